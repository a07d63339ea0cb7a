#!/usr/bin/env python3
"""Watch a route's stops and vehicles against the live provider.

Runs a :class:`SelectionController` with an in-memory map surface, selects
the given mode and route, and prints feature counts every time stops or
vehicles are applied.

Usage
-----
::

    pip install -e .
    python scripts/watch_route.py --mode 1 --route Red --duration 30

Options::

    --mode MODE          0-3 or name (light_rail, heavy_rail, commuter_rail, bus)
    --route ID           Route id; omit to list the mode's routes and exit
    --duration SECONDS   How long to keep polling (default: 30)
    --interval-ms MS     Poll interval override
    --base-url URL       Provider base URL override
    --verbose, -v        Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from transitmap import LayerKind, SelectionController, TransitMapConfig, TransitMode, UpdateKind


async def main() -> None:
    parser = argparse.ArgumentParser(description="Watch live stops and vehicles for one route")
    parser.add_argument("--mode", required=True, help="Transit mode (0-3 or name)")
    parser.add_argument("--route", help="Route id to watch")
    parser.add_argument("--duration", type=float, default=30.0, help="Seconds to keep polling")
    parser.add_argument("--interval-ms", type=int, help="Poll interval in milliseconds")
    parser.add_argument("--base-url", help="Provider base URL")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, object] = {}
    if args.interval_ms is not None:
        overrides["poll_interval_ms"] = args.interval_ms
    if args.base_url:
        overrides["base_url"] = args.base_url
    config = TransitMapConfig.from_env(**overrides)

    mode = TransitMode.parse(args.mode)
    if mode is None:
        parser.error("--mode must not be empty")

    controller: SelectionController

    def _on_update(kind: UpdateKind) -> None:
        if kind is UpdateKind.ROUTES:
            return
        layers = controller.layers
        print(
            f"[gen {controller.active_generation}] {kind}: "
            f"stops={layers.feature_count(mode, LayerKind.STOPS)} "
            f"vehicles={layers.feature_count(mode, LayerKind.VEHICLES)}"
        )

    controller = SelectionController(config, on_update=_on_update)
    async with controller:
        controller.set_mode(mode)
        await controller.wait_idle()

        if not args.route:
            print(f"{len(controller.routes)} routes for {mode.label}:")
            for value, label in controller.route_options()[1:]:
                print(f"  {value:<20} {label}")
            return

        controller.set_route(args.route)
        await asyncio.sleep(args.duration)


if __name__ == "__main__":
    asyncio.run(main())
