"""Selection controller: keeps the map layers in step with the user's choice."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from enum import StrEnum
from typing import Any, TypeVar

import aiohttp

from transitmap._transport import HttpTransport, Transport
from transitmap.catalog import RouteCatalog
from transitmap.config import TransitMapConfig
from transitmap.exceptions import SelectionError, TransitMapError
from transitmap.layers import LayerManager
from transitmap.models.mode import TransitMode
from transitmap.models.route import Route
from transitmap.models.selection import Selection, Tagged
from transitmap.models.stop import Stop, VehiclePosition
from transitmap.projection import CoordinateProjector
from transitmap.stops import StopsLoader
from transitmap.surface import InMemoryMapSurface, MapSurface
from transitmap.tracker import SleepFn, TrackerState, VehicleTracker

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class UpdateKind(StrEnum):
    ROUTES = "routes"
    STOPS = "stops"
    VEHICLES = "vehicles"


class SelectionController:
    """Orchestrates route catalog, stop loading and vehicle polling.

    Every route activation gets a fresh *generation* number. Stop and
    vehicle results carry the generation they were issued under and are
    applied only while it is still the active one; route lists are fenced
    the same way by a catalog generation that advances on mode changes.
    A slow response for an old selection is therefore dropped no matter
    when it arrives.

    Usage::

        async with SelectionController(config, surface) as controller:
            controller.set_mode(TransitMode.HEAVY_RAIL)
            await controller.wait_idle()
            controller.set_route("Red")

    Parameters
    ----------
    config : TransitMapConfig or None
        Base URL and poll interval. Defaults to ``TransitMapConfig()``.
    surface : MapSurface or None
        Surface the layers are attached to. Defaults to an
        :class:`InMemoryMapSurface` using ``config.view``.
    transport : Transport or None
        Provider transport. When omitted an :class:`HttpTransport` is
        created on ``__aenter__``.
    session : aiohttp.ClientSession or None
        Session for the default transport; not closed by the controller.
    projector : CoordinateProjector or None
        Projection used by the layer manager.
    sleep : callable
        Awaitable sleep used between vehicle polls.
    on_update : callable or None
        Called with an :class:`UpdateKind` after routes, stops or vehicles
        were applied.
    """

    def __init__(
        self,
        config: TransitMapConfig | None = None,
        surface: MapSurface | None = None,
        *,
        transport: Transport | None = None,
        session: aiohttp.ClientSession | None = None,
        projector: CoordinateProjector | None = None,
        sleep: SleepFn = asyncio.sleep,
        on_update: Callable[[UpdateKind], None] | None = None,
    ) -> None:
        self._config = config if config is not None else TransitMapConfig()
        self._surface: MapSurface = surface if surface is not None else InMemoryMapSurface(view=self._config.view)
        self._layers = LayerManager(self._surface, projector=projector)
        self._external_session = session is not None
        self._http_session = session
        self._sleep = sleep
        self._on_update = on_update

        self._transport: Transport | None = None
        self._catalog: RouteCatalog | None = None
        self._stops: StopsLoader | None = None
        self._tracker: VehicleTracker | None = None
        if transport is not None:
            self._bind(transport)

        self._selection = Selection()
        self._generation_counter = 0
        self._active_generation: int | None = None
        self._catalog_generation = 0
        self._routes: tuple[Route, ...] = ()
        self._tasks: set[asyncio.Task[None]] = set()
        self._closed = False

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SelectionController:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._bind(HttpTransport(self._config, self._http_session))
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Tear down: stop polling, drop pending work, detach all layers."""
        if self._closed:
            return
        self._closed = True
        self._active_generation = None
        if self._tracker is not None:
            await self._tracker.aclose()
        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._layers.clear_all()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
        self._http_session = None
        _logger.debug("Controller closed")

    def _bind(self, transport: Transport) -> None:
        self._transport = transport
        self._catalog = RouteCatalog(transport)
        self._stops = StopsLoader(transport)
        self._tracker = VehicleTracker(
            transport,
            self.accept_vehicles,
            interval=self._config.poll_interval,
            sleep=self._sleep,
        )

    # ------------------------------------------------------------------
    # View state
    # ------------------------------------------------------------------

    @property
    def config(self) -> TransitMapConfig:
        return self._config

    @property
    def surface(self) -> MapSurface:
        return self._surface

    @property
    def layers(self) -> LayerManager:
        return self._layers

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def active_generation(self) -> int | None:
        return self._active_generation

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes

    @property
    def is_polling(self) -> bool:
        return self._tracker is not None and self._tracker.state is TrackerState.POLLING

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def route_selector_enabled(self) -> bool:
        return self._selection.mode is not None

    def mode_options(self) -> list[tuple[str, str]]:
        """(value, label) pairs for the mode selector, empty choice first."""
        return [("", "Select Transit")] + [(str(int(mode)), mode.label) for mode in TransitMode]

    def route_options(self) -> list[tuple[str, str]]:
        """(value, label) pairs for the route selector; empty while no mode."""
        if not self.route_selector_enabled:
            return []
        return [("", "Select Route")] + [(route.id, route.display_name) for route in self._routes]

    # ------------------------------------------------------------------
    # Selection changes
    # ------------------------------------------------------------------

    def set_mode(self, mode: TransitMode | int | str | None) -> None:
        """Switch transit mode.

        Clears the route, ends the active generation, detaches all layers
        and requests the route list for the new mode (or clears it when
        *mode* is empty).
        """
        self._require_open()
        parsed = TransitMode.parse(mode)
        catalog = self._require_bound(self._catalog) if parsed is not None else None
        self._selection = self._selection.with_mode(parsed)
        self._end_generation()
        self._layers.show_only(None)
        self._catalog_generation += 1
        if parsed is None or catalog is None:
            self._routes = ()
            self._notify(UpdateKind.ROUTES)
            return
        self._spawn(self._load_routes(catalog, parsed, self._catalog_generation), "routes")

    def set_route(self, route_id: str | None) -> int | None:
        """Activate *route_id* under the current mode.

        Starts a new generation, shows only the mode's layer pair, loads
        stops once and starts vehicle polling. An empty *route_id* just
        ends the active generation.

        Returns
        -------
        int or None
            The new active generation, or ``None`` for an empty route.

        Raises
        ------
        SelectionError
            If a route is given while no mode is selected.
        """
        self._require_open()
        route_id = (route_id or "").strip() or None
        mode = self._selection.mode
        if route_id is not None and mode is None:
            raise SelectionError("Cannot select a route before a transit mode")
        if route_id is None or mode is None:
            self._selection = self._selection.with_route(None)
            self._end_generation()
            self._layers.show_only(None)
            return None

        stops = self._require_bound(self._stops)
        tracker = self._require_bound(self._tracker)
        self._selection = self._selection.with_route(route_id)
        self._end_generation()
        self._generation_counter += 1
        generation = self._generation_counter
        self._active_generation = generation
        _logger.debug("Activating gen=%d mode=%s route=%s", generation, mode.name, route_id)

        self._layers.show_only(mode)
        self._spawn(self._load_stops(stops, mode, route_id, generation), f"stops-{generation}")
        tracker.start(mode, route_id, generation)
        return generation

    async def wait_idle(self) -> None:
        """Wait for outstanding route and stop fetches (not the poll loop)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ------------------------------------------------------------------
    # Gated application
    # ------------------------------------------------------------------

    def accept_stops(self, result: Tagged[Stop]) -> bool:
        """Apply *result* if its generation is still active."""
        if not self._is_current(result):
            return False
        self._layers.replace_stops(result.mode, result.items)
        self._notify(UpdateKind.STOPS)
        return True

    def accept_vehicles(self, result: Tagged[VehiclePosition]) -> bool:
        """Apply *result* if its generation is still active."""
        if not self._is_current(result):
            return False
        self._layers.replace_vehicles(result.mode, result.items)
        self._notify(UpdateKind.VEHICLES)
        return True

    def _is_current(self, result: Tagged[Any]) -> bool:
        if self._closed or result.generation != self._active_generation:
            _logger.debug(
                "Discarding stale result gen=%d route=%s (active=%s)",
                result.generation,
                result.route_id,
                self._active_generation,
            )
            return False
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _load_routes(self, catalog: RouteCatalog, mode: TransitMode, catalog_generation: int) -> None:
        routes = await catalog.fetch(mode)
        if routes is None:
            return
        if self._closed or catalog_generation != self._catalog_generation:
            _logger.debug("Discarding stale route list for %s", mode.name)
            return
        self._routes = tuple(routes)
        self._notify(UpdateKind.ROUTES)

    async def _load_stops(self, stops: StopsLoader, mode: TransitMode, route_id: str, generation: int) -> None:
        result = await stops.load(mode, route_id, generation)
        if result is not None:
            self.accept_stops(result)

    def _end_generation(self) -> None:
        self._active_generation = None
        if self._tracker is not None:
            self._tracker.stop()

    def _spawn(self, coro: Coroutine[Any, Any, None], label: str) -> None:
        task = asyncio.get_running_loop().create_task(coro, name=f"transitmap-{label}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _notify(self, kind: UpdateKind) -> None:
        if self._on_update is None:
            return
        try:
            self._on_update(kind)
        except Exception:
            _logger.debug("on_update callback failed", exc_info=True)

    def _require_open(self) -> None:
        if self._closed:
            raise SelectionError("Controller is closed")

    def _require_bound(self, component: T | None) -> T:
        if component is None:
            raise TransitMapError("Controller not initialized. Use 'async with SelectionController(...) as controller:'")
        return component
