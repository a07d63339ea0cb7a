"""Recurring vehicle position poll for the selected route."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum

from transitmap import _api
from transitmap._transport import Transport
from transitmap.exceptions import FetchError, MalformedDataError
from transitmap.models.mode import TransitMode
from transitmap.models.selection import Tagged
from transitmap.models.stop import VehiclePosition

_logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]
VehicleResultHandler = Callable[[Tagged[VehiclePosition]], None]


class TrackerState(StrEnum):
    IDLE = "idle"
    POLLING = "polling"


class VehicleTracker:
    """Poll ``/vehicles`` for one (mode, route, generation) at a time.

    ``start`` fetches immediately and then once per *interval* seconds.
    Every tick runs as its own task, so a slow response never delays the
    next tick; overlapping ticks of the same generation report in arrival
    order. Results go to *on_result*, which owns the decision to apply
    them.

    ``stop`` cancels the timer task and nothing else: ticks already in
    flight finish and report, and the receiver discards them by
    generation.
    """

    def __init__(
        self,
        transport: Transport,
        on_result: VehicleResultHandler,
        *,
        interval: float,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._transport = transport
        self._on_result = on_result
        self._interval = interval
        self._sleep = sleep
        self._poll_task: asyncio.Task[None] | None = None
        self._generation: int | None = None
        self._retired: set[asyncio.Task[None]] = set()
        self._ticks: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> TrackerState:
        return TrackerState.POLLING if self._poll_task is not None else TrackerState.IDLE

    @property
    def generation(self) -> int | None:
        """Generation currently polling, ``None`` when idle."""
        return self._generation

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def in_flight(self) -> int:
        return len(self._ticks)

    def start(self, mode: TransitMode, route_id: str, generation: int) -> None:
        """Begin polling; any previous generation is stopped first."""
        if self._poll_task is not None:
            self.stop()
        _logger.debug("Vehicle polling start gen=%d mode=%s route=%s", generation, mode.name, route_id)
        self._generation = generation
        self._poll_task = asyncio.get_running_loop().create_task(
            self._run(mode, route_id, generation),
            name=f"transitmap-vehicle-poll-{generation}",
        )

    def stop(self) -> None:
        """Cancel the poll timer. Idempotent."""
        task = self._poll_task
        if task is None:
            return
        _logger.debug("Vehicle polling stop gen=%s", self._generation)
        self._poll_task = None
        self._generation = None
        task.cancel()
        self._retired.add(task)
        task.add_done_callback(self._retired.discard)

    async def aclose(self) -> None:
        """Stop polling and cancel in-flight ticks, waiting for both."""
        self.stop()
        pending = [*self._retired, *self._ticks]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def _run(self, mode: TransitMode, route_id: str, generation: int) -> None:
        while True:
            self._spawn_tick(mode, route_id, generation)
            await self._sleep(self._interval)

    def _spawn_tick(self, mode: TransitMode, route_id: str, generation: int) -> None:
        task = asyncio.get_running_loop().create_task(
            self._tick(mode, route_id, generation),
            name=f"transitmap-vehicle-tick-{generation}",
        )
        self._ticks.add(task)
        task.add_done_callback(self._ticks.discard)

    async def _tick(self, mode: TransitMode, route_id: str, generation: int) -> None:
        try:
            vehicles = await _api.fetch_vehicles(self._transport, route_id)
        except (FetchError, MalformedDataError) as exc:
            # Skipped tick: the timer keeps running, displayed vehicles stay.
            _logger.warning("Error updating vehicle locations for route %s (gen=%d): %s", route_id, generation, exc)
            return
        try:
            self._on_result(Tagged.of(generation, mode, route_id, vehicles))
        except Exception:
            _logger.exception("Vehicle result handler failed (gen=%d)", generation)
