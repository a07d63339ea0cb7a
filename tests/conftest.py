from __future__ import annotations

import asyncio
import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from transitmap.exceptions import FetchError

_KEY_PARAMS = ("filter[type]", "filter[route]")


def _resource(resource_id: str, **attributes: Any) -> dict[str, Any]:
    return {"type": "resource", "id": resource_id, "attributes": attributes}


@dataclass
class FakeTransitBackend:
    """In-process stand-in for the provider, implementing ``Transport``.

    Responses are keyed by (endpoint, filter value). ``hold`` makes a
    request wait until the returned event is set, which lets tests decide
    the order in which concurrent fetches complete. The payload is read
    when the request completes, not when it is issued.
    """

    documents: dict[tuple[str, str], Any] = field(default_factory=dict)
    failures: dict[tuple[str, str], Exception] = field(default_factory=dict)
    gates: dict[tuple[str, str], asyncio.Event] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)

    def add_routes(self, mode: int, routes: list[tuple[str, str]]) -> None:
        self.documents[("/routes", str(mode))] = {
            "data": [_resource(rid, long_name=name, type=mode) for rid, name in routes]
        }

    def add_stops(self, route_id: str, stops: list[tuple[str, float, float]]) -> None:
        self.documents[("/stops", route_id)] = {
            "data": [_resource(sid, longitude=lon, latitude=lat) for sid, lon, lat in stops]
        }

    def add_vehicles(self, route_id: str, vehicles: list[tuple[str, float, float]]) -> None:
        self.documents[("/vehicles", route_id)] = {
            "data": [_resource(vid, longitude=lon, latitude=lat) for vid, lon, lat in vehicles]
        }

    def fail(self, endpoint: str, key: str, exc: Exception | None = None) -> None:
        self.failures[(endpoint, key)] = exc or FetchError(f"HTTP 503 from {endpoint}", status_code=503, endpoint=endpoint)

    def recover(self, endpoint: str, key: str) -> None:
        self.failures.pop((endpoint, key), None)

    def hold(self, endpoint: str, key: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[(endpoint, key)] = gate
        return gate

    def count(self, endpoint: str, key: str | None = None) -> int:
        return sum(1 for ep, k in self.calls if ep == endpoint and (key is None or k == key))

    async def get_json(self, endpoint: str, params: Mapping[str, str]) -> Any:
        key = next((params[name] for name in _KEY_PARAMS if name in params), "")
        self.calls.append((endpoint, key))
        gate = self.gates.get((endpoint, key))
        if gate is not None:
            await gate.wait()
        failure = self.failures.get((endpoint, key))
        if failure is not None:
            raise failure
        return copy.deepcopy(self.documents.get((endpoint, key), {"data": []}))


class FakeClock:
    """Simulated time for the vehicle tracker's injectable sleep."""

    def __init__(self) -> None:
        self.now = 0.0
        self._sleepers: list[tuple[float, asyncio.Future[None]]] = []

    async def sleep(self, delay: float) -> None:
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._sleepers.append((self.now + delay, future))
        await future

    @property
    def pending_sleepers(self) -> int:
        return sum(1 for _, fut in self._sleepers if not fut.done())

    async def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            await settle()
            due = [entry for entry in self._sleepers if entry[0] <= target and not entry[1].done()]
            if not due:
                break
            entry = min(due, key=lambda item: item[0])
            self._sleepers.remove(entry)
            self.now = entry[0]
            entry[1].set_result(None)
        self._sleepers = [entry for entry in self._sleepers if not entry[1].done()]
        self.now = target
        await settle()


async def settle(rounds: int = 20) -> None:
    """Let ready tasks run to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def backend() -> FakeTransitBackend:
    fake = FakeTransitBackend()
    fake.add_routes(1, [("Red", "Red Line"), ("Orange", "Orange Line"), ("Blue", "Blue Line")])
    fake.add_routes(3, [("1", "Harvard Square - Nubian Station"), ("39", "Forest Hills - Back Bay Station")])
    fake.add_stops(
        "Red",
        [
            ("place-alfcl", -71.142483, 42.395428),
            ("place-pktrm", -71.0624, 42.35639),
            ("place-asmnl", -71.06459, 42.284652),
        ],
    )
    fake.add_stops("Orange", [("place-ogmnl", -71.07114, 42.43668), ("place-forhl", -71.113686, 42.300523)])
    fake.add_vehicles("Red", [("R-5477", -71.0589, 42.3601)])
    fake.add_vehicles("Orange", [("O-1401", -71.0775, 42.3472), ("O-1402", -71.0701, 42.3609)])
    return fake


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
