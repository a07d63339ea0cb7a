"""Stop loader for a selected route."""

from __future__ import annotations

import logging

from transitmap import _api
from transitmap._transport import Transport
from transitmap.exceptions import FetchError, MalformedDataError
from transitmap.models.mode import TransitMode
from transitmap.models.selection import Tagged
from transitmap.models.stop import Stop

_logger = logging.getLogger(__name__)


class StopsLoader:
    """Fetch a route's stops and tag them with the issuing generation."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def load(self, mode: TransitMode, route_id: str, generation: int) -> Tagged[Stop] | None:
        """Fetch stops for *route_id*.

        Returns ``None`` on failure so the previously displayed stops stay
        in place. Whether a successful result is applied is decided by the
        caller against *generation*.
        """
        try:
            stops = await _api.fetch_stops(self._transport, route_id)
        except (FetchError, MalformedDataError) as exc:
            _logger.warning("Error fetching stops for route %s (gen=%d): %s", route_id, generation, exc)
            return None
        return Tagged.of(generation, mode, route_id, stops)
