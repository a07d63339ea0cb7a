"""Route catalog: the route list for a transit mode."""

from __future__ import annotations

import logging

from transitmap import _api
from transitmap._transport import Transport
from transitmap.exceptions import FetchError, MalformedDataError
from transitmap.models.mode import TransitMode
from transitmap.models.route import Route

_logger = logging.getLogger(__name__)


class RouteCatalog:
    """Fetch routes for a mode, fail-soft."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def fetch(self, mode: TransitMode) -> list[Route] | None:
        """Return the routes for *mode*, or ``None`` when the fetch failed.

        ``None`` means "keep whatever route list is displayed"; an empty
        list is a valid answer and replaces it.
        """
        try:
            routes = await _api.fetch_routes(self._transport, mode)
        except (FetchError, MalformedDataError) as exc:
            _logger.warning("Error fetching routes for %s: %s", mode.name, exc)
            return None
        _logger.debug("Fetched %d routes for %s", len(routes), mode.name)
        return routes
