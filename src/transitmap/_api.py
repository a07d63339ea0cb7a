"""Provider endpoint calls.

Each function issues exactly one request and returns typed models, raising
:class:`FetchError` for transport failures and :class:`MalformedDataError`
when the document does not have the shape the map needs.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from transitmap._constants import ROUTES_ENDPOINT, STOPS_ENDPOINT, VEHICLES_ENDPOINT
from transitmap._transport import Transport
from transitmap.exceptions import MalformedDataError
from transitmap.models.mode import TransitMode
from transitmap.models.route import Route
from transitmap.models.stop import Stop, VehiclePosition

_logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def resource_list(document: Any, endpoint: str) -> list[Any]:
    """Return the ``data`` array of a JSON:API document."""
    if not isinstance(document, dict):
        raise MalformedDataError(f"{endpoint} returned {type(document).__name__}, expected an object", endpoint=endpoint)
    data = document.get("data")
    if not isinstance(data, list):
        raise MalformedDataError(f"{endpoint} response has no 'data' list", endpoint=endpoint)
    return data


def parse_resources(
    model: type[M],
    document: Any,
    endpoint: str,
    *,
    context: dict[str, Any] | None = None,
    skip_invalid: bool = False,
) -> list[M]:
    """Validate every resource in *document*.

    By default one bad resource fails the lot. With *skip_invalid* a bad
    resource is logged and left out; a document without a ``data`` list
    still raises.
    """
    parsed: list[M] = []
    for index, resource in enumerate(resource_list(document, endpoint)):
        try:
            parsed.append(model.model_validate(resource, context=context))
        except ValidationError as exc:
            resource_id = resource.get("id") if isinstance(resource, dict) else None
            message = f"{endpoint} resource #{index} (id={resource_id!r}) is malformed: {exc.error_count()} error(s)"
            if skip_invalid:
                _logger.warning("Skipping %s", message)
                continue
            raise MalformedDataError(message, endpoint=endpoint) from exc
    return parsed


async def fetch_routes(transport: Transport, mode: TransitMode) -> list[Route]:
    document = await transport.get_json(ROUTES_ENDPOINT, {"filter[type]": str(int(mode))})
    return parse_resources(Route, document, ROUTES_ENDPOINT, context={"mode": mode})


async def fetch_stops(transport: Transport, route_id: str) -> list[Stop]:
    document = await transport.get_json(STOPS_ENDPOINT, {"filter[route]": route_id})
    return parse_resources(Stop, document, STOPS_ENDPOINT)


async def fetch_vehicles(transport: Transport, route_id: str) -> list[VehiclePosition]:
    """Vehicle positions for *route_id*; vehicles without a usable position are skipped."""
    document = await transport.get_json(VEHICLES_ENDPOINT, {"filter[route]": route_id})
    return parse_resources(VehiclePosition, document, VEHICLES_ENDPOINT, skip_invalid=True)
