"""Stop and vehicle position models."""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from transitmap.models._base import TransitBaseModel, flatten_resource
from transitmap.models.geo import GeoPoint


class PlacedResource(TransitBaseModel):
    """Provider resource with an id and a WGS84 location.

    The provider sends ``attributes.longitude``/``attributes.latitude``;
    they are gathered into :attr:`location`.
    """

    id: str = Field(min_length=1)
    location: GeoPoint

    @model_validator(mode="before")
    @classmethod
    def _gather_location(cls, values: Any) -> Any:
        values = flatten_resource(values)
        if not isinstance(values, dict) or "location" in values:
            return values
        merged = dict(values)
        merged["location"] = {
            "longitude": merged.pop("longitude", None),
            "latitude": merged.pop("latitude", None),
        }
        return merged


class Stop(PlacedResource):
    """A stop served by the selected route."""


class VehiclePosition(PlacedResource):
    """Last reported position of a vehicle on the selected route."""
