"""Route model."""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationInfo, model_validator

from transitmap.models._base import TransitBaseModel, flatten_resource, safe_str
from transitmap.models.mode import TransitMode


class Route(TransitBaseModel):
    """A route belonging to exactly one transit mode.

    Parameters
    ----------
    id : str
        Provider route id (e.g. ``"Red"``, ``"CR-Fitchburg"``, ``"39"``).
    display_name : str
        Human-readable name; ``long_name`` with ``short_name`` as fallback.
    mode : TransitMode
        From the resource's ``type`` attribute, or the mode the catalog
        was fetched for (validation context ``{"mode": ...}``).
    """

    id: str = Field(min_length=1)
    display_name: str = Field(min_length=1)
    mode: TransitMode

    @model_validator(mode="before")
    @classmethod
    def _map_provider_fields(cls, values: Any, info: ValidationInfo) -> Any:
        values = flatten_resource(values)
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        if "display_name" not in merged:
            name = safe_str(merged.get("long_name")) or safe_str(merged.get("short_name"))
            if name is not None:
                merged["display_name"] = name
        if "mode" not in merged:
            route_type = merged.get("type")
            if isinstance(route_type, str):
                # A non-numeric value is the JSON:API resource type ("route").
                route_type = int(route_type) if route_type.strip().isdigit() else None
            if route_type is None and info.context:
                route_type = info.context.get("mode")
            if route_type is not None:
                merged["mode"] = route_type
        return merged
