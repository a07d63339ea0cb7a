"""Geographic point models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from transitmap.models._base import safe_float


class GeoPoint(BaseModel):
    """WGS84 coordinates as received from the provider.

    Numeric strings are accepted; missing, non-numeric or out-of-range
    values fail validation.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    longitude: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)
    latitude: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)

    @field_validator("longitude", "latitude", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> Any:
        parsed = safe_float(value)
        return value if parsed is None else parsed


class ProjectedPoint(BaseModel):
    """Point in the map surface's native projection (EPSG:3857 metres)."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
