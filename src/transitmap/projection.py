"""Coordinate projection between provider WGS84 and the map surface."""

from __future__ import annotations

import math

from pyproj import Transformer

from transitmap._constants import MAP_CRS, SOURCE_CRS
from transitmap.models.geo import GeoPoint, ProjectedPoint


class CoordinateProjector:
    """Project longitude/latitude into the surface's native projection.

    Stateless apart from the cached :class:`pyproj.Transformer` pair, so a
    single instance can be shared by every layer.
    """

    def __init__(self, source_crs: str = SOURCE_CRS, target_crs: str = MAP_CRS) -> None:
        self.source_crs = source_crs
        self.target_crs = target_crs
        self._forward = Transformer.from_crs(source_crs, target_crs, always_xy=True)
        self._inverse = Transformer.from_crs(target_crs, source_crs, always_xy=True)

    def project(self, point: GeoPoint) -> ProjectedPoint:
        """Convert *point* to map coordinates.

        Raises
        ------
        ValueError
            If the coordinates are non-finite or outside
            ``[-180, 180] x [-90, 90]``. Callers must never pass such
            points; :class:`GeoPoint` validation rejects them on input.
        """
        lon, lat = point.longitude, point.latitude
        if not (math.isfinite(lon) and math.isfinite(lat)) or abs(lon) > 180.0 or abs(lat) > 90.0:
            raise ValueError(f"coordinates out of range: lon={lon} lat={lat}")
        x, y = self._forward.transform(lon, lat)
        return ProjectedPoint(x=x, y=y)

    def unproject(self, point: ProjectedPoint) -> GeoPoint:
        """Inverse of :meth:`project`."""
        lon, lat = self._inverse.transform(point.x, point.y)
        return GeoPoint(longitude=lon, latitude=lat)


_default: CoordinateProjector | None = None


def default_projector() -> CoordinateProjector:
    """Shared WGS84 -> Web Mercator projector."""
    global _default
    if _default is None:
        _default = CoordinateProjector()
    return _default
