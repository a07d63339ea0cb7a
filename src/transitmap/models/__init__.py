"""Data models for transit provider resources and map state."""

from transitmap.models._base import TransitBaseModel
from transitmap.models.geo import GeoPoint, ProjectedPoint
from transitmap.models.mode import TransitMode
from transitmap.models.route import Route
from transitmap.models.selection import Selection, Tagged
from transitmap.models.stop import PlacedResource, Stop, VehiclePosition

__all__ = [
    "GeoPoint",
    "PlacedResource",
    "ProjectedPoint",
    "Route",
    "Selection",
    "Stop",
    "Tagged",
    "TransitBaseModel",
    "TransitMode",
    "VehiclePosition",
]
