"""transitmap - Live transit stops and vehicles on a map, kept race-free."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("transitmap")
except PackageNotFoundError:
    __version__ = "0+local"
from transitmap.catalog import RouteCatalog
from transitmap.config import MapView, TransitMapConfig
from transitmap.controller import SelectionController, UpdateKind
from transitmap.exceptions import (
    FetchError,
    MalformedDataError,
    SelectionError,
    TransitMapConfigError,
    TransitMapError,
)
from transitmap.layers import LayerKind, LayerManager, LayerPair
from transitmap.models import (
    GeoPoint,
    ProjectedPoint,
    Route,
    Selection,
    Stop,
    Tagged,
    TransitMode,
    VehiclePosition,
)
from transitmap.projection import CoordinateProjector
from transitmap.stops import StopsLoader
from transitmap.surface import Feature, FeatureSource, InMemoryMapSurface, Layer, LayerStyle, MapSurface
from transitmap.tracker import TrackerState, VehicleTracker

__all__ = [
    "__version__",
    "CoordinateProjector",
    "Feature",
    "FeatureSource",
    "FetchError",
    "GeoPoint",
    "InMemoryMapSurface",
    "Layer",
    "LayerKind",
    "LayerManager",
    "LayerPair",
    "LayerStyle",
    "MalformedDataError",
    "MapSurface",
    "MapView",
    "ProjectedPoint",
    "Route",
    "RouteCatalog",
    "Selection",
    "SelectionController",
    "SelectionError",
    "Stop",
    "StopsLoader",
    "Tagged",
    "TrackerState",
    "TransitMapConfig",
    "TransitMapConfigError",
    "TransitMapError",
    "TransitMode",
    "UpdateKind",
    "VehiclePosition",
    "VehicleTracker",
]
