"""Map surface interface and an in-memory implementation.

The real rendering surface (tiles, icons, canvas) lives outside this
package. The controller only needs to attach/detach layers and to swap a
layer's features, which :class:`MapSurface` captures. :class:`InMemoryMapSurface`
implements it without any drawing, for headless use and tests.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

from transitmap.config import MapView
from transitmap.models.geo import ProjectedPoint

_logger = logging.getLogger(__name__)

_feature_ids = itertools.count(1)


@dataclass(frozen=True)
class LayerStyle:
    """Marker styling for a layer's features."""

    icon: str
    scale: float
    anchor: tuple[float, float] = (0.5, 0.5)


@dataclass(frozen=True)
class Point:
    """Point geometry in native projection."""

    coordinates: ProjectedPoint


@dataclass(frozen=True)
class Feature:
    """A drawable item: a point geometry plus the id of what it depicts."""

    geometry: Point
    properties: dict[str, Any] = field(default_factory=dict, hash=False)
    uid: int = field(default_factory=lambda: next(_feature_ids))


class FeatureSource:
    """Mutable feature collection backing a vector layer."""

    def __init__(self) -> None:
        self._features: list[Feature] = []
        self.revision = 0

    def clear(self) -> None:
        self._features.clear()
        self.revision += 1

    def add_features(self, features: Iterable[Feature]) -> None:
        self._features.extend(features)
        self.revision += 1

    def get_features(self) -> list[Feature]:
        return list(self._features)

    def __len__(self) -> int:
        return len(self._features)


class Layer:
    """Vector layer: a named feature source with a style."""

    def __init__(self, name: str, style: LayerStyle, source: FeatureSource | None = None) -> None:
        self.name = name
        self.style = style
        self.source = source if source is not None else FeatureSource()

    def __repr__(self) -> str:
        return f"Layer({self.name!r}, features={len(self.source)})"


class MapSurface(Protocol):
    """Structural interface of the rendering surface driven by the core."""

    def add_layer(self, layer: Layer) -> None:
        ...

    def remove_layer(self, layer: Layer) -> None:
        ...

    def has_layer(self, layer: Layer) -> bool:
        ...


class InMemoryMapSurface:
    """Map surface that records attached layers without rendering.

    ``add_layer`` for an attached layer and ``remove_layer`` for a detached
    one are no-ops.
    """

    def __init__(self, target: Any = None, view: MapView | None = None) -> None:
        self.target = target
        self.view = view if view is not None else MapView()
        self._layers: list[Layer] = []

    @property
    def layers(self) -> list[Layer]:
        return list(self._layers)

    def set_target(self, target: Any) -> None:
        """Mount on *target*; ``None`` unmounts."""
        self.target = target

    def add_layer(self, layer: Layer) -> None:
        if any(existing is layer for existing in self._layers):
            return
        _logger.debug("Attaching layer %s", layer.name)
        self._layers.append(layer)

    def remove_layer(self, layer: Layer) -> None:
        for idx, existing in enumerate(self._layers):
            if existing is layer:
                _logger.debug("Detaching layer %s", layer.name)
                del self._layers[idx]
                return

    def has_layer(self, layer: Layer) -> bool:
        return any(existing is layer for existing in self._layers)
