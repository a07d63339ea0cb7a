"""Keyed registry of per-mode stop and vehicle layers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum

from transitmap.models.mode import TransitMode
from transitmap.models.stop import PlacedResource, Stop, VehiclePosition
from transitmap.projection import CoordinateProjector, default_projector
from transitmap.surface import Feature, Layer, LayerStyle, MapSurface, Point

_logger = logging.getLogger(__name__)


class LayerKind(StrEnum):
    STOPS = "stops"
    VEHICLES = "vehicles"


_SUBWAY_STOP = LayerStyle(icon="/subwayStops.png", scale=0.09)
_SUBWAY_VEHICLE = LayerStyle(icon="/subway.png", scale=0.015, anchor=(0.5, 1.0))

DEFAULT_STYLES: dict[TransitMode, tuple[LayerStyle, LayerStyle]] = {
    TransitMode.LIGHT_RAIL: (_SUBWAY_STOP, _SUBWAY_VEHICLE),
    TransitMode.HEAVY_RAIL: (_SUBWAY_STOP, _SUBWAY_VEHICLE),
    TransitMode.COMMUTER_RAIL: (
        LayerStyle(icon="/trainFacility.png", scale=0.02),
        LayerStyle(icon="/train.png", scale=0.025, anchor=(0.5, 1.0)),
    ),
    TransitMode.BUS: (
        LayerStyle(icon="/busStop.png", scale=0.02),
        LayerStyle(icon="/bus.png", scale=0.12, anchor=(0.5, 1.0)),
    ),
}
"""(stop style, vehicle style) per mode."""


@dataclass(frozen=True)
class LayerPair:
    """Stop markers and vehicle markers for one mode."""

    stops_layer: Layer
    vehicles_layer: Layer

    def __iter__(self) -> Iterator[Layer]:
        yield self.stops_layer
        yield self.vehicles_layer

    def layer(self, kind: LayerKind) -> Layer:
        return self.stops_layer if kind is LayerKind.STOPS else self.vehicles_layer


class LayerManager:
    """Owns one :class:`LayerPair` per mode and their attachment state.

    Pairs are created once and only ever attached to or detached from the
    surface. Feature sets are kept while a pair is hidden, so switching
    back to a mode shows its last-known data without a refetch.
    """

    def __init__(
        self,
        surface: MapSurface,
        *,
        projector: CoordinateProjector | None = None,
        styles: dict[TransitMode, tuple[LayerStyle, LayerStyle]] | None = None,
    ) -> None:
        self._surface = surface
        self._projector = projector if projector is not None else default_projector()
        effective_styles = styles if styles is not None else DEFAULT_STYLES
        self._pairs: dict[TransitMode, LayerPair] = {}
        for mode in TransitMode:
            stop_style, vehicle_style = effective_styles[mode]
            self._pairs[mode] = LayerPair(
                stops_layer=Layer(f"{mode.name.lower()}-{LayerKind.STOPS}", stop_style),
                vehicles_layer=Layer(f"{mode.name.lower()}-{LayerKind.VEHICLES}", vehicle_style),
            )

    @property
    def surface(self) -> MapSurface:
        return self._surface

    def pair(self, mode: TransitMode) -> LayerPair:
        return self._pairs[mode]

    def attached_modes(self) -> list[TransitMode]:
        """Modes whose pair is (at least partly) on the surface."""
        return [
            mode
            for mode, pair in self._pairs.items()
            if any(self._surface.has_layer(layer) for layer in pair)
        ]

    def show_only(self, mode: TransitMode | None) -> None:
        """Detach every pair, then attach *mode*'s pair when set."""
        for pair in self._pairs.values():
            for layer in pair:
                if self._surface.has_layer(layer):
                    self._surface.remove_layer(layer)
        if mode is None:
            return
        for layer in self._pairs[mode]:
            if not self._surface.has_layer(layer):
                self._surface.add_layer(layer)

    def clear_all(self) -> None:
        self.show_only(None)

    def replace_stops(self, mode: TransitMode, stops: Iterable[Stop]) -> int:
        return self._replace(mode, LayerKind.STOPS, stops)

    def replace_vehicles(self, mode: TransitMode, vehicles: Iterable[VehiclePosition]) -> int:
        return self._replace(mode, LayerKind.VEHICLES, vehicles)

    def feature_count(self, mode: TransitMode, kind: LayerKind) -> int:
        return len(self._pairs[mode].layer(kind).source)

    def _replace(self, mode: TransitMode, kind: LayerKind, items: Iterable[PlacedResource]) -> int:
        # Project first; the source is only touched once every point converts.
        features = [
            Feature(
                geometry=Point(self._projector.project(item.location)),
                properties={"id": item.id},
            )
            for item in items
        ]
        source = self._pairs[mode].layer(kind).source
        source.clear()
        source.add_features(features)
        _logger.debug("Replaced %s %s features: %d", mode.name, kind, len(features))
        return len(features)
