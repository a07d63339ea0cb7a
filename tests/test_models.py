"""Tests for provider resource parsing and selection models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from transitmap.models import GeoPoint, Route, Selection, Stop, Tagged, TransitMode, VehiclePosition

# ------------------------------------------------------------------
# TransitMode
# ------------------------------------------------------------------


class TestTransitMode:
    def test_values_match_provider_route_types(self) -> None:
        assert [int(m) for m in TransitMode] == [0, 1, 2, 3]

    def test_labels(self) -> None:
        assert TransitMode.LIGHT_RAIL.label == "Subway Light Rail"
        assert TransitMode.HEAVY_RAIL.label == "Subway Heavy Rail"
        assert TransitMode.COMMUTER_RAIL.label == "Commuter Rail"
        assert TransitMode.BUS.label == "Bus"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, None),
            ("", None),
            ("  ", None),
            ("2", TransitMode.COMMUTER_RAIL),
            (3, TransitMode.BUS),
            ("heavy_rail", TransitMode.HEAVY_RAIL),
            (TransitMode.LIGHT_RAIL, TransitMode.LIGHT_RAIL),
        ],
    )
    def test_parse(self, value: object, expected: TransitMode | None) -> None:
        assert TransitMode.parse(value) is expected

    @pytest.mark.parametrize("value", ["7", "ferry", 4, 1.5, True])
    def test_parse_rejects_unknown(self, value: object) -> None:
        with pytest.raises(ValueError):
            TransitMode.parse(value)


# ------------------------------------------------------------------
# Route
# ------------------------------------------------------------------


class TestRoute:
    def test_from_resource(self) -> None:
        route = Route.model_validate(
            {"id": "Red", "type": "route", "attributes": {"long_name": "Red Line", "short_name": "", "type": 1}}
        )
        assert route.id == "Red"
        assert route.display_name == "Red Line"
        assert route.mode is TransitMode.HEAVY_RAIL
        assert route.raw["attributes"]["long_name"] == "Red Line"

    def test_short_name_fallback(self) -> None:
        route = Route.model_validate({"id": "39", "attributes": {"long_name": "", "short_name": "39", "type": 3}})
        assert route.display_name == "39"

    def test_mode_from_context_when_type_missing(self) -> None:
        route = Route.model_validate(
            {"id": "CR-Fitchburg", "attributes": {"long_name": "Fitchburg Line"}},
            context={"mode": TransitMode.COMMUTER_RAIL},
        )
        assert route.mode is TransitMode.COMMUTER_RAIL

    def test_missing_name_is_invalid(self) -> None:
        with pytest.raises(ValidationError):
            Route.model_validate({"id": "X", "attributes": {"type": 3}})


# ------------------------------------------------------------------
# Stops / vehicles
# ------------------------------------------------------------------


class TestPlacedResources:
    def test_stop_from_resource_with_string_coordinates(self) -> None:
        stop = Stop.model_validate(
            {"id": "place-pktrm", "attributes": {"longitude": "-71.0624", "latitude": "42.35639", "name": "Park Street"}}
        )
        assert stop.id == "place-pktrm"
        assert stop.location == GeoPoint(longitude=-71.0624, latitude=42.35639)

    def test_vehicle_from_resource(self) -> None:
        vehicle = VehiclePosition.model_validate(
            {"id": "y1234", "attributes": {"longitude": -71.0589, "latitude": 42.3601, "bearing": 90}}
        )
        assert vehicle.location.longitude == pytest.approx(-71.0589)

    def test_direct_construction(self) -> None:
        stop = Stop(id="s1", location=GeoPoint(longitude=1.0, latitude=2.0))
        assert stop.location.latitude == 2.0

    @pytest.mark.parametrize(
        "attributes",
        [
            {"latitude": 42.0},
            {"longitude": None, "latitude": 42.0},
            {"longitude": "abc", "latitude": 42.0},
            {"longitude": -71.0, "latitude": 95.0},
            {"longitude": 200.0, "latitude": 42.0},
        ],
    )
    def test_bad_coordinates_are_invalid(self, attributes: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            Stop.model_validate({"id": "s1", "attributes": attributes})

    def test_missing_id_is_invalid(self) -> None:
        with pytest.raises(ValidationError):
            VehiclePosition.model_validate({"attributes": {"longitude": -71.0, "latitude": 42.0}})


# ------------------------------------------------------------------
# Selection / Tagged
# ------------------------------------------------------------------


class TestSelection:
    def test_initially_empty(self) -> None:
        selection = Selection()
        assert selection.mode is None
        assert selection.route_id is None
        assert not selection.is_complete

    def test_changing_mode_clears_route(self) -> None:
        selection = Selection(mode=TransitMode.BUS, route_id="39")
        changed = selection.with_mode(TransitMode.HEAVY_RAIL)
        assert changed == Selection(mode=TransitMode.HEAVY_RAIL, route_id=None)

    def test_route_requires_mode(self) -> None:
        with pytest.raises(ValidationError):
            Selection(mode=None, route_id="Red")

    def test_empty_route_is_none(self) -> None:
        assert Selection(mode=TransitMode.BUS).with_route("").route_id is None


def test_tagged_freezes_items() -> None:
    stops = [Stop(id="s1", location=GeoPoint(longitude=0.0, latitude=0.0))]
    tagged = Tagged.of(4, TransitMode.BUS, "39", stops)
    stops.clear()
    assert tagged.generation == 4
    assert len(tagged.items) == 1
