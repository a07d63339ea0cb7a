from __future__ import annotations

import pytest

from transitmap.models.geo import GeoPoint, ProjectedPoint
from transitmap.projection import CoordinateProjector, default_projector

BOSTON = GeoPoint(longitude=-71.0589, latitude=42.3601)


def test_boston_projects_deterministically() -> None:
    projector = CoordinateProjector()
    first = projector.project(BOSTON)
    second = projector.project(BOSTON)

    assert first == second
    # Web Mercator metres, close to the default map centre.
    assert first.x == pytest.approx(-7910240.56, abs=1.0)
    assert first.y == pytest.approx(5215074.24, abs=1.0)


def test_boston_round_trip() -> None:
    projector = CoordinateProjector()
    back = projector.unproject(projector.project(BOSTON))

    assert back.longitude == pytest.approx(BOSTON.longitude, abs=1e-6)
    assert back.latitude == pytest.approx(BOSTON.latitude, abs=1e-6)


def test_origin_maps_to_origin() -> None:
    point = default_projector().project(GeoPoint(longitude=0.0, latitude=0.0))
    assert point.x == pytest.approx(0.0, abs=1e-6)
    assert point.y == pytest.approx(0.0, abs=1e-6)


def test_default_projector_is_shared() -> None:
    assert default_projector() is default_projector()


@pytest.mark.parametrize(("lon", "lat"), [(-181.0, 0.0), (0.0, 90.5), (float("nan"), 0.0)])
def test_out_of_range_is_a_programming_error(lon: float, lat: float) -> None:
    point = GeoPoint.model_construct(longitude=lon, latitude=lat)
    with pytest.raises(ValueError):
        CoordinateProjector().project(point)


def test_unproject_returns_geopoint() -> None:
    assert isinstance(default_projector().unproject(ProjectedPoint(x=0.0, y=0.0)), GeoPoint)
