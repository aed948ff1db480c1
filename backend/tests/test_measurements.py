from __future__ import annotations

import pytest

from zonemap.core import compute_measurements, format_measurement
from tests.conftest import ring_tuple, square


def test_planar_rectangle(planar):
    ring = ring_tuple([[0, 0], [20, 0], [20, 10], [0, 10], [0, 0]])
    m = compute_measurements(ring, planar)
    assert m.area == pytest.approx(200.0)
    assert m.perimeter == pytest.approx(60.0)
    assert m.bounding_width == pytest.approx(20.0)
    assert m.bounding_height == pytest.approx(10.0)
    assert m.vertex_count == 4


def test_geodesic_square_near_equator(geodesic):
    # 0.01 degree square: ~1113 m east-west, ~1106 m north-south
    ring = ring_tuple(square(0, 0, 0.01))
    m = compute_measurements(ring, geodesic)
    assert m.bounding_width == pytest.approx(1113.19, rel=1e-3)
    assert m.bounding_height == pytest.approx(1105.74, rel=1e-3)
    assert m.area == pytest.approx(1113.19 * 1105.74, rel=1e-2)
    assert m.perimeter == pytest.approx(2 * (1113.19 + 1105.74), rel=1e-3)
    assert m.vertex_count == 4


def test_vertex_count_excludes_closing_point(planar):
    ring = ring_tuple([[0, 0], [10, 0], [5, 8], [0, 0]])
    assert compute_measurements(ring, planar).vertex_count == 3


@pytest.mark.parametrize(
    "value, unit, expected",
    [
        (12.5, "m", "12.50 m"),
        (1500, "m", "1.50 km"),
        (250, "m²", "250.00 m²"),
        (25_000, "m²", "2.50 ha"),
        (3_200_000, "m²", "3.20 km²"),
    ],
)
def test_format_measurement(value, unit, expected):
    assert format_measurement(value, unit) == expected


def test_format_measurement_unknown_unit():
    with pytest.raises(ValueError):
        format_measurement(1.0, "ft")
