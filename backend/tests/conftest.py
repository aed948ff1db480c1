"""Shared test fixtures."""

from __future__ import annotations

import os
import tempfile

# must be set before zonemap.config is imported
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite:///" + os.path.join(tempfile.mkdtemp(prefix="zonemap-test-"), "test.db"),
)

import pytest

from zonemap.core import GeodesicOracle, HierarchyStore, PlanarOracle


def square(x: float, y: float, size: float) -> list[list[float]]:
    """Closed, counter-clockwise square ring with its lower-left corner at (x, y)."""
    return [
        [x, y],
        [x + size, y],
        [x + size, y + size],
        [x, y + size],
        [x, y],
    ]


def ring_tuple(coords) -> tuple:
    return tuple((float(a), float(b)) for a, b in coords)


# Planar layout used across the store tests (coordinate units).
AREA_1 = square(0, 0, 100)
AREA_2 = square(200, 0, 100)
AREA_3 = square(400, 0, 100)


@pytest.fixture
def planar() -> PlanarOracle:
    return PlanarOracle()


@pytest.fixture
def geodesic() -> GeodesicOracle:
    return GeodesicOracle()


@pytest.fixture
def store(planar) -> HierarchyStore:
    return HierarchyStore(planar)


@pytest.fixture
def strict_store() -> HierarchyStore:
    """Store whose oracle treats shared edges as overlap."""
    return HierarchyStore(PlanarOracle(allow_shared_edges=False))
