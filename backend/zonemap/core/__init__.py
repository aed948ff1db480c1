from .errors import (
    ChildOutOfBoundsError,
    ContainmentError,
    DegenerateRingError,
    HierarchyError,
    MissingParentError,
    NotFoundError,
    OverlapError,
    ValidationError,
    VertexIndexError,
)
from .measurements import compute_measurements, format_measurement
from .naming import extract_area_number, extract_mz_number, generate_name
from .oracle import GeodesicOracle, GeometryOracle, PlanarOracle, build_oracle
from .renumbering import renumber
from .store import HierarchyStore
from .types import (
    Measurements,
    PolygonEntity,
    PolygonRecord,
    PolygonType,
    RemovalPreview,
    RemovalResult,
)
from .validation import check_ring_shape, validate_ring

__all__ = [
    "ChildOutOfBoundsError",
    "ContainmentError",
    "DegenerateRingError",
    "GeodesicOracle",
    "GeometryOracle",
    "HierarchyError",
    "HierarchyStore",
    "Measurements",
    "MissingParentError",
    "NotFoundError",
    "OverlapError",
    "PlanarOracle",
    "PolygonEntity",
    "PolygonRecord",
    "PolygonType",
    "RemovalPreview",
    "RemovalResult",
    "ValidationError",
    "VertexIndexError",
    "build_oracle",
    "compute_measurements",
    "extract_area_number",
    "extract_mz_number",
    "format_measurement",
    "generate_name",
    "renumber",
    "check_ring_shape",
    "validate_ring",
]
