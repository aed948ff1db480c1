# backend/zonemap/core/types.py
"""階層エンジンで共有する値型"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

Coordinate = Tuple[float, float]
Ring = Tuple[Coordinate, ...]
BoundingBox = Tuple[float, float, float, float]  # (min_x, min_y, max_x, max_y)


class PolygonType(str, Enum):
    """階層の 3 レベル（Area → Monitoring Zone → Sample Plot の順）"""

    AREA = "area"
    MONITORING_ZONE = "mz"
    SAMPLE_PLOT = "sp"

    @property
    def parent_type(self) -> Optional["PolygonType"]:
        return _PARENT[self]

    @property
    def child_type(self) -> Optional["PolygonType"]:
        return _CHILD[self]

    @property
    def prefix(self) -> str:
        return _PREFIX[self]

    @property
    def label(self) -> str:
        return _LABEL[self]

    @property
    def plural_label(self) -> str:
        return _LABEL[self] + "s"


_PARENT = {
    PolygonType.AREA: None,
    PolygonType.MONITORING_ZONE: PolygonType.AREA,
    PolygonType.SAMPLE_PLOT: PolygonType.MONITORING_ZONE,
}
_CHILD = {
    PolygonType.AREA: PolygonType.MONITORING_ZONE,
    PolygonType.MONITORING_ZONE: PolygonType.SAMPLE_PLOT,
    PolygonType.SAMPLE_PLOT: None,
}
_PREFIX = {
    PolygonType.AREA: "PA",
    PolygonType.MONITORING_ZONE: "MZ",
    PolygonType.SAMPLE_PLOT: "SP",
}
_LABEL = {
    PolygonType.AREA: "Area",
    PolygonType.MONITORING_ZONE: "Monitoring Zone",
    PolygonType.SAMPLE_PLOT: "Sample Plot",
}


@dataclass(frozen=True)
class Measurements:
    area: float
    perimeter: float
    bounding_width: float
    bounding_height: float
    vertex_count: int


@dataclass
class PolygonEntity:
    """階層内のポリゴン 1 つ

    name と measurements は階層とリングから導出する値で、保存された正とはみなさない。
    """

    id: str
    type: PolygonType
    parent_id: Optional[str]
    name: str
    ring: Ring
    measurements: Measurements

    def as_tuple(self) -> tuple:
        return (self.id, self.type, self.parent_id, self.name, self.ring, self.measurements)


@dataclass(frozen=True)
class PolygonRecord:
    """保存対象の部分集合：id・種別・親・リング"""

    id: str
    type: PolygonType
    parent_id: Optional[str]
    ring: Ring


@dataclass(frozen=True)
class RemovalResult:
    removed_ids: Tuple[str, ...]
    renamed: dict  # id -> (旧名, 新名)


@dataclass(frozen=True)
class RemovalPreview:
    id: str
    name: str
    descendant_names: Tuple[str, ...]
