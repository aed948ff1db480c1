# backend/zonemap/core/oracle.py
"""ジオメトリ計算（オラクル）

階層エンジン自身は平面・測地の計算をしない。
- GeodesicOracle: 経緯度リング（EPSG:4326）、WGS84 楕円体上で pyproj により計測
- PlanarOracle: 投影座標のリング、座標単位で計測
どちらも空間述語（交差・包含・単純性）は shapely で判定する。

境界だけを共有する（辺・頂点のみ接し、共通面積がない）リング同士は、
allow_shared_edges=True の間は交差とみなさない。False なら共有点が 1 つでも交差。
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from pyproj import Geod
from shapely.geometry import LineString, Point, Polygon
from shapely.validation import explain_validity

from .types import BoundingBox, Coordinate, Ring

_UNIT_FACTORS = {
    "meters": 1.0,
    "kilometers": 1000.0,
}


class GeometryOracle(Protocol):
    def area(self, ring: Ring) -> float: ...

    def length(self, path: Sequence[Coordinate]) -> float: ...

    def bounding_box(self, ring: Ring) -> BoundingBox: ...

    def distance(self, a: Coordinate, b: Coordinate, units: str = "meters") -> float: ...

    def intersects(self, a: Ring, b: Ring) -> bool: ...

    def contains(self, outer: Ring, inner: Ring) -> bool: ...

    def invalid_reason(self, ring: Ring) -> Optional[str]: ...


def _unit_factor(units: str) -> float:
    try:
        return _UNIT_FACTORS[units]
    except KeyError:
        raise ValueError(f"unsupported distance unit: {units!r}") from None


class _ShapelyPredicates:
    def __init__(self, allow_shared_edges: bool = True):
        self.allow_shared_edges = allow_shared_edges

    def bounding_box(self, ring: Ring) -> BoundingBox:
        return tuple(Polygon(ring).bounds)  # type: ignore[return-value]

    def intersects(self, a: Ring, b: Ring) -> bool:
        pa, pb = Polygon(a), Polygon(b)
        if not pa.intersects(pb):
            return False
        if self.allow_shared_edges and pa.touches(pb):
            return False
        return True

    def contains(self, outer: Ring, inner: Ring) -> bool:
        # 境界上も内側とみなす
        return Polygon(outer).covers(Polygon(inner))

    def invalid_reason(self, ring: Ring) -> Optional[str]:
        """単純ポリゴンでなければ理由（例: "Self-intersection[5 5]"）、妥当なら None"""
        poly = Polygon(ring)
        if poly.is_valid:
            return None
        return explain_validity(poly)


class GeodesicOracle(_ShapelyPredicates):
    """経緯度リング。結果はメートル / 平方メートル"""

    def __init__(self, allow_shared_edges: bool = True, ellps: str = "WGS84"):
        super().__init__(allow_shared_edges)
        self.geod = Geod(ellps=ellps)

    def area(self, ring: Ring) -> float:
        lons = [p[0] for p in ring]
        lats = [p[1] for p in ring]
        area, _ = self.geod.polygon_area_perimeter(lons, lats)
        # 回り方向で符号が変わる
        return abs(area)

    def length(self, path: Sequence[Coordinate]) -> float:
        if len(path) < 2:
            return 0.0
        return self.geod.line_length([p[0] for p in path], [p[1] for p in path])

    def distance(self, a: Coordinate, b: Coordinate, units: str = "meters") -> float:
        factor = _unit_factor(units)
        _, _, dist = self.geod.inv(a[0], a[1], b[0], b[1])
        return dist / factor


class PlanarOracle(_ShapelyPredicates):
    """投影座標のリング。距離は座標単位（メートル扱い）のユークリッド距離"""

    def area(self, ring: Ring) -> float:
        return Polygon(ring).area

    def length(self, path: Sequence[Coordinate]) -> float:
        if len(path) < 2:
            return 0.0
        return LineString(path).length

    def distance(self, a: Coordinate, b: Coordinate, units: str = "meters") -> float:
        factor = _unit_factor(units)
        return Point(a).distance(Point(b)) / factor


def build_oracle(mode: str, allow_shared_edges: bool = True) -> GeometryOracle:
    if mode == "geodesic":
        return GeodesicOracle(allow_shared_edges=allow_shared_edges)
    if mode == "planar":
        return PlanarOracle(allow_shared_edges=allow_shared_edges)
    raise ValueError(f"unknown geometry mode: {mode!r}")
