# backend/zonemap/core/rings.py
from __future__ import annotations

from typing import Iterable, Sequence

from .errors import DegenerateRingError, VertexIndexError
from .types import Coordinate, Ring

MIN_DISTINCT_VERTICES = 3


def to_ring(coords: Iterable[Sequence[float]]) -> Ring:
    """GeoJSON 形式の ``[[x, y], ...]`` を不変のリングに変換する。

    3 次元目以降（標高など）は捨てる。
    """
    ring = []
    for c in coords:
        if not isinstance(c, (list, tuple)) or len(c) < 2:
            raise DegenerateRingError("Each coordinate needs at least two ordinates")
        try:
            ring.append((float(c[0]), float(c[1])))
        except (TypeError, ValueError):
            raise DegenerateRingError("Coordinates must be numbers") from None
    return tuple(ring)


def check_ring(ring: Ring) -> None:
    """閉じていて、異なる頂点が 3 つ以上あるリングでなければ DegenerateRingError"""
    if len(ring) < MIN_DISTINCT_VERTICES + 1:
        raise DegenerateRingError(
            f"Polygon must have at least {MIN_DISTINCT_VERTICES} vertices"
        )
    if ring[0] != ring[-1]:
        raise DegenerateRingError("Ring is not closed (first point must equal last point)")
    if len(set(ring[:-1])) < MIN_DISTINCT_VERTICES:
        raise DegenerateRingError(
            f"Polygon must have at least {MIN_DISTINCT_VERTICES} distinct vertices"
        )


def vertices(ring: Ring) -> Ring:
    # 閉じ点を除いた頂点列
    return ring[:-1]


def close_ring(points: Sequence[Coordinate]) -> Ring:
    return tuple(points) + (points[0],)


def remove_vertex(ring: Ring, index: int) -> Ring:
    """頂点 ``index`` を取り除いたリングを返す。

    ``index`` は閉じ点を除いた頂点 ``0..n-1`` を指す。閉じ点は削除後の先頭頂点
    から作り直すので、先頭 (0) を消しても末尾 (n-1) を消しても閉じたリングになる。
    """
    pts = list(vertices(ring))
    if index < 0 or index >= len(pts):
        raise VertexIndexError(index, len(pts))
    if len(pts) <= MIN_DISTINCT_VERTICES:
        raise DegenerateRingError(
            f"Polygon must have at least {MIN_DISTINCT_VERTICES} vertices"
        )
    del pts[index]
    return close_ring(pts)
