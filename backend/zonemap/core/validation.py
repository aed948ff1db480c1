# backend/zonemap/core/validation.py
"""新規・編集リングの受け入れ判定

以下の順に判定し、最初に失敗した規則のエラーを送出する。

0. リング自体が使えること（閉じている・異なる頂点 3 つ以上・自己交差なし）
1. 同じ種別のポリゴンと重ならないこと
2. MZ / SP は親の内側にあること
3. Area / MZ の編集時は、子がすべて新しいリングの内側に残ること

判定はストアを読むだけで、変更はしない。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .errors import (
    ChildOutOfBoundsError,
    ContainmentError,
    DegenerateRingError,
    MissingParentError,
    OverlapError,
)
from .oracle import GeometryOracle
from .rings import check_ring
from .types import PolygonType, Ring

if TYPE_CHECKING:
    from .store import HierarchyStore


def check_ring_shape(ring: Ring, oracle: GeometryOracle) -> None:
    check_ring(ring)
    reason = oracle.invalid_reason(ring)
    if reason is not None:
        raise DegenerateRingError(f"Ring is not a simple polygon: {reason}")


def check_overlap(
    ring: Ring,
    polygon_type: PolygonType,
    store: "HierarchyStore",
    oracle: GeometryOracle,
    exclude_id: Optional[str] = None,
) -> None:
    for other in store.by_type(polygon_type):
        if other.id == exclude_id:
            continue
        if oracle.intersects(ring, other.ring):
            raise OverlapError(polygon_type, other.id)


def check_within_parent(
    ring: Ring,
    polygon_type: PolygonType,
    parent_id: Optional[str],
    store: "HierarchyStore",
    oracle: GeometryOracle,
) -> None:
    expected = polygon_type.parent_type
    if expected is None:
        return
    parent = store.get(parent_id) if parent_id is not None else None
    if parent is None or parent.type is not expected:
        raise MissingParentError(parent_id, expected)
    if not oracle.contains(parent.ring, ring):
        raise ContainmentError(parent.id, polygon_type)


def check_children_contained(
    ring: Ring,
    polygon_type: PolygonType,
    entity_id: str,
    store: "HierarchyStore",
    oracle: GeometryOracle,
) -> None:
    if polygon_type.child_type is None:
        return
    # 子リストの順に見て、最初にはみ出した子を報告
    for child in store.children_of(entity_id):
        if not oracle.contains(ring, child.ring):
            raise ChildOutOfBoundsError(child.id, child.name, polygon_type)


def validate_ring(
    ring: Ring,
    polygon_type: PolygonType,
    parent_id: Optional[str],
    store: "HierarchyStore",
    oracle: GeometryOracle,
    exclude_id: Optional[str] = None,
) -> None:
    """該当する最初の ValidationError を送出する。問題なければ None。

    ``exclude_id`` を渡すと編集モード：編集中のポリゴン自身は重なり判定から除き、
    その子が ``ring`` の内側に残るかも確認する。
    """
    check_ring_shape(ring, oracle)
    check_overlap(ring, polygon_type, store, oracle, exclude_id)
    check_within_parent(ring, polygon_type, parent_id, store, oracle)
    if exclude_id is not None:
        check_children_contained(ring, polygon_type, exclude_id, store, oracle)
