# backend/zonemap/core/naming.py
"""階層コード（PA1, PA1_MZ2, PA1_MZ2_SP3）"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional

from .types import PolygonType

if TYPE_CHECKING:
    from .store import HierarchyStore

_AREA_RE = re.compile(r"^PA(\d+)")
_MZ_RE = re.compile(r"_MZ(\d+)")


def extract_area_number(name: str) -> int:
    """``"PA2"`` -> 2, ``"PA1_MZ3"`` -> 1。無ければ 0"""
    m = _AREA_RE.match(name)
    return int(m.group(1)) if m else 0


def extract_mz_number(name: str) -> int:
    """``"PA1_MZ3"`` -> 3。無ければ 0"""
    m = _MZ_RE.search(name)
    return int(m.group(1)) if m else 0


def area_name(area_no: int) -> str:
    return f"PA{area_no}"


def zone_name(area_no: int, mz_no: int) -> str:
    return f"PA{area_no}_MZ{mz_no}"


def plot_name(area_no: int, mz_no: int, sp_no: int) -> str:
    return f"PA{area_no}_MZ{mz_no}_SP{sp_no}"


def generate_name(
    polygon_type: PolygonType,
    parent_id: Optional[str],
    store: "HierarchyStore",
) -> str:
    """これから追加するポリゴンの連番コード

    子のコードは親の現在の名前から上位の番号を読み取る。
    番号の予約はせず、削除で空いた番号は再採番で詰める。
    """
    if polygon_type is PolygonType.AREA:
        return area_name(len(store.by_type(PolygonType.AREA)) + 1)

    parent = store.get(parent_id) if parent_id is not None else None
    if parent is not None and parent.type is polygon_type.parent_type:
        siblings = [c for c in store.children_of(parent.id) if c.type is polygon_type]
        area_no = extract_area_number(parent.name)
        if polygon_type is PolygonType.MONITORING_ZONE:
            return zone_name(area_no, len(siblings) + 1)
        return plot_name(area_no, extract_mz_number(parent.name), len(siblings) + 1)

    # 親が見つからない場合
    return f"{polygon_type.value.upper()}{len(store.by_type(polygon_type)) + 1}"
