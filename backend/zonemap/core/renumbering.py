# backend/zonemap/core/renumbering.py
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Tuple

from .naming import area_name, plot_name, zone_name

if TYPE_CHECKING:
    from .store import HierarchyStore

logger = logging.getLogger(__name__)


def renumber(store: "HierarchyStore") -> Dict[str, Tuple[str, str]]:
    """兄弟内の番号が 1..N の連番になるよう、全ポリゴンの名前を書き直す。

    子のコードは上位の番号を含むので上から順に処理する。兄弟の順序はストアの
    子リストに従い、ここでは並べ替えない。
    実際に変わった名前だけを ``{id: (旧名, 新名)}`` で返す。
    """
    renamed: Dict[str, Tuple[str, str]] = {}

    def _set(entity, new_name: str) -> None:
        if entity.name != new_name:
            renamed[entity.id] = (entity.name, new_name)
            entity.name = new_name

    areas = store.children_of(None)
    for a_no, area in enumerate(areas, start=1):
        _set(area, area_name(a_no))

    for a_no, area in enumerate(areas, start=1):
        zones = store.children_of(area.id)
        for z_no, zone in enumerate(zones, start=1):
            _set(zone, zone_name(a_no, z_no))

        for z_no, zone in enumerate(zones, start=1):
            # 上位の番号が変わっていなくても SP は必ず計算し直す
            for p_no, plot in enumerate(store.children_of(zone.id), start=1):
                _set(plot, plot_name(a_no, z_no, p_no))

    for entity_id, (old, new) in renamed.items():
        logger.debug("renamed %s: %s -> %s", entity_id, old, new)
    return renamed
