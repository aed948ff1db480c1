# backend/zonemap/services/persistence/polygons.py
"""ストア ⇔ DB の橋渡し

保存するのは id / 種別 / parent_id / 兄弟内の位置 / リングだけ。
名前と計測値は読み込み時に HierarchyStore.from_records が計算し直す。
"""
from __future__ import annotations

import json

from sqlalchemy.orm import Session

from zonemap.core import GeometryOracle, HierarchyStore, PolygonRecord, PolygonType
from zonemap.models.polygon import HierarchyPolygon

_LEVEL = {t: i for i, t in enumerate(PolygonType)}


def _to_geojson(ring) -> str:
    return json.dumps({"type": "Polygon", "coordinates": [[list(p) for p in ring]]})


def _from_geojson(text: str):
    geom = json.loads(text)
    return geom["coordinates"][0]


def sibling_positions(store: HierarchyStore) -> dict[str, int]:
    """{id: 兄弟内の位置}（親ごとの子リストを 1 回ずつ走査）"""
    positions: dict[str, int] = {}
    parents = [None] + [e.id for e in store.entities() if e.type.child_type is not None]
    for parent_id in parents:
        for i, child in enumerate(store.children_of(parent_id)):
            positions[child.id] = i
    return positions


def load_store(db: Session, oracle: GeometryOracle) -> HierarchyStore:
    rows = db.query(HierarchyPolygon).all()
    # 親 → 子の順、兄弟内は position 順
    rows.sort(key=lambda r: (_LEVEL[PolygonType(r.type)], r.position, r.id))
    records = [
        PolygonRecord(
            id=r.id,
            type=PolygonType(r.type),
            parent_id=r.parent_id,
            ring=tuple(tuple(p) for p in _from_geojson(r.geometry)),
        )
        for r in rows
    ]
    return HierarchyStore.from_records(records, oracle)


def save_store(db: Session, store: HierarchyStore) -> None:
    """polygons テーブルを store と同じ内容にする。commit は呼び出し側で行う"""
    existing = {r.id: r for r in db.query(HierarchyPolygon).all()}

    gone = [pid for pid in existing if pid not in store]
    if gone:
        db.query(HierarchyPolygon).filter(HierarchyPolygon.id.in_(gone)).delete(
            synchronize_session=False
        )

    positions = sibling_positions(store)
    for entity in store.entities():
        geometry = _to_geojson(entity.ring)
        row = existing.get(entity.id)
        if row is None:
            db.add(HierarchyPolygon(
                id=entity.id,
                type=entity.type.value,
                parent_id=entity.parent_id,
                position=positions[entity.id],
                geometry=geometry,
            ))
        else:
            row.position = positions[entity.id]
            row.geometry = geometry
    db.flush()
