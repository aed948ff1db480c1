# backend/zonemap/core/store.py
"""ポリゴン階層と、それを変更する唯一の場所

親は子 id の順序付きリストを持ち、子は parent_id で親を参照するだけ。
兄弟内の順位（つまり名前）はこのリストから決め、dict の反復順には頼らない。
Area は親 None の子として扱う。
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Union

from .errors import HierarchyError, MissingParentError, NotFoundError, ValidationError
from .measurements import compute_measurements
from .naming import generate_name
from .oracle import GeometryOracle
from .renumbering import renumber
from .rings import remove_vertex, to_ring
from .types import (
    PolygonEntity,
    PolygonRecord,
    PolygonType,
    RemovalPreview,
    RemovalResult,
    Ring,
)
from .validation import check_ring_shape, validate_ring

logger = logging.getLogger(__name__)

RingLike = Union[Ring, Sequence[Sequence[float]]]


def _new_id() -> str:
    return uuid.uuid4().hex


class HierarchyStore:
    def __init__(self, oracle: GeometryOracle, id_factory: Callable[[], str] = _new_id):
        self.oracle = oracle
        self._id_factory = id_factory
        self._entities: Dict[str, PolygonEntity] = {}
        self._children: Dict[Optional[str], List[str]] = {None: []}

    # -- 参照

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, polygon_id: object) -> bool:
        return polygon_id in self._entities

    def __iter__(self) -> Iterator[PolygonEntity]:
        return iter(self.entities())

    def get(self, polygon_id: Optional[str]) -> Optional[PolygonEntity]:
        if polygon_id is None:
            return None
        return self._entities.get(polygon_id)

    def require(self, polygon_id: str) -> PolygonEntity:
        entity = self.get(polygon_id)
        if entity is None:
            raise NotFoundError(polygon_id)
        return entity

    def children_of(self, polygon_id: Optional[str]) -> List[PolygonEntity]:
        """直下の子（作成順）。None なら Area 一覧"""
        if polygon_id is not None and polygon_id not in self._entities:
            raise NotFoundError(polygon_id)
        return [self._entities[cid] for cid in self._children.get(polygon_id, ())]

    def by_type(self, polygon_type: PolygonType) -> List[PolygonEntity]:
        """指定種別の全ポリゴン（親の順 → 兄弟内の順）"""
        level = self.children_of(None)
        while level and level[0].type is not polygon_type:
            level = [c for e in level for c in self.children_of(e.id)]
        return [e for e in level if e.type is polygon_type]

    def entities(self) -> List[PolygonEntity]:
        """全ポリゴン（Area → MZ → SP の順）"""
        return [e for t in PolygonType for e in self.by_type(t)]

    def find_descendants(self, polygon_id: str) -> List[str]:
        """配下すべての id（行きがけ順、再帰なし）"""
        self.require(polygon_id)
        found: List[str] = []
        stack = list(reversed(self._children.get(polygon_id, [])))
        while stack:
            cid = stack.pop()
            found.append(cid)
            stack.extend(reversed(self._children.get(cid, [])))
        return found

    def removal_preview(self, polygon_id: str) -> RemovalPreview:
        entity = self.require(polygon_id)
        names = tuple(self._entities[d].name for d in self.find_descendants(polygon_id))
        return RemovalPreview(id=entity.id, name=entity.name, descendant_names=names)

    def snapshot(self) -> tuple:
        """ストア全体の比較用の値（ポリゴンと兄弟順）"""
        entities = tuple(sorted(e.as_tuple() for e in self._entities.values()))
        children = tuple(
            sorted(((k or ""), tuple(v)) for k, v in self._children.items() if v)
        )
        return entities, children

    # -- 変更

    def add_polygon(
        self,
        polygon_type: Union[PolygonType, str],
        parent_id: Optional[str],
        ring: RingLike,
    ) -> PolygonEntity:
        polygon_type = PolygonType(polygon_type)
        ring = to_ring(ring)
        if polygon_type is PolygonType.AREA and parent_id is not None:
            raise ValidationError("An Area cannot have a parent")

        validate_ring(ring, polygon_type, parent_id, self, self.oracle)

        measurements = compute_measurements(ring, self.oracle)
        name = generate_name(polygon_type, parent_id, self)
        entity = PolygonEntity(
            id=self._id_factory(),
            type=polygon_type,
            parent_id=parent_id,
            name=name,
            ring=ring,
            measurements=measurements,
        )
        self._insert(entity)
        logger.debug("added %s %s (%s)", polygon_type.value, entity.name, entity.id)
        return entity

    def update_polygon_geometry(self, polygon_id: str, ring: RingLike) -> PolygonEntity:
        entity = self.require(polygon_id)
        ring = to_ring(ring)
        validate_ring(ring, entity.type, entity.parent_id, self, self.oracle, exclude_id=entity.id)

        measurements = compute_measurements(ring, self.oracle)
        entity.ring = ring
        entity.measurements = measurements
        logger.debug("updated geometry of %s (%s)", entity.name, entity.id)
        return entity

    def delete_vertex(self, polygon_id: str, vertex_index: int) -> PolygonEntity:
        """頂点を 1 つ削除し、結果のリングを再検証する"""
        entity = self.require(polygon_id)
        return self.update_polygon_geometry(polygon_id, remove_vertex(entity.ring, vertex_index))

    def remove_polygon(self, polygon_id: str) -> RemovalResult:
        """ポリゴンと配下をまとめて削除し、残りを採番し直す"""
        entity = self.require(polygon_id)
        doomed = [polygon_id] + self.find_descendants(polygon_id)

        self._children[entity.parent_id].remove(polygon_id)
        for did in doomed:
            self._children.pop(did, None)
            del self._entities[did]

        renamed = renumber(self)
        logger.info(
            "removed %s and %d descendant(s); %d polygon(s) renamed",
            entity.name, len(doomed) - 1, len(renamed),
        )
        return RemovalResult(removed_ids=tuple(doomed), renamed=renamed)

    def _insert(self, entity: PolygonEntity) -> None:
        self._entities[entity.id] = entity
        self._children.setdefault(entity.parent_id, []).append(entity.id)

    # -- 復元

    @classmethod
    def from_records(
        cls,
        records: Iterable[PolygonRecord],
        oracle: GeometryOracle,
        id_factory: Callable[[], str] = _new_id,
    ) -> "HierarchyStore":
        """保存済みレコードからストアを組み立て直す。

        レコードは親が子より先、兄弟内は順序どおりに並んでいること。
        名前と計測値は読み込まず再計算する。
        """
        store = cls(oracle, id_factory=id_factory)
        for rec in records:
            if rec.id in store._entities:
                raise HierarchyError(f"duplicate polygon id {rec.id!r}")
            expected = rec.type.parent_type
            parent = store.get(rec.parent_id)
            if expected is None:
                if rec.parent_id is not None:
                    raise MissingParentError(rec.parent_id)
            elif parent is None or parent.type is not expected:
                raise MissingParentError(rec.parent_id, expected)
            ring = to_ring(rec.ring)
            check_ring_shape(ring, oracle)
            store._insert(PolygonEntity(
                id=rec.id,
                type=rec.type,
                parent_id=rec.parent_id,
                name="",
                ring=ring,
                measurements=compute_measurements(ring, oracle),
            ))
        renumber(store)
        logger.debug("restored %d polygon(s)", len(store))
        return store

    def to_records(self) -> List[PolygonRecord]:
        return [
            PolygonRecord(id=e.id, type=e.type, parent_id=e.parent_id, ring=e.ring)
            for e in self.entities()
        ]
