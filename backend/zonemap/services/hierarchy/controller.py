# backend/zonemap/services/hierarchy/controller.py
"""稼働中の HierarchyStore の唯一の持ち主

FastAPI は同期エンドポイントをスレッドプールで実行するため、すべての操作を
1 つのロックで直列化する。変更が成功するたびに DB へ書き込み、書き込みに
失敗したら DB から読み直して、メモリと DB の内容を一致させる。
"""
from __future__ import annotations

import dataclasses
import logging
import threading
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from zonemap.core import (
    GeometryOracle,
    HierarchyStore,
    PolygonEntity,
    PolygonType,
    RemovalPreview,
    RemovalResult,
)
from zonemap.services.persistence.polygons import load_store, save_store

logger = logging.getLogger(__name__)


def _copy(entity: PolygonEntity) -> PolygonEntity:
    return dataclasses.replace(entity)


class HierarchyController:
    def __init__(
        self,
        oracle: GeometryOracle,
        session_factory: Optional[Callable[[], Session]] = None,
    ):
        self.oracle = oracle
        self._session_factory = session_factory
        self._lock = threading.Lock()
        self.store = self._load()

    def _load(self) -> HierarchyStore:
        if self._session_factory is None:
            return HierarchyStore(self.oracle)
        db = self._session_factory()
        try:
            return load_store(db, self.oracle)
        finally:
            db.close()

    def _persist(self) -> None:
        if self._session_factory is None:
            return
        db = self._session_factory()
        try:
            save_store(db, self.store)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("failed to persist polygon hierarchy; reloading from database")
            self.store = self._load()
            raise
        finally:
            db.close()

    # -- 参照

    def list_polygons(self, polygon_type: Optional[PolygonType] = None) -> List[PolygonEntity]:
        with self._lock:
            items = self.store.by_type(polygon_type) if polygon_type else self.store.entities()
            return [_copy(e) for e in items]

    def get(self, polygon_id: str) -> PolygonEntity:
        with self._lock:
            return _copy(self.store.require(polygon_id))

    def removal_preview(self, polygon_id: str) -> RemovalPreview:
        with self._lock:
            return self.store.removal_preview(polygon_id)

    # -- 変更

    def add(self, polygon_type: PolygonType, parent_id: Optional[str], ring) -> PolygonEntity:
        with self._lock:
            entity = self.store.add_polygon(polygon_type, parent_id, ring)
            self._persist()
            return _copy(entity)

    def update_geometry(self, polygon_id: str, ring) -> PolygonEntity:
        with self._lock:
            entity = self.store.update_polygon_geometry(polygon_id, ring)
            self._persist()
            return _copy(entity)

    def delete_vertex(self, polygon_id: str, vertex_index: int) -> PolygonEntity:
        with self._lock:
            entity = self.store.delete_vertex(polygon_id, vertex_index)
            self._persist()
            return _copy(entity)

    def remove(self, polygon_id: str) -> RemovalResult:
        with self._lock:
            result = self.store.remove_polygon(polygon_id)
            self._persist()
            return result
