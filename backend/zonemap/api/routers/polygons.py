from fastapi import APIRouter, Depends, HTTPException, Request
from typing import Optional

from zonemap.core import HierarchyError, NotFoundError, PolygonType
from zonemap.schemas.commons import PolygonKind
from zonemap.schemas.polygon import (
    DeleteOut,
    DeletePreviewOut,
    GeometryIn,
    PolygonIn,
    PolygonOut,
    to_feature,
)
from zonemap.services.hierarchy.controller import HierarchyController

router = APIRouter()


def get_controller(request: Request) -> HierarchyController:
    return request.app.state.controller


def _http_error(err: HierarchyError) -> HTTPException:
    status = 404 if isinstance(err, NotFoundError) else 400
    return HTTPException(status_code=status, detail=err.to_dict())


def _ring(payload) -> list:
    try:
        return payload.ring()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/ping")
def ping():
    return {"ok": True, "router": "polygons"}


@router.get("")
@router.get("/")
def list_polygons(type: Optional[PolygonKind] = None, ctl: HierarchyController = Depends(get_controller)):
    """
    全ポリゴンを GeoJSON FeatureCollection で返す。
    - type が指定されれば絞り込み（area|mz|sp）
    - 並びは Area → MZ → SP、兄弟内は作成順
    """
    polygon_type = PolygonType(type) if type else None
    feats = [to_feature(e) for e in ctl.list_polygons(polygon_type)]
    return {"type": "FeatureCollection", "features": feats}


@router.post("")
@router.post("/")
def create_polygon(payload: PolygonIn, ctl: HierarchyController = Depends(get_controller)) -> PolygonOut:
    ring = _ring(payload)
    try:
        entity = ctl.add(PolygonType(payload.type), payload.parent_id, ring)
    except HierarchyError as e:
        raise _http_error(e)
    return PolygonOut.from_entity(entity)


@router.get("/{polygon_id}")
def get_polygon(polygon_id: str, ctl: HierarchyController = Depends(get_controller)) -> PolygonOut:
    try:
        return PolygonOut.from_entity(ctl.get(polygon_id))
    except HierarchyError as e:
        raise _http_error(e)


@router.patch("/{polygon_id}/geometry")
def update_geometry(polygon_id: str, payload: GeometryIn, ctl: HierarchyController = Depends(get_controller)) -> PolygonOut:
    ring = _ring(payload)
    try:
        entity = ctl.update_geometry(polygon_id, ring)
    except HierarchyError as e:
        raise _http_error(e)
    return PolygonOut.from_entity(entity)


@router.delete("/{polygon_id}/vertices/{vertex_index}")
def delete_vertex(polygon_id: str, vertex_index: int, ctl: HierarchyController = Depends(get_controller)) -> PolygonOut:
    try:
        entity = ctl.delete_vertex(polygon_id, vertex_index)
    except HierarchyError as e:
        raise _http_error(e)
    return PolygonOut.from_entity(entity)


@router.get("/{polygon_id}/delete-preview")
def delete_preview(polygon_id: str, ctl: HierarchyController = Depends(get_controller)) -> DeletePreviewOut:
    # 削除確認ダイアログ用：配下ポリゴン名の一覧
    try:
        return DeletePreviewOut.from_preview(ctl.removal_preview(polygon_id))
    except HierarchyError as e:
        raise _http_error(e)


@router.delete("/{polygon_id}")
def delete_polygon(polygon_id: str, ctl: HierarchyController = Depends(get_controller)) -> DeleteOut:
    # 配下（MZ / SP）もまとめて削除し、残りを採番し直す
    try:
        result = ctl.remove(polygon_id)
    except HierarchyError as e:
        raise _http_error(e)
    return DeleteOut.from_result(result)
