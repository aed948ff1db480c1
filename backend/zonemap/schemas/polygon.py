# backend/zonemap/schemas/polygon.py
from pydantic import BaseModel
from typing import Optional

from zonemap.core import PolygonEntity, RemovalPreview, RemovalResult, format_measurement
from .commons import PolygonKind, polygon_exterior


class PolygonIn(BaseModel):
    type: PolygonKind
    parent_id: Optional[str] = None
    geometry: dict  # GeoJSON Polygon

    def ring(self) -> list:
        return polygon_exterior(self.geometry)


class GeometryIn(BaseModel):
    geometry: dict  # GeoJSON Polygon

    def ring(self) -> list:
        return polygon_exterior(self.geometry)


class PolygonOut(BaseModel):
    id: str
    type: PolygonKind
    name: str
    parent_id: Optional[str] = None
    area: float
    perimeter: float
    width: float
    height: float
    vertices: int
    coordinates: list[list[float]]

    @classmethod
    def from_entity(cls, e: PolygonEntity) -> "PolygonOut":
        m = e.measurements
        return cls(
            id=e.id,
            type=e.type.value,
            name=e.name,
            parent_id=e.parent_id,
            area=m.area,
            perimeter=m.perimeter,
            width=m.bounding_width,
            height=m.bounding_height,
            vertices=m.vertex_count,
            coordinates=[list(p) for p in e.ring],
        )


def to_feature(e: PolygonEntity) -> dict:
    m = e.measurements
    return {
        "type": "Feature",
        "id": e.id,
        "geometry": {"type": "Polygon", "coordinates": [[list(p) for p in e.ring]]},
        "properties": {
            "id": e.id,
            "type": e.type.value,
            "type_label": e.type.label,
            "name": e.name,
            "parent_id": e.parent_id,
            "area": m.area,
            "perimeter": m.perimeter,
            "width": m.bounding_width,
            "height": m.bounding_height,
            "vertices": m.vertex_count,
            "area_label": format_measurement(m.area, "m²"),
            "perimeter_label": format_measurement(m.perimeter, "m"),
        },
    }


class DeletePreviewOut(BaseModel):
    id: str
    name: str
    children_names: list[str]

    @classmethod
    def from_preview(cls, p: RemovalPreview) -> "DeletePreviewOut":
        return cls(id=p.id, name=p.name, children_names=list(p.descendant_names))


class DeleteOut(BaseModel):
    ok: bool = True
    removed: list[str]
    renamed: dict[str, str]  # id -> 新しい名前

    @classmethod
    def from_result(cls, r: RemovalResult) -> "DeleteOut":
        return cls(
            removed=list(r.removed_ids),
            renamed={pid: new for pid, (_, new) in r.renamed.items()},
        )
