# backend/zonemap/schemas/commons.py
from typing import Literal

PolygonKind = Literal["area", "mz", "sp"]


def polygon_exterior(geometry: dict) -> list:
    """GeoJSON Polygon の外輪座標を返す（穴は扱わない）"""
    g = geometry or {}
    if g.get("type") != "Polygon":
        raise ValueError("geometry.type must be Polygon")
    coords = g.get("coordinates")
    if not isinstance(coords, list) or not coords or not isinstance(coords[0], list):
        raise ValueError("geometry.coordinates must hold at least one ring")
    return coords[0]
