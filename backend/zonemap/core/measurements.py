# backend/zonemap/core/measurements.py
from __future__ import annotations

from .oracle import GeometryOracle
from .types import Measurements, Ring


def compute_measurements(ring: Ring, oracle: GeometryOracle) -> Measurements:
    """``ring`` の面積・周長・外接矩形の幅と高さ

    幅は外接矩形の中央緯度で東西方向、高さは中央経度で南北方向に測る。
    """
    area = oracle.area(ring)
    perimeter = oracle.length(ring)

    min_x, min_y, max_x, max_y = oracle.bounding_box(ring)
    mid_y = (min_y + max_y) / 2
    mid_x = (min_x + max_x) / 2
    width = oracle.distance((min_x, mid_y), (max_x, mid_y))
    height = oracle.distance((mid_x, min_y), (mid_x, max_y))

    return Measurements(
        area=area,
        perimeter=perimeter,
        bounding_width=width,
        bounding_height=height,
        vertex_count=len(ring) - 1,  # 閉じ点は数えない
    )


def format_measurement(value: float, unit: str) -> str:
    """表示用の値：長さは m / km、面積は m² / ha / km²"""
    if unit == "m²":
        if value >= 1_000_000:
            return f"{value / 1_000_000:.2f} km²"
        if value >= 10_000:
            return f"{value / 10_000:.2f} ha"
        return f"{value:.2f} m²"
    if unit == "m":
        if value >= 1000:
            return f"{value / 1000:.2f} km"
        return f"{value:.2f} m"
    raise ValueError(f"unsupported unit: {unit!r}")
