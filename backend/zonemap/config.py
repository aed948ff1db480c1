"""環境変数（.env）からのアプリ設定"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # DATABASE_URL が未指定なら db.py で SQLite のパスを決める
    database_url: Optional[str] = None
    log_level: str = "info"

    # lon/lat (EPSG:4326) なら geodesic、投影座標なら planar
    geometry_mode: Literal["geodesic", "planar"] = "geodesic"
    # 辺だけを共有するポリゴン同士は重なりとみなさない
    allow_shared_edges: bool = True

    cors_origins: list[str] = ["*"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
