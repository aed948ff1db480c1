# backend/zonemap/models/polygon.py
from sqlalchemy import Integer, String, Column, ForeignKey, Text
from .base import Base


class HierarchyPolygon(Base):
    # 名前と計測値は保存しない（読み込み時に再計算）
    __tablename__ = "polygons"
    id = Column(String, primary_key=True)
    type = Column(String, nullable=False)  # area|mz|sp
    parent_id = Column(String, ForeignKey("polygons.id", ondelete="CASCADE"), nullable=True)
    position = Column(Integer, nullable=False, default=0)  # 兄弟内の挿入順
    geometry = Column(Text, nullable=False)  # GeoJSON 文字列（Polygon）
