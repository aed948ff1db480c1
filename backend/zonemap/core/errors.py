# backend/zonemap/core/errors.py
"""階層エンジンが送出するエラー

どれも呼び出し側で回復可能。送出時点でストアは変更されていない。
"""

from __future__ import annotations

from typing import Optional

from .types import PolygonType


class HierarchyError(Exception):
    kind = "hierarchy_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class ValidationError(HierarchyError):
    """提案されたリングを受け入れなかった"""

    kind = "validation_error"


class OverlapError(ValidationError):
    kind = "overlap"

    def __init__(self, polygon_type: PolygonType, conflicting_id: str):
        super().__init__(f"{polygon_type.plural_label} cannot overlap with each other")
        self.polygon_type = polygon_type
        self.conflicting_id = conflicting_id

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update(type=self.polygon_type.value, conflicting_id=self.conflicting_id)
        return d


class MissingParentError(ValidationError):
    kind = "missing_parent"

    def __init__(self, parent_id: Optional[str], expected_type: Optional[PolygonType] = None):
        if expected_type is not None:
            message = f"Parent {expected_type.label} {parent_id!r} does not exist"
        else:
            message = f"Parent {parent_id!r} does not exist"
        super().__init__(message)
        self.parent_id = parent_id
        self.expected_type = expected_type

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["parent_id"] = self.parent_id
        return d


class ContainmentError(ValidationError):
    kind = "containment"

    def __init__(self, parent_id: str, polygon_type: PolygonType):
        parent_label = polygon_type.parent_type.label if polygon_type.parent_type else "parent"
        super().__init__(
            f"{polygon_type.label} must be completely within the selected {parent_label}"
        )
        self.parent_id = parent_id
        self.polygon_type = polygon_type

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["parent_id"] = self.parent_id
        return d


class ChildOutOfBoundsError(ValidationError):
    kind = "child_out_of_bounds"

    def __init__(self, child_id: str, child_name: str, polygon_type: PolygonType):
        super().__init__(
            f'Cannot resize {polygon_type.label}: "{child_name}" would be outside the boundary'
        )
        self.child_id = child_id
        self.child_name = child_name

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update(child_id=self.child_id, child_name=self.child_name)
        return d


class DegenerateRingError(ValidationError):
    kind = "degenerate_ring"

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class VertexIndexError(ValidationError):
    kind = "vertex_index"

    def __init__(self, index: int, vertex_count: int):
        super().__init__(f"Vertex index {index} is out of range (0..{vertex_count - 1})")
        self.index = index
        self.vertex_count = vertex_count

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["index"] = self.index
        return d


class NotFoundError(HierarchyError):
    kind = "not_found"

    def __init__(self, polygon_id: Optional[str]):
        super().__init__(f"polygon {polygon_id!r} not found")
        self.id = polygon_id

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["id"] = self.id
        return d
