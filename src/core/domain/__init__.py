"""
Domain models and value objects.

Contains the fundamental value types: Vector, PointSet and result codes.
"""

from src.core.domain.point_set import PointSet
from src.core.domain.point_set import difference as point_set_difference
from src.core.domain.point_set import intersection as point_set_intersection
from src.core.domain.point_set import symmetric_difference as point_set_symmetric_difference
from src.core.domain.point_set import union as point_set_union
from src.core.result import OpResult, ResultCode
from src.core.domain.vector import Norm, Vector

__all__ = [
    # Result codes
    "OpResult",
    "ResultCode",
    # Vector
    "Norm",
    "Vector",
    # Point set
    "PointSet",
    "point_set_difference",
    "point_set_intersection",
    "point_set_symmetric_difference",
    "point_set_union",
]
