"""
Region algebra — Комбинирование боксов

Операции над двумя регионами одной размерности:
- intersection: пересечение (бокс всегда, если боксы пересекаются)
- union: объединение, только когда результат снова бокс
- convex_hull: минимальный бокс, содержащий оба входа

Правило объединения:
Объединение двух axis-aligned боксов является боксом, только если боксы
отличаются сдвигом, ограниченным одной осью на каждой грани:
db = A.low - B.low и de = A.high - B.high имеют не более одной ненулевой
компоненты (относительно собственной LINF-нормы, с TOLERANCE), и если обе
ненулевые, это должна быть одна и та же ось. Нулевой вектор разности совместим
с любой осью.
"""

from typing import Optional

from src.core.result import OpResult, ResultCode
from src.core.domain.vector import Norm, Vector
from src.core.geometry.region import Region
from src.core.math.numerical_safeguards import TOLERANCE, is_zero
from src.core.result_logger import ResultLogger, report


# =============================================================================
# HELPERS
# =============================================================================


def _check_pair(
    left: Optional[Region],
    right: Optional[Region],
    where: str,
    logger: Optional[ResultLogger],
) -> ResultCode:
    if left is None or right is None or left.dim != right.dim:
        return report(
            logger, f"in {where}: null param or dimension mismatch", ResultCode.BAD_REFERENCE
        )
    return ResultCode.SUCCESS


def axis_of_difference(diff: list[float]) -> tuple[bool, Optional[int]]:
    """
    Проверка параллельности вектора разности одной оси.

    Компонента считается ненулевой, если |c_i| / ||diff||_inf > TOLERANCE.

    Args:
        diff: Вектор разности углов

    Returns:
        (parallel, axis):
        - (True, None) для нулевого вектора (совместим с любой осью)
        - (True, i) если ненулевая только компонента i
        - (False, None) если ненулевых компонент больше одной
    """
    norm = Vector(diff).norm(Norm.LINF)
    if is_zero(norm):
        return True, None

    axes = [i for i, c in enumerate(diff) if abs(c / norm) > TOLERANCE]
    if len(axes) > 1:
        return False, None
    return True, axes[0]


def _has_gap(left: Region, right: Region) -> bool:
    """Есть ли ось, по которой боксы разделены зазором."""
    l_low, l_high = left.bounds()
    r_low, r_high = right.bounds()
    for i in range(left.dim):
        if l_high[i] < r_low[i] - TOLERANCE or r_high[i] < l_low[i] - TOLERANCE:
            return True
    return False


def _enclosing(left: Region, right: Region, logger: Optional[ResultLogger]) -> OpResult[Region]:
    l_low, l_high = left.bounds()
    r_low, r_high = right.bounds()
    low = Vector([min(a, b) for a, b in zip(l_low, r_low)])
    high = Vector([max(a, b) for a, b in zip(l_high, r_high)])
    return Region.create(low, high, logger)


# =============================================================================
# OPERATIONS
# =============================================================================


def intersection(
    left: Optional[Region],
    right: Optional[Region],
    logger: Optional[ResultLogger] = None,
) -> OpResult[Region]:
    """
    Пересечение двух регионов.

    Returns:
        Region(max(A.low, B.low), min(A.high, B.high)) или:
        - BAD_REFERENCE: None / несовпадение размерностей
        - WRONG_ARGUMENT: регионы не пересекаются
    """
    code = _check_pair(left, right, "intersection", logger)
    if code != ResultCode.SUCCESS:
        return OpResult.failure(code)

    if not left.intersects(right).value:
        code = report(logger, "in intersection: cannot intersect", ResultCode.WRONG_ARGUMENT)
        return OpResult.failure(code, f"{left!r} and {right!r} do not overlap")

    l_low, l_high = left.bounds()
    r_low, r_high = right.bounds()
    low = Vector([max(a, b) for a, b in zip(l_low, r_low)])
    high = Vector([min(a, b) for a, b in zip(l_high, r_high)])
    return Region.create(low, high, logger)


def union(
    left: Optional[Region],
    right: Optional[Region],
    logger: Optional[ResultLogger] = None,
) -> OpResult[Region]:
    """
    Объединение двух регионов, если оно представимо одним боксом.

    Порядок проверок:
    1. Зазор по какой-либо оси → WRONG_ARGUMENT
    2. right ⊆ left → клон left; left ⊆ right → клон right
    3. Правило одной оси для db/de → бокс (min lows, max highs)
    4. Иначе WRONG_ARGUMENT (используйте convex_hull)
    """
    code = _check_pair(left, right, "union", logger)
    if code != ResultCode.SUCCESS:
        return OpResult.failure(code)

    if _has_gap(left, right):
        code = report(logger, "in union: boxes are not connected", ResultCode.WRONG_ARGUMENT)
        return OpResult.failure(code, "gap between boxes")

    if left.contains_region(right).value:
        return OpResult.success(left.clone())

    if right.contains_region(left).value:
        return OpResult.success(right.clone())

    l_low, l_high = left.bounds()
    r_low, r_high = right.bounds()
    begin_parallel, begin_axis = axis_of_difference([a - b for a, b in zip(l_low, r_low)])
    end_parallel, end_axis = axis_of_difference([a - b for a, b in zip(l_high, r_high)])

    if begin_parallel and end_parallel:
        if begin_axis is None or end_axis is None or begin_axis == end_axis:
            return _enclosing(left, right, logger)

    code = report(
        logger,
        "in union: cannot create convex union. Try convex_hull instead",
        ResultCode.WRONG_ARGUMENT,
    )
    return OpResult.failure(
        code, f"not a convex union (begin_axis={begin_axis}, end_axis={end_axis})"
    )


def convex_hull(
    left: Optional[Region],
    right: Optional[Region],
    logger: Optional[ResultLogger] = None,
) -> OpResult[Region]:
    """Минимальный бокс, содержащий оба региона: (min lows, max highs)."""
    code = _check_pair(left, right, "convex_hull", logger)
    if code != ResultCode.SUCCESS:
        return OpResult.failure(code)
    return _enclosing(left, right, logger)
