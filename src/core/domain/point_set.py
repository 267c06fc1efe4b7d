"""
PointSet — Множество точек с дедупликацией по толерантности

Неупорядоченный набор векторов одной размерности. Две точки считаются
одинаковыми, если ||a - b|| < tolerance в заданной норме.

Множество владеет клонами элементов; get/find возвращают клоны.
Размерность пустого множества равна 0.
"""

from typing import Optional

from src.core.result import OpResult, ResultCode
from src.core.domain.vector import Norm, Vector
from src.core.math.numerical_safeguards import is_nan
from src.core.result_logger import ResultLogger, report


def _is_bad_tolerance(tolerance: float) -> bool:
    return is_nan(tolerance) or tolerance < 0


class PointSet:
    """Множество точек."""

    def __init__(self, logger: Optional[ResultLogger] = None):
        self._elements: list[Vector] = []
        self._logger = logger

    @property
    def dim(self) -> int:
        if not self._elements:
            return 0
        return self._elements[0].dim

    @property
    def size(self) -> int:
        return len(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    # -------------------------------------------------------------------------
    # Поиск
    # -------------------------------------------------------------------------

    def _index_of(self, sample: Vector, norm: Norm, tolerance: float) -> Optional[int]:
        for i, elem in enumerate(self._elements):
            diff = Vector.sub(sample, elem)
            if diff.ok and diff.value.norm(norm) < tolerance:
                return i
        return None

    def insert(self, vector: Optional[Vector], norm: Norm, tolerance: float) -> ResultCode:
        """
        Добавление точки.

        Returns:
            SUCCESS или:
            - NAN_VALUE: tolerance NaN или отрицательная
            - BAD_REFERENCE: vector is None
            - WRONG_DIM: размерность отличается от размерности множества
            - MULTIPLE_DEFINITION: точка уже есть (в пределах tolerance)
        """
        if _is_bad_tolerance(tolerance):
            return report(self._logger, "in PointSet.insert: NAN tolerance", ResultCode.NAN_VALUE)

        if vector is None:
            return report(self._logger, "in PointSet.insert: null param", ResultCode.BAD_REFERENCE)

        if self._elements and vector.dim != self.dim:
            return report(self._logger, "in PointSet.insert: dimension mismatch", ResultCode.WRONG_DIM)

        if self._index_of(vector, norm, tolerance) is not None:
            return report(
                self._logger, "in PointSet.insert: duplicate point", ResultCode.MULTIPLE_DEFINITION
            )

        self._elements.append(vector.clone())
        return ResultCode.SUCCESS

    def get(self, index: int) -> OpResult[Vector]:
        """Клон элемента по индексу (OUT_OF_BOUNDS вне диапазона)."""
        if index < 0 or index >= len(self._elements):
            code = report(self._logger, "in PointSet.get: bad index", ResultCode.OUT_OF_BOUNDS)
            return OpResult.failure(code)
        return OpResult.success(self._elements[index].clone())

    def find(self, sample: Optional[Vector], norm: Norm, tolerance: float) -> OpResult[Vector]:
        """
        Поиск элемента, близкого к sample.

        Returns:
            OpResult с клоном найденного элемента или
            NAN_VALUE / BAD_REFERENCE / WRONG_DIM / NOT_FOUND
        """
        if _is_bad_tolerance(tolerance):
            code = report(self._logger, "in PointSet.find: NAN tolerance", ResultCode.NAN_VALUE)
            return OpResult.failure(code)

        if sample is None:
            code = report(self._logger, "in PointSet.find: null param", ResultCode.BAD_REFERENCE)
            return OpResult.failure(code)

        if self._elements and sample.dim != self.dim:
            code = report(self._logger, "in PointSet.find: dimension mismatch", ResultCode.WRONG_DIM)
            return OpResult.failure(code)

        index = self._index_of(sample, norm, tolerance)
        if index is None:
            code = report(self._logger, "in PointSet.find", ResultCode.NOT_FOUND)
            return OpResult.failure(code)
        return OpResult.success(self._elements[index].clone())

    # -------------------------------------------------------------------------
    # Удаление
    # -------------------------------------------------------------------------

    def erase(self, index: int) -> ResultCode:
        if index < 0 or index >= len(self._elements):
            return report(self._logger, "in PointSet.erase: bad index", ResultCode.OUT_OF_BOUNDS)
        del self._elements[index]
        return ResultCode.SUCCESS

    def erase_like(self, sample: Optional[Vector], norm: Norm, tolerance: float) -> ResultCode:
        """Удаление первого элемента, близкого к sample."""
        if _is_bad_tolerance(tolerance):
            return report(self._logger, "in PointSet.erase_like: NAN tolerance", ResultCode.NAN_VALUE)

        if sample is None:
            return report(
                self._logger, "in PointSet.erase_like: null param", ResultCode.BAD_REFERENCE
            )

        if self._elements and sample.dim != self.dim:
            return report(
                self._logger, "in PointSet.erase_like: dimension mismatch", ResultCode.WRONG_DIM
            )

        index = self._index_of(sample, norm, tolerance)
        if index is None:
            return report(self._logger, "in PointSet.erase_like", ResultCode.NOT_FOUND)

        del self._elements[index]
        return ResultCode.SUCCESS

    def clear(self) -> None:
        self._elements.clear()

    def clone(self) -> "PointSet":
        copy = PointSet(self._logger)
        copy._elements = [elem.clone() for elem in self._elements]
        return copy

    def to_lists(self) -> list[list[float]]:
        return [elem.to_list() for elem in self._elements]


# =============================================================================
# SET ALGEBRA
# =============================================================================


def _check_operands(
    left: Optional[PointSet],
    right: Optional[PointSet],
    tolerance: float,
    where: str,
    logger: Optional[ResultLogger],
    check_dim: bool = True,
) -> ResultCode:
    if _is_bad_tolerance(tolerance):
        return report(logger, f"in {where}: NAN tolerance", ResultCode.NAN_VALUE)

    if left is None or right is None:
        return report(logger, f"in {where}: null operand", ResultCode.BAD_REFERENCE)

    # Пустое множество совместимо с любой размерностью
    if check_dim and left.size and right.size and left.dim != right.dim:
        return report(logger, f"in {where}: dim mismatch", ResultCode.WRONG_DIM)

    return ResultCode.SUCCESS


def union(
    left: Optional[PointSet],
    right: Optional[PointSet],
    norm: Norm,
    tolerance: float,
    logger: Optional[ResultLogger] = None,
) -> OpResult[PointSet]:
    """Объединение: все элементы left плюс элементы right, которых нет в left."""
    code = _check_operands(left, right, tolerance, "point_set.union", logger)
    if code != ResultCode.SUCCESS:
        return OpResult.failure(code)

    result = left.clone()
    for elem in right._elements:
        if result._index_of(elem, norm, tolerance) is None:
            result._elements.append(elem.clone())
    return OpResult.success(result)


def intersection(
    left: Optional[PointSet],
    right: Optional[PointSet],
    norm: Norm,
    tolerance: float,
    logger: Optional[ResultLogger] = None,
) -> OpResult[PointSet]:
    """Пересечение: элементы right, для которых есть близкий элемент в left."""
    code = _check_operands(left, right, tolerance, "point_set.intersection", logger)
    if code != ResultCode.SUCCESS:
        return OpResult.failure(code)

    result = PointSet(logger)
    for elem in right._elements:
        if left._index_of(elem, norm, tolerance) is not None:
            if result._index_of(elem, norm, tolerance) is None:
                result._elements.append(elem.clone())
    return OpResult.success(result)


def difference(
    left: Optional[PointSet],
    right: Optional[PointSet],
    norm: Norm,
    tolerance: float,
    logger: Optional[ResultLogger] = None,
) -> OpResult[PointSet]:
    """Разность: элементы left, которых нет в right."""
    code = _check_operands(left, right, tolerance, "point_set.difference", logger, check_dim=False)
    if code != ResultCode.SUCCESS:
        return OpResult.failure(code)

    result = PointSet(logger)
    for elem in left._elements:
        if right.size and right.dim == elem.dim and right._index_of(elem, norm, tolerance) is not None:
            continue
        result._elements.append(elem.clone())
    return OpResult.success(result)


def symmetric_difference(
    left: Optional[PointSet],
    right: Optional[PointSet],
    norm: Norm,
    tolerance: float,
    logger: Optional[ResultLogger] = None,
) -> OpResult[PointSet]:
    """Симметрическая разность: union(left, right) минус intersection(left, right)."""
    unified = union(left, right, norm, tolerance, logger)
    if not unified.ok:
        return unified

    common = intersection(left, right, norm, tolerance, logger)
    if not common.ok:
        return common

    return difference(unified.value, common.value, norm, tolerance, logger)
