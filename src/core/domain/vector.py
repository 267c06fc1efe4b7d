"""
Vector — Вектор фиксированной размерности

Вектор владеет собственной копией координат (list[float]); clone() и все
арифметические операции возвращают независимые экземпляры, поэтому буферы
вызывающего можно менять сразу после вызова.

Все fallible-операции возвращают ResultCode / OpResult.
"""

import math
from enum import Enum
from typing import Iterable, Iterator, Optional, Sequence

from src.core.result import OpResult, ResultCode
from src.core.math.numerical_safeguards import is_nan
from src.core.result_logger import ResultLogger, report


# =============================================================================
# ENUMS
# =============================================================================


class Norm(str, Enum):
    """Вид нормы вектора."""

    L1 = "L1"
    L2 = "L2"
    LINF = "LINF"


# =============================================================================
# VECTOR
# =============================================================================


class Vector:
    """
    Вещественный вектор фиксированной размерности.

    Экземпляры создаются через Vector.create (с валидацией);
    конструктор предназначен для внутренних вызовов с уже проверенными данными.
    """

    __slots__ = ("_data", "_logger")

    def __init__(self, data: Iterable[float], logger: Optional[ResultLogger] = None):
        self._data: list[float] = [float(x) for x in data]
        self._logger = logger

    @classmethod
    def create(
        cls,
        data: Optional[Sequence[float]],
        logger: Optional[ResultLogger] = None,
    ) -> OpResult["Vector"]:
        """
        Создание вектора с валидацией.

        Args:
            data: Координаты (копируются)
            logger: Опциональный логгер отказов

        Returns:
            OpResult с вектором или кодом:
            - BAD_REFERENCE: data is None
            - WRONG_DIM: пустые данные
            - NAN_VALUE: NaN среди координат
        """
        if data is None:
            code = report(logger, "in Vector.create: null param", ResultCode.BAD_REFERENCE)
            return OpResult.failure(code, "data is None")

        if len(data) == 0:
            code = report(logger, "in Vector.create: 0 dimension", ResultCode.WRONG_DIM)
            return OpResult.failure(code, "empty data")

        if any(is_nan(x) for x in data):
            code = report(logger, "in Vector.create: nan in data", ResultCode.NAN_VALUE)
            return OpResult.failure(code, f"nan in data: {list(data)}")

        return OpResult.success(cls(data, logger))

    # -------------------------------------------------------------------------
    # Доступ к координатам
    # -------------------------------------------------------------------------

    @property
    def dim(self) -> int:
        return len(self._data)

    def coord(self, index: int) -> float:
        """Координата по индексу; NaN если индекс вне [0, dim)."""
        if index < 0 or index >= len(self._data):
            return math.nan
        return self._data[index]

    def set_coord(self, index: int, value: float) -> ResultCode:
        """
        Установка координаты.

        Returns:
            SUCCESS, WRONG_DIM (индекс вне диапазона) или NAN_VALUE
        """
        if index < 0 or index >= len(self._data):
            return report(self._logger, "in Vector.set_coord: wrong index", ResultCode.WRONG_DIM)

        if is_nan(value):
            return report(
                self._logger, "in Vector.set_coord: value is not a number", ResultCode.NAN_VALUE
            )

        self._data[index] = float(value)
        return ResultCode.SUCCESS

    def norm(self, kind: Norm = Norm.L2) -> float:
        """
        Норма вектора.

        - L1: sum(|x_i|)
        - L2: sqrt(sum(x_i^2))
        - LINF: max(|x_i|)
        """
        if kind == Norm.L1:
            return sum(abs(x) for x in self._data)
        elif kind == Norm.L2:
            return math.sqrt(sum(x * x for x in self._data))
        else:
            return max((abs(x) for x in self._data), default=0.0)

    def clone(self) -> "Vector":
        return Vector(self._data, self._logger)

    def to_list(self) -> list[float]:
        return list(self._data)

    def __iter__(self) -> Iterator[float]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Vector({self._data!r})"

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    @staticmethod
    def _check_pair(
        a: Optional["Vector"],
        b: Optional["Vector"],
        where: str,
        logger: Optional[ResultLogger],
    ) -> ResultCode:
        if a is None or b is None:
            return report(logger, f"in Vector.{where}: nullptr", ResultCode.BAD_REFERENCE)
        if a.dim != b.dim:
            return report(logger, f"in Vector.{where}: unequal dimensions", ResultCode.WRONG_DIM)
        return ResultCode.SUCCESS

    @staticmethod
    def add(
        a: Optional["Vector"],
        b: Optional["Vector"],
        logger: Optional[ResultLogger] = None,
    ) -> OpResult["Vector"]:
        """Покомпонентная сумма a + b."""
        code = Vector._check_pair(a, b, "add", logger)
        if code != ResultCode.SUCCESS:
            return OpResult.failure(code)
        return OpResult.success(Vector((x + y for x, y in zip(a._data, b._data)), logger))

    @staticmethod
    def sub(
        a: Optional["Vector"],
        b: Optional["Vector"],
        logger: Optional[ResultLogger] = None,
    ) -> OpResult["Vector"]:
        """Покомпонентная разность a - b."""
        code = Vector._check_pair(a, b, "sub", logger)
        if code != ResultCode.SUCCESS:
            return OpResult.failure(code)
        return OpResult.success(Vector((x - y for x, y in zip(a._data, b._data)), logger))

    @staticmethod
    def scale(
        a: Optional["Vector"],
        factor: float,
        logger: Optional[ResultLogger] = None,
    ) -> OpResult["Vector"]:
        """Умножение вектора на скаляр."""
        if a is None:
            code = report(logger, "in Vector.scale: nullptr", ResultCode.BAD_REFERENCE)
            return OpResult.failure(code)
        if is_nan(factor):
            code = report(logger, "in Vector.scale: factor is not a number", ResultCode.NAN_VALUE)
            return OpResult.failure(code)
        return OpResult.success(Vector((x * factor for x in a._data), logger))

    @staticmethod
    def dot(
        a: Optional["Vector"],
        b: Optional["Vector"],
        logger: Optional[ResultLogger] = None,
    ) -> float:
        """Скалярное произведение; NaN при ошибке."""
        if Vector._check_pair(a, b, "dot", logger) != ResultCode.SUCCESS:
            return math.nan
        return sum(x * y for x, y in zip(a._data, b._data))

    @staticmethod
    def equals(
        a: Optional["Vector"],
        b: Optional["Vector"],
        norm: Norm,
        tolerance: float,
        logger: Optional[ResultLogger] = None,
    ) -> OpResult[bool]:
        """
        Сравнение векторов: ||a - b|| < tolerance.

        Returns:
            OpResult[bool] или NAN_VALUE / BAD_REFERENCE / WRONG_DIM
        """
        if is_nan(tolerance):
            code = report(
                logger, "in Vector.equals: tolerance is not a number", ResultCode.NAN_VALUE
            )
            return OpResult.failure(code)

        diff = Vector.sub(a, b, logger)
        if not diff.ok:
            return OpResult.failure(diff.code)

        return OpResult.success(diff.value.norm(norm) < tolerance)
