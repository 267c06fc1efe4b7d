"""
Region — Замкнутый axis-aligned бокс в R^d

Region задаётся парой угловых векторов (low, high) с инвариантом
low ⪯ high покомпонентно (с учётом TOLERANCE):

    {x : low_i <= x_i <= high_i  для всех i}

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Инвариант low ⪯ high проверяется только фабрикой Region.create
2. Region владеет собственными копиями границ, наружу отдаёт только клоны
3. После создания Region неизменяем (безопасен для конкурентного чтения)
4. Все сравнения границ выполняются с TOLERANCE, никогда точно
5. Границы конечны (без NaN и ±inf), поэтому любой обход решётки завершается

Обход решётки внутри региона: GridCursor (begin/end).
"""

from typing import Optional

from src.core.result import OpResult, ResultCode
from src.core.domain.vector import Vector
from src.core.geometry.cursor import GridCursor
from src.core.math.numerical_safeguards import is_less_or_close, is_valid_float
from src.core.result_logger import ResultLogger, report


def is_less(left: list[float], right: list[float]) -> bool:
    """Покомпонентный порядок left ⪯ right с учётом TOLERANCE."""
    if len(left) != len(right):
        return False
    return all(is_less_or_close(a, b) for a, b in zip(left, right))


# =============================================================================
# REGION
# =============================================================================


class Region:
    """
    Axis-aligned бокс.

    Экземпляры создаются через Region.create; конструктор не проверяет
    инвариант и предназначен для внутренних вызовов.
    """

    __slots__ = ("_low", "_high", "_logger")

    def __init__(self, low: Vector, high: Vector, logger: Optional[ResultLogger] = None):
        self._low = low.clone()
        self._high = high.clone()
        self._logger = logger

    @classmethod
    def create(
        cls,
        low: Optional[Vector],
        high: Optional[Vector],
        logger: Optional[ResultLogger] = None,
    ) -> OpResult["Region"]:
        """
        Валидирующая фабрика региона.

        Args:
            low: Нижний угол
            high: Верхний угол
            logger: Опциональный логгер отказов

        Returns:
            OpResult с регионом или кодом:
            - BAD_REFERENCE: None, несовпадение размерностей, NaN или ±inf в границах
            - WRONG_ARGUMENT: не выполнено low ⪯ high
        """
        if low is None or high is None or low.dim != high.dim:
            code = report(
                logger,
                "in Region.create: null param or vector dimension mismatch",
                ResultCode.BAD_REFERENCE,
            )
            return OpResult.failure(code, "bounds are None or have different dimensions")

        if not all(is_valid_float(x) for x in (*low, *high)):
            code = report(
                logger, "in Region.create: non-finite value in bounds", ResultCode.BAD_REFERENCE
            )
            return OpResult.failure(code, f"non-finite bounds: {low.to_list()}, {high.to_list()}")

        if not is_less(low.to_list(), high.to_list()):
            code = report(
                logger, "in Region.create: bounds are not comparable", ResultCode.WRONG_ARGUMENT
            )
            return OpResult.failure(code, f"low {low.to_list()} !<= high {high.to_list()}")

        return OpResult.success(cls(low, high, logger))

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    @property
    def dim(self) -> int:
        return self._low.dim

    @property
    def low(self) -> Vector:
        """Клон нижнего угла."""
        return self._low.clone()

    @property
    def high(self) -> Vector:
        """Клон верхнего угла."""
        return self._high.clone()

    @property
    def logger(self) -> Optional[ResultLogger]:
        return self._logger

    def bounds(self) -> tuple[list[float], list[float]]:
        """Копии границ как списки (low, high)."""
        return self._low.to_list(), self._high.to_list()

    def clone(self) -> "Region":
        return Region(self._low, self._high, self._logger)

    def __repr__(self) -> str:
        return f"Region(low={self._low.to_list()!r}, high={self._high.to_list()!r})"

    # -------------------------------------------------------------------------
    # Предикаты
    # -------------------------------------------------------------------------

    def contains(self, point: Optional[Vector]) -> OpResult[bool]:
        """
        Принадлежность точки: low ⪯ point ⪯ high.

        Returns:
            OpResult[bool] или BAD_REFERENCE (None) / WRONG_DIM
        """
        if point is None:
            code = report(self._logger, "in Region.contains: null param", ResultCode.BAD_REFERENCE)
            return OpResult.failure(code)

        if point.dim != self.dim:
            code = report(
                self._logger, "in Region.contains: dimension mismatch", ResultCode.WRONG_DIM
            )
            return OpResult.failure(code)

        coords = point.to_list()
        return OpResult.success(
            is_less(self._low.to_list(), coords) and is_less(coords, self._high.to_list())
        )

    def _check_other(self, other: Optional["Region"], where: str) -> ResultCode:
        if other is None or other.dim != self.dim:
            return report(
                self._logger,
                f"in Region.{where}: null param or dimension mismatch",
                ResultCode.BAD_REFERENCE,
            )
        return ResultCode.SUCCESS

    def contains_region(self, other: Optional["Region"]) -> OpResult[bool]:
        """
        Вложенность other ⊆ self.

        Для axis-aligned боксов достаточно проверить оба угла other.
        Обратное направление (self ⊆ other): is_subset_of.
        """
        code = self._check_other(other, "contains_region")
        if code != ResultCode.SUCCESS:
            return OpResult.failure(code)

        low_in = self.contains(other._low)
        high_in = self.contains(other._high)
        return OpResult.success(low_in.value and high_in.value)

    def is_subset_of(self, other: Optional["Region"]) -> OpResult[bool]:
        """
        Вложенность self ⊆ other.

        a.is_subset_of(b) == b.contains_region(a); проверка other ⊆ self
        выполняется через contains_region.
        """
        code = self._check_other(other, "is_subset_of")
        if code != ResultCode.SUCCESS:
            return OpResult.failure(code)
        return other.contains_region(self)

    def intersects(self, other: Optional["Region"]) -> OpResult[bool]:
        """
        Пересечение боксов.

        l = max(low, other.low), r = min(high, other.high); пересекаются iff l ⪯ r.
        Касание гранью считается пересечением.
        """
        code = self._check_other(other, "intersects")
        if code != ResultCode.SUCCESS:
            return OpResult.failure(code)

        left = [max(a, b) for a, b in zip(self._low, other._low)]
        right = [min(a, b) for a, b in zip(self._high, other._high)]
        return OpResult.success(is_less(left, right))

    # -------------------------------------------------------------------------
    # Обход решётки
    # -------------------------------------------------------------------------

    def begin(self, step: Optional[Vector]) -> OpResult[GridCursor]:
        """Курсор от low к high (все компоненты step > 0)."""
        return GridCursor.open(self, step, reverse=False, logger=self._logger)

    def end(self, step: Optional[Vector]) -> OpResult[GridCursor]:
        """Курсор от high к low (все компоненты step < 0)."""
        return GridCursor.open(self, step, reverse=True, logger=self._logger)
