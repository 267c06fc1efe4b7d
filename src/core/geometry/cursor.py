"""GridCursor — обход решётки региона (odometer state machine).

Курсор перебирает все точки решётки low + k⊙step внутри региона:
- Порядок осей задаётся перестановкой order (первая ось самая быстрая)
- Направление: forward (low → high, step > 0) или reverse (high → low, step < 0)
- Шаг с переносом (carry) как у механического счётчика

Состояния:
- ACTIVE: остались непосещённые точки
- EXHAUSTED: терминальное, step() всегда возвращает OUT_OF_BOUNDS

Протокол клиента: open → {point, step}* → OUT_OF_BOUNDS.
"""

from enum import Enum
from typing import TYPE_CHECKING, Iterator, Optional, Sequence, Union

from src.core.result import OpResult, ResultCode
from src.core.domain.vector import Norm, Vector
from src.core.math.numerical_safeguards import (
    TOLERANCE,
    has_nan,
    is_close,
    is_integral,
    is_less_or_close,
)
from src.core.result_logger import ResultLogger, report

if TYPE_CHECKING:
    from src.core.geometry.region import Region


class CursorState(str, Enum):
    """Состояние курсора."""
    ACTIVE = "ACTIVE"
    EXHAUSTED = "EXHAUSTED"


def is_correct_step(step: Vector, dim: int, reverse: bool) -> bool:
    """Проверка шага: размерность, без NaN, знак по направлению, |s_i| >= TOLERANCE."""
    if step.dim != dim or has_nan(step):
        return False

    for s in step:
        if (s < 0 and not reverse) or (s > 0 and reverse) or abs(s) < TOLERANCE:
            return False
    return True


class GridCursor:
    """Курсор обхода решётки внутри Region.

    Курсор владеет клоном региона, клоном шага и текущей точкой;
    ни один вектор не разделяется с вызывающим.
    """

    def __init__(
        self,
        region: "Region",
        step: Vector,
        reverse: bool = False,
        logger: Optional[ResultLogger] = None
    ):
        """
        Args:
            region: регион обхода (клонируется)
            step: шаг по осям (уже проверенный, клонируется)
            reverse: True для обхода high → low
            logger: опциональный логгер отказов
        """
        self._region = region.clone()
        self._low, self._high = self._region.bounds()
        self._step = step.to_list()
        self._reverse = reverse
        self._logger = logger

        self._order: list[int] = list(range(self._region.dim))
        self._current: list[float] = list(self._start)
        self._state = CursorState.ACTIVE

    @classmethod
    def open(
        cls,
        region: Optional["Region"],
        step: Optional[Vector],
        reverse: bool = False,
        logger: Optional[ResultLogger] = None
    ) -> OpResult["GridCursor"]:
        """Открытие курсора на регионе.

        Returns:
            OpResult с курсором или кодом:
            - BAD_REFERENCE: region или step is None
            - WRONG_ARGUMENT: некорректный шаг (размерность, NaN, знак, |s_i| < TOLERANCE)
        """
        where = "GridCursor.open" + (" (reverse)" if reverse else "")

        if region is None or step is None:
            code = report(logger, f"in {where}: null region or step", ResultCode.BAD_REFERENCE)
            return OpResult.failure(code, "region or step is None")

        if not is_correct_step(step, region.dim, reverse):
            code = report(logger, f"in {where}: incorrect step", ResultCode.WRONG_ARGUMENT)
            return OpResult.failure(code, f"incorrect step {step.to_list()} (reverse={reverse})")

        return OpResult.success(cls(region, step, reverse, logger))

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def _start(self) -> list[float]:
        return self._high if self._reverse else self._low

    @property
    def _terminal(self) -> list[float]:
        return self._low if self._reverse else self._high

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def reverse(self) -> bool:
        return self._reverse

    @property
    def order(self) -> tuple[int, ...]:
        return tuple(self._order)

    @property
    def step_vector(self) -> Vector:
        return Vector(self._step)

    @property
    def region(self) -> "Region":
        return self._region.clone()

    def point(self) -> Vector:
        """Клон текущей точки."""
        return Vector(self._current)

    # -------------------------------------------------------------------------
    # Порядок осей
    # -------------------------------------------------------------------------

    def set_order(self, order: Union[Vector, Sequence[float], None]) -> ResultCode:
        """Установка порядка обхода осей.

        order: перестановка 0..d-1 (float-значения допускаются, если они
        целые в пределах TOLERANCE). Успешная смена порядка перезапускает
        обход со стартового угла.

        Returns:
            SUCCESS, BAD_REFERENCE, WRONG_DIM или WRONG_ARGUMENT
        """
        if order is None:
            return report(
                self._logger, "in GridCursor.set_order: null order", ResultCode.BAD_REFERENCE
            )

        values = order.to_list() if isinstance(order, Vector) else list(order)
        dim = self._region.dim

        if len(values) != dim:
            return report(
                self._logger, "in GridCursor.set_order: dimension mismatch", ResultCode.WRONG_DIM
            )

        if has_nan(values):
            return report(
                self._logger, "in GridCursor.set_order: nan in order", ResultCode.WRONG_ARGUMENT
            )

        for i, value in enumerate(values):
            if value < -TOLERANCE or value > dim - 1 + TOLERANCE:
                return report(
                    self._logger,
                    "in GridCursor.set_order: axis index out of range",
                    ResultCode.WRONG_ARGUMENT
                )
            if any(is_close(value, other) for j, other in enumerate(values) if j != i):
                return report(
                    self._logger,
                    "in GridCursor.set_order: order with repeated axes",
                    ResultCode.WRONG_ARGUMENT
                )

        if not all(is_integral(v) for v in values):
            return report(
                self._logger,
                "in GridCursor.set_order: order must hold integer axis indices",
                ResultCode.WRONG_ARGUMENT
            )

        self._order = [int(round(v)) for v in values]
        self._current = list(self._start)
        self._state = CursorState.ACTIVE
        return ResultCode.SUCCESS

    # -------------------------------------------------------------------------
    # Шаг
    # -------------------------------------------------------------------------

    def _at_terminal_corner(self) -> bool:
        eq = Vector.equals(Vector(self._current), Vector(self._terminal), Norm.L2, TOLERANCE)
        return bool(eq.value)

    def _inside_axis(self, axis: int, value: float) -> bool:
        return (
            is_less_or_close(self._low[axis], value)
            and is_less_or_close(value, self._high[axis])
        )

    def step(self) -> ResultCode:
        """Переход к следующей точке решётки.

        1. Текущая точка совпадает с терминальным углом → EXHAUSTED, OUT_OF_BOUNDS
        2. Оси сканируются в порядке order:
           - ось на терминальной границе → сброс в стартовое значение (carry),
             сканирование продолжается
           - иначе прибавляется шаг; при выходе за границу координата
             прижимается к терминальной границе; сканирование останавливается

        Returns:
            SUCCESS или OUT_OF_BOUNDS (обход завершён)
        """
        if self._state == CursorState.EXHAUSTED:
            return ResultCode.OUT_OF_BOUNDS

        if self._at_terminal_corner():
            self._state = CursorState.EXHAUSTED
            return ResultCode.OUT_OF_BOUNDS

        start = self._start
        terminal = self._terminal
        candidate = list(self._current)
        ticked = False

        for axis in self._order:
            if is_close(candidate[axis], terminal[axis]):
                # carry
                candidate[axis] = start[axis]
                continue

            value = candidate[axis] + self._step[axis]
            if not self._inside_axis(axis, value) or is_close(value, terminal[axis]):
                # Перелёт или попадание на границу: фиксируем точно на границе,
                # чтобы проверка терминального угла была точной
                value = terminal[axis]
            candidate[axis] = value
            ticked = True
            break

        if not ticked:
            # Все оси на терминальной границе: точка не меняется
            self._state = CursorState.EXHAUSTED
            return ResultCode.OUT_OF_BOUNDS

        self._current = candidate
        return ResultCode.SUCCESS

    def walk(self) -> Iterator[Vector]:
        """Генератор точек от текущей позиции до исчерпания.

        Эквивалент цикла point() / step() до OUT_OF_BOUNDS.
        """
        if self._state == CursorState.EXHAUSTED:
            return

        while True:
            yield self.point()
            if self.step() != ResultCode.SUCCESS:
                return
