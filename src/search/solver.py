"""ExhaustiveGridSolver — полный перебор целевой функции по решётке региона.

Солвер:
- Принимает задачу (Problem), её параметры, регион и шаг решётки
- Обходит решётку GridCursor'ом (forward при step > 0, reverse при step < 0)
- Возвращает аргумент с минимальным значением целевой функции

Параметры солвера задаются вектором шага или строкой вида
"dim = 2; step = 0.01, 0.02".
"""

import re
from dataclasses import dataclass
from typing import Final, Optional, Sequence

from src.core.domain.vector import Vector
from src.core.geometry.region import Region
from src.core.math.numerical_safeguards import (
    START_BEST_VALUE,
    TOLERANCE,
    is_close,
    is_nan,
    is_valid_float,
    validate_positive,
)
from src.core.result import OpResult, ResultCode
from src.core.result_logger import ResultLogger, report
from src.search.problem import Problem

PARAMS_SEPARATOR: Final[str] = ";"
KEY_VALUE_SEPARATOR: Final[str] = "="
STEP_SEPARATOR: Final[str] = ","

_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True)
class SolverConfig:
    """Конфигурация солвера.

    - start_best_value: стартовое значение минимума (если оно не улучшено,
      solve возвращает NOT_FOUND)
    - tolerance: допуск сравнения значений
    """
    start_best_value: float = START_BEST_VALUE
    tolerance: float = TOLERANCE

    def __post_init__(self) -> None:
        validate_positive(self.tolerance, "tolerance")
        if not is_valid_float(self.start_best_value):
            raise ValueError(f"start_best_value must be a valid float, got {self.start_best_value}")


@dataclass(frozen=True)
class SolveResult:
    """Результат solve()."""

    code: ResultCode
    solution: Optional[list[float]]
    best_value: Optional[float]

    # Диагностика
    visited: int
    details: str

    @property
    def ok(self) -> bool:
        return self.code == ResultCode.SUCCESS


class ExhaustiveGridSolver:
    """Солвер полного перебора по решётке.

    Солвер хранит клоны всех переданных векторов и региона.
    """

    def __init__(self, config: Optional[SolverConfig] = None, logger: Optional[ResultLogger] = None):
        self.config = config or SolverConfig()
        self._logger = logger

        self._problem: Optional[Problem] = None
        self._problem_params: Optional[Vector] = None
        self._region: Optional[Region] = None
        self._step: Optional[Vector] = None
        self._order: Optional[list[int]] = None
        self._solution: Optional[Vector] = None

    @property
    def params_dim(self) -> int:
        """Размерность шага (0, пока шаг не задан)."""
        return self._step.dim if self._step is not None else 0

    # -------------------------------------------------------------------------
    # Настройка
    # -------------------------------------------------------------------------

    def set_params(self, step: Optional[Vector]) -> ResultCode:
        if step is None:
            return report(self._logger, "in ExhaustiveGridSolver.set_params: null param", ResultCode.BAD_REFERENCE)
        self._step = step.clone()
        return ResultCode.SUCCESS

    def set_params_from_string(self, text: Optional[str]) -> ResultCode:
        """Разбор строки параметров "dim = N; step = s1, s2, ..., sN".

        Ключи обрабатываются по порядку: dim должен предшествовать step,
        число компонент step должно совпадать с dim.

        Returns:
            SUCCESS, BAD_REFERENCE (None) или WRONG_ARGUMENT (ошибка разбора)
        """
        if text is None:
            return report(
                self._logger,
                "in ExhaustiveGridSolver.set_params_from_string: null param",
                ResultCode.BAD_REFERENCE
            )

        params = [p for p in text.split(PARAMS_SEPARATOR) if p.strip()]
        if len(params) != 2:
            return self._parse_error("wrong number of params")

        dim = 0
        step: Optional[list[float]] = None

        for param in params:
            parts = [p for p in param.split(KEY_VALUE_SEPARATOR) if p.strip()]
            if len(parts) != 2:
                return self._parse_error(f"bad param '{param.strip()}'")

            key = _WHITESPACE.sub("", parts[0])
            value = parts[1].strip()

            if key == "dim":
                try:
                    dim = int(value)
                except ValueError:
                    return self._parse_error(f"dim is not an integer: '{value}'")
                if dim <= 0:
                    return self._parse_error(f"dim must be positive: {dim}")
            elif key == "step":
                items = [s for s in value.split(STEP_SEPARATOR) if s.strip()]
                if len(items) != dim:
                    return self._parse_error("step size does not match dim")
                try:
                    step = [float(s) for s in items]
                except ValueError:
                    return self._parse_error(f"step is not numeric: '{value}'")
            else:
                return self._parse_error(f"unknown key '{key}'")

        if step is None:
            return self._parse_error("step is missing")

        created = Vector.create(step, self._logger)
        if not created.ok:
            return self._parse_error("step holds invalid values")

        self._step = created.value
        return ResultCode.SUCCESS

    def _parse_error(self, details: str) -> ResultCode:
        return report(
            self._logger,
            f"in ExhaustiveGridSolver.set_params_from_string: {details}",
            ResultCode.WRONG_ARGUMENT
        )

    def set_problem(self, problem: Optional[Problem]) -> ResultCode:
        if problem is None:
            return report(self._logger, "in ExhaustiveGridSolver.set_problem: null param", ResultCode.BAD_REFERENCE)
        self._problem = problem
        self._solution = None
        return ResultCode.SUCCESS

    def set_problem_params(self, params: Optional[Vector]) -> ResultCode:
        if params is None:
            return report(
                self._logger, "in ExhaustiveGridSolver.set_problem_params: null param", ResultCode.BAD_REFERENCE
            )
        self._problem_params = params.clone()
        return ResultCode.SUCCESS

    def set_region(self, region: Optional[Region]) -> ResultCode:
        if region is None:
            return report(self._logger, "in ExhaustiveGridSolver.set_region: null param", ResultCode.BAD_REFERENCE)
        self._region = region.clone()
        return ResultCode.SUCCESS

    def set_order(self, order: Optional[Sequence[int]]) -> ResultCode:
        """Порядок обхода осей; None возвращает порядок по умолчанию (0..d-1)."""
        self._order = list(order) if order is not None else None
        return ResultCode.SUCCESS

    # -------------------------------------------------------------------------
    # Решение
    # -------------------------------------------------------------------------

    def _fail(self, code: ResultCode, details: str, visited: int = 0) -> SolveResult:
        return SolveResult(code=code, solution=None, best_value=None, visited=visited, details=details)

    def solve(self) -> SolveResult:
        """Полный перебор решётки.

        1. Нужны задача, регион и шаг → иначе BAD_REFERENCE
        2. Параметры задачи применяются к задаче (если заданы)
        3. Регион должен быть допустим для задачи → иначе WRONG_ARGUMENT
        4. Размерности задачи, региона и шага совпадают → иначе WRONG_DIM
        5. Курсор: begin при step[0] > 0, иначе end; некорректный шаг → WRONG_ARGUMENT
        6. Минимум строго меньше текущего лучшего; если лучший не изменился → NOT_FOUND
        """
        self._solution = None

        if self._problem is None or self._region is None or self._step is None:
            return self._fail(
                report(
                    self._logger,
                    "in ExhaustiveGridSolver.solve: problem, region or step is not set",
                    ResultCode.BAD_REFERENCE
                ),
                "problem, region or step is not set"
            )

        if self._problem_params is not None:
            code = self._problem.set_params(self._problem_params)
            if code != ResultCode.SUCCESS:
                return self._fail(code, "problem rejected params")

        if not self._problem.is_region_valid(self._region):
            return self._fail(
                report(self._logger, "in ExhaustiveGridSolver.solve: region is not valid", ResultCode.WRONG_ARGUMENT),
                f"region {self._region!r} is not valid for {type(self._problem).__name__}"
            )

        if self._region.dim != self._problem.args_dim or self._step.dim != self._region.dim:
            return self._fail(
                report(self._logger, "in ExhaustiveGridSolver.solve: dimension mismatch", ResultCode.WRONG_DIM),
                "dimension mismatch"
            )

        if self._step.coord(0) > 0:
            opened = self._region.begin(self._step)
        else:
            opened = self._region.end(self._step)

        if not opened.ok:
            return self._fail(
                report(self._logger, "in ExhaustiveGridSolver.solve: cannot open cursor", ResultCode.WRONG_ARGUMENT),
                opened.details
            )

        cursor = opened.value
        if self._order is not None:
            code = cursor.set_order(self._order)
            if code != ResultCode.SUCCESS:
                return self._fail(code, f"invalid axis order {self._order}")

        best_value = self.config.start_best_value
        best_point: Optional[Vector] = None
        visited = 0

        for point in cursor.walk():
            visited += 1
            value = self._problem.goal_by_args(point)
            if not value.ok:
                return self._fail(value.code, "goal evaluation failed", visited)
            if is_nan(value.value):
                continue
            if value.value < best_value:
                best_value = value.value
                best_point = point

        if best_point is None or is_close(best_value, self.config.start_best_value, self.config.tolerance):
            return self._fail(
                report(self._logger, "in ExhaustiveGridSolver.solve: solution not found", ResultCode.NOT_FOUND),
                "best value was never improved",
                visited
            )

        self._solution = best_point
        return SolveResult(
            code=ResultCode.SUCCESS,
            solution=best_point.to_list(),
            best_value=best_value,
            visited=visited,
            details=f"min at {best_point.to_list()} after {visited} points"
        )

    def get_solution(self) -> OpResult[Vector]:
        """Клон последнего найденного решения (NOT_FOUND до успешного solve)."""
        if self._solution is None:
            code = report(self._logger, "in ExhaustiveGridSolver.get_solution: no solution", ResultCode.NOT_FOUND)
            return OpResult.failure(code)
        return OpResult.success(self._solution.clone())
