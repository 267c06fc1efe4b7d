"""Problem — целевые функции для перебора по решётке.

Problem описывает:
- Целевую функцию goal(args; params)
- Допустимость региона для поиска (is_region_valid)

Реестр PROBLEM_REGISTRY заменяет загрузку задач из внешних библиотек:
задача выбирается по имени и создаётся фабрикой.
"""

from abc import ABC, abstractmethod
from typing import Callable, Final, Optional

from src.core.domain.vector import Vector
from src.core.geometry.region import Region
from src.core.math.numerical_safeguards import TOLERANCE
from src.core.result import OpResult, ResultCode
from src.core.result_logger import ResultLogger, report


class Problem(ABC):
    """Базовый класс задачи минимизации.

    Задача владеет клоном своих параметров.
    """

    def __init__(self, args_dim: int, params_dim: int, logger: Optional[ResultLogger] = None):
        self._args_dim = args_dim
        self._params_dim = params_dim
        self._params: Optional[Vector] = None
        self._logger = logger

    @property
    def args_dim(self) -> int:
        return self._args_dim

    @property
    def params_dim(self) -> int:
        return self._params_dim

    @property
    def params(self) -> Optional[Vector]:
        return self._params.clone() if self._params is not None else None

    @abstractmethod
    def _evaluate(self, args: list[float], params: list[float]) -> float:
        """Значение целевой функции для уже проверенных входов."""

    @abstractmethod
    def is_region_valid(self, region: Optional[Region]) -> bool:
        """Пригоден ли регион для поиска решения."""

    def goal(self, args: Optional[Vector], params: Optional[Vector]) -> OpResult[float]:
        """Целевая функция.

        Returns:
            OpResult[float] или BAD_REFERENCE (None) / WRONG_DIM
        """
        name = type(self).__name__
        if args is None or params is None:
            code = report(
                self._logger, f"in {name}.goal: null params or args", ResultCode.BAD_REFERENCE
            )
            return OpResult.failure(code)

        if args.dim != self._args_dim or params.dim != self._params_dim:
            code = report(
                self._logger, f"in {name}.goal: wrong dimension of arg or param", ResultCode.WRONG_DIM
            )
            return OpResult.failure(code)

        return OpResult.success(self._evaluate(args.to_list(), params.to_list()))

    def goal_by_args(self, args: Optional[Vector]) -> OpResult[float]:
        """Целевая функция с сохранёнными параметрами (NOT_FOUND если их нет)."""
        if self._params is None:
            code = report(
                self._logger,
                f"in {type(self).__name__}.goal_by_args: params are not set",
                ResultCode.NOT_FOUND
            )
            return OpResult.failure(code)
        return self.goal(args, self._params)

    def set_params(self, params: Optional[Vector]) -> ResultCode:
        """Сохранение клона параметров задачи."""
        name = type(self).__name__
        if params is None:
            return report(self._logger, f"in {name}.set_params: null params", ResultCode.BAD_REFERENCE)

        if params.dim != self._params_dim:
            return report(
                self._logger, f"in {name}.set_params: wrong dimension of param", ResultCode.WRONG_DIM
            )

        self._params = params.clone()
        return ResultCode.SUCCESS


class ParabolaProblem(Problem):
    """f(x, y; a) = y - x^2 + a.

    Регион допустим, если f меняет знак между углами региона
    (или обращается в ноль в пределах TOLERANCE).
    """

    ARGS_DIM: Final[int] = 2
    PARAMS_DIM: Final[int] = 1

    def __init__(self, logger: Optional[ResultLogger] = None):
        super().__init__(self.ARGS_DIM, self.PARAMS_DIM, logger)

    def _evaluate(self, args: list[float], params: list[float]) -> float:
        x, y = args
        a = params[0]
        return y - x * x + a

    def is_region_valid(self, region: Optional[Region]) -> bool:
        if region is None:
            report(self._logger, "in ParabolaProblem.is_region_valid: null region", ResultCode.BAD_REFERENCE)
            return False

        if region.dim != self._args_dim:
            report(self._logger, "in ParabolaProblem.is_region_valid: wrong dim", ResultCode.WRONG_DIM)
            return False

        if self._params is None:
            report(
                self._logger,
                "in ParabolaProblem.is_region_valid: params are not set",
                ResultCode.BAD_REFERENCE
            )
            return False

        low, high = region.bounds()
        params = self._params.to_list()
        product = self._evaluate(low, params) * self._evaluate(high, params)
        return product < 0 or abs(product) < TOLERANCE


# =============================================================================
# REGISTRY
# =============================================================================

ProblemFactory = Callable[[Optional[ResultLogger]], Problem]

PROBLEM_REGISTRY: dict[str, ProblemFactory] = {
    "parabola": ParabolaProblem,
}


def create_problem(name: str, logger: Optional[ResultLogger] = None) -> OpResult[Problem]:
    """Создание задачи по имени из реестра (NOT_FOUND для неизвестного имени)."""
    factory = PROBLEM_REGISTRY.get(name)
    if factory is None:
        code = report(logger, f"in create_problem: unknown problem '{name}'", ResultCode.NOT_FOUND)
        return OpResult.failure(code, f"known problems: {sorted(PROBLEM_REGISTRY)}")
    return OpResult.success(factory(logger))
