"""
SearchTask — Описание задачи поиска и её исполнение

Immutable Pydantic модель входного документа (контракт search_task.json):
- task_id, problem (имя в реестре), problem_params
- region: {low, high}
- step: шаг решётки (все компоненты одного знака, |s_i| >= TOLERANCE)
- order: опциональный порядок обхода осей
- log_file: опциональный файл журнала отказов

run_search_task собирает из модели Region, задачу и солвер и возвращает
SearchOutcome; ошибки исполнения выражаются кодом результата, исключения
бросаются только при загрузке некорректного документа.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import (
    BaseModel,
    Field,
    FiniteFloat,
    ValidationInfo,
    field_validator,
    model_validator,
)

from src.core.contracts.validators import validate_search_task
from src.core.domain.vector import Vector
from src.core.geometry.region import Region, is_less
from src.core.math.numerical_safeguards import validate_step_magnitude
from src.core.result import ResultCode
from src.core.result_logger import ResultLogger
from src.search.problem import create_problem
from src.search.solver import ExhaustiveGridSolver, SolverConfig


# =============================================================================
# MODELS
# =============================================================================


class RegionBounds(BaseModel):
    """Границы региона: конечные координаты, low ⪯ high покомпонентно."""

    low: list[FiniteFloat] = Field(..., min_length=1, description="Нижний угол")
    high: list[FiniteFloat] = Field(..., min_length=1, description="Верхний угол")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_corners(self) -> "RegionBounds":
        if len(self.low) != len(self.high):
            raise ValueError(
                f"region corners have different dimensions: {len(self.low)} != {len(self.high)}"
            )
        if not is_less(self.low, self.high):
            raise ValueError(f"region low {self.low} is not below high {self.high}")
        return self


class SearchTask(BaseModel):
    """
    Задача полного перебора.

    Immutable модель (frozen=True).
    """

    task_id: str = Field(..., min_length=1, description="Идентификатор задачи")
    problem: str = Field("parabola", min_length=1, description="Имя задачи в реестре")
    problem_params: list[FiniteFloat] = Field(default_factory=list, description="Параметры задачи")

    region: RegionBounds = Field(..., description="Регион поиска")
    step: list[FiniteFloat] = Field(..., min_length=1, description="Шаг решётки")
    order: Optional[list[int]] = Field(None, description="Порядок обхода осей (перестановка)")

    log_file: Optional[str] = Field(None, description="Файл журнала отказов")

    model_config = {"frozen": True}

    @field_validator("step")
    @classmethod
    def validate_step(cls, v: list[float], info: ValidationInfo) -> list[float]:
        """Размерность шага совпадает с регионом, все компоненты одного знака."""
        for i, s in enumerate(v):
            validate_step_magnitude(s, f"step[{i}]")

        if any(s > 0 for s in v) and any(s < 0 for s in v):
            raise ValueError(f"step components must share one sign, got {v}")

        region = info.data.get("region")
        if region is not None and len(v) != len(region.low):
            raise ValueError(f"step dimension {len(v)} != region dimension {len(region.low)}")
        return v

    @field_validator("order")
    @classmethod
    def validate_order(cls, v: Optional[list[int]], info: ValidationInfo) -> Optional[list[int]]:
        if v is None:
            return v
        if sorted(v) != list(range(len(v))):
            raise ValueError(f"order must be a permutation of 0..{len(v) - 1}, got {v}")

        region = info.data.get("region")
        if region is not None and len(v) != len(region.low):
            raise ValueError(f"order dimension {len(v)} != region dimension {len(region.low)}")
        return v

    @property
    def dim(self) -> int:
        return len(self.region.low)

    @property
    def reverse(self) -> bool:
        """Обход high → low (отрицательный шаг)."""
        return self.step[0] < 0


@dataclass(frozen=True)
class SearchOutcome:
    """Результат исполнения SearchTask."""

    task_id: str
    code: ResultCode
    solution: Optional[list[float]]
    best_value: Optional[float]

    # Диагностика
    visited: int
    details: str

    @property
    def ok(self) -> bool:
        return self.code == ResultCode.SUCCESS


# =============================================================================
# LOADING
# =============================================================================


def load_search_task(data: Dict[str, Any]) -> SearchTask:
    """
    Загрузка задачи из dict: JSON Schema контракт, затем Pydantic модель.

    Raises:
        jsonschema.ValidationError: Документ не соответствует контракту
        pydantic.ValidationError: Нарушены семантические ограничения
    """
    validate_search_task(data)
    return SearchTask.model_validate(data)


def load_search_task_file(path: Union[str, Path]) -> SearchTask:
    """
    Загрузка задачи из JSON файла.

    Raises:
        FileNotFoundError / json.JSONDecodeError / ValidationError
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return load_search_task(data)


# =============================================================================
# EXECUTION
# =============================================================================


def _outcome(task: SearchTask, code: ResultCode, details: str) -> SearchOutcome:
    return SearchOutcome(
        task_id=task.task_id,
        code=code,
        solution=None,
        best_value=None,
        visited=0,
        details=details,
    )


def run_search_task(
    task: SearchTask,
    logger: Optional[ResultLogger] = None,
    config: Optional[SolverConfig] = None,
) -> SearchOutcome:
    """
    Исполнение задачи поиска.

    Args:
        task: Проверенная модель задачи
        logger: Логгер отказов (default: ResultLogger())
        config: Конфигурация солвера

    Returns:
        SearchOutcome; code != SUCCESS описывает первый отказ
    """
    logger = logger or ResultLogger()

    if task.log_file is not None:
        code = logger.set_log_file(task.log_file)
        if code != ResultCode.SUCCESS:
            return _outcome(task, code, f"cannot open log file {task.log_file}")

    try:
        return _run(task, logger, config)
    finally:
        if task.log_file is not None:
            logger.set_log_file(None)


def _run(task: SearchTask, logger: ResultLogger, config: Optional[SolverConfig]) -> SearchOutcome:
    created = create_problem(task.problem, logger)
    if not created.ok:
        return _outcome(task, created.code, created.details)
    problem = created.value

    low = Vector.create(task.region.low, logger)
    high = Vector.create(task.region.high, logger)
    if not low.ok or not high.ok:
        return _outcome(task, low.code if not low.ok else high.code, "invalid region corners")

    region = Region.create(low.value, high.value, logger)
    if not region.ok:
        return _outcome(task, region.code, region.details)

    step = Vector.create(task.step, logger)
    if not step.ok:
        return _outcome(task, step.code, step.details)

    solver = ExhaustiveGridSolver(config, logger)
    solver.set_problem(problem)
    solver.set_region(region.value)
    solver.set_params(step.value)
    solver.set_order(task.order)

    if task.problem_params:
        params = Vector.create(task.problem_params, logger)
        if not params.ok:
            return _outcome(task, params.code, params.details)
        solver.set_problem_params(params.value)

    result = solver.solve()
    return SearchOutcome(
        task_id=task.task_id,
        code=result.code,
        solution=result.solution,
        best_value=result.best_value,
        visited=result.visited,
        details=result.details,
    )
