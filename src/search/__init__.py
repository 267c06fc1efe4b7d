"""
Search layer: задачи, солвер полного перебора и исполнение описаний задач.
"""

from src.search.problem import PROBLEM_REGISTRY, ParabolaProblem, Problem, create_problem
from src.search.solver import ExhaustiveGridSolver, SolveResult, SolverConfig
from src.search.task import (
    RegionBounds,
    SearchOutcome,
    SearchTask,
    load_search_task,
    load_search_task_file,
    run_search_task,
)

__all__ = [
    # Problems
    "PROBLEM_REGISTRY",
    "ParabolaProblem",
    "Problem",
    "create_problem",
    # Solver
    "ExhaustiveGridSolver",
    "SolveResult",
    "SolverConfig",
    # Tasks
    "RegionBounds",
    "SearchOutcome",
    "SearchTask",
    "load_search_task",
    "load_search_task_file",
    "run_search_task",
]
