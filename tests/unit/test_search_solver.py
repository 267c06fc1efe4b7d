"""
Тесты для Problem / ExhaustiveGridSolver

Проверяет:
1. Целевую функцию parabola и проверку региона
2. Реестр задач
3. Разбор строки параметров солвера
4. solve(): коды отказов и найденный минимум
"""

import math

import pytest

from src.core.domain import ResultCode, Vector
from src.core.geometry import Region
from src.search import (
    PROBLEM_REGISTRY,
    ExhaustiveGridSolver,
    ParabolaProblem,
    SolverConfig,
    create_problem,
)


def vec(*coords):
    return Vector.create(list(coords)).value


def box(low, high):
    return Region.create(vec(*low), vec(*high)).value


@pytest.fixture
def parabola():
    problem = ParabolaProblem()
    assert problem.set_params(vec(10.0)) == ResultCode.SUCCESS
    return problem


@pytest.fixture
def solver(parabola):
    s = ExhaustiveGridSolver()
    s.set_problem(parabola)
    s.set_region(box((0.0, 0.0), (5.0, 4.0)))
    s.set_params(vec(0.1, 0.2))
    return s


# =============================================================================
# ТЕСТЫ: Problem
# =============================================================================


class TestParabolaProblem:
    def test_dims(self):
        problem = ParabolaProblem()
        assert problem.args_dim == 2
        assert problem.params_dim == 1
        assert problem.params is None

    def test_goal(self):
        result = ParabolaProblem().goal(vec(2.0, 3.0), vec(1.0))

        assert result.ok
        assert result.value == pytest.approx(3.0 - 4.0 + 1.0)

    def test_goal_wrong_dim(self):
        assert ParabolaProblem().goal(vec(2.0), vec(1.0)).code == ResultCode.WRONG_DIM
        assert ParabolaProblem().goal(vec(2.0, 1.0), vec(1.0, 2.0)).code == ResultCode.WRONG_DIM

    def test_goal_none(self):
        assert ParabolaProblem().goal(None, vec(1.0)).code == ResultCode.BAD_REFERENCE

    def test_goal_by_args_without_params(self):
        assert ParabolaProblem().goal_by_args(vec(1.0, 1.0)).code == ResultCode.NOT_FOUND

    def test_goal_by_args(self, parabola):
        assert parabola.goal_by_args(vec(5.0, 0.0)).value == pytest.approx(-15.0)

    def test_set_params_clones(self):
        problem = ParabolaProblem()
        params = vec(1.0)
        problem.set_params(params)
        params.set_coord(0, 2.0)

        assert problem.params.to_list() == [1.0]

    def test_set_params_wrong_dim(self):
        assert ParabolaProblem().set_params(vec(1.0, 2.0)) == ResultCode.WRONG_DIM

    def test_region_valid_on_sign_change(self, parabola):
        assert parabola.is_region_valid(box((0.0, 0.0), (5.0, 4.0))) is True

    def test_region_invalid_without_sign_change(self, parabola):
        assert parabola.is_region_valid(box((0.0, 0.0), (1.0, 1.0))) is False

    def test_region_valid_on_zero_corner(self):
        problem = ParabolaProblem()
        problem.set_params(vec(0.0))

        assert problem.is_region_valid(box((0.0, 0.0), (1.0, 5.0))) is True

    def test_region_invalid_dim(self, parabola):
        assert parabola.is_region_valid(box((0.0,), (1.0,))) is False


class TestProblemRegistry:
    def test_parabola_registered(self):
        assert "parabola" in PROBLEM_REGISTRY

    def test_create_problem(self):
        result = create_problem("parabola")

        assert result.ok
        assert isinstance(result.value, ParabolaProblem)

    def test_unknown_problem(self):
        result = create_problem("rosenbrock")

        assert result.code == ResultCode.NOT_FOUND
        assert "parabola" in result.details


# =============================================================================
# ТЕСТЫ: разбор параметров
# =============================================================================


class TestSolverParamsString:
    def test_parse(self):
        s = ExhaustiveGridSolver()

        assert s.set_params_from_string("dim = 2; step = 0.01, 0.02") == ResultCode.SUCCESS
        assert s.params_dim == 2

    def test_parse_compact(self):
        s = ExhaustiveGridSolver()
        assert s.set_params_from_string("dim=3;step=1,2,3;") == ResultCode.SUCCESS

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "dim = 2",
            "dim = 2; step = 0.1",
            "step = 0.1, 0.2; dim = 2",
            "dim = two; step = 0.1, 0.2",
            "dim = 2; step = 0.1, abc",
            "dim = 2; size = 0.1, 0.2",
            "dim = 0; step = ",
            "dim = 2; dim = 2",
            "dim = 1; step = nan",
            "dim = 2; step == 0.1, 0.2 = 3",
        ],
    )
    def test_parse_errors(self, text):
        s = ExhaustiveGridSolver()

        assert s.set_params_from_string(text) == ResultCode.WRONG_ARGUMENT
        assert s.params_dim == 0

    def test_parse_none(self):
        assert ExhaustiveGridSolver().set_params_from_string(None) == ResultCode.BAD_REFERENCE


# =============================================================================
# ТЕСТЫ: solve
# =============================================================================


class TestSolverConfig:
    def test_defaults(self):
        config = SolverConfig()
        assert config.start_best_value == 1e10
        assert config.tolerance == 1e-6

    def test_rejects_bad_tolerance(self):
        with pytest.raises(ValueError):
            SolverConfig(tolerance=0.0)
        with pytest.raises(ValueError):
            SolverConfig(start_best_value=math.nan)


class TestSolve:
    def test_minimum_of_parabola(self, parabola):
        """Минимум y - x^2 + 10 на [0,0]-[5,4] в точке [5, 0]."""
        s = ExhaustiveGridSolver()
        s.set_problem(parabola)
        s.set_region(box((0.0, 0.0), (5.0, 4.0)))
        assert s.set_params_from_string("dim = 2; step = 0.01, 0.02") == ResultCode.SUCCESS

        result = s.solve()

        assert result.ok
        assert result.solution == pytest.approx([5.0, 0.0])
        assert result.best_value == pytest.approx(-15.0)
        assert result.visited == 501 * 201

    def test_get_solution(self, solver):
        assert solver.get_solution().code == ResultCode.NOT_FOUND

        solver.solve()
        solution = solver.get_solution()

        assert solution.ok
        assert solution.value.to_list() == pytest.approx([5.0, 0.0])

    def test_reverse_step(self, solver):
        solver.set_params(vec(-0.1, -0.2))
        result = solver.solve()

        assert result.ok
        assert result.solution == pytest.approx([5.0, 0.0])

    def test_custom_order(self, solver):
        solver.set_order([1, 0])
        result = solver.solve()

        assert result.ok
        assert result.solution == pytest.approx([5.0, 0.0])

    def test_invalid_order(self, solver):
        solver.set_order([0, 0])
        assert solver.solve().code == ResultCode.WRONG_ARGUMENT

    def test_problem_params_applied(self, solver):
        solver.set_problem_params(vec(20.0))
        result = solver.solve()

        assert result.ok
        assert result.best_value == pytest.approx(-5.0)

    def test_missing_problem(self):
        s = ExhaustiveGridSolver()
        s.set_region(box((0.0, 0.0), (1.0, 1.0)))
        s.set_params(vec(0.1, 0.1))

        result = s.solve()
        assert result.code == ResultCode.BAD_REFERENCE
        assert result.solution is None

    def test_invalid_region(self, solver):
        solver.set_region(box((0.0, 0.0), (1.0, 1.0)))
        assert solver.solve().code == ResultCode.WRONG_ARGUMENT

    def test_step_dimension_mismatch(self, solver):
        solver.set_params(vec(0.1, 0.1, 0.1))
        assert solver.solve().code == ResultCode.WRONG_DIM

    def test_mixed_sign_step(self, solver):
        solver.set_params(vec(0.1, -0.2))
        assert solver.solve().code == ResultCode.WRONG_ARGUMENT

    def test_not_found_when_best_never_improves(self, parabola):
        s = ExhaustiveGridSolver(SolverConfig(start_best_value=-1000.0))
        s.set_problem(parabola)
        s.set_region(box((0.0, 0.0), (5.0, 4.0)))
        s.set_params(vec(1.0, 1.0))

        result = s.solve()
        assert result.code == ResultCode.NOT_FOUND
        assert result.visited == 6 * 5

    def test_setters_reject_none(self):
        s = ExhaustiveGridSolver()

        assert s.set_params(None) == ResultCode.BAD_REFERENCE
        assert s.set_problem(None) == ResultCode.BAD_REFERENCE
        assert s.set_problem_params(None) == ResultCode.BAD_REFERENCE
        assert s.set_region(None) == ResultCode.BAD_REFERENCE
