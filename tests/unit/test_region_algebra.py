"""
Тесты для Region algebra — intersection / union / convex_hull

Проверяемые свойства:
1. A.intersects(B) ⟺ intersection(A, B) успешна
2. union(A, A) == A
3. union только когда результат снова бокс (правило одной оси)
4. convex_hull всегда успешен и содержит оба входа
"""

import pytest

from src.core.domain import ResultCode, Vector
from src.core.geometry import Region, axis_of_difference, convex_hull, intersection, union


def vec(*coords):
    return Vector.create(list(coords)).value


def box(low, high):
    result = Region.create(vec(*low), vec(*high))
    assert result.ok, result.details
    return result.value


@pytest.fixture
def unit_cube():
    return box((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))


# =============================================================================
# ТЕСТЫ: axis_of_difference
# =============================================================================


class TestAxisOfDifference:
    def test_zero_vector(self):
        assert axis_of_difference([0.0, 0.0, 0.0]) == (True, None)

    def test_single_axis(self):
        assert axis_of_difference([0.0, -0.5, 0.0]) == (True, 1)

    def test_several_axes(self):
        assert axis_of_difference([0.5, 0.5, 0.0]) == (False, None)

    def test_relative_to_own_norm(self):
        """Малая компонента относительно LINF-нормы считается нулевой."""
        assert axis_of_difference([1000.0, 1e-4, 0.0]) == (True, 0)


# =============================================================================
# ТЕСТЫ: intersection
# =============================================================================


class TestIntersection:
    def test_overlap(self, unit_cube):
        other = box((0.5, 0.5, 0.5), (2.0, 2.0, 2.0))
        result = intersection(unit_cube, other)

        assert result.ok
        assert result.value.bounds() == ([0.5, 0.5, 0.5], [1.0, 1.0, 1.0])

    def test_disjoint(self, unit_cube):
        other = box((5.0, 5.0, 5.0), (6.0, 6.0, 6.0))
        result = intersection(unit_cube, other)

        assert result.code == ResultCode.WRONG_ARGUMENT
        assert result.value is None

    def test_touching_face_is_flat_box(self, unit_cube):
        other = box((1.0, 0.0, 0.0), (2.0, 1.0, 1.0))
        result = intersection(unit_cube, other)

        assert result.ok
        assert result.value.bounds() == ([1.0, 0.0, 0.0], [1.0, 1.0, 1.0])

    def test_matches_intersects(self, unit_cube):
        for other in (
            box((0.5, 0.5, 0.5), (2.0, 2.0, 2.0)),
            box((5.0, 5.0, 5.0), (6.0, 6.0, 6.0)),
            box((-1.0, -1.0, -1.0), (0.0, 0.0, 0.0)),
        ):
            assert unit_cube.intersects(other).value == intersection(unit_cube, other).ok

    def test_dimension_mismatch(self, unit_cube):
        flat = box((0.0, 0.0), (1.0, 1.0))
        assert intersection(unit_cube, flat).code == ResultCode.BAD_REFERENCE

    def test_none(self, unit_cube):
        assert intersection(None, unit_cube).code == ResultCode.BAD_REFERENCE


# =============================================================================
# ТЕСТЫ: union
# =============================================================================


class TestUnion:
    def test_self_union(self, unit_cube):
        result = union(unit_cube, unit_cube)

        assert result.ok
        assert result.value.bounds() == unit_cube.bounds()

    def test_nested(self, unit_cube):
        inner = box((0.25, 0.25, 0.25), (0.5, 0.5, 0.5))

        assert union(unit_cube, inner).value.bounds() == unit_cube.bounds()
        assert union(inner, unit_cube).value.bounds() == unit_cube.bounds()

    def test_shift_along_one_axis(self, unit_cube):
        other = box((0.0, 0.5, 0.0), (1.0, 1.5, 1.0))
        result = union(unit_cube, other)

        assert result.ok
        assert result.value.bounds() == ([0.0, 0.0, 0.0], [1.0, 1.5, 1.0])

    def test_adjacent_along_one_axis(self, unit_cube):
        other = box((1.0, 0.0, 0.0), (2.0, 1.0, 1.0))
        result = union(unit_cube, other)

        assert result.ok
        assert result.value.bounds() == ([0.0, 0.0, 0.0], [2.0, 1.0, 1.0])

    def test_extension_of_one_face(self, unit_cube):
        """Совпадающий нижний угол (нулевой db) совместим с любой осью."""
        other = box((0.0, 0.0, 0.0), (1.0, 1.0, 3.0))
        result = union(unit_cube, other)

        assert result.ok
        assert result.value.bounds() == ([0.0, 0.0, 0.0], [1.0, 1.0, 3.0])

    def test_diagonal_overlap_is_not_a_box(self, unit_cube):
        other = box((0.75, 0.75, 0.75), (2.0, 2.0, 2.0))
        result = union(unit_cube, other)

        assert result.code == ResultCode.WRONG_ARGUMENT
        assert result.value is None

    def test_shift_along_different_axes(self):
        a = box((0.0, 0.0), (2.0, 2.0))
        b = box((1.0, 0.0), (2.0, 3.0))

        assert union(a, b).code == ResultCode.WRONG_ARGUMENT

    def test_gap(self, unit_cube):
        other = box((2.0, 0.0, 0.0), (3.0, 1.0, 1.0))
        assert union(unit_cube, other).code == ResultCode.WRONG_ARGUMENT

    def test_dimension_mismatch(self, unit_cube):
        flat = box((0.0, 0.0), (1.0, 1.0))
        assert union(unit_cube, flat).code == ResultCode.BAD_REFERENCE


# =============================================================================
# ТЕСТЫ: convex_hull
# =============================================================================


class TestConvexHull:
    def test_hull_of_disjoint(self, unit_cube):
        other = box((5.0, 5.0, 5.0), (6.0, 6.0, 6.0))
        result = convex_hull(unit_cube, other)

        assert result.ok
        assert result.value.bounds() == ([0.0, 0.0, 0.0], [6.0, 6.0, 6.0])

    def test_hull_contains_inputs(self, unit_cube):
        other = box((0.75, 0.75, 0.75), (2.0, 2.0, 2.0))
        hull = convex_hull(unit_cube, other).value

        assert unit_cube.is_subset_of(hull).value is True
        assert other.is_subset_of(hull).value is True

    def test_hull_none(self, unit_cube):
        assert convex_hull(unit_cube, None).code == ResultCode.BAD_REFERENCE
