"""
Numerical Safeguards — Tolerance-примитивы для геометрии боксов

Модуль обеспечивает единообразные float-сравнения для всего пакета:
- Единственная константа толерантности TOLERANCE (1e-6)
- NaN-проверки входных данных
- Epsilon-сравнения (ноль, порядок, целочисленность)
- Валидация параметров конфигурации

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Float никогда не сравниваются на точное равенство
2. Одна и та же TOLERANCE используется для шага курсора, границ,
   перестановок и проверки параллельности осям
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final, Iterable


# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Толерантность для всех сравнений региона и курсора
# (минимальный шаг, равенство границ, различимость индексов перестановки)
TOLERANCE: Final[float] = 1e-6

# Стартовое "худшее" значение целевой функции для перебора
START_BEST_VALUE: Final[float] = 1e10


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float конечным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение finite
    """
    return math.isfinite(value)


def is_nan(value: float) -> bool:
    """NaN-проверка, устойчивая к не-float входам."""
    try:
        return math.isnan(value)
    except TypeError:
        return True


def has_nan(values: Iterable[float]) -> bool:
    """
    Проверка последовательности на наличие NaN.

    Args:
        values: Координаты

    Returns:
        True если хотя бы одна координата NaN (или не число)
    """
    return any(is_nan(v) for v in values)


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_zero(value: float, tol: float = TOLERANCE) -> bool:
    """
    Проверка, близко ли значение к нулю с учётом толерантности.

    Returns:
        True если abs(value) < tol
    """
    return abs(value) < tol


def is_close(a: float, b: float, tol: float = TOLERANCE) -> bool:
    """
    Абсолютное сравнение двух float.

    Examples:
        >>> is_close(1.0, 1.0 + 1e-9)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return abs(a - b) < tol


def is_less_or_close(a: float, b: float, tol: float = TOLERANCE) -> bool:
    """
    a ⪯ b с учётом толерантности: a <= b + tol.

    Базовый покомпонентный порядок для границ региона.
    """
    return a <= b + tol


def is_integral(value: float, tol: float = TOLERANCE) -> bool:
    """
    Проверка, что float представляет целое число (индекс оси).

    Examples:
        >>> is_integral(2.0000000001)
        True
        >>> is_integral(1.5)
        False
    """
    if not is_valid_float(value):
        return False
    return abs(value - round(value)) <= tol


# =============================================================================
# ВАЛИДАЦИЯ И ПРОВЕРКИ
# =============================================================================


def validate_positive(value: float, name: str, eps: float = 0.0) -> None:
    """
    Валидация, что значение положительное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        eps: Минимальный порог (default: 0.0)

    Raises:
        ValueError: Если value <= eps или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= eps:
        raise ValueError(f"{name} must be positive (> {eps}), got {value}")


def validate_step_magnitude(value: float, name: str, tol: float = TOLERANCE) -> None:
    """
    Валидация компоненты шага сетки: |value| >= tol, не NaN.

    Raises:
        ValueError: Если шаг слишком мал или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if abs(value) < tol:
        raise ValueError(f"{name} magnitude must be >= {tol}, got {value}")
