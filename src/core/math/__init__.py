"""
Core math modules

Tolerance-примитивы для сравнения float в геометрии регионов и курсора.
"""

from src.core.math.numerical_safeguards import (
    # Epsilon constants
    START_BEST_VALUE,
    TOLERANCE,
    # NaN/Inf checks
    has_nan,
    is_nan,
    is_valid_float,
    # Epsilon comparisons
    is_close,
    is_integral,
    is_less_or_close,
    is_zero,
    # Validation
    validate_positive,
    validate_step_magnitude,
)

__all__ = [
    # Epsilon constants
    "START_BEST_VALUE",
    "TOLERANCE",
    # NaN/Inf checks
    "has_nan",
    "is_nan",
    "is_valid_float",
    # Epsilon comparisons
    "is_close",
    "is_integral",
    "is_less_or_close",
    "is_zero",
    # Validation
    "validate_positive",
    "validate_step_magnitude",
]
