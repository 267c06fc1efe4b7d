"""
Result codes — Коды результатов операций

Все fallible-операции пакета (вектор, регион, курсор, множество точек, solver)
возвращают код результата, а не бросают исключения. Исключения остаются только
на границе конфигурации (pydantic / jsonschema / validate_*).

OUT_OF_BOUNDS от GridCursor.step(): ожидаемый сигнал завершения обхода,
а не ошибка.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


# =============================================================================
# ENUMS
# =============================================================================


class ResultCode(str, Enum):
    """Код результата операции."""

    SUCCESS = "SUCCESS"
    OUT_OF_MEMORY = "OUT_OF_MEMORY"
    BAD_REFERENCE = "BAD_REFERENCE"
    WRONG_DIM = "WRONG_DIM"
    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"
    NAN_VALUE = "NAN_VALUE"
    FILE_ERROR = "FILE_ERROR"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    NOT_FOUND = "NOT_FOUND"
    WRONG_ARGUMENT = "WRONG_ARGUMENT"
    CALCULATION_ERROR = "CALCULATION_ERROR"
    MULTIPLE_DEFINITION = "MULTIPLE_DEFINITION"


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class OpResult(Generic[T]):
    """Результат fallible-операции.

    При ошибке value всегда None, details содержит причину.
    """

    code: ResultCode
    value: Optional[T] = None

    # Для отладки
    details: str = ""

    @property
    def ok(self) -> bool:
        """True если code == SUCCESS."""
        return self.code == ResultCode.SUCCESS

    @classmethod
    def success(cls, value: Optional[T] = None, details: str = "") -> "OpResult[T]":
        return cls(code=ResultCode.SUCCESS, value=value, details=details)

    @classmethod
    def failure(cls, code: ResultCode, details: str = "") -> "OpResult[T]":
        return cls(code=code, value=None, details=details)
