"""
Contract Validation Module

Модуль для валидации JSON контрактов (описаний задач поиска).
"""

from .validators import (
    SCHEMA_DIR,
    ContractValidator,
    SchemaLoader,
    SearchTaskValidator,
    format_error,
    get_schema_loader,
    validate_search_task,
)

__all__ = [
    "SCHEMA_DIR",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "SearchTaskValidator",
    # Functions
    "format_error",
    "get_schema_loader",
    "validate_search_task",
]
