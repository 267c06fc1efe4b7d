"""
Contract validators — JSON Schema проверка входных документов

Документы задач поиска проверяются против contracts/schema/<name>.json
(Draft 2020-12, библиотека jsonschema) до построения Pydantic моделей:
схема ловит структурные ошибки (типы, обязательные поля, лишние ключи),
модель ловит семантические (порядок границ, размерности, знак шага).
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

# Корень проекта: src/core/contracts/validators.py → ../../../..
SCHEMA_DIR = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Кэширующий загрузчик схем из одного каталога."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else SCHEMA_DIR
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без расширения ('search_task').

        Raises:
            FileNotFoundError: нет файла схемы
            json.JSONDecodeError: файл не JSON
            ValueError: схема не проходит Draft 2020-12 meta-validation
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{schema_name}.json"
        if not path.exists():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}") from e

        self._cache[schema_name] = schema
        return schema


_SCHEMA_LOADER: Optional[SchemaLoader] = None


def get_schema_loader() -> SchemaLoader:
    """Загрузчик по умолчанию, создаётся при первом обращении."""
    global _SCHEMA_LOADER
    if _SCHEMA_LOADER is None:
        _SCHEMA_LOADER = SchemaLoader()
    return _SCHEMA_LOADER


def format_error(error: ValidationError) -> str:
    """'region.low[0]: 'x' is not of type 'number''."""
    path = ""
    for part in error.absolute_path:
        path += f"[{part}]" if isinstance(part, int) else (f".{part}" if path else str(part))
    return f"{path or '<root>'}: {error.message}"


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка документов против одной именованной схемы."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self.schema = (loader or get_schema_loader()).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """Raises ValidationError на первом нарушении."""
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)

    def error_messages(self, data: Dict[str, Any]) -> List[str]:
        """Все нарушения в виде 'path: message', отсортированные по пути."""
        errors = sorted(self.iter_errors(data), key=lambda e: list(map(str, e.absolute_path)))
        return [format_error(e) for e in errors]


class SearchTaskValidator(ContractValidator):
    """Контракт search_task: описание одной задачи перебора."""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__("search_task", loader)


def validate_search_task(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: документ не соответствует search_task.json
    """
    SearchTaskValidator().validate(data)
