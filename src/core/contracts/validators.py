"""
JSON Schema Contract Validators

Модуль для валидации JSON данных согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы (каталог schema/ рядом с модулем):
- calculator_config.json (конфигурация калькулятора)

Разделение ответственности с моделями настроек:
- схема проверяет структуру: известные ключи, типы, диапазоны, допустимые значения
- pydantic-модель только нормализует уже проверенные значения
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import best_match


# =============================================================================
# ERRORS
# =============================================================================


class ContractViolation(ValueError):
    """Данные нарушают контракт; содержит описания всех нарушений."""

    def __init__(self, schema_name: str, errors: List[str]):
        self.schema_name = schema_name
        self.errors = errors
        super().__init__(f"{schema_name}: " + "; ".join(errors))


def describe_error(error: ValidationError) -> str:
    """Описание нарушения в виде 'поле: сообщение'."""
    location = ".".join(str(part) for part in error.absolute_path) or "<root>"
    return f"{location}: {error.message}"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схема проверяется мета-схемой Draft 2020-12 один раз при первой загрузке,
    после чего кэшируется вместе с готовым валидатором.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = Path(schema_dir) if schema_dir else Path(__file__).parent / "schema"
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._validators: Dict[str, Draft202012Validator] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'calculator_config')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
            ValueError: Если файл не является валидной JSON Schema
        """
        return self.validator_for(schema_name).schema

    def validator_for(self, schema_name: str) -> Draft202012Validator:
        """Валидатор для схемы schema_name (из кэша, если уже загружен)."""
        cached = self._validators.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {e.message}") from e

        validator = Draft202012Validator(schema)
        self._validators[schema_name] = validator
        return validator


_SCHEMA_LOADER: Optional[SchemaLoader] = None


def get_schema_loader() -> SchemaLoader:
    """Общий экземпляр загрузчика (создаётся при первом обращении)."""
    global _SCHEMA_LOADER
    if _SCHEMA_LOADER is None:
        _SCHEMA_LOADER = SchemaLoader()
    return _SCHEMA_LOADER


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка данных против одной именованной схемы."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self.validator = (loader or get_schema_loader()).validator_for(schema_name)

    @property
    def schema(self) -> Dict[str, Any]:
        return self.validator.schema

    def validate(self, data: Any) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Наиболее релевантное нарушение (best_match)
        """
        error = best_match(self.validator.iter_errors(data))
        if error is not None:
            raise error

    def is_valid(self, data: Any) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        """Все нарушения, упорядоченные по пути к полю."""
        return iter(
            sorted(self.validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
        )

    def check(self, data: Any) -> None:
        """
        Проверка с полным отчётом.

        Raises:
            ContractViolation: Со списком всех нарушений
        """
        errors = [describe_error(error) for error in self.iter_errors(data)]
        if errors:
            raise ContractViolation(self.schema_name, errors)


class CalculatorConfigValidator(ContractValidator):
    """Валидатор конфигурации калькулятора (calculator_config.json)."""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__("calculator_config", loader=loader)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_calculator_config(data: Dict[str, Any]) -> None:
    """
    Валидация конфигурации калькулятора.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    CalculatorConfigValidator().validate(data)
