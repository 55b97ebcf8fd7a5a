"""
CalculatorSettings — Конфигурация интерактивного калькулятора

Immutable Pydantic модель настроек оболочки. Любые входные данные модели
(JSON файл, флаги командной строки, явный вызов конструктора) сначала
проверяются по JSON Schema (calculator_config.json); модель только
нормализует проверенные значения (регистр уровня логирования, Path).

Порядок поиска файла конфигурации:
1. Явный путь (--config)
2. Переменная окружения MATRIX_CALC_CONFIG
3. Значения по умолчанию (файл не нужен)
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Final, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.contracts import CalculatorConfigValidator

CONFIG_ENV_VAR: Final[str] = "MATRIX_CALC_CONFIG"

LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# SETTINGS MODEL
# =============================================================================


class CalculatorSettings(BaseModel):
    """
    Настройки калькулятора.

    Immutable модель (frozen=True): переопределения флагами командной строки
    создают новый экземпляр через model_validate.
    """

    log_level: str = Field("INFO", description="Уровень логирования")
    log_file: Optional[Path] = Field(None, description="Файл журнала (опционально)")
    log_to_console: bool = Field(False, description="Дублировать журнал в stderr")
    slot_count: int = Field(2, description="Количество слотов матриц (1-9)")

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def check_contract(cls, data: Any) -> Any:
        """Структурная проверка по calculator_config.json (ContractViolation → ValidationError)."""
        if isinstance(data, dict):
            raw = {key: str(value) if isinstance(value, Path) else value for key, value in data.items()}
        else:
            raw = data
        CalculatorConfigValidator().check(raw)
        return data

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Уровень логирования без учёта регистра."""
        return v.upper()

    @property
    def log_level_value(self) -> int:
        """Числовой уровень для модуля logging."""
        return logging.getLevelName(self.log_level)


# =============================================================================
# LOADING
# =============================================================================


def resolve_config_path(config_file: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """
    Путь к файлу конфигурации.

    Returns:
        Явный путь, путь из MATRIX_CALC_CONFIG или None
    """
    if config_file is not None:
        return Path(config_file)

    raw = os.environ.get(CONFIG_ENV_VAR)
    if raw and raw.strip():
        return Path(raw).expanduser()
    return None


def load_settings(config_file: Optional[Union[str, Path]] = None) -> CalculatorSettings:
    """
    Загрузка настроек.

    Args:
        config_file: Явный путь к JSON файлу конфигурации

    Returns:
        CalculatorSettings (по умолчанию, если файл не задан)

    Raises:
        OSError: Файл не найден или не читается
        json.JSONDecodeError: Файл не является JSON
        pydantic.ValidationError: Нарушение схемы calculator_config.json
    """
    path = resolve_config_path(config_file)
    if path is None:
        return CalculatorSettings()

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    return CalculatorSettings.model_validate(data)
