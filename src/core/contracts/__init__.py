"""
Contract Validation Module

Модуль для валидации JSON контрактов (конфигурация калькулятора).
"""

from .validators import (
    CalculatorConfigValidator,
    ContractValidator,
    ContractViolation,
    SchemaLoader,
    describe_error,
    get_schema_loader,
    validate_calculator_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "CalculatorConfigValidator",
    # Errors
    "ContractViolation",
    # Functions
    "describe_error",
    "get_schema_loader",
    "validate_calculator_config",
]
