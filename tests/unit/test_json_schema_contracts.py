"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидатора конфигурации:
- Валидность самой схемы
- Валидация правильных данных
- Детекция нарушений типов и constraints (min/max/enum)
- Запрет неизвестных полей
- Ошибки загрузчика схем
"""

import json

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    CalculatorConfigValidator,
    ContractViolation,
    SchemaLoader,
    describe_error,
    get_schema_loader,
    validate_calculator_config,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def valid_config():
    """Валидная конфигурация калькулятора."""
    return {
        "log_level": "debug",
        "log_file": "logs/matrix-calc.log",
        "log_to_console": True,
        "slot_count": 2,
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты SchemaLoader."""

    def test_load_calculator_config_schema(self):
        schema = SchemaLoader().load_schema("calculator_config")
        assert schema["type"] == "object"
        assert schema["additionalProperties"] is False

    def test_schema_is_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("calculator_config") is loader.load_schema("calculator_config")

    def test_shared_loader(self):
        assert get_schema_loader() is get_schema_loader()

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError, match="Schema not found"):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_schema_dir(self, tmp_path):
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "nope")

    def test_invalid_schema_rejected(self, tmp_path):
        (tmp_path / "broken.json").write_text(json.dumps({"type": 42}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# CALCULATOR CONFIG
# =============================================================================


class TestCalculatorConfigValidator:
    """Тесты валидации calculator_config."""

    def test_valid_config(self, valid_config):
        validate_calculator_config(valid_config)
        assert CalculatorConfigValidator().is_valid(valid_config)

    def test_empty_config_is_valid(self):
        """Все поля необязательны (используются значения по умолчанию)."""
        validate_calculator_config({})

    def test_null_log_file(self, valid_config):
        valid_config["log_file"] = None
        validate_calculator_config(valid_config)

    def test_unknown_key_rejected(self, valid_config):
        valid_config["colour"] = "blue"
        with pytest.raises(ValidationError):
            validate_calculator_config(valid_config)

    @pytest.mark.parametrize("level", ["INFO", "info", "Info", "wArNiNg", "Critical"])
    def test_log_level_any_case(self, valid_config, level):
        valid_config["log_level"] = level
        validate_calculator_config(valid_config)

    @pytest.mark.parametrize("level", ["verbose", "", "info ", "xinfo", "infox", 10])
    def test_invalid_log_level(self, valid_config, level):
        valid_config["log_level"] = level
        with pytest.raises(ValidationError):
            validate_calculator_config(valid_config)

    @pytest.mark.parametrize("slots", [0, 10, 2.5, "2"])
    def test_invalid_slot_count(self, valid_config, slots):
        valid_config["slot_count"] = slots
        with pytest.raises(ValidationError):
            validate_calculator_config(valid_config)

    def test_invalid_console_flag(self, valid_config):
        valid_config["log_to_console"] = "yes"
        assert not CalculatorConfigValidator().is_valid(valid_config)

    def test_iter_errors_reports_all(self):
        errors = list(
            CalculatorConfigValidator().iter_errors({"slot_count": 0, "log_level": "loud"})
        )
        assert len(errors) == 2
        assert [list(e.absolute_path) for e in errors] == [["log_level"], ["slot_count"]]

    def test_check_collects_all_violations(self):
        with pytest.raises(ContractViolation) as exc_info:
            CalculatorConfigValidator().check({"slot_count": 0, "colour": "blue"})
        violation = exc_info.value
        assert isinstance(violation, ValueError)
        assert violation.schema_name == "calculator_config"
        assert len(violation.errors) == 2
        assert any(msg.startswith("slot_count: ") for msg in violation.errors)
        assert any(msg.startswith("<root>: ") and "colour" in msg for msg in violation.errors)

    def test_check_accepts_valid_config(self, valid_config):
        CalculatorConfigValidator().check(valid_config)

    def test_validate_reports_single_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_calculator_config({"slot_count": "2"})
        assert list(exc_info.value.absolute_path) == ["slot_count"]

    def test_describe_error(self):
        error = next(CalculatorConfigValidator().iter_errors({"log_to_console": "yes"}))
        assert describe_error(error) == "log_to_console: 'yes' is not of type 'boolean'"
