"""Shared fixtures for the test suite."""

import logging

import pytest

from src.shell.logging_config import LOGGER_NAMESPACE
from src.shell.settings import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_logging():
    """setup_logging() reconfigures the 'src' logger; restore it after each test."""
    yield
    logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    """An exported MATRIX_CALC_CONFIG must not leak into the tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture
def matrix_files(tmp_path):
    """Two compatible 2x2 matrices and one 1x2 matrix on disk."""
    files = {
        "a": tmp_path / "a.txt",
        "b": tmp_path / "b.txt",
        "row": tmp_path / "row.txt",
    }
    files["a"].write_text("1 2\n3 4\n", encoding="utf-8")
    files["b"].write_text("2 0\n1 2\n", encoding="utf-8")
    files["row"].write_text("1 2\n", encoding="utf-8")
    return files
