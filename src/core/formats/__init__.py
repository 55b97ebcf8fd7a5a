"""
Text Matrix Format

Чтение (parser) и запись (serializer) матриц в текстовом формате:
одна строка файла на строку матрицы, значения через пробел.
"""

from .parser import (
    DEFAULT_READ_ENCODING,
    parse,
    parse_line,
    parse_text,
    read_matrix,
)
from .serializer import (
    DEFAULT_WRITE_ENCODING,
    SaveMode,
    format_row,
    save_matrix,
    to_text,
    write_matrix,
)

__all__ = [
    # Parser
    "DEFAULT_READ_ENCODING",
    "parse",
    "parse_line",
    "parse_text",
    "read_matrix",
    # Serializer
    "DEFAULT_WRITE_ENCODING",
    "SaveMode",
    "format_row",
    "save_matrix",
    "to_text",
    "write_matrix",
]
