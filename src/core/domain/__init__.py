"""
Domain models and error taxonomy.

Contains the Matrix entity and the exceptions raised by the core.
"""

from src.core.domain.errors import (
    DimensionError,
    FormatError,
    MatrixError,
    MatrixIndexError,
    MatrixIOError,
    ShapeError,
)
from src.core.domain.matrix import (
    ROW_SEPARATOR,
    VALUE_SEPARATOR,
    Matrix,
    format_value,
)

__all__ = [
    # Errors
    "MatrixError",
    "FormatError",
    "MatrixIOError",
    "DimensionError",
    "ShapeError",
    "MatrixIndexError",
    # Matrix model
    "Matrix",
    "format_value",
    "ROW_SEPARATOR",
    "VALUE_SEPARATOR",
]
