"""
Core math modules

Арифметика над матрицами и сравнение float с учётом машинной точности.
"""

# Matrix Operations
from src.core.math.matrix_ops import (
    ElementwiseOp,
    Operation,
    OperationResult,
    add,
    apply_operation,
    determinant,
    elementwise,
    minor,
    multiply,
    multiply_by_scalar,
    subtract,
)

# Tolerance
from src.core.math.tolerance import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    has_finite_values,
    is_close,
    is_valid_float,
    matrices_close,
)

__all__ = [
    # Matrix Operations: Types
    "ElementwiseOp",
    "Operation",
    "OperationResult",
    # Matrix Operations: Functions
    "add",
    "apply_operation",
    "determinant",
    "elementwise",
    "minor",
    "multiply",
    "multiply_by_scalar",
    "subtract",
    # Tolerance: Constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # Tolerance: Functions
    "has_finite_values",
    "is_close",
    "is_valid_float",
    "matrices_close",
]
