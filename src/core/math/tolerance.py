"""
Tolerance — Сравнение float и матриц с учётом машинной точности

Арифметика ядра выполняется напрямую в float64, без стабилизации, поэтому
результаты разных порядков вычисления (например, (AB)C и A(BC)) совпадают
только с точностью до погрешности округления. Модуль даёт единый способ
сравнивать такие результаты.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Матрицы разной формы никогда не считаются близкими
2. NaN не близок ничему, включая NaN
"""

import math
from typing import Final

from src.core.domain.matrix import Matrix

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Относительная толерантность сравнения float
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Абсолютная толерантность сравнения float (для значений около нуля)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12


# =============================================================================
# СРАВНЕНИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """True если значение конечно (не NaN, не Inf)."""
    return math.isfinite(value)


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def has_finite_values(matrix: Matrix) -> bool:
    """True если все элементы матрицы конечны."""
    return all(is_valid_float(value) for row in matrix.iter_rows() for value in row)


def matrices_close(
    a: Matrix,
    b: Matrix,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Поэлементное сравнение матриц с толерантностью.

    Args:
        a: Первая матрица
        b: Вторая матрица
        rel_tol: Относительная толерантность
        abs_tol: Абсолютная толерантность

    Returns:
        True если формы совпадают и все пары элементов близки
    """
    if a.shape != b.shape:
        return False

    for row_a, row_b in zip(a.iter_rows(), b.iter_rows()):
        for value_a, value_b in zip(row_a, row_b):
            if not is_close(value_a, value_b, rel_tol=rel_tol, abs_tol=abs_tol):
                return False
    return True
