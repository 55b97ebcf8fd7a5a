"""
Matrix Operations — Движок арифметики над матрицами

Операции:
- add / subtract         — поэлементно, формы должны совпадать
- multiply_by_scalar     — каждый элемент умножается на k (никогда не падает)
- multiply               — классическое произведение, A.cols == B.rows
- determinant            — рекурсивное разложение Лапласа по первой строке

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все операции чистые: входные матрицы никогда не изменяются
2. Несовместимые размеры → DimensionError, не квадратная матрица → ShapeError
3. Частичных результатов нет: либо новая матрица/скаляр, либо исключение
4. Определитель считается точным разложением по минорам, O(n!),
   без перестановок строк и LU-разложения

ФОРМУЛЫ:
    (A ± B)[i][j] = A[i][j] ± B[i][j]
    (A·k)[i][j]   = A[i][j] · k
    (AB)[i][j]    = Σ_k A[i][k] · B[k][j]
    det(A)        = Σ_i (-1)^i · A[0][i] · det(M_0i)
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional

from src.core.domain.errors import DimensionError, ShapeError
from src.core.domain.matrix import Matrix
from src.core.math.tolerance import has_finite_values, is_valid_float


# =============================================================================
# ENUMS
# =============================================================================


class ElementwiseOp(str, Enum):
    """Поэлементные операции над двумя матрицами одной формы."""

    ADD = "add"
    SUBTRACT = "subtract"


class Operation(IntEnum):
    """
    Операции движка.

    Значения совпадают с номерами пунктов меню интерактивной оболочки.
    """

    ADD = 1
    SUBTRACT = 2
    MULTIPLY = 3
    SCALAR = 4
    DETERMINANT = 5


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class OperationResult:
    """Результат операции: либо матрица, либо скаляр (определитель)."""

    operation: Operation
    matrix: Optional[Matrix] = None
    scalar: Optional[float] = None

    @property
    def is_scalar(self) -> bool:
        return self.matrix is None

    @property
    def is_finite(self) -> bool:
        """False если результат содержит NaN или Inf (переполнение float64)."""
        if self.matrix is None:
            return is_valid_float(self.scalar)
        return has_finite_values(self.matrix)


# =============================================================================
# ПОЭЛЕМЕНТНЫЕ ОПЕРАЦИИ
# =============================================================================


def elementwise(a: Matrix, b: Matrix, op: ElementwiseOp) -> Matrix:
    """
    Поэлементная операция над матрицами одинаковой формы.

    Args:
        a: Первая матрица
        b: Вторая матрица
        op: ElementwiseOp.ADD или ElementwiseOp.SUBTRACT

    Returns:
        Новая матрица формы a.shape

    Raises:
        DimensionError: Если формы a и b различаются
    """
    if a.shape != b.shape:
        raise DimensionError(
            f"matrices must have the same dimensions for {op.value}: "
            f"{a.rows}x{a.cols} vs {b.rows}x{b.cols}"
        )

    result = Matrix(a.rows, a.cols)
    for i in range(a.rows):
        for j in range(a.cols):
            if op is ElementwiseOp.ADD:
                value = a.get(i, j) + b.get(i, j)
            else:
                value = a.get(i, j) - b.get(i, j)
            result.set(i, j, value)
    return result


def add(a: Matrix, b: Matrix) -> Matrix:
    """
    Сумма матриц.

    Examples:
        >>> add(Matrix.from_rows([[1, 2]]), Matrix.from_rows([[3, 4]])).data
        [[4.0, 6.0]]
    """
    return elementwise(a, b, ElementwiseOp.ADD)


def subtract(a: Matrix, b: Matrix) -> Matrix:
    """Разность матриц a - b."""
    return elementwise(a, b, ElementwiseOp.SUBTRACT)


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def multiply_by_scalar(matrix: Matrix, scalar: float) -> Matrix:
    """
    Умножение матрицы на скаляр (включая 0 и отрицательные значения).

    Examples:
        >>> multiply_by_scalar(Matrix.from_rows([[1, 2], [3, 4]]), 2).data
        [[2.0, 4.0], [6.0, 8.0]]
    """
    result = Matrix(matrix.rows, matrix.cols)
    for i in range(matrix.rows):
        for j in range(matrix.cols):
            result.set(i, j, matrix.get(i, j) * scalar)
    return result


def multiply(a: Matrix, b: Matrix) -> Matrix:
    """
    Произведение матриц a·b.

    Сложность O(a.rows · a.cols · b.cols).

    Args:
        a: Левая матрица m×n
        b: Правая матрица n×p

    Returns:
        Новая матрица m×p

    Raises:
        DimensionError: Если a.cols != b.rows
    """
    if a.cols != b.rows:
        raise DimensionError(
            "number of columns of the first matrix must equal number of rows "
            f"of the second for multiplication: {a.rows}x{a.cols} vs {b.rows}x{b.cols}"
        )

    result = Matrix(a.rows, b.cols)
    for i in range(a.rows):
        for j in range(b.cols):
            total = 0.0
            for k in range(a.cols):
                total += a.get(i, k) * b.get(k, j)
            result.set(i, j, total)
    return result


# =============================================================================
# ОПРЕДЕЛИТЕЛЬ
# =============================================================================


def _minor_grid(grid: List[List[float]], row: int, col: int) -> List[List[float]]:
    # Порядок оставшихся строк и столбцов сохраняется
    return [
        [value for j, value in enumerate(line) if j != col]
        for i, line in enumerate(grid)
        if i != row
    ]


def _determinant_recursive(grid: List[List[float]]) -> float:
    n = len(grid)
    if n == 1:
        return grid[0][0]
    if n == 2:
        return grid[0][0] * grid[1][1] - grid[0][1] * grid[1][0]

    det = 0.0
    for i in range(n):
        sign = 1.0 if i % 2 == 0 else -1.0
        det += sign * grid[0][i] * _determinant_recursive(_minor_grid(grid, 0, i))
    return det


def minor(matrix: Matrix, row: int, col: int) -> Matrix:
    """
    Минор: подматрица без строки row и столбца col.

    Args:
        matrix: Квадратная матрица n×n, n >= 2
        row: Удаляемая строка
        col: Удаляемый столбец

    Returns:
        Новая матрица (n-1)×(n-1)

    Raises:
        ShapeError: Если матрица не квадратная или меньше 2×2
        MatrixIndexError: Если row/col вне матрицы
    """
    if not matrix.is_square():
        raise ShapeError(
            f"minor is defined only for square matrices, got {matrix.rows}x{matrix.cols}"
        )
    if matrix.rows < 2:
        raise ShapeError("minor requires at least a 2x2 matrix")
    matrix.check_indices(row, col)
    return Matrix.from_rows(_minor_grid(matrix.data, row, col))


def determinant(matrix: Matrix) -> float:
    """
    Определитель квадратной матрицы разложением Лапласа по первой строке.

    Базовые случаи:
        n = 1: единственный элемент
        n = 2: ad - bc

    Examples:
        >>> determinant(Matrix.from_rows([[5]]))
        5.0
        >>> determinant(Matrix.from_rows([[1, 2], [3, 4]]))
        -2.0

    Raises:
        ShapeError: Если матрица не квадратная
    """
    if not matrix.is_square():
        raise ShapeError(
            "determinant can only be computed for a square matrix, "
            f"got {matrix.rows}x{matrix.cols}"
        )
    return _determinant_recursive(matrix.data)


# =============================================================================
# ВЫБОР ОПЕРАЦИИ
# =============================================================================


def apply_operation(
    operation: Operation,
    first: Matrix,
    second: Optional[Matrix] = None,
    scalar: Optional[float] = None,
) -> OperationResult:
    """
    Выполнение операции по селектору.

    Args:
        operation: Выбранная операция
        first: Первый операнд (для SCALAR и DETERMINANT единственный)
        second: Второй операнд (ADD, SUBTRACT, MULTIPLY)
        scalar: Скаляр (SCALAR)

    Returns:
        OperationResult с матрицей или определителем

    Raises:
        ValueError: Если не передан обязательный операнд
        DimensionError, ShapeError: Из соответствующих операций
    """
    operation = Operation(operation)

    if operation is Operation.DETERMINANT:
        return OperationResult(operation=operation, scalar=determinant(first))

    if operation is Operation.SCALAR:
        if scalar is None:
            raise ValueError("scalar multiplication requires a scalar")
        return OperationResult(
            operation=operation, matrix=multiply_by_scalar(first, scalar)
        )

    if second is None:
        raise ValueError(f"{operation.name.lower()} requires a second matrix")

    if operation is Operation.ADD:
        matrix = add(first, second)
    elif operation is Operation.SUBTRACT:
        matrix = subtract(first, second)
    else:
        matrix = multiply(first, second)
    return OperationResult(operation=operation, matrix=matrix)
