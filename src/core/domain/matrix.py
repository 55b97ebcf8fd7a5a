"""
Matrix — Плотная двумерная матрица float64

Контейнер с неизменяемой формой и изменяемым содержимым.
Создаётся парсером (из текста) или движком операций (как результат).

Два пути создания:
- Matrix(rows, cols)        — матрица, заполненная нулями
- Matrix.from_rows(grid)    — копия прямоугольной сетки значений

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. rows >= 1, cols >= 1
2. Данные содержат ровно rows строк по ровно cols элементов
3. Форма не меняется после создания (меняются только значения через set)
4. Создание атомарно: либо готовая матрица, либо ShapeError
5. data возвращает копию, поэтому внешний код не может рассинхронизировать
   данные с rows/cols
"""

from typing import Iterable, List, Sequence

from src.core.domain.errors import MatrixIndexError, ShapeError


# =============================================================================
# ТЕКСТОВОЕ ПРЕДСТАВЛЕНИЕ ЗНАЧЕНИЙ
# =============================================================================

# Разделитель значений в строке и разделитель строк
VALUE_SEPARATOR = " "
ROW_SEPARATOR = "\n"


def format_value(value: float) -> str:
    """
    Каноническое текстовое представление float64.

    repr(float) даёт кратчайшую строку, которая при float() восстанавливает
    ровно то же значение, поэтому сериализация и парсинг согласованы.

    Examples:
        >>> format_value(2)
        '2.0'
        >>> format_value(-3.5)
        '-3.5'
        >>> format_value(1e16)
        '1e+16'
    """
    return repr(float(value))


# =============================================================================
# MATRIX
# =============================================================================


class Matrix:
    """
    Двумерная матрица значений float64 (row-major).

    Examples:
        >>> m = Matrix(2, 3)
        >>> m.shape
        (2, 3)
        >>> m.set(0, 1, 5)
        >>> m.get(0, 1)
        5.0
    """

    __slots__ = ("_rows", "_cols", "_data")

    def __init__(self, rows: int, cols: int):
        """
        Создание матрицы rows×cols, заполненной нулями.

        Args:
            rows: Количество строк (> 0)
            cols: Количество столбцов (> 0)

        Raises:
            ShapeError: Если rows <= 0 или cols <= 0
        """
        if rows <= 0 or cols <= 0:
            raise ShapeError(
                f"rows and cols must be positive, got {rows}x{cols}"
            )
        self._rows = rows
        self._cols = cols
        self._data: List[List[float]] = [[0.0] * cols for _ in range(rows)]

    @classmethod
    def zeros(cls, rows: int, cols: int) -> "Matrix":
        """Нулевая матрица rows×cols."""
        return cls(rows, cols)

    @classmethod
    def from_rows(cls, grid: Sequence[Sequence[float]]) -> "Matrix":
        """
        Создание матрицы из прямоугольной сетки значений.

        Значения копируются и приводятся к float, так что дальнейшие
        изменения исходной сетки не влияют на матрицу.

        Args:
            grid: Последовательность строк одинаковой длины

        Returns:
            Новая матрица len(grid)×len(grid[0])

        Raises:
            ShapeError: Если сетка пуста, первая строка пуста или строки
                имеют разную длину
        """
        if grid is None or len(grid) == 0:
            raise ShapeError("matrix cannot be empty")

        cols = len(grid[0])
        if cols == 0:
            raise ShapeError("matrix cannot have an empty first row")

        data: List[List[float]] = []
        for index, row in enumerate(grid):
            if len(row) != cols:
                raise ShapeError(
                    f"row {index} has {len(row)} elements, expected {cols}"
                )
            data.append([float(value) for value in row])

        matrix = cls.__new__(cls)
        matrix._rows = len(data)
        matrix._cols = cols
        matrix._data = data
        return matrix

    # -------------------------------------------------------------------------
    # Размеры
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return self._rows, self._cols

    def is_square(self) -> bool:
        return self._rows == self._cols

    # -------------------------------------------------------------------------
    # Доступ к элементам
    # -------------------------------------------------------------------------

    def get(self, row: int, col: int) -> float:
        """
        Значение элемента.

        Raises:
            MatrixIndexError: Если row вне [0, rows) или col вне [0, cols)
        """
        self.check_indices(row, col)
        return self._data[row][col]

    def set(self, row: int, col: int, value: float) -> None:
        """
        Запись значения элемента на месте (единственный мутатор).

        Raises:
            MatrixIndexError: Если row вне [0, rows) или col вне [0, cols)
        """
        self.check_indices(row, col)
        self._data[row][col] = float(value)

    @property
    def data(self) -> List[List[float]]:
        """Копия всей сетки значений (строка за строкой)."""
        return [list(row) for row in self._data]

    def iter_rows(self) -> Iterable[tuple[float, ...]]:
        """Итератор по строкам в виде кортежей (без копирования всей сетки)."""
        for row in self._data:
            yield tuple(row)

    def copy(self) -> "Matrix":
        return Matrix.from_rows(self._data)

    def check_indices(self, row: int, col: int) -> None:
        """
        Проверка пары индексов.

        Raises:
            MatrixIndexError: Если индекс не int (bool тоже отклоняется) или
                вне [0, rows) × [0, cols)
        """
        for index in (row, col):
            if isinstance(index, bool) or not isinstance(index, int):
                raise MatrixIndexError(
                    f"matrix indices must be integers, got {type(index).__name__} {index!r}"
                )
        # Отрицательные индексы не разрешены (без python wrap-around)
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise MatrixIndexError(
                f"index ({row}, {col}) out of bounds for {self._rows}x{self._cols} matrix"
            )

    # -------------------------------------------------------------------------
    # Представление
    # -------------------------------------------------------------------------

    def to_text(self) -> str:
        """
        Каноническое текстовое представление.

        Каждая строка матрицы на отдельной строке, значения через один пробел,
        без завершающего перевода строки.
        """
        return ROW_SEPARATOR.join(
            VALUE_SEPARATOR.join(format_value(value) for value in row)
            for row in self._data
        )

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"Matrix.from_rows({self._data!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._data == other._data

    # Содержимое изменяемо, поэтому матрица не хэшируется
    __hash__ = None  # type: ignore[assignment]
