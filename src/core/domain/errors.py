"""
Matrix Errors — Иерархия исключений ядра

Все ошибки ядра наследуются от MatrixError, поэтому вызывающая сторона может
перехватить их одним except. Каждый подкласс соответствует отдельному классу
сбоев, и для каждого класса у пользователя своя стратегия восстановления:

- FormatError       — некорректное или пустое текстовое представление матрицы
                      (исправить содержимое файла)
- MatrixIOError     — ошибка чтения/записи файла (указать другой путь)
- DimensionError    — несовместимые размеры операндов (выбрать другие матрицы)
- ShapeError        — недопустимая форма (нулевые размеры, не квадратная матрица)
- MatrixIndexError  — выход индекса за границы матрицы

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ядро никогда не печатает и не логирует, только бросает типизированную ошибку
2. Ошибка означает отсутствие результата (частичных результатов не бывает)
"""

from pathlib import Path
from typing import Optional


class MatrixError(Exception):
    """Базовое исключение для всех ошибок, связанных с матрицами."""

    pass


class FormatError(MatrixError, ValueError):
    """
    Некорректный формат текстового источника.

    Нечисловой токен, строки разной длины, пустая строка внутри данных
    или пустой источник.
    """

    pass


class MatrixIOError(MatrixError):
    """
    Ошибка ввода/вывода при чтении или записи файла матрицы.

    Исходное исключение (OSError, UnicodeDecodeError) сохраняется в __cause__.
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class DimensionError(MatrixError, ValueError):
    """Размеры операндов несовместимы с запрошенной операцией."""

    pass


class ShapeError(MatrixError, ValueError):
    """Недопустимая форма: неположительные размеры или не квадратная матрица."""

    pass


class MatrixIndexError(MatrixError, IndexError):
    """Индекс строки или столбца за пределами матрицы."""

    pass
