"""
Matrix Text Serializer — Запись матриц в текстовый формат

Обратная операция к парсеру: значения строки через один пробел, строки через
перевод строки. Значения выводятся через repr(float), поэтому повторный
разбор сериализованного текста даёт матрицу, равную исходной.

Сохранение в файл:
- SaveMode.EXISTING — файл должен существовать, содержимое перезаписывается
- SaveMode.NEW      — файл не должен существовать, родительские каталоги
                      создаются при необходимости
"""

from enum import Enum
from pathlib import Path
from typing import Final, Iterable, TextIO, Union

from src.core.domain.errors import MatrixIOError
from src.core.domain.matrix import ROW_SEPARATOR, VALUE_SEPARATOR, Matrix, format_value

DEFAULT_WRITE_ENCODING: Final[str] = "utf-8"


class SaveMode(str, Enum):
    """Режим сохранения результата в файл."""

    EXISTING = "existing"
    NEW = "new"


def format_row(values: Iterable[float]) -> str:
    """Одна строка матрицы в текстовом формате."""
    return VALUE_SEPARATOR.join(format_value(value) for value in values)


def to_text(matrix: Matrix) -> str:
    """Текст матрицы без завершающего перевода строки."""
    return matrix.to_text()


def write_matrix(matrix: Matrix, stream: TextIO) -> None:
    """
    Запись матрицы в текстовый поток.

    Каждая строка матрицы завершается переводом строки.
    """
    for row in matrix.iter_rows():
        stream.write(format_row(row))
        stream.write(ROW_SEPARATOR)


def save_matrix(
    matrix: Matrix,
    path: Union[str, Path],
    mode: SaveMode = SaveMode.NEW,
    encoding: str = DEFAULT_WRITE_ENCODING,
) -> Path:
    """
    Сохранение матрицы в файл.

    Args:
        matrix: Матрица для сохранения
        path: Путь к файлу
        mode: SaveMode.EXISTING (перезапись) или SaveMode.NEW (новый файл)
        encoding: Кодировка файла

    Returns:
        Путь, по которому сохранена матрица

    Raises:
        MatrixIOError: Если файл отсутствует (EXISTING), уже существует (NEW)
            или запись завершилась ошибкой ОС
    """
    path = Path(path)
    mode = SaveMode(mode)

    if mode is SaveMode.EXISTING and not path.is_file():
        raise MatrixIOError(f"file does not exist: {path}", path=path)
    if mode is SaveMode.NEW and path.exists():
        raise MatrixIOError(f"file already exists: {path}", path=path)

    try:
        if mode is SaveMode.NEW:
            path.parent.mkdir(parents=True, exist_ok=True)
        # режим "x" никогда не перезаписывает существующий файл
        file_mode = "w" if mode is SaveMode.EXISTING else "x"
        with open(path, file_mode, encoding=encoding, newline="\n") as f:
            write_matrix(matrix, f)
    except OSError as e:
        raise MatrixIOError(f"error writing file {path}: {e}", path=path) from e

    return path
