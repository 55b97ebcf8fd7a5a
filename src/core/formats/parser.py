"""
Matrix Text Parser — Чтение и валидация текстового формата матриц

Формат:
- UTF-8 текст, одна строка файла = одна строка матрицы
- Значения разделены одним или несколькими пробельными символами
- Значения — десятичные литералы float64 (1.0, -3.5, 2, 1e-3)

Алгоритм:
1. Источник читается построчно (без ограничения количества строк)
2. Каждая строка разбивается на токены, каждый токен → float
3. Количество столбцов первой строки становится ожидаемым для всех остальных
4. Пустые строки в конце источника игнорируются; пустая строка, за которой
   следуют данные (в том числе в начале источника), считается ошибкой формата
5. Если не прочитано ни одной строки → FormatError("source is empty")

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ошибки содержимого → FormatError, ошибки файловой системы → MatrixIOError
2. Парсер либо возвращает валидную матрицу, либо бросает исключение
"""

import io
from pathlib import Path
from typing import Final, Iterable, List, Union

from src.core.domain.errors import FormatError, MatrixIOError
from src.core.domain.matrix import Matrix

# utf-8-sig читает обычный UTF-8 и дополнительно пропускает BOM
DEFAULT_READ_ENCODING: Final[str] = "utf-8-sig"

MSG_NOT_NUMERIC: Final[str] = "expected a numeric value"
MSG_RAGGED_ROWS: Final[str] = "rows must have equal length"
MSG_EMPTY_SOURCE: Final[str] = "source is empty"


def _parse_token(token: str, line_no: int) -> float:
    # float() допускает "1_000", в формате файла разделители разрядов запрещены
    if "_" in token:
        raise FormatError(f"{MSG_NOT_NUMERIC}, got {token!r} on line {line_no}")
    try:
        return float(token)
    except ValueError:
        raise FormatError(
            f"{MSG_NOT_NUMERIC}, got {token!r} on line {line_no}"
        ) from None


def parse_line(line: str, line_no: int = 1) -> List[float]:
    """
    Разбор одной строки в список значений.

    Args:
        line: Строка источника (перевод строки допускается)
        line_no: Номер строки для сообщений об ошибках (с 1)

    Returns:
        Значения строки (пустой список для пустой строки)

    Raises:
        FormatError: Если токен не является числом
    """
    return [_parse_token(token, line_no) for token in line.split()]


def parse(source: Iterable[str]) -> Matrix:
    """
    Разбор матрицы из итерируемого источника строк.

    Args:
        source: Открытый текстовый файл, io.StringIO или список строк

    Returns:
        Матрица из прочитанных строк

    Raises:
        FormatError: Нечисловой токен, строки разной длины, пустая строка
            внутри данных или пустой источник
    """
    rows: List[List[float]] = []
    expected_cols = -1
    # Номер первой пустой строки, после которой ещё не было данных
    pending_blank_line = 0

    for line_no, line in enumerate(source, start=1):
        values = parse_line(line, line_no)

        if not values:
            if not pending_blank_line:
                pending_blank_line = line_no
            continue

        if pending_blank_line:
            raise FormatError(
                f"{MSG_RAGGED_ROWS}: row on line {pending_blank_line} is empty"
            )

        if expected_cols == -1:
            expected_cols = len(values)
        elif len(values) != expected_cols:
            raise FormatError(
                f"{MSG_RAGGED_ROWS}: line {line_no} has {len(values)} values, "
                f"expected {expected_cols}"
            )
        rows.append(values)

    if not rows:
        raise FormatError(MSG_EMPTY_SOURCE)

    return Matrix.from_rows(rows)


def parse_text(text: str) -> Matrix:
    """Разбор матрицы из строки."""
    return parse(io.StringIO(text))


def read_matrix(path: Union[str, Path], encoding: str = DEFAULT_READ_ENCODING) -> Matrix:
    """
    Чтение матрицы из файла.

    Args:
        path: Путь к файлу
        encoding: Кодировка (default: UTF-8 с необязательным BOM)

    Returns:
        Прочитанная матрица

    Raises:
        MatrixIOError: Файл не найден, нет доступа, ошибка декодирования
        FormatError: Некорректное содержимое файла
    """
    path = Path(path)
    try:
        with open(path, "r", encoding=encoding) as f:
            return parse(f)
    except (OSError, UnicodeDecodeError) as e:
        raise MatrixIOError(f"error reading file {path}: {e}", path=path) from e
