"""
Тесты для Matrix Text Parser

Проверяемые инварианты:
1. Корректный текст → матрица с ожидаемыми значениями
2. Нечисловой токен → FormatError("expected a numeric value")
3. Строки разной длины → FormatError("rows must have equal length")
4. Пустой источник / только пробелы → FormatError("source is empty")
5. Пустые строки в конце игнорируются, внутри данных — ошибка
6. Ошибки файловой системы → MatrixIOError, не FormatError
"""

import io

import pytest

from src.core.domain import FormatError, Matrix, MatrixError, MatrixIOError
from src.core.formats import parse, parse_line, parse_text, read_matrix


# =============================================================================
# ТЕСТЫ: Корректный ввод
# =============================================================================


class TestParseValid:
    """Разбор корректных источников."""

    def test_simple_2x2(self):
        m = parse_text("1.0 2.0\n3.0 4.0\n")
        assert m == Matrix.from_rows([[1, 2], [3, 4]])

    def test_without_trailing_newline(self):
        assert parse_text("1 2\n3 4") == Matrix.from_rows([[1, 2], [3, 4]])

    def test_integer_and_exponent_literals(self):
        m = parse_text("2 -3.5 1e-3\n+4 .5 -0\n")
        assert m.data == [[2.0, -3.5, 0.001], [4.0, 0.5, -0.0]]

    def test_multiple_whitespace_separators(self):
        """Разделитель — любая последовательность пробельных символов."""
        m = parse_text("  1 \t 2   3\n4\t5\t6  \n")
        assert m == Matrix.from_rows([[1, 2, 3], [4, 5, 6]])

    def test_windows_line_endings(self):
        m = parse_text("1 2\r\n3 4\r\n")
        assert m == Matrix.from_rows([[1, 2], [3, 4]])

    def test_single_value(self):
        assert parse_text("42").shape == (1, 1)

    def test_single_column(self):
        m = parse_text("1\n2\n3\n")
        assert m.shape == (3, 1)

    def test_parse_from_list_of_lines(self):
        """Источник — любой итерируемый набор строк."""
        assert parse(["1 2", "3 4"]) == Matrix.from_rows([[1, 2], [3, 4]])

    def test_parse_from_stream(self):
        assert parse(io.StringIO("5 6\n")) == Matrix.from_rows([[5, 6]])

    def test_special_float_literals(self):
        """inf/nan принимаются, так как их выдаёт сериализатор."""
        m = parse_text("inf -inf nan")
        assert m.get(0, 0) == float("inf")
        assert m.get(0, 1) == float("-inf")
        assert m.get(0, 2) != m.get(0, 2)

    def test_parse_line(self):
        assert parse_line("1 2.5 -3\n") == [1.0, 2.5, -3.0]
        assert parse_line("   \n") == []


# =============================================================================
# ТЕСТЫ: Пустые строки
# =============================================================================


class TestBlankLines:
    """Политика пустых строк: в конце игнорируются, внутри — ошибка."""

    def test_trailing_blank_lines_ignored(self):
        m = parse_text("1 2\n3 4\n\n   \n\t\n")
        assert m.shape == (2, 2)

    def test_interior_blank_line_rejected(self):
        with pytest.raises(FormatError, match="line 2 is empty"):
            parse_text("1 2\n\n3 4\n")

    def test_leading_blank_line_rejected(self):
        with pytest.raises(FormatError, match="line 1 is empty"):
            parse_text("\n1 2\n")

    def test_interior_blank_reports_equal_length_rule(self):
        with pytest.raises(FormatError, match="rows must have equal length"):
            parse_text("1 2\n  \n3 4")


# =============================================================================
# ТЕСТЫ: Ошибки формата
# =============================================================================


class TestParseInvalid:
    """Разбор некорректных источников."""

    def test_ragged_rows(self):
        with pytest.raises(FormatError, match="rows must have equal length"):
            parse_text("1.0 2.0\n3.0 4.0 5.0\n")

    def test_ragged_rows_reports_line(self):
        with pytest.raises(FormatError, match="line 3 has 1 values, expected 2"):
            parse_text("1 2\n3 4\n5\n")

    def test_non_numeric_token(self):
        with pytest.raises(FormatError, match="expected a numeric value"):
            parse_text("1.0 abc\n3.0 4.0\n")

    def test_non_numeric_token_reports_location(self):
        with pytest.raises(FormatError, match=r"'x' on line 2"):
            parse_text("1 2\n3 x\n")

    @pytest.mark.parametrize("token", ["1,5", "1_000", "0x10", "--1", "1.2.3"])
    def test_rejected_literals(self, token):
        with pytest.raises(FormatError, match="expected a numeric value"):
            parse_text(f"1 {token}\n")

    def test_empty_source(self):
        with pytest.raises(FormatError, match="source is empty"):
            parse_text("")

    def test_whitespace_only_source(self):
        with pytest.raises(FormatError, match="source is empty"):
            parse_text("   \n\t\n\n")

    def test_format_error_hierarchy(self):
        """FormatError — это MatrixError и ValueError, но не MatrixIOError."""
        with pytest.raises(FormatError) as exc_info:
            parse_text("a")
        assert isinstance(exc_info.value, MatrixError)
        assert isinstance(exc_info.value, ValueError)
        assert not isinstance(exc_info.value, MatrixIOError)


# =============================================================================
# ТЕСТЫ: Чтение файлов
# =============================================================================


class TestReadMatrix:
    """Тесты read_matrix."""

    def test_read_file(self, tmp_path):
        path = tmp_path / "m.txt"
        path.write_text("1.0 2.0\n3.0 4.0\n", encoding="utf-8")
        assert read_matrix(path) == Matrix.from_rows([[1, 2], [3, 4]])

    def test_read_file_str_path(self, tmp_path):
        path = tmp_path / "m.txt"
        path.write_text("7\n", encoding="utf-8")
        assert read_matrix(str(path)) == Matrix.from_rows([[7]])

    def test_utf8_bom_tolerated(self, tmp_path):
        path = tmp_path / "bom.txt"
        path.write_bytes("\ufeff1 2\n".encode("utf-8"))
        assert read_matrix(path) == Matrix.from_rows([[1, 2]])

    def test_missing_file(self, tmp_path):
        path = tmp_path / "missing.txt"
        with pytest.raises(MatrixIOError, match="error reading file") as exc_info:
            read_matrix(path)
        assert exc_info.value.path == path
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_directory_instead_of_file(self, tmp_path):
        with pytest.raises(MatrixIOError):
            read_matrix(tmp_path)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"\xff\xfe\xfa 1 2\n")
        with pytest.raises(MatrixIOError) as exc_info:
            read_matrix(path)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_format_error_from_file_is_not_io_error(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("1 2\n3\n", encoding="utf-8")
        with pytest.raises(FormatError):
            read_matrix(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("", encoding="utf-8")
        with pytest.raises(FormatError, match="source is empty"):
            read_matrix(path)
