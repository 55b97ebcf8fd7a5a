"""Interactive Session — текстовое меню калькулятора матриц.

Оболочка вокруг ядра:
- Загрузка матриц из файлов в слоты (по умолчанию 2 слота)
- Главное меню: операция / перезагрузка матриц / выход
- Выбор операндов по номерам слотов и операции по номеру
- Вывод результата и сохранение его в существующий или новый файл

Ошибки ядра (MatrixError) выводятся пользователю и логируются, цикл
продолжается. Конец ввода (EOF) завершает сессию.
"""

import logging
import sys
from typing import Callable, List, Optional, TextIO, Tuple

from src.core.domain.errors import MatrixError, MatrixIndexError, MatrixIOError
from src.core.domain.matrix import Matrix, format_value
from src.core.formats.parser import read_matrix
from src.core.formats.serializer import SaveMode, save_matrix
from src.core.math.matrix_ops import Operation, OperationResult, apply_operation
from src.shell.settings import CalculatorSettings

logger = logging.getLogger(__name__)


MAIN_MENU = """
Main menu:
1. Perform an operation on matrices
2. Load new matrices from files
0. Exit"""

OPERATION_MENU = """
Choose an operation:
1. Addition
2. Subtraction
3. Multiplication
4. Multiplication by a scalar
5. Determinant of the first matrix"""

SAVE_MODES = {1: SaveMode.EXISTING, 2: SaveMode.NEW}


class InputError(ValueError):
    """Ответ пользователя не удалось разобрать."""

    pass


class MatrixSession:
    """Интерактивная сессия калькулятора.

    Ввод и вывод инъектируются, поэтому сессию можно вести из тестов:
    input_fn получает текст подсказки и возвращает ответ (или бросает EOFError).
    """

    def __init__(
        self,
        settings: Optional[CalculatorSettings] = None,
        input_fn: Callable[[str], str] = input,
        output: Optional[TextIO] = None,
    ):
        """
        Args:
            settings: настройки (по умолчанию CalculatorSettings())
            input_fn: функция чтения ответа пользователя
            output: поток вывода (по умолчанию sys.stdout)
        """
        self.settings = settings or CalculatorSettings()
        self._input = input_fn
        self._out = output or sys.stdout

        self.slots: List[Optional[Matrix]] = [None] * self.settings.slot_count
        self.last_result: Optional[OperationResult] = None

    # -------------------------------------------------------------------------
    # Ввод/вывод
    # -------------------------------------------------------------------------

    def _print(self, text: str = "") -> None:
        print(text, file=self._out)

    def _ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def _ask_int(self, prompt: str) -> int:
        answer = self._ask(prompt)
        try:
            return int(answer)
        except ValueError:
            raise InputError(f"expected an integer, got {answer!r}") from None

    def _ask_float(self, prompt: str) -> float:
        answer = self._ask(prompt)
        try:
            return float(answer)
        except ValueError:
            raise InputError(f"expected a number, got {answer!r}") from None

    # -------------------------------------------------------------------------
    # Главный цикл
    # -------------------------------------------------------------------------

    def run(self) -> int:
        """Главный цикл сессии.

        Returns:
            код завершения (0)
        """
        logger.info("Session started")
        logger.info(
            "Default encoding: %s, filesystem encoding: %s",
            sys.getdefaultencoding(),
            sys.getfilesystemencoding(),
        )

        try:
            while True:
                try:
                    if any(slot is None for slot in self.slots):
                        self.load_matrices()

                    choice = self._ask_int(MAIN_MENU + "\nEnter action number: ")
                    if choice == 1:
                        self.perform_operation()
                    elif choice == 2:
                        self.load_matrices()
                    elif choice == 0:
                        break
                    else:
                        self._print("Invalid choice. Please select an action from the menu.")
                        logger.warning("Invalid main menu choice: %d", choice)
                except MatrixError as e:
                    self._print(f"Error: {e}")
                    logger.error("Operation failed: %s", e, exc_info=True)
                except InputError as e:
                    self._print("Invalid input, please check the entered data.")
                    logger.warning("Invalid input: %s", e)
        except EOFError:
            self._print()
            logger.info("Input closed")

        logger.info("Session finished")
        return 0

    # -------------------------------------------------------------------------
    # Загрузка матриц
    # -------------------------------------------------------------------------

    def load_matrices(self) -> None:
        """Загрузка матриц во все слоты; неудачная загрузка повторяет запрос."""
        for index in range(len(self.slots)):
            while True:
                path = self._ask(f"Enter path to matrix file {index + 1}: ")
                try:
                    self.slots[index] = read_matrix(path)
                    break
                except MatrixError as e:
                    self._print(f"Failed to read file, try again: {e}")
                    logger.error("Failed to read file %r: %s", path, e)

            matrix = self.slots[index]
            logger.info("Loaded matrix %d (%dx%d) from %s", index + 1, matrix.rows, matrix.cols, path)

        logger.info("Matrices loaded from files")

    def select_slot(self, number: int) -> Matrix:
        """Матрица из слота с номером number (нумерация с 1).

        Raises:
            MatrixIndexError: если слота с таким номером нет или он пуст
        """
        if not 1 <= number <= len(self.slots):
            raise MatrixIndexError(
                f"matrix number must be between 1 and {len(self.slots)}, got {number}"
            )
        matrix = self.slots[number - 1]
        if matrix is None:
            raise MatrixIndexError(f"matrix slot {number} is empty")
        return matrix

    def choose_matrices(self) -> Tuple[Matrix, Matrix]:
        """Выбор двух операндов по номерам слотов (повтор до корректного ввода)."""
        while True:
            self._print(f"\nChoose matrices for the operation (1-{len(self.slots)}):")
            try:
                first_number = self._ask_int("Enter the number of the first matrix: ")
                second_number = self._ask_int("Enter the number of the second matrix: ")
                return self.select_slot(first_number), self.select_slot(second_number)
            except (MatrixIndexError, InputError) as e:
                self._print("Invalid matrix number, try again.")
                logger.warning("Invalid matrix selection: %s", e)

    # -------------------------------------------------------------------------
    # Операции
    # -------------------------------------------------------------------------

    def perform_operation(self) -> Optional[OperationResult]:
        """Выбор и выполнение операции над выбранными матрицами.

        Returns:
            результат операции или None при некорректном выборе операции

        Raises:
            MatrixError: ошибка ядра (несовместимые размеры и т.п.)
        """
        first, second = self.choose_matrices()

        choice = self._ask_int(OPERATION_MENU + "\nEnter operation number: ")
        try:
            operation = Operation(choice)
        except ValueError:
            self._print("Invalid operation choice.")
            logger.warning("Invalid operation choice: %d", choice)
            return None

        scalar = None
        if operation is Operation.SCALAR:
            scalar = self._ask_float("Enter the scalar: ")

        result = apply_operation(operation, first, second, scalar=scalar)
        if scalar is None:
            logger.info("Performed %s", operation.name.lower())
        else:
            logger.info("Performed %s by %s", operation.name.lower(), format_value(scalar))

        self.last_result = result
        self.print_result(result)
        return result

    def print_result(self, result: OperationResult) -> None:
        """Вывод результата; матричный результат можно сохранить в файл."""
        if not result.is_finite:
            self._print("Warning: the result contains non-finite values (overflow or NaN).")
            logger.warning("%s produced non-finite values", result.operation.name.lower())

        if result.matrix is not None:
            self._print("Result:")
            self._print(result.matrix.to_text())
            logger.info("Result printed")
            self.save_result(result.matrix)
        else:
            self._print(f"Determinant of the first matrix: {format_value(result.scalar)}")
            logger.info("Determinant printed")

    def save_result(self, matrix: Matrix) -> bool:
        """Диалог сохранения результата.

        Returns:
            True если матрица сохранена
        """
        answer = self._ask("Save the result to a file? (y/n): ")
        if answer.lower() != "y":
            return False

        mode_choice = self._ask_int("Save to an existing file (1) or create a new one (2)? ")
        mode = SAVE_MODES.get(mode_choice)
        if mode is None:
            self._print("Invalid save option.")
            logger.warning("Invalid save option: %d", mode_choice)
            return False

        path = self._ask("Enter file path: ")
        try:
            saved_path = save_matrix(matrix, path, mode=mode)
        except MatrixIOError as e:
            self._print(f"Failed to save file: {e}")
            logger.error("Failed to save file %r: %s", path, e)
            return False

        self._print(f"Result saved to file: {saved_path}")
        logger.info("Result saved to file: %s", saved_path)
        return True
