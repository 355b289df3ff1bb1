"""
Matrix — Плотная целочисленная матрица

Immutable Pydantic модель m×n матрицы в row-major порядке и свободные
функции для поэлементного сложения и матричного умножения.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все строки имеют одинаковую длину col_count
2. row_count >= 1 и col_count >= 1
3. Матрица не изменяется после создания (frozen=True, хранение в tuple)
4. add/multiply возвращают новый экземпляр, операнды не изменяются
5. Несовместимые размерности → DimensionMismatch (никогда не None)
"""

import logging
from typing import Iterable, List, Tuple

from pydantic import BaseModel, Field, StrictInt, field_validator

_logger = logging.getLogger(__name__)

# Форматирование вывода: заголовок и разделитель ячеек
MATRIX_HEADER = "Matrix = "
CELL_SEPARATOR = "\t"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ShapeError(Exception):
    """
    Матрица создаётся из пустых или неровных (ragged) данных.

    Наследуется от Exception (не ValueError), поэтому Pydantic не
    оборачивает её в ValidationError и вызывающий код получает
    именно ShapeError.
    """

    pass


class DimensionMismatch(Exception):
    """
    Размерности операндов несовместимы для операции.

    Attributes:
        operation: Имя операции ("add" или "multiply")
        left_shape: (rows, cols) левого операнда
        right_shape: (rows, cols) правого операнда
    """

    def __init__(
        self,
        operation: str,
        left_shape: Tuple[int, int],
        right_shape: Tuple[int, int],
    ):
        self.operation = operation
        self.left_shape = left_shape
        self.right_shape = right_shape
        super().__init__(
            f"Cannot {operation} matrices of dimensions "
            f"{left_shape[0]}x{left_shape[1]} and {right_shape[0]}x{right_shape[1]}"
        )


# =============================================================================
# MATRIX MODEL
# =============================================================================


class Matrix(BaseModel):
    """
    Плотная целочисленная матрица.

    Immutable модель (frozen=True). Данные копируются в tuple of tuples
    при создании, поэтому внешний список не может изменить матрицу.

    Examples:
        >>> m = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        >>> m.shape
        (2, 3)
    """

    values: Tuple[Tuple[StrictInt, ...], ...] = Field(
        ..., description="Строки матрицы в row-major порядке"
    )

    model_config = {"frozen": True}

    @field_validator("values", mode="after")
    @classmethod
    def validate_rectangular(
        cls, v: Tuple[Tuple[int, ...], ...]
    ) -> Tuple[Tuple[int, ...], ...]:
        """
        Проверка формы: хотя бы одна строка, хотя бы один столбец,
        все строки одинаковой длины.

        Выполняется после приведения типов Pydantic, поэтому любой
        итерируемый вход (list, deque, генератор) уже стал tuple of tuples.
        """
        if len(v) == 0:
            raise ShapeError("Matrix must have at least one row")

        col_count = len(v[0])
        if col_count == 0:
            raise ShapeError("Matrix must have at least one column")

        for index, row in enumerate(v):
            if len(row) != col_count:
                _logger.debug(
                    "ragged matrix input: row %d has %d columns, expected %d",
                    index,
                    len(row),
                    col_count,
                )
                raise ShapeError(
                    f"Row {index} has {len(row)} columns, expected {col_count}"
                )

        return v

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[int]]) -> "Matrix":
        """
        Создание матрицы из последовательности строк.

        Args:
            rows: Прямоугольный массив целых чисел (row-major)

        Returns:
            Новый экземпляр Matrix

        Raises:
            ShapeError: Если rows пустой или строки разной длины
        """
        return cls(values=rows)

    @property
    def row_count(self) -> int:
        """Количество строк."""
        return len(self.values)

    @property
    def col_count(self) -> int:
        """Количество столбцов."""
        return len(self.values[0])

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.row_count, self.col_count)

    def to_lists(self) -> List[List[int]]:
        """Изменяемая копия строк (не связана с матрицей)."""
        return [list(row) for row in self.values]

    def __str__(self) -> str:
        return format_matrix(self)


# =============================================================================
# OPERATIONS
# =============================================================================


def add(a: Matrix, b: Matrix) -> Matrix:
    """
    Поэлементная сумма двух матриц.

    c[r][k] = a[r][k] + b[r][k]

    Args:
        a: Левый операнд
        b: Правый операнд

    Returns:
        Новая матрица той же формы

    Raises:
        DimensionMismatch: Если формы a и b различаются
    """
    if a.row_count != b.row_count or a.col_count != b.col_count:
        _logger.debug("add: shape mismatch %s vs %s", a.shape, b.shape)
        raise DimensionMismatch("add", a.shape, b.shape)

    total = tuple(
        tuple(x + y for x, y in zip(row_a, row_b))
        for row_a, row_b in zip(a.values, b.values)
    )
    return Matrix(values=total)


def multiply(a: Matrix, b: Matrix) -> Matrix:
    """
    Матричное произведение a × b (порядок важен, операция некоммутативна).

    result[r][c] = Σ_k a[r][k] * b[k][c]

    Args:
        a: Левый операнд (m×n)
        b: Правый операнд (n×p)

    Returns:
        Новая матрица m×p

    Raises:
        DimensionMismatch: Если a.col_count != b.row_count
    """
    if a.col_count != b.row_count:
        _logger.debug("multiply: shape mismatch %s vs %s", a.shape, b.shape)
        raise DimensionMismatch("multiply", a.shape, b.shape)

    product = []
    for r in range(a.row_count):
        row = []
        for c in range(b.col_count):
            cell = 0
            for k in range(a.col_count):
                cell += a.values[r][k] * b.values[k][c]
            row.append(cell)
        product.append(tuple(row))

    return Matrix(values=tuple(product))


def format_matrix(matrix: Matrix) -> str:
    """
    Текстовое представление для отладки.

    Первая строка "Matrix = ", затем по строке на каждую строку матрицы:
    табуляция, затем каждое значение с табуляцией после него.

    Examples:
        >>> format_matrix(Matrix.from_rows([[1, 2]]))
        'Matrix = \\n\\t1\\t2\\t\\n'
    """
    lines = [MATRIX_HEADER + "\n"]
    for row in matrix.values:
        cells = "".join(f"{value}{CELL_SEPARATOR}" for value in row)
        lines.append(f"{CELL_SEPARATOR}{cells}\n")
    return "".join(lines)
