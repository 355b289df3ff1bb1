"""
Core math modules

Целочисленные матрицы и полиномы одной переменной: immutable модели и
чистые функции над ними.
"""

# Matrix
from src.core.math.matrix import (
    CELL_SEPARATOR,
    MATRIX_HEADER,
    DimensionMismatch,
    Matrix,
    ShapeError,
    add,
    format_matrix,
    multiply,
)

# Polynomial
from src.core.math.polynomial import (
    DEFAULT_PARSE_CONFIG,
    INITIAL_CAPACITY,
    MAX_EXPONENT,
    ZERO_POLYNOMIAL_DESCRIPTION,
    ParseConfig,
    ParseError,
    Polynomial,
    parse_polynomial,
)

__all__ = [
    # Matrix — Constants
    "CELL_SEPARATOR",
    "MATRIX_HEADER",
    # Matrix — Exceptions
    "DimensionMismatch",
    "ShapeError",
    # Matrix — Types
    "Matrix",
    # Matrix — Functions
    "add",
    "format_matrix",
    "multiply",
    # Polynomial — Constants
    "DEFAULT_PARSE_CONFIG",
    "INITIAL_CAPACITY",
    "MAX_EXPONENT",
    "ZERO_POLYNOMIAL_DESCRIPTION",
    # Polynomial — Exceptions
    "ParseError",
    # Polynomial — Types
    "ParseConfig",
    "Polynomial",
    # Polynomial — Functions
    "parse_polynomial",
]
