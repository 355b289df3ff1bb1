"""
Contract Validation Module

Модуль для валидации JSON контрактов сериализованных Matrix и Polynomial:
структура по JSON Schema, затем инварианты модели.
"""

from .validators import (
    ContractValidator,
    ContractViolation,
    MatrixValidator,
    PolynomialValidator,
    SchemaLoader,
    validate_matrix,
    validate_polynomial,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "MatrixValidator",
    "PolynomialValidator",
    # Exceptions
    "ContractViolation",
    # Functions
    "validate_matrix",
    "validate_polynomial",
]
