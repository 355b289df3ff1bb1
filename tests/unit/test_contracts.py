"""
Tests for Matrix / Polynomial contracts

Комплексное тестирование контрактов:
- Загрузка и meta-валидация схем
- Структурные нарушения → jsonschema.ValidationError
- Нарушения инвариантов модели (неровные строки, degree vs coefficients)
  → ContractViolation
- Сериализация через dump() и обратная загрузка
"""

import json

import pytest
from jsonschema import ValidationError
from pydantic import ValidationError as ModelValidationError

from src.core.contracts import (
    ContractViolation,
    MatrixValidator,
    PolynomialValidator,
    SchemaLoader,
    validate_matrix,
    validate_polynomial,
)
from src.core.math import Matrix, Polynomial, ShapeError, multiply


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def matrix():
    return Matrix.from_rows([[1, 2, 3], [4, 5, 6]])


@pytest.fixture
def polynomial():
    return Polynomial.parse("202x^3 + 50x^0 + 03x^1 + 7x^7")


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Загрузка и meta-валидация схем."""

    def test_available_schemas(self):
        assert SchemaLoader().available() == ["matrix", "polynomial"]

    @pytest.mark.parametrize("schema_name", ["matrix", "polynomial"])
    def test_schema_loads(self, schema_name):
        schema = SchemaLoader().load_schema(schema_name)
        assert schema["title"].lower() == schema_name

    def test_schema_is_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("matrix") is loader.load_schema("matrix")

    def test_missing_schema_raises(self):
        with pytest.raises(FileNotFoundError, match="Schema not found"):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "absent")

    def test_invalid_schema_rejected(self, tmp_path):
        (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON Schema in broken.json"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# MATRIX CONTRACT
# =============================================================================


class TestMatrixContract:
    """Контракт matrix.json ↔ Matrix."""

    def test_validate_returns_matrix(self, matrix):
        loaded = validate_matrix(matrix.model_dump(mode="json"))

        assert isinstance(loaded, Matrix)
        assert loaded == matrix

    def test_product_round_trip(self, matrix):
        column = Matrix.from_rows([[1], [0], [1]])
        product = multiply(matrix, column)

        assert validate_matrix(MatrixValidator().dump(product)) == product

    def test_ragged_rows_rejected(self):
        """Схема не видит неровные строки, модель — видит."""
        data = {"values": [[1], [1, 2]]}

        with pytest.raises(ContractViolation) as exc_info:
            validate_matrix(data)

        assert exc_info.value.schema_name == "matrix"
        assert isinstance(exc_info.value.cause, ShapeError)
        assert not MatrixValidator().is_valid(data)

    def test_empty_values_rejected(self):
        with pytest.raises(ValidationError):
            validate_matrix({"values": []})

    def test_empty_row_rejected(self):
        with pytest.raises(ValidationError):
            validate_matrix({"values": [[]]})

    def test_non_integer_cell_rejected(self):
        with pytest.raises(ValidationError):
            validate_matrix({"values": [[1, "2"]]})

    def test_missing_values_rejected(self):
        with pytest.raises(ValidationError, match="'values' is a required property"):
            validate_matrix({})

    def test_extra_property_rejected(self, matrix):
        data = matrix.model_dump(mode="json")
        data["rows"] = 2
        assert not MatrixValidator().is_valid(data)

    def test_iter_errors_reports_each_violation(self):
        errors = list(MatrixValidator().iter_errors({"values": [[1.5, "x"]]}))
        assert len(errors) == 2

    def test_dump_is_json_compatible(self, matrix):
        data = MatrixValidator().dump(matrix)

        assert data == {"values": [[1, 2, 3], [4, 5, 6]]}
        assert Matrix.model_validate_json(json.dumps(data)) == matrix

    def test_dump_rejects_other_models(self, polynomial):
        with pytest.raises(TypeError, match="expects Matrix, got Polynomial"):
            MatrixValidator().dump(polynomial)


# =============================================================================
# POLYNOMIAL CONTRACT
# =============================================================================


class TestPolynomialContract:
    """Контракт polynomial.json ↔ Polynomial."""

    def test_serialized_polynomial_is_valid(self, polynomial):
        data = PolynomialValidator().dump(polynomial)

        assert data["degree"] == 7
        assert data["coefficients"] == [50, 3, 0, 202, 0, 0, 0, 7, 0, 0]
        assert validate_polynomial(data) == polynomial

    def test_zero_polynomial_is_valid(self):
        zero = Polynomial.parse("0x^0")
        assert validate_polynomial(zero.model_dump(mode="json")).is_zero

    def test_nonzero_above_degree_rejected(self):
        """Ненулевой коэффициент выше degree проходит схему, но не модель."""
        data = {"coefficients": [1, 0, 5], "degree": 0}

        with pytest.raises(ContractViolation) as exc_info:
            validate_polynomial(data)

        assert exc_info.value.schema_name == "polynomial"
        assert isinstance(exc_info.value.cause, ModelValidationError)

    def test_degree_beyond_capacity_rejected(self):
        with pytest.raises(ContractViolation, match="too small"):
            validate_polynomial({"coefficients": [1], "degree": 3})

    def test_degree_below_sentinel_rejected(self):
        with pytest.raises(ValidationError):
            validate_polynomial({"coefficients": [0], "degree": -2})

    def test_missing_degree_rejected(self):
        with pytest.raises(ValidationError, match="'degree' is a required property"):
            validate_polynomial({"coefficients": [1]})

    def test_is_valid(self, polynomial):
        validator = PolynomialValidator()

        assert validator.is_valid(polynomial.model_dump(mode="json"))
        assert not validator.is_valid({"coefficients": [], "degree": -1})
        assert not validator.is_valid({"coefficients": [0, 4], "degree": 0})

    def test_round_trip(self, polynomial):
        restored = Polynomial.model_validate_json(polynomial.model_dump_json())

        assert restored == polynomial
        assert restored.to_display_string() == "7x^7 + 202x^3 + 3x^1 + 50x^0"
