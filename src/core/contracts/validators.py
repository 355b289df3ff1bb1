"""
Contracts — сериализованные Matrix и Polynomial

Двухуровневая проверка входящих dict (например, из JSON):
1. Структура — JSON Schema (contracts/schema/*.json, Draft 2020-12)
2. Инварианты модели — Matrix / Polynomial через model_validate

JSON Schema не выражает прямоугольность матрицы и связь degree с
длиной coefficients, поэтому второй уровень обязателен:
{"values": [[1], [1, 2]]} проходит схему, но отклоняется моделью.

Исключения:
- jsonschema.ValidationError — нарушение структуры
- ContractViolation — структура верна, но нарушены инварианты модели
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Type

import jsonschema
from jsonschema import Draft202012Validator
from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError

from src.core.math.matrix import Matrix, ShapeError
from src.core.math.polynomial import Polynomial

# Каталог схем по умолчанию (корень проекта / contracts / schema)
DEFAULT_SCHEMA_DIR = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ContractViolation(Exception):
    """
    Данные соответствуют схеме, но модель их отклонила.

    Attributes:
        schema_name: Имя контракта ('matrix' / 'polynomial')
        cause: Исходная ошибка модели (ShapeError или pydantic ValidationError)
    """

    def __init__(self, schema_name: str, cause: Exception):
        self.schema_name = schema_name
        self.cause = cause
        super().__init__(f"{schema_name} contract violated: {cause}")


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик и кэш JSON Schema файлов.

    Каждая схема проходит meta-валидацию при первой загрузке.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else DEFAULT_SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def available(self) -> List[str]:
        """Имена схем в каталоге (без расширения), по алфавиту."""
        return sorted(path.stem for path in self._schema_dir.glob("*.json"))

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка схемы по имени.

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-валидацию
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER: Optional[SchemaLoader] = None


def _default_loader() -> SchemaLoader:
    global _SCHEMA_LOADER
    if _SCHEMA_LOADER is None:
        _SCHEMA_LOADER = SchemaLoader()
    return _SCHEMA_LOADER


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Связка "схема + модель" для одного сериализованного типа.

    validate() возвращает построенную модель, dump() сериализует модель
    и проверяет результат той же схемой.
    """

    schema_name: str = ""
    model: Type[BaseModel] = BaseModel

    def __init__(self, loader: Optional[SchemaLoader] = None):
        loader = loader or _default_loader()
        self.schema = loader.load_schema(self.schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> BaseModel:
        """
        Проверка структуры и инвариантов, построение модели.

        Raises:
            jsonschema.ValidationError: Нарушена структура
            ContractViolation: Нарушены инварианты модели
        """
        self.validator.validate(data)
        try:
            return self.model.model_validate(data)
        except (ShapeError, ModelValidationError) as e:
            raise ContractViolation(self.schema_name, e) from e

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка обоих уровней без exception."""
        if not self.validator.is_valid(data):
            return False
        try:
            self.model.model_validate(data)
        except (ShapeError, ModelValidationError):
            return False
        return True

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[jsonschema.ValidationError]:
        """Все структурные ошибки (уровень JSON Schema)."""
        return self.validator.iter_errors(data)

    def dump(self, instance: BaseModel) -> Dict[str, Any]:
        """
        Сериализация модели в JSON-совместимый dict по контракту.

        Raises:
            TypeError: Если instance не является моделью этого контракта
        """
        if not isinstance(instance, self.model):
            raise TypeError(
                f"{self.schema_name} contract expects {self.model.__name__}, "
                f"got {type(instance).__name__}"
            )
        data = instance.model_dump(mode="json")
        self.validator.validate(data)
        return data


class MatrixValidator(ContractValidator):
    """Контракт matrix.json ↔ Matrix."""

    schema_name = "matrix"
    model = Matrix


class PolynomialValidator(ContractValidator):
    """Контракт polynomial.json ↔ Polynomial."""

    schema_name = "polynomial"
    model = Polynomial


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_matrix(data: Dict[str, Any]) -> Matrix:
    """
    Проверка и загрузка сериализованной матрицы.

    Raises:
        jsonschema.ValidationError: Нарушена структура
        ContractViolation: Неровные строки и т.п.
    """
    return MatrixValidator().validate(data)


def validate_polynomial(data: Dict[str, Any]) -> Polynomial:
    """
    Проверка и загрузка сериализованного полинома.

    Raises:
        jsonschema.ValidationError: Нарушена структура
        ContractViolation: Степень не согласована с coefficients
    """
    return PolynomialValidator().validate(data)
