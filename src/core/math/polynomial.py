"""
Polynomial — Полином одной переменной с целыми коэффициентами

Разбор строки вида "a_n x^n + ... + a_1 x^1 + a_0 x^0" в плотный массив
коэффициентов (индекс = степень), отслеживание степени и обратное
форматирование.

ГРАММАТИКА:
    description := term ("+" term)*
    term        := [digits] "x^" digits     (пробелы вокруг term допустимы)

    - Отсутствующий коэффициент означает 1
    - Отрицательные коэффициенты и степени не поддерживаются
    - "0x^0" — отдельный литерал нулевого полинома (degree = -1)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. coefficients[i] == 0 для всех i > degree
2. len(coefficients) >= degree + 1 (ёмкость растёт удвоением)
3. degree увеличивается только ненулевым коэффициентом и никогда не
   уменьшается в ходе разбора (термы обрабатываются в порядке записи)
4. Любая ошибка грамматики → ParseError (никогда не None/частичный результат)
"""

import logging
import re
from dataclasses import dataclass
from typing import Final, List, Optional, Tuple

from pydantic import BaseModel, Field, StrictInt, model_validator

_logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ РАЗБОРА
# =============================================================================

# Начальная ёмкость буфера коэффициентов
INITIAL_CAPACITY: Final[int] = 5

# Наибольшая допустимая степень (ёмкость буфера до 2x степени)
MAX_EXPONENT: Final[int] = 1 << 16

# Литерал нулевого полинома
ZERO_POLYNOMIAL_DESCRIPTION: Final[str] = "0x^0"

# Разделители грамматики
TERM_SEPARATOR: Final[str] = "+"
POWER_MARKER: Final[str] = "x^"
DISPLAY_SEPARATOR: Final[str] = " + "

_DIGITS = re.compile(r"[0-9]+")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ParseError(Exception):
    """
    Строка описания полинома нарушает грамматику.

    Attributes:
        description: Исходная строка
        term: Терм, на котором разбор остановился (None если ошибка не
            относится к конкретному терму)
        reason: Краткое описание нарушения
    """

    def __init__(self, description: str, reason: str, term: Optional[str] = None):
        self.description = description
        self.term = term
        self.reason = reason
        location = f" in term {term!r}" if term is not None else ""
        super().__init__(f"Malformed polynomial {description!r}{location}: {reason}")


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class ParseConfig:
    """Конфигурация разбора полинома.

    - initial_capacity: начальный размер буфера коэффициентов (>= 1)
    - allow_duplicate_exponents: False → повтор степени даёт ParseError,
      True → последний терм перезаписывает коэффициент
    - max_exponent: наибольшая допустимая степень, большая → ParseError
    """
    initial_capacity: int = INITIAL_CAPACITY
    allow_duplicate_exponents: bool = False
    max_exponent: int = MAX_EXPONENT

    def __post_init__(self):
        if self.initial_capacity < 1:
            raise ValueError(
                f"initial_capacity must be >= 1, got {self.initial_capacity}"
            )
        if self.max_exponent < 0:
            raise ValueError(f"max_exponent must be >= 0, got {self.max_exponent}")


DEFAULT_PARSE_CONFIG: Final[ParseConfig] = ParseConfig()


# =============================================================================
# GROWABLE BUFFER
# =============================================================================


class _CoefficientBuffer:
    """Массив коэффициентов с удвоением ёмкости (используется только при разборе)."""

    def __init__(self, capacity: int):
        self._slots: List[int] = [0] * capacity

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def _grow(self) -> None:
        # Новый массив вдвое больше, значения и порядок сохраняются
        grown = [0] * (2 * len(self._slots))
        grown[: len(self._slots)] = self._slots
        self._slots = grown

    def store(self, index: int, value: int) -> None:
        while index >= self.capacity:
            self._grow()
        self._slots[index] = value

    def freeze(self) -> Tuple[int, ...]:
        return tuple(self._slots)


# =============================================================================
# POLYNOMIAL MODEL
# =============================================================================


class Polynomial(BaseModel):
    """
    Полином в кольце Z[x].

    Immutable модель (frozen=True). Создаётся через Polynomial.parse();
    прямое создание тоже допустимо, но проверяет инварианты ёмкости.

    Examples:
        >>> p = Polynomial.parse("202x^3 + 50x^0 + 03x^1 + 7x^7")
        >>> p.to_display_string()
        '7x^7 + 202x^3 + 3x^1 + 50x^0'
        >>> p.degree
        7
    """

    coefficients: Tuple[StrictInt, ...] = Field(
        ..., min_length=1, description="Коэффициенты по возрастанию степени (с запасом ёмкости)"
    )
    degree: StrictInt = Field(..., ge=-1, description="Степень полинома (-1 для нулевого)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_capacity(self) -> "Polynomial":
        """
        Проверка инвариантов хранения:
        - ёмкость покрывает степень
        - все слоты выше степени нулевые
        """
        if len(self.coefficients) < self.degree + 1:
            raise ValueError(
                f"coefficients length {len(self.coefficients)} "
                f"too small for degree {self.degree}"
            )
        for exponent in range(self.degree + 1, len(self.coefficients)):
            if self.coefficients[exponent] != 0:
                raise ValueError(
                    f"coefficient at exponent {exponent} above degree "
                    f"{self.degree} must be zero"
                )
        return self

    @classmethod
    def parse(
        cls, description: str, config: Optional[ParseConfig] = None
    ) -> "Polynomial":
        """
        Разбор строкового описания полинома.

        Args:
            description: Строка вида "2x^2 + x^1 + 5x^0"
            config: Параметры разбора (default: DEFAULT_PARSE_CONFIG)

        Returns:
            Новый экземпляр Polynomial

        Raises:
            ParseError: Если строка нарушает грамматику
        """
        config = config or DEFAULT_PARSE_CONFIG
        buffer = _CoefficientBuffer(config.initial_capacity)

        if description == ZERO_POLYNOMIAL_DESCRIPTION:
            return cls(coefficients=buffer.freeze(), degree=-1)

        degree = -1
        seen_exponents = set()

        for raw_term in description.split(TERM_SEPARATOR):
            coefficient, exponent = _parse_term(description, raw_term)

            if exponent > config.max_exponent:
                raise _fail(
                    description,
                    raw_term.strip(),
                    f"exponent {exponent} exceeds max_exponent {config.max_exponent}",
                )

            if exponent in seen_exponents and not config.allow_duplicate_exponents:
                raise _fail(description, raw_term.strip(), f"duplicate exponent {exponent}")
            seen_exponents.add(exponent)

            buffer.store(exponent, coefficient)

            if exponent > degree and coefficient != 0:
                degree = exponent

        return cls(coefficients=buffer.freeze(), degree=degree)

    @property
    def capacity(self) -> int:
        return len(self.coefficients)

    @property
    def is_zero(self) -> bool:
        return self.degree == -1

    def coefficient(self, exponent: int) -> int:
        """
        Коэффициент при x^exponent (0 за пределами ёмкости).

        Raises:
            ValueError: Если exponent отрицательный
        """
        if exponent < 0:
            raise ValueError(f"exponent must be non-negative, got {exponent}")
        if exponent >= len(self.coefficients):
            return 0
        return self.coefficients[exponent]

    def to_display_string(self) -> str:
        """
        Каноническая запись: ненулевые термы от degree до 0, "{c}x^{e}"
        через " + ". Нулевой полином → "0x^0".
        """
        if self.degree == -1:
            return ZERO_POLYNOMIAL_DESCRIPTION

        terms = [
            f"{self.coefficients[exponent]}{POWER_MARKER}{exponent}"
            for exponent in range(self.degree, -1, -1)
            if self.coefficients[exponent] != 0
        ]
        return DISPLAY_SEPARATOR.join(terms)

    def to_debug_string(self) -> str:
        """Все слоты буфера, включая неиспользованную ёмкость: "(c0, c1, ...)"."""
        return "(" + ", ".join(str(c) for c in self.coefficients) + ")"

    def __str__(self) -> str:
        return self.to_display_string()


# =============================================================================
# TERM PARSING
# =============================================================================


def _fail(description: str, term: Optional[str], reason: str) -> ParseError:
    _logger.debug("polynomial parse failed: %s (term=%r)", reason, term)
    return ParseError(description, reason, term)


def _parse_term(description: str, raw_term: str) -> Tuple[int, int]:
    """Разбор одного терма "[c]x^e" → (coefficient, exponent)."""
    term = raw_term.strip()

    if POWER_MARKER not in term:
        raise _fail(description, term, "missing 'x^'")

    parts = term.split(POWER_MARKER)
    if len(parts) != 2:
        raise _fail(description, term, "'x^' must appear exactly once")

    coefficient_part, exponent_part = parts

    if not _DIGITS.fullmatch(exponent_part):
        raise _fail(description, term, f"exponent {exponent_part!r} is not a non-negative integer")

    if coefficient_part == "":
        coefficient = 1
    elif _DIGITS.fullmatch(coefficient_part):
        coefficient = int(coefficient_part)
    else:
        raise _fail(
            description, term, f"coefficient {coefficient_part!r} is not a non-negative integer"
        )

    return coefficient, int(exponent_part)


def parse_polynomial(
    description: str, config: Optional[ParseConfig] = None
) -> Polynomial:
    """Функциональная обёртка над Polynomial.parse()."""
    return Polynomial.parse(description, config)
