"""
ExactFraction — точная рациональная арифметика

Модуль обеспечивает рациональные числа произвольной точности:
- numerator/denominator как Python int (без переполнения)
- Всегда в несократимом виде, denominator > 0
- Ноль всегда хранится как (0, 1)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. gcd(|numerator|, denominator) == 1 после каждого построения
2. denominator > 0 (знак переносится в numerator)
3. Целочисленность проверяется через denominator == 1
4. Immutable: каждая операция возвращает новый экземпляр
"""

import math
from dataclasses import dataclass
from typing import Union

from src.core.errors import DivisionByZero


@dataclass(frozen=True)
class ExactFraction:
    """
    Несократимая дробь numerator/denominator.

    Examples:
        >>> ExactFraction(4, -6)
        ExactFraction(numerator=-2, denominator=3)
        >>> ExactFraction(0, 5)
        ExactFraction(numerator=0, denominator=1)
        >>> ExactFraction(1, 2) + ExactFraction(1, 3)
        ExactFraction(numerator=5, denominator=6)
    """

    numerator: int
    denominator: int = 1

    def __post_init__(self) -> None:
        numerator = self.numerator
        denominator = self.denominator

        if denominator == 0:
            raise DivisionByZero(f"Denominator cannot be zero (numerator={numerator})")

        if numerator == 0:
            object.__setattr__(self, "numerator", 0)
            object.__setattr__(self, "denominator", 1)
            return

        g = math.gcd(numerator, denominator)
        numerator //= g
        denominator //= g

        if denominator < 0:
            numerator = -numerator
            denominator = -denominator

        object.__setattr__(self, "numerator", numerator)
        object.__setattr__(self, "denominator", denominator)

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_int(cls, value: int) -> "ExactFraction":
        return cls(value, 1)

    @classmethod
    def zero(cls) -> "ExactFraction":
        return cls(0, 1)

    @classmethod
    def one(cls) -> "ExactFraction":
        return cls(1, 1)

    # -------------------------------------------------------------------------
    # Предикаты
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.numerator == 0

    def is_integer(self) -> bool:
        """Точная проверка целочисленности (denominator == 1)."""
        return self.denominator == 1

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, other: "ExactFraction") -> "ExactFraction":
        return ExactFraction(
            self.numerator * other.denominator + other.numerator * self.denominator,
            self.denominator * other.denominator,
        )

    def subtract(self, other: "ExactFraction") -> "ExactFraction":
        return ExactFraction(
            self.numerator * other.denominator - other.numerator * self.denominator,
            self.denominator * other.denominator,
        )

    def multiply(self, other: "ExactFraction") -> "ExactFraction":
        return ExactFraction(
            self.numerator * other.numerator,
            self.denominator * other.denominator,
        )

    def divide(self, other: "ExactFraction") -> "ExactFraction":
        """
        Деление на другую дробь.

        Raises:
            DivisionByZero: если other == 0
        """
        if other.is_zero():
            raise DivisionByZero(f"Division of {self} by zero fraction")
        return ExactFraction(
            self.numerator * other.denominator,
            self.denominator * other.numerator,
        )

    def negate(self) -> "ExactFraction":
        return ExactFraction(-self.numerator, self.denominator)

    def to_float(self) -> float:
        """
        Приближённое float-значение.

        ВНИМАНИЕ: только для диагностики, никогда для принятия решений.
        """
        return self.numerator / self.denominator

    # -------------------------------------------------------------------------
    # Операторы (int операнды приводятся к дроби)
    # -------------------------------------------------------------------------

    def __add__(self, other: Union["ExactFraction", int]) -> "ExactFraction":
        return self.add(_coerce(other))

    def __radd__(self, other: int) -> "ExactFraction":
        return _coerce(other).add(self)

    def __sub__(self, other: Union["ExactFraction", int]) -> "ExactFraction":
        return self.subtract(_coerce(other))

    def __rsub__(self, other: int) -> "ExactFraction":
        return _coerce(other).subtract(self)

    def __mul__(self, other: Union["ExactFraction", int]) -> "ExactFraction":
        return self.multiply(_coerce(other))

    def __rmul__(self, other: int) -> "ExactFraction":
        return _coerce(other).multiply(self)

    def __truediv__(self, other: Union["ExactFraction", int]) -> "ExactFraction":
        return self.divide(_coerce(other))

    def __rtruediv__(self, other: int) -> "ExactFraction":
        return _coerce(other).divide(self)

    def __neg__(self) -> "ExactFraction":
        return self.negate()

    def __str__(self) -> str:
        if self.denominator == 1:
            return str(self.numerator)
        return f"{self.numerator}/{self.denominator}"


def _coerce(value: Union[ExactFraction, int]) -> ExactFraction:
    if isinstance(value, ExactFraction):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return ExactFraction(value, 1)
    raise TypeError(f"Unsupported operand for ExactFraction: {type(value).__name__}")
