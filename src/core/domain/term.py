"""
Term — одночлен: целый коэффициент × моном

Immutable Pydantic модель. Моном — отображение variable → exponent.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Нулевые экспоненты никогда не хранятся
2. Повторяющиеся переменные суммируются, а не перезаписываются
3. Экспоненты строго положительные
4. Переменные хранятся отсортированными (детерминированный порядок)
"""

from collections.abc import Iterable, Mapping
from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# TERM MODEL
# =============================================================================


class Term(BaseModel):
    """
    Одночлен coefficient * x1^e1 * x2^e2 ...

    Коэффициент может быть нулевым: такие термы отфильтровываются
    при агрегации в Polynomial.

    Примеры:
        Term(coefficient=3, variables={"x": 2})           -> 3x^2
        Term(coefficient=-1, variables=[("x", 1), ("x", 2)]) -> -1x^3
        Term(coefficient=5)                               -> 5
    """

    coefficient: int = Field(..., description="Целый коэффициент (любой знак)")
    variables: Dict[str, int] = Field(
        default_factory=dict, description="variable -> exponent (только ненулевые)"
    )

    model_config = {"frozen": True}  # Immutable

    @field_validator("variables", mode="before")
    @classmethod
    def merge_variables(cls, v: Any) -> Dict[str, int]:
        """
        Свёртка входных пар (name, exponent) в нормализованный словарь.

        Принимает Mapping или iterable пар. Одинаковые имена суммируются,
        нулевые экспоненты удаляются после слияния.
        """
        if v is None:
            return {}

        pairs = v.items() if isinstance(v, Mapping) else v
        if not isinstance(pairs, Iterable):
            raise ValueError(f"variables must be a mapping or pairs, got {type(v).__name__}")

        merged: Dict[str, int] = {}
        for name, exponent in pairs:
            if not isinstance(name, str) or not name:
                raise ValueError(f"variable name must be a non-empty string, got {name!r}")
            if isinstance(exponent, bool) or not isinstance(exponent, int):
                raise ValueError(f"exponent of '{name}' must be int, got {exponent!r}")
            merged[name] = merged.get(name, 0) + exponent

        for name, exponent in merged.items():
            if exponent < 0:
                raise ValueError(f"exponent of '{name}' must be non-negative, got {exponent}")

        return {name: merged[name] for name in sorted(merged) if merged[name] != 0}

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def constant(cls, value: int) -> "Term":
        return cls(coefficient=value)

    @classmethod
    def power(cls, coefficient: int, variable: str, exponent: int) -> "Term":
        """coefficient * variable^exponent (exponent == 0 даёт константу)."""
        return cls(coefficient=coefficient, variables={variable: exponent})

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def signature(self) -> str:
        return monomial_signature(self)

    def is_constant(self) -> bool:
        return not self.variables

    def degree(self) -> int:
        """Полная степень (сумма экспонент)."""
        return sum(self.variables.values())

    # -------------------------------------------------------------------------
    # Операции
    # -------------------------------------------------------------------------

    def multiply(self, other: "Term") -> "Term":
        """
        Произведение термов: коэффициенты перемножаются, экспоненты суммируются.
        """
        return Term(
            coefficient=self.coefficient * other.coefficient,
            variables=list(self.variables.items()) + list(other.variables.items()),
        )

    def __mul__(self, other: "Term") -> "Term":
        if not isinstance(other, Term):
            return NotImplemented
        return self.multiply(other)

    def with_coefficient(self, coefficient: int) -> "Term":
        return Term(coefficient=coefficient, variables=self.variables)

    def render(self) -> str:
        """
        Каноническая строка: коэффициент + var / var^exp (^1 опускается).

        Examples:
            >>> Term(coefficient=-3, variables={"y": 2, "x": 1}).render()
            '-3xy^2'
        """
        variable_part = "".join(
            name if exponent == 1 else f"{name}^{exponent}"
            for name, exponent in self.variables.items()
        )
        return f"{self.coefficient}{variable_part}"

    def __str__(self) -> str:
        return self.render()

    def __hash__(self) -> int:
        return hash((self.coefficient, self.signature))


# =============================================================================
# MONOMIAL SIGNATURE
# =============================================================================


def monomial_signature(term: Term) -> str:
    """
    Канонический ключ группировки подобных термов.

    Переменные упорядочены по code point; пустая строка — константный терм.

    Examples:
        >>> monomial_signature(Term(coefficient=2, variables={"y": 2, "x": 1}))
        'x^1,y^2'
        >>> monomial_signature(Term(coefficient=4))
        ''
    """
    return ",".join(
        f"{name}^{exponent}" for name, exponent in sorted(term.variables.items())
    )
