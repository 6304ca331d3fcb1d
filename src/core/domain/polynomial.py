"""
Polynomial — каноническая сумма термов

Immutable Pydantic модель. Канонизация выполняется при построении:
- Группировка по monomial signature (порядок первого появления)
- Суммирование коэффициентов
- Удаление термов с нулевым коэффициентом

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Не более одного терма на каждую signature
2. Нет термов с нулевым коэффициентом
3. Повторная канонизация — no-op (идемпотентность)
4. Равенство — по мультимножеству (signature, coefficient), порядок не важен
5. Каждое преобразование строит новый Polynomial
"""

from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator

from src.core.domain.term import Term, monomial_signature
from src.core.math.exact_fraction import ExactFraction


# =============================================================================
# КАНОНИЗАЦИЯ
# =============================================================================


def combine_like_terms(terms: Iterable[Term]) -> Tuple[Term, ...]:
    """
    Свёртка подобных термов.

    Examples:
        >>> [t.render() for t in combine_like_terms([
        ...     Term(coefficient=1, variables={"x": 1}),
        ...     Term(coefficient=2, variables={"x": 1}),
        ...     Term(coefficient=4),
        ... ])]
        ['3x', '4']
    """
    grouped: Dict[str, Term] = {}
    totals: Dict[str, int] = {}

    for term in terms:
        signature = monomial_signature(term)
        if signature not in grouped:
            grouped[signature] = term
            totals[signature] = 0
        totals[signature] += term.coefficient

    return tuple(
        grouped[signature].with_coefficient(total)
        for signature, total in totals.items()
        if total != 0
    )


def _render_order(term: Term) -> Tuple[int, str]:
    # variable-count desc, затем signature asc
    return (-len(term.variables), monomial_signature(term))


# =============================================================================
# POLYNOMIAL MODEL
# =============================================================================


class Polynomial(BaseModel):
    """
    Полином с целыми коэффициентами в канонической форме.

    Порядок термов сохраняется (первое появление signature), но не
    участвует в равенстве и хешировании.
    """

    terms: Tuple[Term, ...] = Field(default=(), description="Канонические термы")

    model_config = {"frozen": True}  # Immutable

    @field_validator("terms")
    @classmethod
    def canonicalize(cls, v: Tuple[Term, ...]) -> Tuple[Term, ...]:
        return combine_like_terms(v)

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, *terms: Term) -> "Polynomial":
        return cls(terms=terms)

    @classmethod
    def constant(cls, value: int) -> "Polynomial":
        return cls(terms=(Term.constant(value),))

    @classmethod
    def zero(cls) -> "Polynomial":
        return cls(terms=())

    @classmethod
    def one(cls) -> "Polynomial":
        """Мультипликативная единица."""
        return cls.constant(1)

    @classmethod
    def from_exponent_map(cls, variable: str, exponent_map: Mapping[int, int]) -> "Polynomial":
        """Univariate полином из отображения exponent -> coefficient."""
        return cls(
            terms=tuple(
                Term.power(coefficient, variable, exponent)
                for exponent, coefficient in sorted(exponent_map.items(), reverse=True)
            )
        )

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    def variables(self) -> frozenset:
        """VariableSet: все имена переменных по всем термам."""
        return frozenset(name for term in self.terms for name in term.variables)

    def signature_map(self) -> Dict[str, int]:
        """signature -> coefficient (основа равенства)."""
        return {monomial_signature(term): term.coefficient for term in self.terms}

    def is_zero(self) -> bool:
        return not self.terms

    def is_constant(self) -> bool:
        return all(term.is_constant() for term in self.terms)

    def constant_value(self) -> Optional[int]:
        """Значение константного полинома или None, если есть переменные."""
        if not self.is_constant():
            return None
        return sum(term.coefficient for term in self.terms)

    def degree(self) -> int:
        """Полная степень; для нулевого полинома -1."""
        if not self.terms:
            return -1
        return max(term.degree() for term in self.terms)

    def to_exponent_map(self, variable: str) -> Dict[int, int]:
        """
        exponent -> coefficient по переменной variable.

        Константы попадают в экспоненту 0. Сократившиеся в ноль
        экспоненты удаляются.

        Raises:
            ValueError: если терм содержит другую переменную
        """
        exponent_map: Dict[int, int] = {}
        for term in self.terms:
            foreign = set(term.variables) - {variable}
            if foreign:
                raise ValueError(
                    f"Term '{term.render()}' is not univariate in '{variable}'"
                )
            exponent = term.variables.get(variable, 0)
            exponent_map[exponent] = exponent_map.get(exponent, 0) + term.coefficient

        return {e: c for e, c in exponent_map.items() if c != 0}

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def multiply(self, other: "Polynomial") -> "Polynomial":
        """Полное перекрёстное произведение термов + канонизация."""
        return Polynomial(
            terms=tuple(left.multiply(right) for left in self.terms for right in other.terms)
        )

    def add(self, other: "Polynomial") -> "Polynomial":
        return Polynomial(terms=self.terms + other.terms)

    def negate(self) -> "Polynomial":
        return Polynomial(
            terms=tuple(term.with_coefficient(-term.coefficient) for term in self.terms)
        )

    def subtract(self, other: "Polynomial") -> "Polynomial":
        return self.add(other.negate())

    def __mul__(self, other: "Polynomial") -> "Polynomial":
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.multiply(other)

    def __add__(self, other: "Polynomial") -> "Polynomial":
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "Polynomial") -> "Polynomial":
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> "Polynomial":
        return self.negate()

    def evaluate(self, assignment: Mapping[str, Union[ExactFraction, int]]) -> ExactFraction:
        """
        Точное значение полинома при подстановке переменных.

        Args:
            assignment: variable -> значение (ExactFraction или int)

        Raises:
            ValueError: если переменной нет в assignment
        """
        missing = self.variables() - set(assignment)
        if missing:
            raise ValueError(f"No value for variables: {', '.join(sorted(missing))}")

        total = ExactFraction.zero()
        for term in self.terms:
            value = ExactFraction.from_int(term.coefficient)
            for name, exponent in term.variables.items():
                base = assignment[name]
                if isinstance(base, int):
                    base = ExactFraction.from_int(base)
                for _ in range(exponent):
                    value = value * base
            total = total + value
        return total

    # -------------------------------------------------------------------------
    # Равенство и представление
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.signature_map() == other.signature_map()

    def __hash__(self) -> int:
        return hash(frozenset(self.signature_map().items()))

    def canonical_string(self) -> str:
        """
        Каноническая строка.

        Порядок: число переменных по убыванию, затем signature по возрастанию.
        Термы после первого получают явный знак + или -.

        Examples:
            >>> Polynomial.of(Term(coefficient=4), Term(coefficient=2, variables={"x": 1})).canonical_string()
            '2x+4'
        """
        if not self.terms:
            return "0"

        ordered = sorted(self.terms, key=_render_order)
        parts = [ordered[0].render()]
        for term in ordered[1:]:
            rendered = term.render()
            parts.append(rendered if term.coefficient < 0 else f"+{rendered}")
        return "".join(parts)

    def __str__(self) -> str:
        return self.canonical_string()
