"""
Rational Roots — поиск всех рациональных корней univariate полинома

Rational Root Theorem: для целого полинома со старшим коэффициентом a
и свободным членом b любой несократимый корень p/q удовлетворяет p | b, q | a.

Проверка кандидата — точное целочисленное вычисление без дробей:
    q^deg * P(p/q) = Σ a_k * p^k * q^(deg-k) == 0

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Никакого float при принятии решения о корне
2. Каждый корень возвращается один раз (дедупликация по (p, q))
"""

from typing import Dict, List, Optional, Tuple

from src.core.domain.factor import Leaf, leaf
from src.core.domain.polynomial import Polynomial
from src.core.domain.term import Term
from src.core.errors import UnsupportedOperation
from src.core.math.exact_fraction import ExactFraction
from src.core.math.integer_arith import divisors_with_signs, reduce_to_lowest_terms


def evaluate_scaled(exponent_map: Dict[int, int], p: int, q: int) -> int:
    """
    q^deg * P(p/q) в целых числах; равно нулю тогда и только тогда, когда p/q — корень.

    Examples:
        >>> evaluate_scaled({2: 1, 1: -5, 0: 6}, 2, 1)
        0
        >>> evaluate_scaled({1: 2, 0: -1}, 1, 2)
        0
    """
    if not exponent_map:
        return 0

    degree = max(exponent_map)
    return sum(
        coefficient * p ** exponent * q ** (degree - exponent)
        for exponent, coefficient in exponent_map.items()
    )


def candidate_roots(leading: int, constant_term: int) -> List[Tuple[int, int]]:
    """
    Несократимые кандидаты (p, q), q > 0, без повторов.

    Порядок детерминирован: порядок перебора делителей p, затем q.
    """
    numerators = list(divisors_with_signs(constant_term))
    denominators = [d for d in divisors_with_signs(leading) if d != 0]

    seen = set()
    candidates: List[Tuple[int, int]] = []
    for p in numerators:
        for q in denominators:
            pair = reduce_to_lowest_terms(p, q)
            if pair in seen:
                continue
            seen.add(pair)
            candidates.append(pair)
    return candidates


def _single_variable(polynomial: Polynomial, variable: Optional[str]) -> Optional[str]:
    names = polynomial.variables()
    if len(names) > 1:
        raise UnsupportedOperation(
            f"Only univariate polynomials are supported. Variables: {', '.join(sorted(names))}"
        )
    if variable is not None and names and variable not in names:
        raise ValueError(f"Polynomial does not depend on '{variable}'")
    if names:
        return next(iter(names))
    return variable


def find_rational_roots(
    polynomial: Polynomial, variable: Optional[str] = None
) -> List[ExactFraction]:
    """
    Все различные рациональные корни.

    Кратность не учитывается: корень возвращается один раз.
    Константный полином корней не имеет (нулевой полином — тоже пустой список).

    Raises:
        UnsupportedOperation: если переменных больше одной
    """
    name = _single_variable(polynomial, variable)
    if name is None:
        return []

    exponent_map = polynomial.to_exponent_map(name)
    if not exponent_map:
        return []

    # x^lowest выносится заранее: иначе нулевой свободный член даёт единственный кандидат 0
    lowest = min(exponent_map)
    roots = [ExactFraction.zero()] if lowest > 0 else []
    reduced = {exponent - lowest: coefficient for exponent, coefficient in exponent_map.items()}

    degree = max(reduced)
    for p, q in candidate_roots(reduced[degree], reduced[0]):
        if evaluate_scaled(reduced, p, q) == 0:
            roots.append(ExactFraction(p, q))
    return roots


def linear_factor(variable: str, root: ExactFraction) -> Leaf:
    """Целочисленный линейный множитель (q*x - p) для корня p/q."""
    return leaf(
        Polynomial.of(
            Term.power(root.denominator, variable, 1),
            Term.constant(-root.numerator),
        )
    )


def rational_root_factors(
    polynomial: Polynomial, variable: Optional[str] = None
) -> List[Leaf]:
    """Линейные множители (q*x - p) для всех рациональных корней."""
    name = _single_variable(polynomial, variable)
    if name is None:
        return []
    return [linear_factor(name, root) for root in find_rational_roots(polynomial, name)]
