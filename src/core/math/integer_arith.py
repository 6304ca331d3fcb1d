"""
Integer Arithmetic — целочисленные примитивы для факторизации

Модуль содержит чистые функции над Python int (произвольная точность):
- Делители со знаками (Rational Root Theorem)
- Сокращение пары p/q
- НОК и content (НОД всех коэффициентов)
- Точное деление с проверкой остатка

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Никакого float — только точная целочисленная арифметика
2. exact_divide никогда не усекает: остаток != 0 → InternalConsistencyError
"""

import math
from typing import Iterable, Iterator

from src.core.errors import InternalConsistencyError


# =============================================================================
# ДЕЛИТЕЛИ
# =============================================================================


def divisors_with_signs(value: int) -> Iterator[int]:
    """
    Все делители |value| с обоими знаками.

    Для value == 0 возвращает единственный кандидат 0 (корень x = 0).

    Examples:
        >>> sorted(divisors_with_signs(6))
        [-6, -3, -2, -1, 1, 2, 3, 6]
        >>> list(divisors_with_signs(0))
        [0]
    """
    if value == 0:
        yield 0
        return

    abs_value = abs(value)
    i = 1
    while i * i <= abs_value:
        if abs_value % i == 0:
            yield i
            yield -i
            j = abs_value // i
            if j != i:
                yield j
                yield -j
        i += 1


def reduce_to_lowest_terms(numerator: int, denominator: int) -> tuple[int, int]:
    """
    Сокращение p/q с нормализацией знака (q > 0).

    Examples:
        >>> reduce_to_lowest_terms(4, -6)
        (-2, 3)
        >>> reduce_to_lowest_terms(0, -7)
        (0, 1)
    """
    if denominator == 0:
        raise ValueError("denominator must be non-zero")
    if numerator == 0:
        return (0, 1)

    g = math.gcd(numerator, denominator)
    numerator //= g
    denominator //= g
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    return (numerator, denominator)


# =============================================================================
# НОК / CONTENT
# =============================================================================


def lcm(a: int, b: int) -> int:
    """НОК по модулю; lcm(0, x) == 0."""
    if a == 0 or b == 0:
        return 0
    return abs(a // math.gcd(a, b) * b)


def lcm_all(values: Iterable[int]) -> int:
    """НОК последовательности (пустая → 1)."""
    result = 1
    for value in values:
        result = lcm(result, value)
    return result


def content(coefficients: Iterable[int]) -> int:
    """
    Content: НОД модулей всех коэффициентов.

    Для нулевого вектора возвращает 1 (нулевой полином не масштабируется).

    Examples:
        >>> content([6, -9, 12])
        3
        >>> content([0, 0])
        1
    """
    g = 0
    for c in coefficients:
        g = math.gcd(g, c)
    return g if g != 0 else 1


def exact_divide(dividend: int, divisor: int) -> int:
    """
    Точное деление dividend / divisor.

    Raises:
        InternalConsistencyError: если деление не нацело
        ValueError: если divisor == 0
    """
    if divisor == 0:
        raise ValueError("divisor must be non-zero")

    quotient, remainder = divmod(dividend, divisor)
    if remainder != 0:
        raise InternalConsistencyError(
            f"Non-exact integer division: {dividend} / {divisor} "
            f"leaves remainder {remainder}"
        )
    return quotient
