"""
Expansion — раскрытие дерева множителей в один полином

Leaf возвращает свой полином; Product сворачивает детей умножением,
начиная с мультипликативной единицы Polynomial([Term(1)]).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат канонический (like-term combination)
2. Перестановка детей не меняет результат (коммутативность до канонической формы)
"""

from typing import Union

from src.core.domain.factor import Leaf, Product
from src.core.domain.polynomial import Polynomial


def expand(factor: Union[Leaf, Product]) -> Polynomial:
    """
    Раскрытие (возможно вложенного) дерева множителей.

    Raises:
        ValueError: если factor is None
    """
    if factor is None:
        raise ValueError("factor must not be None")

    if isinstance(factor, Leaf):
        return factor.polynomial

    result = Polynomial.one()
    for child in factor.children:
        result = result.multiply(expand(child))
    return result
