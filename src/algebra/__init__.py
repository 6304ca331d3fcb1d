"""Algebra — раскрытие и факторизация полиномов.

- expand: дерево множителей → канонический полином
- UnivariateFactorizer: факторизация над Q (Rational Root Theorem + синтетическое деление)
- find_rational_roots: все рациональные корни univariate полинома
"""

from .expansion import expand
from .factorizer import (
    FactorizationResult,
    FactorizerConfig,
    UnivariateFactorizer,
    factorize,
)
from .rational_roots import find_rational_roots, rational_root_factors

__all__ = [
    "expand",
    "factorize",
    "UnivariateFactorizer",
    "FactorizerConfig",
    "FactorizationResult",
    "find_rational_roots",
    "rational_root_factors",
]
