"""
Domain models and value objects.

Contains the immutable algebraic entities: Term, Polynomial, Factor tree.
"""

from src.core.domain.factor import (
    Factor,
    Leaf,
    Product,
    constant,
    is_constant_leaf,
    is_leaf,
    iter_leaves,
    leaf,
    product,
    render_factor,
)
from src.core.domain.polynomial import Polynomial, combine_like_terms
from src.core.domain.term import Term, monomial_signature

__all__ = [
    # Term
    "Term",
    "monomial_signature",
    # Polynomial
    "Polynomial",
    "combine_like_terms",
    # Factor tree
    "Factor",
    "Leaf",
    "Product",
    "constant",
    "leaf",
    "product",
    "is_leaf",
    "is_constant_leaf",
    "iter_leaves",
    "render_factor",
]
