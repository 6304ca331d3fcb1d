"""Parsing — разбор текстовых выражений в Polynomial и Factor."""

from .expression_parser import (
    ParseOutcome,
    normalize,
    parse_expression,
    parse_factor,
    parse_monomial,
    parse_polynomial,
    parse_terms,
    try_parse,
)

__all__ = [
    "ParseOutcome",
    "normalize",
    "parse_expression",
    "parse_monomial",
    "parse_terms",
    "parse_polynomial",
    "try_parse",
    "parse_factor",
]
