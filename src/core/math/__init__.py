"""
Core math modules

Точная рациональная арифметика, целочисленные примитивы и
float-примитивы для диагностического probe.
"""

# Exact Fraction
from src.core.math.exact_fraction import ExactFraction

# Integer Arithmetic
from src.core.math.integer_arith import (
    content,
    divisors_with_signs,
    exact_divide,
    lcm,
    lcm_all,
    reduce_to_lowest_terms,
)

# Numerical Safeguards (только диагностика)
from src.core.math.numerical_safeguards import (
    EPS_PROBE_ABS,
    EPS_PROBE_REL,
    horner_float,
    is_close,
    is_valid_float,
    probe_residual_scale,
)

__all__ = [
    # Exact Fraction
    "ExactFraction",
    # Integer Arithmetic
    "content",
    "divisors_with_signs",
    "exact_divide",
    "lcm",
    "lcm_all",
    "reduce_to_lowest_terms",
    # Numerical Safeguards
    "EPS_PROBE_ABS",
    "EPS_PROBE_REL",
    "horner_float",
    "is_close",
    "is_valid_float",
    "probe_residual_scale",
]
