"""
Core domain models, exact arithmetic primitives, and invariants.

This module contains the foundational building blocks of the polynomial
engine: error taxonomy, exact rational arithmetic, Term/Polynomial/Factor
value objects, and JSON contracts.
"""
