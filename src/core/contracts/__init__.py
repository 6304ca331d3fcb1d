"""
Contract Validation Module

Модуль для валидации JSON контрактов Polynomial и дерева Factor.
"""

from .validators import (
    ContractValidator,
    FactorTreeValidator,
    PolynomialValidator,
    SchemaLoader,
    factor_from_contract,
    factor_to_contract,
    polynomial_from_contract,
    polynomial_to_contract,
    validate_factor_tree,
    validate_polynomial,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PolynomialValidator",
    "FactorTreeValidator",
    # Functions
    "validate_polynomial",
    "validate_factor_tree",
    "polynomial_to_contract",
    "factor_to_contract",
    "polynomial_from_contract",
    "factor_from_contract",
]
