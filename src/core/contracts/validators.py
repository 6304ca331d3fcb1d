"""
JSON-контракты Polynomial и дерева Factor

Схемы лежат в contracts/schema/ (Draft 2020-12):
- polynomial.json: список термов с ненулевым целым коэффициентом
- factor_tree.json: рекурсивный tagged union leaf | product

Загрузка из контракта всегда идёт в два шага: сначала jsonschema,
затем pydantic (канонизация полинома).
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from pydantic import TypeAdapter

from src.core.domain.factor import Factor, Leaf, Product
from src.core.domain.polynomial import Polynomial

# <корень проекта>/contracts/schema
DEFAULT_SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Читает и кэширует схемы; каждая схема проходит meta-validation."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else DEFAULT_SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени без расширения ('polynomial', 'factor_tree').

        Raises:
            FileNotFoundError: нет файла схемы
            ValueError: файл не является корректной Draft 2020-12 схемой
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {e.message}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()

_FACTOR_ADAPTER: TypeAdapter = TypeAdapter(Factor)


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """jsonschema-валидатор одного контракта."""

    schema_name: str = ""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        self.schema = (loader or _SCHEMA_LOADER).load_schema(self.schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """Raises ValidationError (первая найденная ошибка)."""
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)


class PolynomialValidator(ContractValidator):
    schema_name = "polynomial"


class FactorTreeValidator(ContractValidator):
    """Рекурсивное дерево: leaf с children или product с polynomial отклоняются."""

    schema_name = "factor_tree"


# =============================================================================
# СЕРИАЛИЗАЦИЯ
# =============================================================================


def polynomial_to_contract(polynomial: Polynomial) -> Dict[str, Any]:
    """JSON-совместимый dict полинома."""
    return polynomial.model_dump(mode="json")


def factor_to_contract(factor: Union[Leaf, Product]) -> Dict[str, Any]:
    """JSON-совместимый dict дерева множителей (с полем kind)."""
    return _FACTOR_ADAPTER.dump_python(factor, mode="json")


def polynomial_from_contract(data: Dict[str, Any]) -> Polynomial:
    """
    Polynomial из контракта (после проверки схемой).

    Raises:
        ValidationError: jsonschema или pydantic, если данные невалидны
    """
    validate_polynomial(data)
    return Polynomial.model_validate(data)


def factor_from_contract(data: Dict[str, Any]) -> Union[Leaf, Product]:
    """
    Дерево множителей из контракта (после проверки схемой).

    Raises:
        ValidationError: jsonschema или pydantic, если данные невалидны
    """
    validate_factor_tree(data)
    return _FACTOR_ADAPTER.validate_python(data)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_polynomial(data: Dict[str, Any]) -> None:
    PolynomialValidator().validate(data)


def validate_factor_tree(data: Dict[str, Any]) -> None:
    FactorTreeValidator().validate(data)
