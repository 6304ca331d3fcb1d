"""
Factor — дерево множителей (tagged union Leaf | Product)

Leaf хранит полином с целыми коэффициентами, Product — упорядоченный
список дочерних множителей. Состояние "лист с детьми" невозможно по
построению.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все листья — полиномы с целыми коэффициентами (Term.coefficient: int)
2. Product без детей — мультипликативная единица (1)
3. Дерево владеет детьми (без разделения и циклов)
"""

from typing import Annotated, Iterator, Literal, Tuple, Union

from pydantic import BaseModel, Field

from src.core.domain.polynomial import Polynomial


# =============================================================================
# FACTOR MODELS
# =============================================================================


class Leaf(BaseModel):
    """Лист дерева: один полином."""

    kind: Literal["leaf"] = "leaf"
    polynomial: Polynomial = Field(..., description="Полином с целыми коэффициентами")

    model_config = {"frozen": True}

    def render(self) -> str:
        return f"({self.polynomial.canonical_string()})"

    def __str__(self) -> str:
        return self.render()


class Product(BaseModel):
    """Внутренний узел: произведение дочерних множителей."""

    kind: Literal["product"] = "product"
    children: Tuple["Factor", ...] = Field(default=(), description="Дочерние множители")

    model_config = {"frozen": True}

    def render(self) -> str:
        if not self.children:
            return "(1)"
        return "".join(render_factor(child) for child in self.children)

    def __str__(self) -> str:
        return self.render()


Factor = Annotated[Union[Leaf, Product], Field(discriminator="kind")]

Product.model_rebuild()


# =============================================================================
# КОНСТРУКТОРЫ И ОБХОД
# =============================================================================


def leaf(polynomial: Polynomial) -> Leaf:
    if polynomial is None:
        raise ValueError("leaf polynomial must not be None")
    return Leaf(polynomial=polynomial)


def constant(value: int) -> Leaf:
    """Константный лист (value)."""
    return Leaf(polynomial=Polynomial.constant(value))


def product(*factors: Union[Leaf, Product]) -> Product:
    return Product(children=tuple(factors))


def is_leaf(factor: Union[Leaf, Product]) -> bool:
    return isinstance(factor, Leaf)


def is_constant_leaf(factor: Union[Leaf, Product]) -> bool:
    return isinstance(factor, Leaf) and factor.polynomial.is_constant()


def iter_leaves(factor: Union[Leaf, Product]) -> Iterator[Leaf]:
    """Обход листьев слева направо (depth-first)."""
    if isinstance(factor, Leaf):
        yield factor
        return
    for child in factor.children:
        yield from iter_leaves(child)


def render_factor(factor: Union[Leaf, Product]) -> str:
    """
    Строковое представление дерева.

    Leaf → (polynomial); Product → конкатенация детей; пустой Product → (1).
    """
    return factor.render()
