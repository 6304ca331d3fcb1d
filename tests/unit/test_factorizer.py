"""
Тесты для Univariate Factorizer

Проверяет:
1. Известные разложения (структура дерева и каноническая строка)
2. Инвариант expand(factorize(P)) == P на случайных полиномах
3. Ранние выходы: константа, многомерный вход
4. Вынесение (-1) и целой константы
5. FactorizationResult: корни, остаток, диагностика
6. Float probe: только диагностика, результат не меняется
"""

import logging
import math
import random
from typing import List

import pytest

from src.algebra import (
    FactorizationResult,
    FactorizerConfig,
    UnivariateFactorizer,
    expand,
    factorize,
)
from src.core.domain import Leaf, Polynomial, Product, Term, iter_leaves, render_factor
from src.core.errors import FormatError, InternalConsistencyError, UnsupportedOperation
from src.core.math import ExactFraction
from src.parsing import parse_polynomial


def random_polynomial(rng: random.Random, max_degree: int = 6, bound: int = 30) -> Polynomial:
    degree = rng.randint(1, max_degree)
    coefficients = {e: rng.randint(-bound, bound) for e in range(degree)}
    leading = 0
    while leading == 0:
        leading = rng.randint(-bound, bound)
    coefficients[degree] = leading
    return Polynomial.from_exponent_map("x", coefficients)


def random_product_of_linear_factors(rng: random.Random) -> Polynomial:
    result = Polynomial.constant(rng.choice([-6, -2, -1, 1, 3, 4]))
    for _ in range(rng.randint(1, 4)):
        q = rng.randint(1, 5)
        p = rng.randint(-6, 6)
        result = result * Polynomial.of(Term.power(q, "x", 1), Term.constant(-p))
    # иногда добавляется неприводимый над Q множитель
    if rng.random() < 0.5:
        result = result * Polynomial.of(Term.power(1, "x", 2), Term.constant(rng.randint(1, 3)))
    return result


# =============================================================================
# ИЗВЕСТНЫЕ РАЗЛОЖЕНИЯ
# =============================================================================


class TestKnownFactorizations:
    """Тесты известных разложений"""

    @pytest.mark.parametrize(
        "expr, expected",
        [
            ("x^2 - 5x + 6", "(1x-2)(1x-3)"),
            ("4x^2 - 4", "(4)(1x-1)(1x+1)"),
            ("-2x^2 + 2", "(2)(-1)(1x-1)(1x+1)"),
            ("6x^2 - 5x + 1", "(2x-1)(3x-1)"),
            ("4x^2 - 4x + 1", "(2x-1)(2x-1)"),
            ("x^3 - x", "(1x)(1x-1)(1x+1)"),
            ("x^3 - 3x^2 + 3x - 1", "(1x-1)(1x-1)(1x-1)"),
            ("x^2 + 1", "(1x^2+1)"),
            ("2x^2 + 4", "(2)(1x^2+2)"),
            ("3x", "(3)(1x)"),
            ("-x", "(-1)(1x)"),
            ("x - 7", "(1x-7)"),
        ],
    )
    def test_rendering(self, expr: str, expected: str) -> None:
        tree = factorize(parse_polynomial(expr))
        assert render_factor(tree) == expected
        assert expand(tree) == parse_polynomial(expr)

    def test_quadratic_leaves_vanish_at_roots(self) -> None:
        """x^2 - 5x + 6: раскрытие равно исходному, листья зануляются в 2 и 3"""
        p = parse_polynomial("x^2 - 5x + 6")
        tree = factorize(p)

        assert expand(tree).canonical_string() == p.canonical_string()
        for root in (2, 3):
            assert expand(tree).evaluate({"x": root}).is_zero()
            assert any(l.polynomial.evaluate({"x": root}).is_zero() for l in iter_leaves(tree))

    def test_rational_root_leaf_vanishes(self) -> None:
        tree = factorize(parse_polynomial("6x^2 - 5x + 1"))
        for root in (ExactFraction(1, 2), ExactFraction(1, 3)):
            assert any(l.polynomial.evaluate({"x": root}).is_zero() for l in iter_leaves(tree))

    def test_other_variable_name(self) -> None:
        tree = factorize(parse_polynomial("t^2 - 1"))
        assert render_factor(tree) == "(1t-1)(1t+1)"


# =============================================================================
# РАННИЕ ВЫХОДЫ
# =============================================================================


class TestEarlyExits:
    """Тесты предусловий"""

    def test_multivariate_rejected(self) -> None:
        """x + y → UnsupportedOperation"""
        with pytest.raises(UnsupportedOperation, match="Only univariate"):
            factorize(parse_polynomial("x + y"))

    def test_unsupported_is_not_format_error(self) -> None:
        with pytest.raises(UnsupportedOperation) as exc_info:
            factorize(parse_polynomial("xy"))
        assert not isinstance(exc_info.value, FormatError)
        assert not isinstance(exc_info.value, ValueError)

    @pytest.mark.parametrize("value", [7, -3, 1])
    def test_constant_returns_single_leaf(self, value: int) -> None:
        p = Polynomial.constant(value)
        tree = factorize(p)
        assert isinstance(tree, Leaf)
        assert tree.polynomial == p

    def test_zero_polynomial(self) -> None:
        tree = factorize(Polynomial.zero())
        assert isinstance(tree, Leaf)
        assert tree.polynomial.is_zero()
        assert expand(tree).is_zero()

    def test_none_rejected(self) -> None:
        with pytest.raises(ValueError, match="must not be None"):
            factorize(None)  # type: ignore[arg-type]


# =============================================================================
# ROUND TRIP
# =============================================================================


class TestRoundTrip:
    """expand(factorize(P)) == P"""

    @pytest.mark.parametrize("seed", range(40))
    def test_random_dense_polynomials(self, seed: int) -> None:
        rng = random.Random(seed)
        p = random_polynomial(rng)
        assert expand(factorize(p)) == p

    @pytest.mark.parametrize("seed", range(40))
    def test_random_products_of_linear_factors(self, seed: int) -> None:
        rng = random.Random(1000 + seed)
        p = random_product_of_linear_factors(rng)
        tree = factorize(p)
        assert expand(tree) == p

    def test_sparse_high_degree(self) -> None:
        p = parse_polynomial("x^12 - 1")
        assert expand(factorize(p)) == p

    def test_large_coefficients(self) -> None:
        """Произвольная точность: коэффициенты за пределами int64"""
        big = 10 ** 30
        p = Polynomial.of(Term.power(big, "x", 2), Term.constant(-big))
        tree = factorize(p)
        assert expand(tree) == p
        assert render_factor(tree) == f"({big})(1x-1)(1x+1)"

    def test_leaves_are_integer_polynomials(self) -> None:
        rng = random.Random(7)
        for _ in range(10):
            tree = factorize(random_product_of_linear_factors(rng))
            for l in iter_leaves(tree):
                assert all(isinstance(t.coefficient, int) for t in l.polynomial.terms)


# =============================================================================
# FACTORIZATION RESULT
# =============================================================================


class TestFactorizationResult:
    """Тесты factorize_detailed"""

    @pytest.fixture
    def factorizer(self) -> UnivariateFactorizer:
        return UnivariateFactorizer()

    def test_default_config(self, factorizer: UnivariateFactorizer) -> None:
        assert factorizer.config == FactorizerConfig()
        assert not factorizer.config.float_probe_enabled

    def test_details(self, factorizer: UnivariateFactorizer) -> None:
        result = factorizer.factorize_detailed(parse_polynomial("-12x^3 + 10x^2 - 2x"))
        assert isinstance(result, FactorizationResult)
        assert result.variable == "x"
        assert result.negated
        # -1 * 2 * x * (2x - 1) * (3x - 1): последний линейный множитель остаётся остатком
        assert result.rational_roots == (ExactFraction(0), ExactFraction(1, 2))
        assert result.remainder == parse_polynomial("3x - 1")
        assert result.linear_factor_count == 2
        assert result.scale_constant == 2
        assert result.remainder_degree == 1
        assert expand(result.factor) == parse_polynomial("-12x^3 + 10x^2 - 2x")
        assert "constant=2" in result.details

    def test_irreducible_remainder(self, factorizer: UnivariateFactorizer) -> None:
        result = factorizer.factorize_detailed(parse_polynomial("x^3 - 2x^2 + 2x - 4"))
        # (x - 2)(x^2 + 2)
        assert result.rational_roots == (ExactFraction(2),)
        assert result.remainder == parse_polynomial("x^2 + 2")
        assert result.remainder_degree == 2

    def test_constant_result(self, factorizer: UnivariateFactorizer) -> None:
        result = factorizer.factorize_detailed(Polynomial.constant(5))
        assert result.variable is None
        assert result.rational_roots == ()
        assert result.details == "constant input"

    def test_factorize_matches_detailed(self, factorizer: UnivariateFactorizer) -> None:
        p = parse_polynomial("2x^3 - 3x^2 - 11x + 6")
        assert factorizer.factorize(p) == factorizer.factorize_detailed(p).factor

    def test_result_is_product(self, factorizer: UnivariateFactorizer) -> None:
        assert isinstance(factorizer.factorize(parse_polynomial("x^2 - 1")), Product)


class TestConsistencyGuard:
    """Нецелая комбинация scale/content — фатальная ошибка"""

    def test_non_exact_combination_raises(self) -> None:
        with pytest.raises(InternalConsistencyError):
            UnivariateFactorizer._combine_scale_and_content(ExactFraction(1, 3), 2, 1)

    def test_exact_combination(self) -> None:
        assert UnivariateFactorizer._combine_scale_and_content(ExactFraction(1, 2), 6, 1) == 3
        assert UnivariateFactorizer._combine_scale_and_content(ExactFraction(1), 6, 3) == 2


# =============================================================================
# FLOAT PROBE
# =============================================================================


class TestFloatProbe:
    """Float probe — только диагностика"""

    def test_disabled_by_default(self) -> None:
        result = UnivariateFactorizer().factorize_detailed(parse_polynomial("x^2 - 5x + 6"))
        assert result.probe_residuals == ()
        assert result.probe_disagreements == 0

    def test_agrees_on_exact_roots(self) -> None:
        config = FactorizerConfig(float_probe_enabled=True)
        result = UnivariateFactorizer(config).factorize_detailed(parse_polynomial("6x^2 - 5x + 1"))
        assert len(result.probe_residuals) == 1
        assert result.probe_disagreements == 0

    def test_probe_never_changes_result(self) -> None:
        polynomials: List[Polynomial] = [
            parse_polynomial("x^3 - 2x^2 + 2x - 4"),
            parse_polynomial("6x^2 - 5x + 1"),
            parse_polynomial("x^2 + 1"),
        ]
        probing = UnivariateFactorizer(FactorizerConfig(float_probe_enabled=True, float_probe_abs_tol=0.0))
        plain = UnivariateFactorizer()
        for p in polynomials:
            assert probing.factorize(p) == plain.factorize(p)

    def test_overflow_skipped(self) -> None:
        """Коэффициенты вне диапазона float: probe пропускается, факторизация точная"""
        huge = 10 ** 400
        p = Polynomial.of(Term.power(huge, "x", 2), Term.constant(-huge))
        result = UnivariateFactorizer(FactorizerConfig(float_probe_enabled=True)).factorize_detailed(p)
        assert all(math.isnan(r) for r in result.probe_residuals)
        assert result.probe_disagreements == 0
        assert expand(result.factor) == p


# =============================================================================
# ОГРАНИЧЕНИЕ ПЕРЕБОРА КАНДИДАТОВ
# =============================================================================


class TestRootSearchLimit:
    """max_root_search_magnitude: быстрый отказ от перебора огромных делителей"""

    def test_unbounded_by_default(self) -> None:
        assert FactorizerConfig().max_root_search_magnitude is None
        result = UnivariateFactorizer().factorize_detailed(parse_polynomial("x^2 - 5x + 6"))
        assert not result.root_search_truncated

    def test_huge_constant_term_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """x^2 + 1000000000000000007: без перебора делителей, остаток как есть"""
        p = parse_polynomial("x^2 + 1000000000000000007")
        factorizer = UnivariateFactorizer(FactorizerConfig(max_root_search_magnitude=10 ** 6))
        with caplog.at_level(logging.WARNING, logger="src.algebra.factorizer"):
            result = factorizer.factorize_detailed(p)

        assert result.root_search_truncated
        assert result.rational_roots == ()
        assert render_factor(result.factor) == "(1x^2+1000000000000000007)"
        assert expand(result.factor) == p
        assert "Rational root search stopped" in caplog.text
        assert "truncated=True" in result.details

    def test_truncation_keeps_identity(self) -> None:
        """(x - 2)(x - 1001): корни не ищутся, но раскрытие равно исходному"""
        p = parse_polynomial("x^2 - 1003x + 2002")
        result = UnivariateFactorizer(FactorizerConfig(max_root_search_magnitude=1000)).factorize_detailed(p)
        assert result.root_search_truncated
        assert result.remainder == p
        assert expand(result.factor) == p

    def test_limit_not_reached(self) -> None:
        p = parse_polynomial("6x^2 - 5x + 1")
        result = UnivariateFactorizer(FactorizerConfig(max_root_search_magnitude=6)).factorize_detailed(p)
        assert not result.root_search_truncated
        assert render_factor(result.factor) == "(2x-1)(3x-1)"


class TestLogging:
    def test_peeled_roots_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="src.algebra.factorizer"):
            factorize(parse_polynomial("x^2 - 5x + 6"))
        assert "Peeled root 2" in caplog.text
        assert "Factorized" in caplog.text
