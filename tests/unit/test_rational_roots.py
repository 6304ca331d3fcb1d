"""
Тесты для поиска рациональных корней
"""

import pytest

from src.algebra import factorize, find_rational_roots, rational_root_factors
from src.algebra.rational_roots import candidate_roots, evaluate_scaled
from src.core.domain import Polynomial, iter_leaves, render_factor
from src.core.errors import UnsupportedOperation
from src.core.math import ExactFraction
from src.parsing import parse_polynomial


class TestEvaluateScaled:
    """q^deg * P(p/q) в целых числах"""

    def test_integer_root(self) -> None:
        assert evaluate_scaled({2: 1, 1: -5, 0: 6}, 2, 1) == 0
        assert evaluate_scaled({2: 1, 1: -5, 0: 6}, 1, 1) == 2

    def test_rational_root(self) -> None:
        assert evaluate_scaled({1: 2, 0: -1}, 1, 2) == 0

    def test_empty_map(self) -> None:
        assert evaluate_scaled({}, 3, 1) == 0


class TestCandidateRoots:
    def test_reduced_and_unique(self) -> None:
        candidates = candidate_roots(leading=2, constant_term=4)
        assert len(candidates) == len(set(candidates))
        assert all(q > 0 for _, q in candidates)
        assert (1, 2) in candidates
        assert (2, 2) not in candidates

    def test_zero_constant(self) -> None:
        assert candidate_roots(leading=5, constant_term=0) == [(0, 1)]


class TestFindRationalRoots:
    """Тесты для find_rational_roots"""

    @pytest.mark.parametrize(
        "expr, expected",
        [
            ("x^2 - 5x + 6", {ExactFraction(2), ExactFraction(3)}),
            ("6x^2 - 5x + 1", {ExactFraction(1, 2), ExactFraction(1, 3)}),
            ("x^2 - 2x", {ExactFraction(0), ExactFraction(2)}),
            ("x^3 - 3x^2 + 3x - 1", {ExactFraction(1)}),
            ("2x + 3", {ExactFraction(-3, 2)}),
            ("x^2 + 1", set()),
            ("x^2 - 2", set()),
        ],
    )
    def test_roots(self, expr: str, expected: set) -> None:
        roots = find_rational_roots(parse_polynomial(expr))
        assert set(roots) == expected
        assert len(roots) == len(expected)

    def test_constant_has_no_roots(self) -> None:
        assert find_rational_roots(Polynomial.constant(5)) == []
        assert find_rational_roots(Polynomial.zero()) == []

    def test_multivariate_rejected(self) -> None:
        with pytest.raises(UnsupportedOperation):
            find_rational_roots(parse_polynomial("x + y"))

    def test_wrong_variable_rejected(self) -> None:
        with pytest.raises(ValueError, match="does not depend on 'y'"):
            find_rational_roots(parse_polynomial("x - 1"), variable="y")

    def test_roots_are_exact(self) -> None:
        p = parse_polynomial("3x^3 - x^2 - 12x + 4")
        for root in find_rational_roots(p):
            assert p.evaluate({"x": root}).is_zero()

    def test_agrees_with_factorizer(self) -> None:
        """Корни совпадают с корнями линейных листьев факторизации"""
        p = parse_polynomial("12x^4 - 32x^3 + 19x^2 + 7x - 6")
        # (x - 1)(2x + 1)(3x - 2)(2x - 3)
        roots = set(find_rational_roots(p))
        linear_leaf_roots = set()
        for l in iter_leaves(factorize(p)):
            exponents = l.polynomial.to_exponent_map("x")
            if max(exponents, default=0) == 1:
                linear_leaf_roots.add(ExactFraction(-exponents.get(0, 0), exponents[1]))
        assert roots == linear_leaf_roots


class TestRationalRootFactors:
    def test_linear_factors(self) -> None:
        factors = rational_root_factors(parse_polynomial("6x^2 - 5x + 1"))
        assert sorted(render_factor(f) for f in factors) == ["(2x-1)", "(3x-1)"]

    def test_zero_root_factor(self) -> None:
        factors = rational_root_factors(parse_polynomial("x^2 - 2x"))
        assert "(1x)" in [render_factor(f) for f in factors]

    def test_constant(self) -> None:
        assert rational_root_factors(Polynomial.constant(3)) == []
