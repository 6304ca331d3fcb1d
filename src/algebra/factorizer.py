"""
Univariate Factorizer — факторизация над Q в дерево целочисленных множителей

Алгоритм:
1. exponent -> coefficient (константы в экспоненте 0), сокращения удаляются
2. degree = max, leading = coefficient[degree]; ноль → нулевой лист
3. leading < 0 → множитель (-1) и смена знака всех коэффициентов
4. Плотный вектор ExactFraction по убыванию степеней
5. Пока degree > 1: кандидаты p/q (Rational Root Theorem), точная проверка
   схемой Горнера; найденный корень → множитель (q*x - p), синтетическое
   деление на (x - p/q), scale *= 1/q
6. Остаток: НОК знаменателей, content, примитивный целый полином
7. scale * content → одна целая константа (обязательно нацело)
8. Единственный константный ребёнок возвращается напрямую

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. expand(factorize(P)) == P для любого целого univariate P (точное тождество)
2. Корень принимается только по точному ExactFraction-вычислению
3. Float probe (если включён) — только диагностика, на результат не влияет
4. Нецелая комбинация scale/content → InternalConsistencyError, никогда не усекается
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from src.algebra.rational_roots import candidate_roots, linear_factor
from src.core.domain.factor import Leaf, Product, constant, is_constant_leaf, leaf
from src.core.domain.polynomial import Polynomial
from src.core.errors import UnsupportedOperation
from src.core.math.exact_fraction import ExactFraction
from src.core.math.integer_arith import content, exact_divide, lcm_all
from src.core.math.numerical_safeguards import (
    EPS_PROBE_ABS,
    EPS_PROBE_REL,
    horner_float,
    is_close,
    is_valid_float,
    probe_residual_scale,
)

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG / RESULT
# =============================================================================


@dataclass(frozen=True)
class FactorizerConfig:
    """Конфигурация факторизатора.

    float_probe_enabled: дополнительно проверять найденные корни во float
        (только диагностика, попадает в FactorizationResult.probe_*)
    max_root_search_magnitude: предел |старшего коэффициента| и |свободного
        члена| текущего частного для перебора кандидатов. Делители ищутся
        пробным делением до sqrt(n), поэтому свободный член порядка 10^18
        перебирается минутами. None: без ограничения (полный поиск).
        При превышении поиск прекращается с WARNING, остаток остаётся
        неразложенным, expand(factorize(P)) == P сохраняется.
    """
    float_probe_enabled: bool = False
    float_probe_rel_tol: float = EPS_PROBE_REL
    float_probe_abs_tol: float = EPS_PROBE_ABS
    max_root_search_magnitude: Optional[int] = None


@dataclass(frozen=True)
class FactorizationResult:
    """Результат факторизации с диагностикой."""

    factor: Union[Leaf, Product]
    variable: Optional[str]

    # Разложение
    rational_roots: Tuple[ExactFraction, ...]  # В порядке отщепления (с кратностью)
    scale_constant: int  # Целая константа-множитель (1, если не выделена)
    negated: bool  # Был ли вынесен множитель (-1)
    remainder: Polynomial  # Примитивный остаток без рациональных корней
    remainder_degree: int
    root_search_truncated: bool  # Перебор остановлен по max_root_search_magnitude

    # Float probe
    probe_residuals: Tuple[float, ...]
    probe_disagreements: int

    # Для отладки
    details: str

    @property
    def linear_factor_count(self) -> int:
        return len(self.rational_roots)


# =============================================================================
# ТОЧНЫЕ ПРИМИТИВЫ
# =============================================================================


def horner_exact(
    coefficients_descending: Sequence[ExactFraction], x: ExactFraction
) -> ExactFraction:
    """Точное значение полинома в точке x (схема Горнера)."""
    acc = ExactFraction.zero()
    for c in coefficients_descending:
        acc = acc * x + c
    return acc


def synthetic_divide(
    coefficients_descending: Sequence[ExactFraction], root: ExactFraction
) -> List[ExactFraction]:
    """
    Деление на (x - root); возвращает частное степени на единицу ниже.

    Остаток (acc * root + a0) для настоящего корня равен нулю и отбрасывается.
    """
    quotient = [coefficients_descending[0]]
    acc = coefficients_descending[0]
    for c in coefficients_descending[1:-1]:
        acc = acc * root + c
        quotient.append(acc)
    return quotient


def clear_denominators(
    coefficients_descending: Sequence[ExactFraction],
) -> Tuple[List[int], int]:
    """
    Умножение вектора на НОК знаменателей.

    Returns:
        (integer_coefficients, lcm_of_denominators)
    """
    common = lcm_all(c.denominator for c in coefficients_descending)
    return [c.numerator * (common // c.denominator) for c in coefficients_descending], common


def primitive_part(integer_coefficients: Sequence[int]) -> Tuple[List[int], int]:
    """
    Деление на content.

    Returns:
        (primitive_coefficients, content)
    """
    g = content(integer_coefficients)
    return [exact_divide(c, g) for c in integer_coefficients], g


# =============================================================================
# FACTORIZER
# =============================================================================


class UnivariateFactorizer:
    """Факторизатор univariate полиномов с целыми коэффициентами над Q.

    Не хранит изменяемого состояния: один экземпляр безопасно использовать
    из нескольких потоков.
    """

    def __init__(self, config: Optional[FactorizerConfig] = None):
        self.config = config or FactorizerConfig()

    def factorize(self, polynomial: Polynomial) -> Union[Leaf, Product]:
        """
        Дерево множителей, раскрытие которого равно исходному полиному.

        Raises:
            UnsupportedOperation: если полином зависит от нескольких переменных
            InternalConsistencyError: при нарушении инварианта реконструкции
        """
        return self.factorize_detailed(polynomial).factor

    def factorize_detailed(self, polynomial: Polynomial) -> FactorizationResult:
        """То же, что factorize, плюс диагностика (корни, константа, остаток, probe)."""
        if polynomial is None:
            raise ValueError("polynomial must not be None")

        variable_names = polynomial.variables()
        if len(variable_names) > 1:
            raise UnsupportedOperation(
                "Only univariate factorization is supported. "
                f"Variables: {', '.join(sorted(variable_names))}"
            )

        # 0. Константа (включая ноль): один лист без изменений
        if not variable_names:
            return self._trivial_result(leaf(polynomial), None, polynomial, "constant input")

        variable = next(iter(variable_names))

        # 1. exponent -> coefficient
        exponent_map = polynomial.to_exponent_map(variable)
        if not exponent_map:
            return self._trivial_result(leaf(Polynomial.zero()), variable, Polynomial.zero(), "zero polynomial")

        # 2. degree / leading
        degree = max(exponent_map)
        leading = exponent_map[degree]
        if leading == 0:
            return self._trivial_result(leaf(Polynomial.zero()), variable, Polynomial.zero(), "zero leading coefficient")

        children: List[Union[Leaf, Product]] = []

        # 3. Вынесение (-1)
        negated = leading < 0
        if negated:
            children.append(constant(-1))
            exponent_map = {e: -c for e, c in exponent_map.items()}

        # 4. Плотный вектор по убыванию степеней
        coefficients = [
            ExactFraction.from_int(exponent_map.get(degree - i, 0)) for i in range(degree + 1)
        ]
        input_coefficients = [c.numerator for c in coefficients]

        # 5. Отщепление рациональных корней
        scale = ExactFraction.one()
        roots: List[ExactFraction] = []
        truncated = False
        while len(coefficients) - 1 > 1:
            integer_coefficients, _ = clear_denominators(coefficients)
            primitive, _ = primitive_part(integer_coefficients)
            if self._exceeds_search_limit(primitive):
                truncated = True
                logger.warning(
                    f"Rational root search stopped for {polynomial.canonical_string()}: "
                    f"leading={primitive[0]}, constant={primitive[-1]} exceed "
                    f"max_root_search_magnitude={self.config.max_root_search_magnitude}"
                )
                break

            root = self._find_rational_root(coefficients, primitive)
            if root is None:
                break

            children.append(linear_factor(variable, root))
            coefficients = synthetic_divide(coefficients, root)
            scale = scale * ExactFraction(1, root.denominator)
            roots.append(root)
            logger.debug(
                f"Peeled root {root} of {polynomial.canonical_string()}, "
                f"quotient degree {len(coefficients) - 1}"
            )

        # 6. Примитивный целый остаток
        cleared, common_denominator = clear_denominators(coefficients)
        primitive, remainder_content = primitive_part(cleared)
        remainder_degree = len(primitive) - 1
        remainder = Polynomial.from_exponent_map(
            variable,
            {remainder_degree - i: c for i, c in enumerate(primitive) if c != 0},
        )

        # 7. Одна целая константа
        combined = self._combine_scale_and_content(scale, remainder_content, common_denominator)
        if combined != 1:
            children.insert(0, constant(combined))
        if remainder.constant_value() != 1:
            children.append(leaf(remainder))

        # 8. Минимальное дерево
        if len(children) == 1 and is_constant_leaf(children[0]):
            factor: Union[Leaf, Product] = children[0]
        else:
            factor = Product(children=tuple(children))

        residuals, disagreements = self._float_probe(input_coefficients, roots)

        logger.debug(
            f"Factorized {polynomial.canonical_string()} -> {factor.render()} "
            f"(constant={combined}, remainder_degree={remainder_degree})"
        )

        return FactorizationResult(
            factor=factor,
            variable=variable,
            rational_roots=tuple(roots),
            scale_constant=combined,
            negated=negated,
            remainder=remainder,
            remainder_degree=remainder.degree(),
            root_search_truncated=truncated,
            probe_residuals=residuals,
            probe_disagreements=disagreements,
            details=(
                f"degree={degree}, roots=[{', '.join(str(r) for r in roots)}], "
                f"constant={combined}, negated={negated}, "
                f"truncated={truncated}, "
                f"remainder={remainder.canonical_string()}"
            ),
        )

    # -------------------------------------------------------------------------
    # Внутренние шаги
    # -------------------------------------------------------------------------

    def _exceeds_search_limit(self, primitive: Sequence[int]) -> bool:
        limit = self.config.max_root_search_magnitude
        if limit is None:
            return False
        return max(abs(primitive[0]), abs(primitive[-1])) > limit

    @staticmethod
    def _find_rational_root(
        coefficients: Sequence[ExactFraction], primitive: Sequence[int]
    ) -> Optional[ExactFraction]:
        """
        Первый кандидат p/q, обращающий полином в ноль точно, или None.

        Кандидаты берутся из примитивного целого вектора того же частного.
        """

        for p, q in candidate_roots(primitive[0], primitive[-1]):
            candidate = ExactFraction(p, q)
            if horner_exact(coefficients, candidate).is_zero():
                return candidate
        return None

    @staticmethod
    def _combine_scale_and_content(
        scale: ExactFraction, remainder_content: int, common_denominator: int
    ) -> int:
        """
        K = content * scale / lcm: целое по построению.

        Raises:
            InternalConsistencyError: если деление не нацело
        """
        return exact_divide(
            remainder_content * scale.numerator,
            scale.denominator * common_denominator,
        )

    def _float_probe(
        self, coefficients: Sequence[int], roots: Sequence[ExactFraction]
    ) -> Tuple[Tuple[float, ...], int]:
        """
        Необязательная float-проверка корней.

        Возвращает residuals и число расхождений; на факторизацию не влияет.
        """
        if not self.config.float_probe_enabled or not roots:
            return (), 0

        try:
            float_coefficients = [float(c) for c in coefficients]
        except OverflowError:
            logger.debug("Float probe skipped: coefficients exceed float range")
            return tuple(math.nan for _ in roots), 0

        residuals: List[float] = []
        disagreements = 0
        for root in roots:
            x = root.to_float()
            residual = horner_float(float_coefficients, x)
            residuals.append(residual)
            if not is_valid_float(residual):
                continue

            relative = residual / probe_residual_scale(float_coefficients, x)
            if not is_close(
                relative,
                0.0,
                rel_tol=self.config.float_probe_rel_tol,
                abs_tol=self.config.float_probe_abs_tol,
            ):
                disagreements += 1
                logger.warning(
                    f"Float probe disagrees with exact root {root}: residual={residual:.3e}"
                )

        return tuple(residuals), disagreements

    @staticmethod
    def _trivial_result(
        factor: Leaf, variable: Optional[str], remainder: Polynomial, reason: str
    ) -> FactorizationResult:
        return FactorizationResult(
            factor=factor,
            variable=variable,
            rational_roots=(),
            scale_constant=1,
            negated=False,
            remainder=remainder,
            remainder_degree=remainder.degree(),
            root_search_truncated=False,
            probe_residuals=(),
            probe_disagreements=0,
            details=reason,
        )


def factorize(
    polynomial: Polynomial, config: Optional[FactorizerConfig] = None
) -> Union[Leaf, Product]:
    """Удобная обёртка: UnivariateFactorizer(config).factorize(polynomial)."""
    return UnivariateFactorizer(config).factorize(polynomial)
