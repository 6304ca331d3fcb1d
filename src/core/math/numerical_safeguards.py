"""
Numerical Safeguards — float-примитивы для диагностического probe

Модуль используется ТОЛЬКО для необязательной проверки корней в float:
- Распознавание NaN/Inf
- Epsilon-сравнения float с учётом машинной точности
- Float-вычисление полинома по схеме Горнера

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результаты этого модуля никогда не влияют на возвращаемые алгебраические значения
2. Переполнение при вычислении даёт NaN (horner_float) или Inf (масштаб), а не исключение
3. Float сравнения всегда учитывают машинную точность
"""

import math
from typing import Final, Sequence

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Относительная толерантность probe (масштабируется величиной коэффициентов)
EPS_PROBE_REL: Final[float] = 1e-9

# Абсолютная толерантность probe
EPS_PROBE_ABS: Final[float] = 1e-9


# =============================================================================
# NaN/Inf
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Examples:
        >>> is_valid_float(1.0)
        True
        >>> is_valid_float(float('nan'))
        False
        >>> is_valid_float(float('inf'))
        False
    """
    return math.isfinite(value)


# =============================================================================
# EPSILON-СРАВНЕНИЯ
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_PROBE_REL,
    abs_tol: float = EPS_PROBE_ABS,
) -> bool:
    """
    Сравнение float с относительной и абсолютной толерантностью.

    NaN/Inf никогда не считаются близкими.

    Raises:
        ValueError: если толерантности отрицательные
    """
    if rel_tol < 0 or abs_tol < 0:
        raise ValueError(f"tolerances must be non-negative, got rel={rel_tol}, abs={abs_tol}")

    if not is_valid_float(a) or not is_valid_float(b):
        return False

    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


# =============================================================================
# FLOAT HORNER
# =============================================================================


def horner_float(coefficients_descending: Sequence[float], x: float) -> float:
    """
    Float-значение полинома (коэффициенты по убыванию степеней).

    Переполнение (float-арифметика даёт inf, а не исключение) возвращается
    как NaN, чтобы probe мог его распознать.

    Examples:
        >>> horner_float([1.0, -5.0, 6.0], 2.0)
        0.0
        >>> horner_float([1e308, 1e308], 10.0)
        nan
    """
    acc = 0.0
    for c in coefficients_descending:
        acc = acc * x + c
        if not math.isfinite(acc):
            return math.nan
    return acc


def probe_residual_scale(coefficients_descending: Sequence[float], x: float) -> float:
    """
    Масштаб для относительной оценки residual: Σ |a_k| |x|^k.

    Используется как reference-величина в is_close(residual / scale, 0).
    При переполнении возвращает inf.
    """
    scale = 0.0
    for c in coefficients_descending:
        scale = scale * abs(x) + abs(c)
        if math.isinf(scale):
            return math.inf
    return scale if scale > 0 else 1.0
