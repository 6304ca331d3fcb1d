"""
Errors — таксономия исключений алгебраического ядра

Все ошибки наследуются от PolynomialAlgebraError, чтобы вызывающий код мог
перехватить их одним except. Дополнительные базовые классы (ValueError,
ZeroDivisionError, RuntimeError) сохраняют совместимость со стандартными
ожиданиями Python.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. FormatError никогда не исправляется "молча" — поднимается сразу
2. UnsupportedOperation отличима от ошибки разбора (не наследует ValueError)
3. InternalConsistencyError — сигнал дефекта алгоритма, не пользовательская ошибка
"""

from typing import Optional


# =============================================================================
# EXCEPTIONS
# =============================================================================


class PolynomialAlgebraError(Exception):
    """Базовый класс всех ошибок алгебраического ядра."""
    pass


class FormatError(PolynomialAlgebraError, ValueError):
    """
    Текст выражения нарушает грамматику.

    Примеры: "x^" (нет цифр экспоненты), "3**x" (двойной оператор),
    "2^3" (экспонента у числового литерала не поддерживается грамматикой).

    Attributes:
        fragment: Фрагмент (monomial chunk), в котором найдена ошибка
        position: Смещение ошибки в нормализованном тексте (или None)
    """

    def __init__(
        self,
        message: str,
        fragment: str = "",
        position: Optional[int] = None,
    ):
        super().__init__(message)
        self.fragment = fragment
        self.position = position


class UnsupportedOperation(PolynomialAlgebraError):
    """
    Операция сознательно не поддерживается (граница scope).

    Многомерная факторизация отклоняется, а не аппроксимируется.
    """
    pass


class DivisionByZero(PolynomialAlgebraError, ZeroDivisionError):
    """Нулевой знаменатель при построении дроби или деление на нулевую дробь."""
    pass


class InternalConsistencyError(PolynomialAlgebraError, RuntimeError):
    """
    Нарушение инварианта при реконструкции факторизации.

    Возникает, если scale/content не делятся нацело. Для корректного
    целочисленного входа не должно происходить никогда — это дефект,
    а не пользовательская ошибка.
    """
    pass
