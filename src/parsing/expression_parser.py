"""
Expression Parser — текст → Polynomial

Грамматика:
    polynomial  := signedTerm+
    signedTerm  := ('+'|'-') monomial
    monomial    := INT? factor*
    factor      := VAR ('^' INT)?      ; '*' между множителями опционален
    VAR         := letter (digit|'_')*

Алгоритм:
1. Нормализация тире (en dash, em dash, minus sign → '-'), удаление пробелов
2. Явный ведущий знак
3. Один линейный проход: куски от знака до следующего знака
4. Разбор каждого куска: коэффициент, затем var(^exp)?

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. '^' и цифры никогда не являются разделителями термов
2. Ошибки формата поднимаются сразу (FormatError), без "ремонта" ввода
3. Экспонента у числового литерала ("2^3") не поддерживается грамматикой
"""

from typing import Dict, Final, List, NamedTuple, Optional, Tuple

from src.core.domain.factor import Leaf, constant, leaf
from src.core.domain.polynomial import Polynomial
from src.core.domain.term import Term
from src.core.errors import FormatError

# =============================================================================
# CONSTANTS
# =============================================================================

# Unicode-варианты минуса: en dash, em dash, minus sign
DASH_VARIANTS: Final[Tuple[str, ...]] = ("–", "—", "−")

SIGNS: Final[str] = "+-"


def _is_digit(ch: str) -> bool:
    # str.isdigit() принимает и надстрочные цифры ('²'), которые int() не разбирает
    return "0" <= ch <= "9"


class ParseOutcome(NamedTuple):
    """Результат try_parse: ровно одно из полей не None."""

    polynomial: Optional[Polynomial]
    error: Optional[FormatError]


# =============================================================================
# FRONT END
# =============================================================================


def normalize(text: str) -> str:
    """
    Нормализация: тире → '-', удаление пробельных символов, явный знак.

    Examples:
        >>> normalize(" x^2 – 3x ")
        '+x^2-3x'
    """
    for dash in DASH_VARIANTS:
        text = text.replace(dash, "-")
    compact = "".join(text.split())
    if compact and compact[0] not in SIGNS:
        compact = "+" + compact
    return compact


def parse_expression(text: str) -> List[Tuple[int, str]]:
    """
    Разбиение текста на куски (sign, raw monomial text).

    Examples:
        >>> parse_expression("2xy^2 - y + 4")
        [(1, '2xy^2'), (-1, 'y'), (1, '4')]

    Raises:
        FormatError: пустой ввод или пустое тело монома ("x+-y", "x-")
    """
    if text is None:
        raise ValueError("expression must not be None")

    normalized = normalize(text)
    if not normalized:
        raise FormatError("Empty expression", fragment=text, position=0)

    chunks: List[Tuple[int, str]] = []
    i = 0
    while i < len(normalized):
        start = i
        sign = -1 if normalized[i] == "-" else 1
        i += 1
        while i < len(normalized) and normalized[i] not in SIGNS:
            i += 1

        body = normalized[start + 1:i]
        if not body:
            raise FormatError(
                f"Empty monomial after '{normalized[start]}' at position {start}",
                fragment=normalized[start:i],
                position=start,
            )
        chunks.append((sign, body))

    return chunks


# =============================================================================
# MONOMIAL
# =============================================================================


def parse_monomial(body: str, offset: int = 0) -> Tuple[int, Dict[str, int]]:
    """
    Разбор тела монома без знака.

    Args:
        body: Тело монома ("2xy^2", "3*x*y^2", "4")
        offset: Смещение body в нормализованном тексте (для сообщений об ошибках)

    Returns:
        (coefficient magnitude, variables). Без цифр коэффициента и хотя бы
        с одной переменной коэффициент равен 1.

    Raises:
        FormatError: при нарушении грамматики
    """
    i = 0
    n = len(body)

    while i < n and _is_digit(body[i]):
        i += 1
    has_coefficient = i > 0
    coefficient = int(body[:i]) if has_coefficient else 1

    variables: Dict[str, int] = {}
    expect_factor = False

    while i < n:
        ch = body[i]

        if ch == "*":
            if expect_factor or i == 0:
                raise FormatError(
                    f"Unexpected '*' at position {offset + i} in term '{body}'",
                    fragment=body,
                    position=offset + i,
                )
            expect_factor = True
            i += 1
            continue

        if ch == "^" and not variables:
            raise FormatError(
                f"Exponent on a numeric literal is not supported in term '{body}'",
                fragment=body,
                position=offset + i,
            )

        if not ch.isalpha():
            raise FormatError(
                f"Unexpected character '{ch}' at position {offset + i} in term '{body}'",
                fragment=body,
                position=offset + i,
            )

        name_start = i
        i += 1
        while i < n and (_is_digit(body[i]) or body[i] == "_"):
            i += 1
        name = body[name_start:i]

        exponent = 1
        if i < n and body[i] == "^":
            i += 1
            exp_start = i
            while i < n and _is_digit(body[i]):
                i += 1
            if i == exp_start:
                raise FormatError(
                    f"Missing exponent after '^' in term '{body}'",
                    fragment=body,
                    position=offset + exp_start - 1,
                )
            exponent = int(body[exp_start:i])

        variables[name] = variables.get(name, 0) + exponent
        expect_factor = False

    if expect_factor:
        raise FormatError(
            f"Dangling '*' at end of term '{body}'",
            fragment=body,
            position=offset + n - 1,
        )

    if not has_coefficient and not variables:
        raise FormatError(f"Invalid monomial '{body}'", fragment=body, position=offset)

    return coefficient, variables


# =============================================================================
# PUBLIC API
# =============================================================================


def parse_terms(text: str) -> List[Term]:
    """
    Сырые термы в порядке появления (до свёртки подобных).

    Examples:
        >>> [t.coefficient for t in parse_terms("  x  -  3x + 4 ")]
        [1, -3, 4]
    """
    normalized_offset = 0
    terms: List[Term] = []
    for sign, body in parse_expression(text):
        coefficient, variables = parse_monomial(body, offset=normalized_offset + 1)
        terms.append(Term(coefficient=sign * coefficient, variables=variables))
        normalized_offset += len(body) + 1
    return terms


def parse_polynomial(text: str) -> Polynomial:
    """
    Канонический полином из текста.

    Examples:
        >>> parse_polynomial("x + 2x + 4").canonical_string()
        '3x+4'
    """
    return Polynomial(terms=tuple(parse_terms(text)))


def try_parse(text: str) -> ParseOutcome:
    """Разбор без exception: ошибка формата возвращается в ParseOutcome.error."""
    try:
        return ParseOutcome(polynomial=parse_polynomial(text), error=None)
    except FormatError as e:
        return ParseOutcome(polynomial=None, error=e)


def parse_factor(text: str) -> Leaf:
    """
    Разбор строки одного множителя: "(x-2)", "(-1)", "3".

    Одна пара внешних скобок снимается; целое число даёт константный лист.
    """
    if text is None or not text.strip():
        raise FormatError("Empty factor string", fragment=text or "", position=0)

    trimmed = text.strip()
    if len(trimmed) >= 2 and trimmed[0] == "(" and trimmed[-1] == ")":
        trimmed = trimmed[1:-1].strip()

    unsigned = trimmed[1:] if trimmed[:1] in SIGNS else trimmed
    if unsigned and all(_is_digit(ch) for ch in unsigned):
        return constant(int(trimmed))

    return leaf(parse_polynomial(trimmed))
