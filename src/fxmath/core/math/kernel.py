"""
Arithmetic Kernel — safe/fast арифметика над raw-значениями

Модуль реализует два полных семейства операций над знаковыми W-битными
целыми (raw-значениями fixed-point чисел):
- SAFE: обнаружение переполнения и насыщение до MaxValue/MinValue
- FAST: без проверок, результат заворачивается (two's complement wrapping)

Python int не ограничен по ширине, поэтому поведение W-битного машинного
целого эмулируется явно через wrap()/to_unsigned(). Все функции принимают
и возвращают raw-значения в диапазоне [fmt.raw_min, fmt.raw_max].

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат любой операции лежит в [raw_min, raw_max]
2. safe_add/safe_sub/safe_mul/safe_div никогда не заворачиваются
3. Деление и модуль на ноль — нарушение контракта (ContractViolation)
4. fast_div — псевдоним safe_div (дешёвого приближённого деления нет)
5. Все операции детерминированы и не используют float
"""

import math
from typing import Callable, NamedTuple

from fxmath.core.config import ArithmeticTier
from fxmath.core.contracts import require
from fxmath.core.domain.fixed_format import FixedFormat


RawBinaryOp = Callable[[int, int, FixedFormat], int]


# =============================================================================
# TWO'S COMPLEMENT HELPERS
# =============================================================================


def wrap(value: int, fmt: FixedFormat) -> int:
    """
    Приведение произвольного int к знаковому W-битному значению.

    Эквивалент static_cast<intW_t> для результата, не поместившегося в W бит.

    Examples:
        >>> wrap(2**31, FixedFormat(width=32, frac_bits=16))
        -2147483648
    """
    sign_bit = 1 << fmt.sign_shift
    return ((value + sign_bit) & fmt.all_mask) - sign_bit


def to_unsigned(value: int, fmt: FixedFormat) -> int:
    """Беззнаковая интерпретация W-битного значения."""
    return value & fmt.all_mask


def to_signed(value: int, fmt: FixedFormat) -> int:
    """Знаковая интерпретация W-битного беззнакового значения."""
    return wrap(value, fmt)


def count_leading_zeros(value: int, fmt: FixedFormat) -> int:
    """Количество ведущих нулевых бит в W-битном беззнаковом значении."""
    return fmt.width - to_unsigned(value, fmt).bit_length()


def trunc_mod(x: int, y: int) -> int:
    """
    Остаток с усечением к нулю (знак результата = знак делимого).

    Python `%` — floor-модуль, машинный `%` — truncating. Ядро везде
    использует машинную семантику.

    Examples:
        >>> trunc_mod(-7, 4)
        -3
        >>> -7 % 4
        1
    """
    r = abs(x) % abs(y)
    return -r if x < 0 else r


# =============================================================================
# КОНВЕРСИИ
# =============================================================================


def raw_from_int(value: int, fmt: FixedFormat) -> int:
    """Int(n) = n * 2^F. Переполнение — ответственность вызывающего (wrap)."""
    return wrap(value << fmt.frac_bits, fmt)


def raw_from_float(value: float, fmt: FixedFormat) -> int:
    """
    Float(v) = trunc(v * 2^F).

    Умножение на степень двойки в double точное, далее усечение к нулю.
    Значения вне диапазона насыщаются (машинный cast там не определён).

    Raises:
        ContractViolation: Если value — NaN/Inf
    """
    require(math.isfinite(value), f"Cannot convert non-finite float {value} to fixed point")
    # Для огромных конечных value произведение == inf: сравниваем до int()
    scaled = value * fmt.raw_one
    if scaled >= fmt.raw_max:
        return fmt.raw_max
    if scaled <= fmt.raw_min:
        return fmt.raw_min
    return int(scaled)


def raw_to_float(raw: int, fmt: FixedFormat) -> float:
    return raw / fmt.raw_one


def raw_to_int(raw: int, fmt: FixedFormat) -> int:
    """Арифметический сдвиг вправо на F (floor к -inf)."""
    return raw >> fmt.frac_bits


# =============================================================================
# SAFE TIER
# =============================================================================


def safe_add(x: int, y: int, fmt: FixedFormat) -> int:
    """
    Сложение с насыщением.

    Переполнение two's complement: операнды одного знака, знак суммы другой.
    """
    total = wrap(x + y, fmt)
    if (~(x ^ y) & (x ^ total)) < 0:
        return fmt.raw_max if x > 0 else fmt.raw_min
    return total


def safe_sub(x: int, y: int, fmt: FixedFormat) -> int:
    """
    Вычитание с насыщением.

    Переполнение: операнды разного знака, знак разности отличается от x.
    """
    diff = wrap(x - y, fmt)
    if ((x ^ y) & (x ^ diff)) < 0:
        return fmt.raw_min if x < 0 else fmt.raw_max
    return diff


class _PartialProducts(NamedTuple):
    """
    Сдвинутые частичные суммы произведения x * y.

    lohi, hilo, hihi: произведения целой и дробной половин операндов;
    lo_ret = (xlo * ylo) >> F и hi_ret = hihi << F уже выровнены к формату.
    """

    lo_ret: int
    lohi: int
    hilo: int
    hihi: int
    hi_ret: int


def _partial_products(x: int, y: int, fmt: FixedFormat) -> _PartialProducts:
    f = fmt.frac_bits

    xlo = x & fmt.fraction_mask
    xhi = x >> f
    ylo = y & fmt.fraction_mask
    yhi = y >> f

    lolo = to_unsigned(xlo * ylo, fmt)
    lohi = wrap(xlo * yhi, fmt)
    hilo = wrap(xhi * ylo, fmt)
    hihi = wrap(xhi * yhi, fmt)

    return _PartialProducts(
        lo_ret=lolo >> f,
        lohi=lohi,
        hilo=hilo,
        hihi=hihi,
        hi_ret=wrap(hihi << f, fmt),
    )


def safe_mul(x: int, y: int, fmt: FixedFormat) -> int:
    """
    Умножение с насыщением.

    Алгоритм:
        x = xhi * 2^F + xlo, y = yhi * 2^F + ylo
        x*y / 2^F = (xlo*ylo >> F) + xlo*yhi + xhi*ylo + (xhi*yhi << F)

    Каждая частичная сумма отслеживает перенос в знаковый бит. Насыщение
    определяется знаками операндов, знаком суммы и тем, является ли старшая
    часть hihi корректным знаковым расширением.
    """
    parts = _partial_products(x, y, fmt)
    overflow = False

    def add_tracking(a: int, b: int) -> int:
        nonlocal overflow
        total = wrap(a + b, fmt)
        overflow |= (a ^ b ^ total) < 0
        return total

    total = add_tracking(parts.lo_ret, parts.lohi)
    total = add_tracking(total, parts.hilo)
    total = add_tracking(total, parts.hi_ret)

    op_signs_equal = (x ^ y) >= 0

    if op_signs_equal:
        if total < 0 or (overflow and x > 0):
            return fmt.raw_max
    elif total > 0:
        return fmt.raw_min

    top_carry = parts.hihi >> fmt.frac_bits
    if top_carry != 0 and top_carry != -1:
        return fmt.raw_max if op_signs_equal else fmt.raw_min

    if not op_signs_equal:
        pos_op, neg_op = (y, x) if x <= y else (x, y)
        if total > neg_op and neg_op < -fmt.raw_one and pos_op > fmt.raw_one:
            return fmt.raw_min

    return total


def safe_div(x: int, y: int, fmt: FixedFormat) -> int:
    """
    Деление с насыщением и округлением к ближайшему.

    Длинное деление беззнаковых модулей:
    1. Делитель сдвигается вправо, пока младший полубайт нулевой
    2. Нормализованный цикл: остаток сдвигается влево на число ведущих нулей
       (но не дальше оставшегося бюджета бит), очередная «цифра» частного
       = остаток // делитель
    3. Цифра, не помещающаяся в оставшийся бюджет бит → насыщение
    4. Округление: частное вычисляется с одним лишним битом, +1, >> 1

    Raises:
        ContractViolation: Если y == 0
    """
    require(y != 0, "Divide by zero")

    all_mask = fmt.all_mask
    remainder = abs(x)
    divider = abs(y)
    quotient = 0
    bit_pos = fmt.frac_bits + 1
    same_sign = (x ^ y) >= 0

    while (divider & 0xF) == 0 and bit_pos >= 4:
        divider >>= 4
        bit_pos -= 4

    while remainder != 0 and bit_pos >= 0:
        shift = min(count_leading_zeros(remainder, fmt), bit_pos)
        remainder = (remainder << shift) & all_mask
        bit_pos -= shift

        digit, remainder = divmod(remainder, divider)
        quotient = (quotient + (digit << bit_pos)) & all_mask

        if digit & ~(all_mask >> bit_pos) & all_mask:
            return fmt.raw_max if same_sign else fmt.raw_min

        remainder = (remainder << 1) & all_mask
        bit_pos -= 1

    quotient = (quotient + 1) & all_mask
    result = to_signed(quotient >> 1, fmt)
    if not same_sign:
        result = wrap(-result, fmt)
    return result


def safe_mod(x: int, y: int, fmt: FixedFormat) -> int:
    """
    Остаток от деления (truncating, знак делимого).

    Единственный особый случай: MinValue % -1 → 0 (иначе переполнение).

    Raises:
        ContractViolation: Если y == 0
    """
    require(y != 0, "Modulo by zero")
    if x == fmt.raw_min and y == -1:
        return 0
    return trunc_mod(x, y)


# =============================================================================
# FAST TIER
# =============================================================================


def fast_add(x: int, y: int, fmt: FixedFormat) -> int:
    return wrap(x + y, fmt)


def fast_sub(x: int, y: int, fmt: FixedFormat) -> int:
    return wrap(x - y, fmt)


def fast_mul(x: int, y: int, fmt: FixedFormat) -> int:
    """Те же четыре частичных произведения, что и safe_mul, без учёта переполнения."""
    parts = _partial_products(x, y, fmt)
    return wrap(parts.lo_ret + parts.lohi + parts.hilo + parts.hi_ret, fmt)


def fast_div(x: int, y: int, fmt: FixedFormat) -> int:
    # TODO: найти более дешёвый приближённый алгоритм деления, проходящий
    # те же допуски, что и остальные fast-операции
    return safe_div(x, y, fmt)


def fast_mod(x: int, y: int, fmt: FixedFormat) -> int:
    require(y != 0, "Modulo by zero")
    return wrap(trunc_mod(x, y), fmt)


# =============================================================================
# УНАРНЫЕ ОПЕРАЦИИ
# =============================================================================


def negate(x: int, fmt: FixedFormat) -> int:
    """Насыщающее отрицание: -MinValue → MaxValue."""
    if x == fmt.raw_min:
        return fmt.raw_max
    return -x


def safe_abs(x: int, fmt: FixedFormat) -> int:
    """|x| с насыщением: |MinValue| → MaxValue."""
    if x == fmt.raw_min:
        return fmt.raw_max
    return abs(x)


def fast_abs(x: int, fmt: FixedFormat) -> int:
    """|x| через маску знака, |MinValue| остаётся MinValue."""
    mask = x >> fmt.sign_shift
    return wrap((x + mask) ^ mask, fmt)


# =============================================================================
# ВЫБОР TIER ДЛЯ ОПЕРАТОРОВ
# =============================================================================


class TierOperations(NamedTuple):
    """Набор бинарных raw-операций одного tier."""

    add: RawBinaryOp
    sub: RawBinaryOp
    mul: RawBinaryOp
    div: RawBinaryOp
    mod: RawBinaryOp


SAFE_OPERATIONS = TierOperations(safe_add, safe_sub, safe_mul, safe_div, safe_mod)
FAST_OPERATIONS = TierOperations(fast_add, fast_sub, fast_mul, fast_div, fast_mod)


def operations_for(tier: ArithmeticTier) -> TierOperations:
    """
    Операции, через которые работают перегруженные операторы.

    Args:
        tier: ArithmeticTier.SAFE или ArithmeticTier.FAST

    Returns:
        TierOperations выбранного семейства
    """
    if tier == ArithmeticTier.SAFE:
        return SAFE_OPERATIONS
    return FAST_OPERATIONS
