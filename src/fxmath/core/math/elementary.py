"""
Elementary Functions — элементарные функции над FixedPoint

Модуль содержит функции, не требующие таблиц и рядов:
- Явные safe/fast арифметические операции над значениями
- abs (safe/fast), sign, fraction, floor, ceiling, round (half-to-even)
- min/max, clamp, clamp01, repeat
- lerp (обычный, clamped, inverse), move_towards
- true_modulo (всегда неотрицательный для положительного делителя)
- approx_equal / approx_zero с игнорированием младших бит

Все функции принимают значения одного конкретного FixedPoint типа и
возвращают значение того же типа.
"""

from typing import TYPE_CHECKING, TypeVar

from fxmath.core.contracts import require
from fxmath.core.math import kernel

if TYPE_CHECKING:
    from fxmath.core.domain.fixed_point import FixedPoint

FX = TypeVar("FX", bound="FixedPoint")


# =============================================================================
# ЯВНЫЕ SAFE/FAST ОПЕРАЦИИ
# =============================================================================


def _same_type(x: "FixedPoint", y: "FixedPoint") -> None:
    if type(x) is not type(y):
        raise TypeError(f"Operands must share a format: {type(x).__name__} vs {type(y).__name__}")


def safe_add(x: FX, y: FX) -> FX:
    _same_type(x, y)
    return x._new(kernel.safe_add(x.raw, y.raw, x.fmt))


def safe_sub(x: FX, y: FX) -> FX:
    _same_type(x, y)
    return x._new(kernel.safe_sub(x.raw, y.raw, x.fmt))


def safe_mul(x: FX, y: FX) -> FX:
    _same_type(x, y)
    return x._new(kernel.safe_mul(x.raw, y.raw, x.fmt))


def safe_div(x: FX, y: FX) -> FX:
    _same_type(x, y)
    return x._new(kernel.safe_div(x.raw, y.raw, x.fmt))


def safe_mod(x: FX, y: FX) -> FX:
    _same_type(x, y)
    return x._new(kernel.safe_mod(x.raw, y.raw, x.fmt))


def fast_add(x: FX, y: FX) -> FX:
    _same_type(x, y)
    return x._new(kernel.fast_add(x.raw, y.raw, x.fmt))


def fast_sub(x: FX, y: FX) -> FX:
    _same_type(x, y)
    return x._new(kernel.fast_sub(x.raw, y.raw, x.fmt))


def fast_mul(x: FX, y: FX) -> FX:
    _same_type(x, y)
    return x._new(kernel.fast_mul(x.raw, y.raw, x.fmt))


def fast_div(x: FX, y: FX) -> FX:
    _same_type(x, y)
    return x._new(kernel.fast_div(x.raw, y.raw, x.fmt))


def fast_mod(x: FX, y: FX) -> FX:
    _same_type(x, y)
    return x._new(kernel.fast_mod(x.raw, y.raw, x.fmt))


# =============================================================================
# СРАВНЕНИЯ С ТОЛЕРАНТНОСТЬЮ
# =============================================================================


def approx_equal(x: FX, y: FX, ignore_bits: int | None = None) -> bool:
    """
    Равенство с игнорированием младших бит raw.

    Args:
        x: Первое значение
        y: Второе значение
        ignore_bits: Сколько младших бит игнорировать
            (default: EpsilonBits = F // 8)

    Returns:
        True если raw-значения совпадают после маскирования

    Raises:
        ContractViolation: Если ignore_bits вне [0, W)

    Examples:
        >>> approx_equal(Fixed64(1), Fixed64(3))
        True
        >>> approx_equal(Fixed64(1), Fixed64(0x1F), ignore_bits=4)
        False
    """
    _same_type(x, y)
    if ignore_bits is None:
        ignore_bits = x.fmt.epsilon_bits
    require(0 <= ignore_bits < x.fmt.width, f"Invalid ignore_bits {ignore_bits}")

    mask = -1 << ignore_bits
    return (x.raw & mask) == (y.raw & mask)


def approx_zero(x: FX, ignore_bits: int | None = None) -> bool:
    return approx_equal(x, type(x).ZERO, ignore_bits)


# =============================================================================
# MIN / MAX / CLAMP
# =============================================================================


def fx_min(x: FX, y: FX) -> FX:
    return x if x < y else y


def fx_max(x: FX, y: FX) -> FX:
    return x if x > y else y


def clamp(x: FX, min_value: FX, max_value: FX) -> FX:
    """Ограничение x диапазоном [min_value, max_value]."""
    if x < min_value:
        return min_value
    if x > max_value:
        return max_value
    return x


def clamp01(x: FX) -> FX:
    cls = type(x)
    return clamp(x, cls.ZERO, cls.ONE)


def repeat(x: FX, length: FX) -> FX:
    """
    Зацикливание x в диапазон [0, length].

    repeat(x, L) = clamp(x - floor(x / L) * L, 0, L)
    """
    cls = type(x)
    return clamp(x - floor(x / length) * length, cls.ZERO, length)


# =============================================================================
# ЗНАК И МОДУЛЬ
# =============================================================================


def sign(x: FX) -> FX:
    """-1, 0 или 1 того же типа."""
    cls = type(x)
    if x.raw == 0:
        return cls.ZERO
    if x.raw < 0:
        return cls.NEG_ONE
    return cls.ONE


def sign_to_int(x: "FixedPoint") -> int:
    if x.raw < 0:
        return -1
    if x.raw > 0:
        return 1
    return 0


def fx_abs(x: FX) -> FX:
    """|x| с насыщением: fx_abs(MinValue) == MaxValue."""
    return x._new(kernel.safe_abs(x.raw, x.fmt))


def fast_abs(x: FX) -> FX:
    """|x| без проверки: fast_abs(MinValue) == MinValue."""
    return x._new(kernel.fast_abs(x.raw, x.fmt))


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def fraction(x: FX) -> FX:
    """Дробная часть, всегда в [0, 1): fraction(-0.25) == 0.75."""
    return x._new(x.raw & x.fmt.fraction_mask)


def floor(x: FX) -> FX:
    return x._new(x.raw & x.fmt.whole_mask)


def ceiling(x: FX) -> FX:
    if (x.raw & x.fmt.fraction_mask) == 0:
        return x
    return safe_add(floor(x), type(x).ONE)


def fx_round(x: FX) -> FX:
    """
    Округление к ближайшему целому, половина — к чётному.

    Ровно половина: остаётся на ненулевом чётном целом, иначе вверх.
    Поэтому 0.5 → 1, а -0.5 → 0.

    Examples:
        >>> fx_round(Fixed64.from_float(6.5)).to_int()
        6
        >>> fx_round(Fixed64.from_float(7.5)).to_int()
        8
    """
    fmt = x.fmt
    one = type(x).ONE
    frac = x.raw & fmt.fraction_mask
    whole = floor(x)

    if frac < fmt.raw_half:
        return whole
    if frac > fmt.raw_half:
        return safe_add(whole, one)

    if whole.raw != 0 and (whole.raw & fmt.raw_one) == 0:
        return whole
    return safe_add(whole, one)


def floor_to_int(x: "FixedPoint") -> int:
    return floor(x).raw >> x.fmt.frac_bits


def ceiling_to_int(x: "FixedPoint") -> int:
    return ceiling(x).raw >> x.fmt.frac_bits


def round_to_int(x: "FixedPoint") -> int:
    return fx_round(x).raw >> x.fmt.frac_bits


# =============================================================================
# ИНТЕРПОЛЯЦИЯ
# =============================================================================


def lerp(a: FX, b: FX, t: FX) -> FX:
    return a + (b - a) * t


def lerp_clamped(a: FX, b: FX, t: FX) -> FX:
    return a + (b - a) * clamp01(t)


def lerp_inverse(a: FX, b: FX, value: FX) -> FX:
    """
    Обратная интерполяция: t ∈ [0, 1] такое, что lerp(a, b, t) ≈ value.

    При a == b возвращает 0.
    """
    if a == b:
        return type(a).ZERO
    t = (value - a) / (b - a)
    return clamp01(t)


def move_towards(value: FX, target: FX, delta: FX) -> tuple[FX, FX]:
    """
    Сдвиг value к target не более чем на delta.

    Args:
        value: Текущее значение
        target: Целевое значение
        delta: Максимальный шаг (неотрицательный)

    Returns:
        (result, amount_moved): новое значение и фактический сдвиг
        (result - value, со знаком)
    """
    result = target
    if value < target:
        result = fx_min(value + delta, target)
    elif value > target:
        result = fx_max(value - delta, target)

    return result, result - value


def true_modulo(a: FX, b: FX) -> FX:
    """Модуль со знаком делителя: true_modulo(-1, 3) == 2."""
    r = a % b
    return r + b if r.raw < 0 else r
