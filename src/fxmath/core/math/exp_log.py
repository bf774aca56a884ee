"""
Exponential / Logarithm — log2, ln, pow2, fx_pow

- log2: нормализация в [1, 2) сдвигами с учётом целой части, затем F
  итераций возведения в квадрат (по одному дробному биту результата за шаг)
- ln: log2(x) * ln(2)
- pow2: разложение 2^x = 2^int * e^(frac * ln2), ряд Тейлора для дробной
  части до обнуления члена, целая часть — сдвигом
- fx_pow: base^exp = pow2(exp * log2(base))

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. log2(2^k) == k точно для представимых степеней двойки
2. log2/ln от неположительного аргумента — ContractViolation
3. pow2 насыщается: x >= Log2Max → MaxValue, x <= Log2Min → 0
4. fx_pow(0, exp) при exp <= 0 — ContractViolation (деление на ноль)
"""

from typing import TYPE_CHECKING, TypeVar

from fxmath.core.contracts import require
from fxmath.core.math import kernel
from fxmath.core.math.elementary import floor_to_int, fraction, safe_mul

if TYPE_CHECKING:
    from fxmath.core.domain.fixed_point import FixedPoint

FX = TypeVar("FX", bound="FixedPoint")


# =============================================================================
# LOGARITHMS
# =============================================================================


def log2(x: FX) -> FX:
    """
    Двоичный логарифм.

    Args:
        x: Положительное значение

    Returns:
        log2(x), ошибка ~1e-7 для Q32.32

    Raises:
        ContractViolation: Если x <= 0

    Examples:
        >>> log2(Fixed64.from_int(8)).to_int()
        3
    """
    require(x.raw > 0, "Logarithm of non-positive value")

    fmt = x.fmt
    raw_one = fmt.raw_one
    raw_two = raw_one << 1

    b = 1 << (fmt.frac_bits - 1)
    y = 0

    z = x.raw
    while z < raw_one:
        z <<= 1
        y -= raw_one
    while z >= raw_two:
        z >>= 1
        y += raw_one

    for _ in range(fmt.frac_bits):
        z = kernel.fast_mul(z, z, fmt)
        if z >= raw_two:
            z >>= 1
            y += b
        b >>= 1

    return x._new(y)


def ln(x: FX) -> FX:
    """Натуральный логарифм: log2(x) * ln(2)."""
    return x._new(kernel.fast_mul(log2(x).raw, type(x).constants.ln2, x.fmt))


# =============================================================================
# POWERS
# =============================================================================


def pow2(x: FX) -> FX:
    """
    2 в степени x.

    Args:
        x: Показатель (любой)

    Returns:
        2^x; для x >= Log2Max — MaxValue, для x <= Log2Min — 0.
        Для отрицательного x: 1 / 2^|x|
    """
    cls = type(x)
    if x.raw == 0:
        return cls.ONE

    negative = x.raw < 0
    if negative:
        x = -x

    if x == cls.ONE:
        return cls.ONE / cls.from_int(2) if negative else cls.from_int(2)
    if x >= cls.LOG2_MAX:
        return cls.ONE_OVER_MAX_VALUE if negative else cls.MAX_VALUE
    if x <= cls.LOG2_MIN:
        return cls.MAX_VALUE if negative else cls.ZERO

    integer_part = floor_to_int(x)
    frac = fraction(x)
    fmt = x.fmt
    ln2 = cls.constants.ln2

    # e^(frac * ln2) = sum (frac * ln2)^i / i!
    result = cls.ONE
    term = cls.ONE
    i = 1
    while term.raw != 0:
        scaled = kernel.fast_mul(kernel.fast_mul(frac.raw, term.raw, fmt), ln2, fmt)
        term = cls._new(scaled) / cls.from_int(i)
        result += term
        i += 1

    result = cls._new(kernel.wrap(result.raw << integer_part, fmt))
    if negative:
        result = cls.ONE / result
    return result


def fx_pow(base: FX, exp: FX) -> FX:
    """
    base в степени exp.

    Args:
        base: Основание (>= 0)
        exp: Показатель

    Returns:
        base^exp; fx_pow(1, e) == 1, fx_pow(b, 0) == 1, fx_pow(0, e > 0) == 0

    Raises:
        ContractViolation: Если base == 0 и exp <= 0
    """
    cls = type(base)
    if base == cls.ONE:
        return cls.ONE
    if exp.raw == 0:
        return cls.ONE
    if base.raw == 0:
        require(exp.raw > 0, "Zero raised to a non-positive power")
        return cls.ZERO

    return pow2(safe_mul(exp, log2(base)))
