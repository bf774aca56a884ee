"""
Inverse Trigonometry — atan, acos, asin, atan2

- atan: ряд Эйлера atan(x) = x/(1+x²) * Σ term_k, где
  term_k = term_{k-1} * 2k·x² / ((2k+1)(1+x²)). Для |x| > 1 используется
  atan(x) = π/2 - atan(1/x), отрицательные аргументы отражаются.
- acos: atan(sqrt(1 - x²) / x) со сдвигом на π для x < 0
- asin: π/2 - acos(x)
- atan2: рациональное приближение atan(z) ≈ z / (1 + 0.28·z²), ошибка ~0.005

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. atan(0) == 0, acos(1) == 0, acos(0) == π/2, acos(-1) == π
2. acos/asin вне [-1, 1] — ContractViolation
3. atan2 на осях возвращает точные 0, ±π/2, ±π
"""

from typing import TYPE_CHECKING, Final, TypeVar

from fxmath.core.contracts import require
from fxmath.core.math.elementary import fx_abs, safe_add, safe_mul, safe_sub
from fxmath.core.math.sqrt import sqrt

if TYPE_CHECKING:
    from fxmath.core.domain.fixed_point import FixedPoint

FX = TypeVar("FX", bound="FixedPoint")

# Коэффициент рационального приближения atan2
ATAN2_COEFFICIENT: Final[float] = 0.28

# Число итераций ряда atan: F - 4
_ATAN_ITERATION_MARGIN: Final[int] = 4


# =============================================================================
# ATAN
# =============================================================================


def atan(x: FX) -> FX:
    """
    Арктангенс через быстро сходящийся ряд Эйлера.

    Args:
        x: Любое значение

    Returns:
        atan(x) в (-π/2, π/2), ошибка ~1e-7 для Q32.32
    """
    cls = type(x)
    if x == cls.ZERO:
        return cls.ZERO

    negative = x < cls.ZERO
    if negative:
        x = -x

    two = cls.from_int(2)
    three = cls.from_int(3)

    invert = x > cls.ONE
    if invert:
        x = cls.ONE / x

    result = cls.ONE
    term = cls.ONE

    x_sq = x * x
    x_sq2 = x_sq * two
    x_sq_plus_one = x_sq + cls.ONE
    x_sq12 = x_sq_plus_one * two
    dividend = x_sq2
    divisor = x_sq_plus_one * three

    for _ in range(x.fmt.frac_bits - _ATAN_ITERATION_MARGIN):
        term *= dividend / divisor
        result += term
        dividend += x_sq2
        divisor += x_sq12
        if term == cls.ZERO:
            break

    result = result * x / x_sq_plus_one

    if invert:
        result = cls.PI_OVER_2 - result
    if negative:
        result = -result
    return result


# =============================================================================
# ACOS / ASIN
# =============================================================================


def acos(x: FX) -> FX:
    """
    Арккосинус.

    Args:
        x: Значение в [-1, 1]

    Returns:
        acos(x) в [0, π]

    Raises:
        ContractViolation: Если x вне [-1, 1]
    """
    cls = type(x)
    require(cls.NEG_ONE <= x <= cls.ONE, f"acos argument out of range: {x}")

    if x == cls.ZERO:
        return cls.PI_OVER_2

    result = atan(sqrt(cls.ONE - x * x) / x)
    if x < cls.ZERO:
        return result + cls.PI
    return result


def asin(x: FX) -> FX:
    """Арксинус: π/2 - acos(x)."""
    return type(x).PI_OVER_2 - acos(x)


# =============================================================================
# ATAN2
# =============================================================================


def atan2(y: FX, x: FX) -> FX:
    """
    Угол вектора (x, y) в радианах.

    Быстрое рациональное приближение (ошибка ~0.005). Если знаменатель
    приближения насыщается, результат — ±π/2 по знаку y.

    Args:
        y: Ордината
        x: Абсцисса

    Returns:
        Угол в [-π, π]; atan2(0, 0) == 0
    """
    cls = type(y)
    if type(x) is not cls:
        raise TypeError(f"Operands must share a format: {cls.__name__} vs {type(x).__name__}")

    if x.raw == 0:
        if y.raw > 0:
            return cls.PI_OVER_2
        if y.raw == 0:
            return cls.ZERO
        return -cls.PI_OVER_2

    z = y / x
    base = cls.from_float(ATAN2_COEFFICIENT)

    if safe_add(cls.ONE, safe_mul(safe_mul(base, z), z)) == cls.MAX_VALUE:
        return -cls.PI_OVER_2 if y < cls.ZERO else cls.PI_OVER_2

    if fx_abs(z) < cls.ONE:
        angle = z / (cls.ONE + safe_mul(base, safe_mul(z, z)))
        if x.raw < 0:
            if y.raw < 0:
                return safe_sub(angle, cls.PI)
            return safe_add(angle, cls.PI)
    else:
        angle = safe_sub(cls.PI_OVER_2, z / safe_add(safe_mul(z, z), base))
        if y.raw < 0:
            return safe_sub(angle, cls.PI)
    return angle
