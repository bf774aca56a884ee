"""
Trigonometry — sin/cos/tan через lookup-таблицы

sin и cos сводят угол к первой четверти (clamp_to_quadrant) и читают
таблицу sin; tan сводит угол к [0, π/2] по модулю π и читает таблицу tan.

Варианты:
- sin/cos/tan: линейная интерполяция между соседними записями таблицы
- fast_sin/fast_cos: ближайшая (усечённая) запись без интерполяции

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. sin(0) == 0, sin(π/2) == 1, sin(π) == 0, sin(3π/2) == -1, sin(2π) == 0 точно
2. cos(0) == 1, cos(π) == -1 точно
3. tan(0) == tan(±π) == 0; tan вблизи асимптоты насыщается через таблицу
4. Индекс следующей записи никогда не выходит за [0, N-1]
"""

from typing import TYPE_CHECKING, TypeVar

from fxmath.core.math import kernel
from fxmath.core.math.elementary import fx_round, sign_to_int
from fxmath.core.math.lut import clamp_to_quadrant, get_trig_tables

if TYPE_CHECKING:
    from fxmath.core.domain.fixed_point import FixedPoint

FX = TypeVar("FX", bound="FixedPoint")


# =============================================================================
# HELPERS
# =============================================================================


def _lookup(table: tuple[int, ...], index: int, mirrored: bool) -> int:
    if mirrored:
        return table[len(table) - 1 - index]
    return table[index]


def _interpolate(x: FX, angle_raw: int, table: tuple[int, ...], mirrored: bool) -> int:
    """
    Линейная интерполяция по таблице.

    Индекс = angle * LutInterval; ближайшая запись берётся по округлённому
    индексу, соседняя — в направлении ошибки округления.

    Args:
        x: Значение нужного типа (источник формата и констант)
        angle_raw: Угол в [0, π/2] (raw)
        table: Таблица sin или tan
        mirrored: Читать таблицу с конца

    Returns:
        Интерполированное raw-значение (без учёта знака четверти)
    """
    fmt = x.fmt
    last = len(table) - 1

    scaled = x._new(kernel.fast_mul(angle_raw, type(x).constants.lut_interval, fmt))
    rounded = fx_round(scaled)
    error = x._new(kernel.fast_sub(scaled.raw, rounded.raw, fmt))

    index = min(max(rounded.raw >> fmt.frac_bits, 0), last)
    next_index = min(max(index + sign_to_int(error), 0), last)

    nearest = _lookup(table, index, mirrored)
    next_nearest = _lookup(table, next_index, mirrored)

    step = kernel.fast_abs(kernel.fast_sub(nearest, next_nearest, fmt), fmt)
    delta = kernel.fast_mul(error.raw, step, fmt)
    return kernel.fast_add(nearest, -delta if mirrored else delta, fmt)


def _cos_to_sin_angle(x: "FixedPoint") -> int:
    # cos(x) = sin(x + π/2); для положительных углов сдвиг на -3π/2 не переполняется
    consts = type(x).constants
    shift = -consts.pi - consts.pi_over_2 if x.raw > 0 else consts.pi_over_2
    return kernel.wrap(x.raw + shift, x.fmt)


# =============================================================================
# SIN / COS
# =============================================================================


def sin(x: FX) -> FX:
    """
    Синус с линейной интерполяцией по таблице.

    Args:
        x: Угол в радианах (любой, включая большие по модулю)

    Returns:
        sin(x), абсолютная ошибка ~1e-6 для Q32.32

    Examples:
        >>> sin(Fixed64.PI_OVER_2) == Fixed64.ONE
        True
    """
    fmt = x.fmt
    quadrant = clamp_to_quadrant(x.raw, type(x).constants, fmt)
    tables = get_trig_tables(fmt)

    value = _interpolate(x, quadrant.raw, tables.sin, quadrant.flip_h)
    if quadrant.flip_v:
        value = kernel.wrap(-value, fmt)
    return x._new(value)


def fast_sin(x: FX) -> FX:
    """Синус по ближайшей записи таблицы, без интерполяции (ошибка ~1e-3)."""
    fmt = x.fmt
    quadrant = clamp_to_quadrant(x.raw, type(x).constants, fmt)
    table = get_trig_tables(fmt).sin

    scaled = kernel.fast_mul(quadrant.raw, type(x).constants.lut_interval, fmt)
    index = min(scaled >> fmt.frac_bits, len(table) - 1)

    value = _lookup(table, index, quadrant.flip_h)
    if quadrant.flip_v:
        value = kernel.negate(value, fmt)
    return x._new(value)


def cos(x: FX) -> FX:
    return sin(x._new(_cos_to_sin_angle(x)))


def fast_cos(x: FX) -> FX:
    return fast_sin(x._new(_cos_to_sin_angle(x)))


# =============================================================================
# TAN
# =============================================================================


def tan(x: FX) -> FX:
    """
    Тангенс с линейной интерполяцией по таблице.

    Угол сводится к [0, π/2] по модулю π с отслеживанием знака.
    Рядом с π/2 результат насыщается до MaxValue (с соответствующим знаком).

    Args:
        x: Угол в радианах

    Returns:
        tan(x)
    """
    fmt = x.fmt
    consts = type(x).constants

    clamped = kernel.trunc_mod(x.raw, consts.pi)
    flip = False
    if clamped < 0:
        flip = True
        clamped = -clamped

    if clamped > consts.pi_over_2:
        flip = not flip
        clamped = consts.pi_over_2 - (clamped - consts.pi_over_2)

    value = _interpolate(x, clamped, get_trig_tables(fmt).tan, mirrored=False)
    if flip:
        value = kernel.wrap(-value, fmt)
    return x._new(value)
