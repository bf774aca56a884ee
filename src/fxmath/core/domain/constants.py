"""
FixedConstants — константы одной инстанциации fixed-point типа

Константы вычисляются один раз при создании конкретного типа (FixedPoint
подкласса) из замкнутых выражений или float-семян и далее не изменяются.
Бандл передаётся явно (через класс типа), а не хранится в глобальном состоянии.

Все значения — raw-целые данного формата.
"""

import math
from dataclasses import dataclass

from fxmath.core.config import OPERATOR_TIER, TRIG_LUT_SIZE
from fxmath.core.domain.fixed_format import FixedFormat
from fxmath.core.math.kernel import operations_for, raw_from_float, raw_from_int, safe_div


# =============================================================================
# CONSTANTS BUNDLE
# =============================================================================


@dataclass(frozen=True)
class FixedConstants:
    """Immutable набор raw-констант формата."""

    zero: int
    one: int
    half: int
    neg_one: int
    min_value: int
    max_value: int
    one_over_max_value: int

    # Границы Pow2: 2^x для x >= log2_max насыщается
    log2_max: int
    log2_min: int

    pi: int
    two_pi: int
    pi_over_2: int
    one_over_pi: int
    one_over_two_pi: int
    large_pi: int
    ln2: int

    # Lookup-таблицы тригонометрии: индекс = угол * lut_interval
    lut_size: int
    lut_interval: int

    deg2rad: int
    rad2deg: int


def build_constants(fmt: FixedFormat) -> FixedConstants:
    """
    Вычисление констант формата.

    Производные константы (OneOverMaxValue, Deg2Rad, Rad2Deg, LutInterval)
    считаются той же арифметикой, что и операторы типа (OPERATOR_TIER).

    Args:
        fmt: Формат fixed-point числа

    Returns:
        FixedConstants для данного формата
    """
    ops = operations_for(OPERATOR_TIER)

    def from_float(value: float) -> int:
        return raw_from_float(value, fmt)

    one = fmt.raw_one
    pi_over_2 = from_float(math.pi / 2)
    two_pi = from_float(math.pi * 2)
    one_over_two_pi = from_float(1.0 / (2 * math.pi))
    lut_size = raw_from_int(TRIG_LUT_SIZE - 1, fmt)

    return FixedConstants(
        zero=0,
        one=one,
        half=fmt.raw_half,
        neg_one=-one,
        min_value=fmt.raw_min,
        max_value=fmt.raw_max,
        one_over_max_value=safe_div(one, fmt.raw_max, fmt),
        log2_max=raw_from_int(fmt.integer_bits - 1, fmt),
        log2_min=raw_from_int(-fmt.integer_bits, fmt),
        pi=from_float(math.pi),
        two_pi=two_pi,
        pi_over_2=pi_over_2,
        one_over_pi=from_float(1.0 / math.pi),
        one_over_two_pi=one_over_two_pi,
        large_pi=from_float(math.pi * (1 << fmt.large_pi_bits)),
        ln2=from_float(math.log(2)),
        lut_size=lut_size,
        lut_interval=ops.div(lut_size, pi_over_2, fmt),
        deg2rad=ops.mul(from_float(1.0 / 360.0), two_pi, fmt),
        rad2deg=ops.mul(one_over_two_pi, raw_from_int(360, fmt), fmt),
    )
