"""
Bit-Level Square Root — точный и быстрый квадратный корень

Два варианта:
- sqrt: побитовый restoring-алгоритм (digit-by-digit) на беззнаковом raw.
  Первая фаза даёт целочисленный корень raw, вторая продолжает вычисление
  ещё на F бит точности с расширенным остатком; в конце — округление вверх,
  если остаток больше половины младшего разряда.
- fast_sqrt: non-restoring (add/shift) приближение с фиксированным числом
  итераций. Точен до малой дробной ошибки для небольших значений; для
  очень больших (> ~1e9) абсолютная ошибка растёт до тысяч raw-единиц.

fast_sqrt выбирает реализацию по формату: для зарегистрированных форматов
используется специализированная стратегия (для Q16.16 — 32-битная рабочая
точность), для остальных — общий алгоритм с 64-битной рабочей точностью.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. sqrt(n*n) == n точно для малых неотрицательных целых n
2. Отрицательный аргумент — нарушение контракта (ContractViolation)
3. Результат всегда неотрицателен
"""

import logging
from typing import TYPE_CHECKING, Callable, Final, TypeVar

from fxmath.core.contracts import require
from fxmath.core.domain.fixed_format import FixedFormat

if TYPE_CHECKING:
    from fxmath.core.domain.fixed_point import FixedPoint

logger = logging.getLogger(__name__)

FX = TypeVar("FX", bound="FixedPoint")

RawSqrtStrategy = Callable[[int, FixedFormat], int]

# Рабочая точность общего fast_sqrt
_FAST_SQRT_WORK_BITS: Final[int] = 64

# Порог остановки цикла fast_sqrt (b > 0x40)
_FAST_SQRT_STOP_BIT: Final[int] = 0x40


# =============================================================================
# ТОЧНЫЙ КОРЕНЬ
# =============================================================================


def _restoring_pass(num: int, result: int, bit: int) -> tuple[int, int]:
    """Один проход digit-by-digit алгоритма: bit уменьшается на 2 разряда за шаг."""
    while bit != 0:
        if num >= result + bit:
            num -= result + bit
            result = (result >> 1) + bit
        else:
            result >>= 1
        bit >>= 2
    return num, result


def raw_sqrt(raw: int, fmt: FixedFormat) -> int:
    """
    Точный корень над raw-значением.

    Args:
        raw: Неотрицательное raw-значение
        fmt: Формат

    Returns:
        raw-значение sqrt(raw / 2^F) * 2^F
    """
    f = fmt.frac_bits
    num = raw

    bit = 1 << (fmt.width - 2)
    while bit > num:
        bit >>= 2

    num, result = _restoring_pass(num, 0, bit)

    # Расширение остатка: ещё F/2 итераций дают F/2 дробных бит результата
    if num > (1 << f) - 1:
        num -= result
        num = (num << f) - fmt.raw_half
        result = (result << f) + fmt.raw_half
    else:
        num <<= f
        result <<= f

    num, result = _restoring_pass(num, result, 1 << (f - 2))

    if num > result:
        result += 1

    return result


def sqrt(x: FX) -> FX:
    """
    Точный квадратный корень.

    Raises:
        ContractViolation: Если x < 0
    """
    require(x.raw >= 0, "Square root of negative value")
    return x._new(raw_sqrt(x.raw, x.fmt))


# =============================================================================
# БЫСТРЫЙ КОРЕНЬ
# =============================================================================


def _fast_sqrt_loop(r: int, b: int, work_mask: int) -> int:
    q = 0
    while b > _FAST_SQRT_STOP_BIT:
        t = q + b
        if r >= t:
            r -= t
            q = t + b  # q += 2*b
        r = (r << 1) & work_mask
        b >>= 1
    return q


def _fast_sqrt_generic(raw: int, fmt: FixedFormat) -> int:
    work_mask = (1 << _FAST_SQRT_WORK_BITS) - 1
    b = (1 << (_FAST_SQRT_WORK_BITS - 2)) >> (_FAST_SQRT_WORK_BITS - fmt.width)
    q = _fast_sqrt_loop(raw, b, work_mask)
    return q >> ((fmt.width - fmt.frac_bits) // 2)


def _fast_sqrt_q16_16(raw: int, fmt: FixedFormat) -> int:
    # 32-битная рабочая точность: остаток заворачивается на 32 битах
    q = _fast_sqrt_loop(raw, 0x40000000, 0xFFFFFFFF)
    return q >> 8


_FAST_SQRT_STRATEGIES: dict[FixedFormat, RawSqrtStrategy] = {}


def register_fast_sqrt(fmt: FixedFormat, strategy: RawSqrtStrategy) -> None:
    """
    Регистрация специализированного fast_sqrt для формата.

    Args:
        fmt: Формат, для которого используется стратегия
        strategy: Функция (raw, fmt) -> raw
    """
    logger.debug("fast_sqrt strategy for %s: %s", fmt, strategy.__name__)
    _FAST_SQRT_STRATEGIES[fmt] = strategy


def fast_sqrt_strategy(fmt: FixedFormat) -> RawSqrtStrategy:
    return _FAST_SQRT_STRATEGIES.get(fmt, _fast_sqrt_generic)


def fast_sqrt(x: FX) -> FX:
    """
    Быстрый приближённый квадратный корень.

    Более чем вдвое быстрее sqrt ценой точности для больших чисел.

    Raises:
        ContractViolation: Если x < 0
    """
    if x.raw == 0:
        return type(x).ZERO
    require(x.raw > 0, "Square root of negative value")
    strategy = fast_sqrt_strategy(x.fmt)
    return x._new(strategy(x.raw, x.fmt))


register_fast_sqrt(FixedFormat(width=32, frac_bits=16), _fast_sqrt_q16_16)
