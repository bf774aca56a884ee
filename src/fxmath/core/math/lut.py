"""
Lookup-Table Subsystem — таблицы sin/tan на четверть периода

Таблицы из TRIG_LUT_SIZE элементов покрывают угол [0, π/2]:
    angle_i = i * (π/2) / (N - 1), i = 0..N-1

Значения генерируются один раз из double-precision math.sin/math.tan и
хранятся как tuple raw-целых формата. Построение ленивое: при первом
обращении для формата, под блокировкой (once-cell), после чего таблицы
только читаются без синхронизации.

Также модуль содержит сведение угла к первой четверти (quadrant folding),
общее для sin/cos.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Таблица sin монотонно неубывающая, sin[0] == 0, sin[N-1] == One
2. Таблица tan: значения >= MaxValue (и асимптота) насыщаются до MaxValue
3. Для одного формата существует ровно один экземпляр TrigTables
4. Таблицы никогда не изменяются после построения
"""

import logging
import math
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from fxmath.core.config import TRIG_LUT_SIZE
from fxmath.core.domain.fixed_format import FixedFormat
from fxmath.core.math.kernel import raw_from_float, raw_to_float, trunc_mod

if TYPE_CHECKING:
    from fxmath.core.domain.constants import FixedConstants

logger = logging.getLogger(__name__)


# =============================================================================
# TABLES
# =============================================================================


@dataclass(frozen=True)
class TrigTables:
    """Immutable таблицы sin/tan одного формата (raw-значения)."""

    sin: tuple[int, ...]
    tan: tuple[int, ...]

    @property
    def size(self) -> int:
        return len(self.sin)


def _lut_angle(i: int, n: int) -> float:
    return (i * math.pi * 0.5) / (n - 1)


def build_sin_table(fmt: FixedFormat, size: int = TRIG_LUT_SIZE) -> tuple[int, ...]:
    return tuple(raw_from_float(math.sin(_lut_angle(i, size)), fmt) for i in range(size))


def build_tan_table(fmt: FixedFormat, size: int = TRIG_LUT_SIZE) -> tuple[int, ...]:
    """
    Таблица tan на [0, π/2].

    tan(π/2) в double конечен, но огромен: всё, что не помещается в формат
    (или получилось отрицательным), заменяется на MaxValue.
    """
    double_max = raw_to_float(fmt.raw_max, fmt)
    entries = []
    for i in range(size):
        t = math.tan(_lut_angle(i, size))
        if t > double_max or t < 0.0:
            entries.append(fmt.raw_max)
        else:
            entries.append(raw_from_float(t, fmt))
    return tuple(entries)


_TABLES: dict[FixedFormat, TrigTables] = {}
_TABLES_LOCK = threading.Lock()


def get_trig_tables(fmt: FixedFormat) -> TrigTables:
    """
    Таблицы формата, построенные не более одного раза за процесс.

    Args:
        fmt: Формат fixed-point числа

    Returns:
        Общий для всех вызовов экземпляр TrigTables
    """
    tables = _TABLES.get(fmt)
    if tables is not None:
        return tables

    with _TABLES_LOCK:
        tables = _TABLES.get(fmt)
        if tables is None:
            logger.debug("Building %d-entry trig lookup tables for %s", TRIG_LUT_SIZE, fmt)
            tables = TrigTables(sin=build_sin_table(fmt), tan=build_tan_table(fmt))
            _TABLES[fmt] = tables
    return tables


# =============================================================================
# QUADRANT FOLDING
# =============================================================================


class QuadrantAngle(NamedTuple):
    """Угол, сведённый к [0, π/2), и флаги отражения."""

    raw: int
    flip_h: bool  # Угол во второй половине своего полупериода: индекс зеркалится
    flip_v: bool  # Угол за π: результат меняет знак


def clamp_to_quadrant(raw: int, consts: "FixedConstants", fmt: FixedFormat) -> QuadrantAngle:
    """
    Сведение произвольного угла к первой четверти.

    1. Последовательные остатки по LargePi >> i (i = 0..LargePiBits-1):
       один остаток по огромному углу потерял бы точность
    2. Отрицательный угол переносится в [0, 2π) прибавлением 2π
    3. Вычитанием π и π/2 получаем [0, π) и [0, π/2)

    Args:
        raw: Угол в радианах (raw)
        consts: Константы формата
        fmt: Формат

    Returns:
        QuadrantAngle(raw, flip_h, flip_v)
    """
    clamped_two_pi = raw
    for i in range(fmt.large_pi_bits):
        clamped_two_pi = trunc_mod(clamped_two_pi, consts.large_pi >> i)
    if raw < 0:
        clamped_two_pi += consts.two_pi

    clamped_pi = clamped_two_pi
    while clamped_pi >= consts.pi:
        clamped_pi -= consts.pi

    clamped_pi_over_2 = clamped_pi
    while clamped_pi_over_2 >= consts.pi_over_2:
        clamped_pi_over_2 -= consts.pi_over_2

    return QuadrantAngle(
        raw=clamped_pi_over_2,
        flip_h=clamped_pi >= consts.pi_over_2,
        flip_v=clamped_two_pi >= consts.pi,
    )
