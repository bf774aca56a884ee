"""
Library Configuration — библиотечные константы fxmath

Единственное место, где задаются библиотечные (не per-call) настройки:
- Какой tier арифметики (safe/fast) используют операторы + - * / %
- Размер lookup-таблиц тригонометрии

Значения читаются один раз при создании конкретного fixed-point типа
(импорт модуля) и далее не меняются.
"""

from enum import Enum
from typing import Final


# =============================================================================
# ENUMS
# =============================================================================


class ArithmeticTier(str, Enum):
    """Семейство арифметических операций"""

    SAFE = "safe"  # Насыщение (saturation) при переполнении
    FAST = "fast"  # Без проверок переполнения (wrapping)


# =============================================================================
# LIBRARY-WIDE SETTINGS
# =============================================================================

# Tier, через который работают операторы + - * / % у FixedPoint.
# Явные safe_*/fast_* функции не зависят от этого флага.
OPERATOR_TIER: Final[ArithmeticTier] = ArithmeticTier.FAST

# Количество элементов в таблицах sin/tan на четверть периода [0, π/2]
TRIG_LUT_SIZE: Final[int] = 1 << 12

# Поддерживаемые ширины raw-значения (бит)
SUPPORTED_WIDTHS: Final[tuple[int, ...]] = (32, 64)

# Минимум дробных бит: LargePiBits = min(F, W - F) - 3 должен быть >= 1
MIN_FRAC_BITS: Final[int] = 4

# Минимум целых бит (включая знак): индекс таблицы LutSize = TRIG_LUT_SIZE - 1
# и интервал LutSize / (π/2) должны быть представимы
MIN_INTEGER_BITS: Final[int] = (TRIG_LUT_SIZE - 1).bit_length() + 1
