"""
fxmath — детерминированная fixed-point арифметика и математика

Бит-в-бит воспроизводимые вычисления для lockstep-симуляций: один и тот же
вход даёт один и тот же raw-результат на любой машине.

    >>> from fxmath import Fixed64, sin
    >>> sin(Fixed64.PI_OVER_2) == Fixed64.ONE
    True
"""

from fxmath.core.config import OPERATOR_TIER, TRIG_LUT_SIZE, ArithmeticTier
from fxmath.core.contracts import ContractViolation, require
from fxmath.core.domain import (
    Fixed32,
    Fixed64,
    FixedConstants,
    FixedFormat,
    FixedPoint,
    Vector2,
)
from fxmath.core.math import *  # noqa: F403
from fxmath.core.math import __all__ as _math_all

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "ArithmeticTier",
    "OPERATOR_TIER",
    "TRIG_LUT_SIZE",
    # Contracts
    "ContractViolation",
    "require",
    # Value types
    "FixedFormat",
    "FixedConstants",
    "FixedPoint",
    "Fixed32",
    "Fixed64",
    "Vector2",
    # Math
    *_math_all,
]
