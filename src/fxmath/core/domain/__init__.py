"""
Domain value types.

Формат fixed-point числа, бандл его констант, сам числовой тип и Vector2.
"""

# Порядок импорта важен: constants тянет за собой fxmath.core.math
from fxmath.core.domain.fixed_format import FixedFormat
from fxmath.core.domain.constants import FixedConstants, build_constants
from fxmath.core.domain.fixed_point import Fixed32, Fixed64, FixedPoint
from fxmath.core.domain.vector2 import Vector2

__all__ = [
    # Format
    "FixedFormat",
    # Constants
    "FixedConstants",
    "build_constants",
    # Value types
    "FixedPoint",
    "Fixed32",
    "Fixed64",
    "Vector2",
]
