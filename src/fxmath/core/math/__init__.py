"""
Core math modules для fixed-point чисел

Детерминированные алгоритмы над raw-целыми: арифметика с насыщением,
корни, табличная тригонометрия, логарифмы и обратные функции.
"""

# Arithmetic kernel (raw-level)
from fxmath.core.math.kernel import (
    FAST_OPERATIONS,
    SAFE_OPERATIONS,
    TierOperations,
    operations_for,
)

# Elementary functions
from fxmath.core.math.elementary import (
    # Explicit tiers
    fast_add,
    fast_div,
    fast_mod,
    fast_mul,
    fast_sub,
    safe_add,
    safe_div,
    safe_mod,
    safe_mul,
    safe_sub,
    # Tolerant comparisons
    approx_equal,
    approx_zero,
    # Min / max / clamp
    clamp,
    clamp01,
    fx_max,
    fx_min,
    repeat,
    # Sign and magnitude
    fast_abs,
    fx_abs,
    sign,
    sign_to_int,
    # Rounding
    ceiling,
    ceiling_to_int,
    floor,
    floor_to_int,
    fraction,
    fx_round,
    round_to_int,
    # Interpolation
    lerp,
    lerp_clamped,
    lerp_inverse,
    move_towards,
    true_modulo,
)

# Square roots
from fxmath.core.math.sqrt import fast_sqrt, register_fast_sqrt, sqrt

# Lookup tables
from fxmath.core.math.lut import TrigTables, get_trig_tables

# Trigonometry
from fxmath.core.math.trig import cos, fast_cos, fast_sin, sin, tan

# Exponential / logarithm
from fxmath.core.math.exp_log import fx_pow, ln, log2, pow2

# Inverse trigonometry
from fxmath.core.math.inverse_trig import acos, asin, atan, atan2

__all__ = [
    # Kernel
    "TierOperations",
    "SAFE_OPERATIONS",
    "FAST_OPERATIONS",
    "operations_for",
    # Explicit tiers
    "safe_add",
    "safe_sub",
    "safe_mul",
    "safe_div",
    "safe_mod",
    "fast_add",
    "fast_sub",
    "fast_mul",
    "fast_div",
    "fast_mod",
    # Tolerant comparisons
    "approx_equal",
    "approx_zero",
    # Min / max / clamp
    "fx_min",
    "fx_max",
    "clamp",
    "clamp01",
    "repeat",
    # Sign and magnitude
    "sign",
    "sign_to_int",
    "fx_abs",
    "fast_abs",
    # Rounding
    "fraction",
    "floor",
    "ceiling",
    "fx_round",
    "floor_to_int",
    "ceiling_to_int",
    "round_to_int",
    # Interpolation
    "lerp",
    "lerp_clamped",
    "lerp_inverse",
    "move_towards",
    "true_modulo",
    # Square roots
    "sqrt",
    "fast_sqrt",
    "register_fast_sqrt",
    # Lookup tables
    "TrigTables",
    "get_trig_tables",
    # Trigonometry
    "sin",
    "fast_sin",
    "cos",
    "fast_cos",
    "tan",
    # Exponential / logarithm
    "log2",
    "ln",
    "pow2",
    "fx_pow",
    # Inverse trigonometry
    "atan",
    "acos",
    "asin",
    "atan2",
]
