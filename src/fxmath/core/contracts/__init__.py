"""
Contract Checks Module

Предусловия fixed-point операций (assertion-style, без recoverable errors).
"""

from .preconditions import ContractViolation, require

__all__ = [
    "ContractViolation",
    "require",
]
