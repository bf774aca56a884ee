"""
FixedPoint — детерминированный fixed-point числовой тип

Value-тип с единственным полем raw (знаковое W-битное целое), значение
которого интерпретируется как raw / 2^F. Результаты бит-в-бит совпадают на
любой машине: ни одна операция не использует аппаратный float, кроме явных
конверсий from_float/to_float.

Конкретный тип объявляется подклассом с параметрами формата:

    class Fixed64(FixedPoint, width=64, frac_bits=32): ...

При создании подкласса формат валидируется (FixedFormat) и один раз
вычисляется бандл констант (FixedConstants), доступный как атрибуты класса
(Fixed64.PI, Fixed64.MAX_VALUE, ...).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. raw всегда в [MinValue, MaxValue] своего формата
2. Экземпляры immutable и hashable
3. Неявных числовых конверсий нет: смешивание с int/float или другим
   форматом в арифметике → TypeError
4. Операторы + - * / % работают через OPERATOR_TIER (один tier на библиотеку)
5. Унарный минус насыщается: -MinValue == MaxValue
"""

from dataclasses import fields
from typing import Any, ClassVar, TypeVar

from fxmath.core.config import OPERATOR_TIER
from fxmath.core.domain.constants import FixedConstants, build_constants
from fxmath.core.domain.fixed_format import FixedFormat
from fxmath.core.math.kernel import (
    negate,
    operations_for,
    raw_from_float,
    raw_from_int,
    raw_to_float,
    raw_to_int,
    safe_abs,
    wrap,
)

FX = TypeVar("FX", bound="FixedPoint")

_OPERATORS = operations_for(OPERATOR_TIER)


# =============================================================================
# FIXED POINT VALUE TYPE
# =============================================================================


class FixedPoint:
    """
    Базовый fixed-point тип.

    Сам по себе не инстанцируется: формат задаётся только в подклассе.
    Конструктор принимает raw bit pattern (без масштабирования), для
    значений используются from_int / from_float.
    """

    __slots__ = ("_raw",)

    fmt: ClassVar[FixedFormat]
    constants: ClassVar[FixedConstants]

    ZERO: ClassVar["FixedPoint"]
    ONE: ClassVar["FixedPoint"]
    HALF: ClassVar["FixedPoint"]
    NEG_ONE: ClassVar["FixedPoint"]
    MIN_VALUE: ClassVar["FixedPoint"]
    MAX_VALUE: ClassVar["FixedPoint"]
    ONE_OVER_MAX_VALUE: ClassVar["FixedPoint"]
    LOG2_MAX: ClassVar["FixedPoint"]
    LOG2_MIN: ClassVar["FixedPoint"]
    PI: ClassVar["FixedPoint"]
    TWO_PI: ClassVar["FixedPoint"]
    PI_OVER_2: ClassVar["FixedPoint"]
    ONE_OVER_PI: ClassVar["FixedPoint"]
    ONE_OVER_TWO_PI: ClassVar["FixedPoint"]
    LARGE_PI: ClassVar["FixedPoint"]
    LN2: ClassVar["FixedPoint"]
    LUT_SIZE: ClassVar["FixedPoint"]
    LUT_INTERVAL: ClassVar["FixedPoint"]
    DEG2RAD: ClassVar["FixedPoint"]
    RAD2DEG: ClassVar["FixedPoint"]

    def __init_subclass__(cls, *, width: int, frac_bits: int, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.fmt = FixedFormat(width=width, frac_bits=frac_bits)
        cls.constants = build_constants(cls.fmt)
        for field in fields(cls.constants):
            setattr(cls, field.name.upper(), cls._new(getattr(cls.constants, field.name)))

    def __init__(self, raw: int = 0) -> None:
        if not hasattr(type(self), "fmt"):
            raise TypeError("FixedPoint is abstract, use a concrete format such as Fixed64")
        if not isinstance(raw, int):
            raise TypeError(f"raw value must be int, got {type(raw).__name__}")
        self._raw = wrap(raw, self.fmt)

    @classmethod
    def _new(cls: type[FX], raw: int) -> FX:
        """Создание из raw, заведомо лежащего в диапазоне формата."""
        obj = object.__new__(cls)
        obj._raw = raw
        return obj

    # -------------------------------------------------------------------------
    # Конструирование
    # -------------------------------------------------------------------------

    @classmethod
    def from_raw(cls: type[FX], raw: int) -> FX:
        """Прямой bit pattern, усечённый до W бит."""
        return cls(raw)

    @classmethod
    def from_int(cls: type[FX], value: int) -> FX:
        """
        Int(n) = n * 2^F.

        Переполнение целой части — ответственность вызывающего (wrap).
        """
        return cls._new(raw_from_int(value, cls.fmt))

    @classmethod
    def from_float(cls: type[FX], value: float) -> FX:
        """
        Float(v) = trunc(v * 2^F), вне диапазона — насыщение.

        Raises:
            ContractViolation: Если value — NaN/Inf
        """
        return cls._new(raw_from_float(value, cls.fmt))

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    @property
    def raw(self) -> int:
        return self._raw

    def to_float(self) -> float:
        return raw_to_float(self._raw, self.fmt)

    def to_int(self) -> int:
        """Арифметический сдвиг вправо на F: floor к минус бесконечности."""
        return raw_to_int(self._raw, self.fmt)

    def __float__(self) -> float:
        return self.to_float()

    def __int__(self) -> int:
        return self.to_int()

    # -------------------------------------------------------------------------
    # Арифметика (через OPERATOR_TIER)
    # -------------------------------------------------------------------------

    def __add__(self: FX, other: object) -> FX:
        if type(other) is not type(self):
            return NotImplemented
        return self._new(_OPERATORS.add(self._raw, other._raw, self.fmt))

    def __sub__(self: FX, other: object) -> FX:
        if type(other) is not type(self):
            return NotImplemented
        return self._new(_OPERATORS.sub(self._raw, other._raw, self.fmt))

    def __mul__(self: FX, other: object) -> FX:
        if type(other) is not type(self):
            return NotImplemented
        return self._new(_OPERATORS.mul(self._raw, other._raw, self.fmt))

    def __truediv__(self: FX, other: object) -> FX:
        if type(other) is not type(self):
            return NotImplemented
        return self._new(_OPERATORS.div(self._raw, other._raw, self.fmt))

    def __mod__(self: FX, other: object) -> FX:
        if type(other) is not type(self):
            return NotImplemented
        return self._new(_OPERATORS.mod(self._raw, other._raw, self.fmt))

    def __neg__(self: FX) -> FX:
        return self._new(negate(self._raw, self.fmt))

    def __pos__(self: FX) -> FX:
        return self

    def __abs__(self: FX) -> FX:
        return self._new(safe_abs(self._raw, self.fmt))

    # -------------------------------------------------------------------------
    # Побитовые операции над raw
    # -------------------------------------------------------------------------

    def __and__(self: FX, other: object) -> FX:
        if type(other) is not type(self):
            return NotImplemented
        return self._new(self._raw & other._raw)

    def __or__(self: FX, other: object) -> FX:
        if type(other) is not type(self):
            return NotImplemented
        return self._new(self._raw | other._raw)

    def __xor__(self: FX, other: object) -> FX:
        if type(other) is not type(self):
            return NotImplemented
        return self._new(self._raw ^ other._raw)

    def __invert__(self: FX) -> FX:
        return self._new(~self._raw)

    def __lshift__(self: FX, shift: int) -> FX:
        """Сдвиг влево на n бит = умножение на 2^n (с заворачиванием)."""
        return self._new(wrap(self._raw << shift, self.fmt))

    def __rshift__(self: FX, shift: int) -> FX:
        return self._new(self._raw >> shift)

    # -------------------------------------------------------------------------
    # Сравнения
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._raw == other._raw

    def __ne__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._raw != other._raw

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._raw < other._raw

    def __le__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._raw <= other._raw

    def __gt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._raw > other._raw

    def __ge__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._raw >= other._raw

    def __hash__(self) -> int:
        return hash((self.fmt.width, self.fmt.frac_bits, self._raw))

    # -------------------------------------------------------------------------
    # Представление
    # -------------------------------------------------------------------------

    def __repr__(self) -> str:
        return f"{type(self).__name__}(raw={self._raw}, value={self.to_float()!r})"

    def __str__(self) -> str:
        return str(self.to_float())

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self._raw,))


# =============================================================================
# REFERENCE FORMATS
# =============================================================================


class Fixed32(FixedPoint, width=32, frac_bits=16):
    """Q16.16: 32-битное raw, 16 дробных бит."""

    __slots__ = ()


class Fixed64(FixedPoint, width=64, frac_bits=32):
    """Q32.32: 64-битное raw, 32 дробных бита."""

    __slots__ = ()
