"""
FixedFormat — параметры fixed-point представления

Immutable Pydantic модель, описывающая конкретную инстанциацию типа:
- width (W): полная ширина знакового raw-значения в битах
- frac_bits (F): количество дробных бит

Значение = raw / 2^F, raw ∈ [-2^(W-1), 2^(W-1) - 1].

Все битовые маски и пороги, которые используют арифметическое ядро и
математические функции, выводятся из (W, F) здесь и больше нигде.
"""

from pydantic import BaseModel, Field, field_validator, model_validator

from fxmath.core.config import MIN_FRAC_BITS, MIN_INTEGER_BITS, SUPPORTED_WIDTHS


# =============================================================================
# FIXED FORMAT MODEL
# =============================================================================


class FixedFormat(BaseModel):
    """
    Формат fixed-point числа.

    Immutable модель (frozen=True): формат фиксируется при создании типа
    и никогда не изменяется. Hashable, поэтому используется как ключ кэшей
    (lookup-таблицы, стратегии sqrt).
    """

    width: int = Field(..., description="Полная ширина raw-значения в битах (W)")
    frac_bits: int = Field(..., description="Количество дробных бит (F)")

    model_config = {"frozen": True}

    @field_validator("width")
    @classmethod
    def validate_width(cls, v: int) -> int:
        """Ширина должна совпадать с одной из знаковых машинных ширин."""
        if v not in SUPPORTED_WIDTHS:
            raise ValueError(f"width {v} not supported, expected one of {SUPPORTED_WIDTHS}")
        return v

    @field_validator("frac_bits")
    @classmethod
    def validate_frac_bits(cls, v: int) -> int:
        """
        Количество дробных бит: чётное и не меньше MIN_FRAC_BITS.

        Чётность нужна для битового sqrt (половина дробных бит на результат).
        """
        if v % 2 != 0:
            raise ValueError(f"frac_bits must be even, got {v}")
        if v < MIN_FRAC_BITS:
            raise ValueError(f"frac_bits must be >= {MIN_FRAC_BITS}, got {v}")
        return v

    @model_validator(mode="after")
    def validate_integer_bits(self) -> "FixedFormat":
        """Целая часть (включая знак) должна вмещать индекс lookup-таблицы."""
        if self.width - self.frac_bits < MIN_INTEGER_BITS:
            raise ValueError(
                f"format {self.width}/{self.frac_bits} leaves "
                f"{self.width - self.frac_bits} integer bits, "
                f"at least {MIN_INTEGER_BITS} required"
            )
        return self

    # -------------------------------------------------------------------------
    # Границы raw-значения
    # -------------------------------------------------------------------------

    @property
    def integer_bits(self) -> int:
        return self.width - self.frac_bits

    @property
    def sign_shift(self) -> int:
        return self.width - 1

    @property
    def raw_max(self) -> int:
        return (1 << (self.width - 1)) - 1

    @property
    def raw_min(self) -> int:
        return -(1 << (self.width - 1))

    @property
    def all_mask(self) -> int:
        """Маска всех W бит (беззнаковое представление)."""
        return (1 << self.width) - 1

    # -------------------------------------------------------------------------
    # Дробная часть
    # -------------------------------------------------------------------------

    @property
    def raw_one(self) -> int:
        return 1 << self.frac_bits

    @property
    def raw_half(self) -> int:
        return 1 << (self.frac_bits - 1)

    @property
    def fraction_mask(self) -> int:
        return (1 << self.frac_bits) - 1

    @property
    def whole_mask(self) -> int:
        # Python int: ~mask == ...1110000 (знаковое расширение бесконечно)
        return ~self.fraction_mask

    @property
    def epsilon_bits(self) -> int:
        """Число младших бит, игнорируемых approx_equal по умолчанию."""
        return self.frac_bits // 8

    @property
    def large_pi_bits(self) -> int:
        """log2 множителя LargePi = π * 2^bits, используемого при сведении угла."""
        return min(self.frac_bits, self.width - self.frac_bits) - 3

    def __str__(self) -> str:
        return f"Q{self.width - self.frac_bits}.{self.frac_bits}"
