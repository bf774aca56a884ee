"""
Tests for Inverse Trigonometry

Проверяемые инварианты:
1. atan(0) == 0, acos(±1) и acos(0) точны
2. acos/asin вне [-1, 1] — ContractViolation
3. atan2 на осях точен, в остальных точках — ошибка приближения ~0.005
"""

import math

import pytest

from fxmath.core.contracts import ContractViolation
from fxmath.core.domain.fixed_point import Fixed32, Fixed64
from fxmath.core.math.inverse_trig import acos, asin, atan, atan2


@pytest.fixture(params=[Fixed32, Fixed64], ids=["Q16.16", "Q32.32"])
def fx(request):
    """Оба эталонных формата."""
    return request.param


# =============================================================================
# ATAN
# =============================================================================


class TestAtan:
    """Арктангенс по ряду Эйлера."""

    def test_zero(self, fx):
        """atan(0) == 0."""
        assert atan(fx.ZERO) == fx.ZERO

    def test_accuracy_unit_range(self, fx):
        """[-1, 1] с шагом 0.01."""
        margin = 1e-7 if fx is Fixed64 else 1e-3
        for i in range(-100, 101):
            x = fx.from_float(i / 100)
            assert atan(x).to_float() == pytest.approx(math.atan(x.to_float()), abs=margin), i

    @pytest.mark.parametrize("value", [1.5, 2.0, 10.0, 100.0, 12345.0, -3.0, -500.0])
    def test_accuracy_large(self, value):
        """|x| > 1: atan(x) = ±π/2 - atan(1/x)."""
        x = Fixed64.from_float(value)
        assert atan(x).to_float() == pytest.approx(math.atan(value), abs=1e-6)

    def test_odd(self, fx):
        """atan(-x) == -atan(x)."""
        for value in (0.3, 0.9, 4.0):
            x = fx.from_float(value)
            assert atan(-x) == -atan(x)


# =============================================================================
# ACOS / ASIN
# =============================================================================


class TestAcos:
    """Арккосинус."""

    def test_exact_points(self, fx):
        """acos(1) == 0, acos(0) == π/2, acos(-1) == π."""
        assert acos(fx.ONE) == fx.ZERO
        assert acos(fx.ZERO) == fx.PI_OVER_2
        assert acos(fx.NEG_ONE) == fx.PI

    def test_accuracy(self):
        """Q32.32 на (-1, 1) с шагом 0.01."""
        for i in range(-99, 100):
            x = Fixed64.from_float(i / 100)
            expected = math.acos(x.to_float())
            assert acos(x).to_float() == pytest.approx(expected, rel=1.2e-5, abs=1e-6), i

    def test_accuracy_q16(self):
        """Q16.16 в нескольких точках."""
        for value in (-0.9, -0.5, 0.25, 0.5, 0.9):
            x = Fixed32.from_float(value)
            assert acos(x).to_float() == pytest.approx(math.acos(x.to_float()), abs=2e-3)

    @pytest.mark.parametrize("value", [1.0001, -1.0001, 2.0, -5.0])
    def test_out_of_range_violates_contract(self, fx, value):
        """Аргумент вне [-1, 1]."""
        with pytest.raises(ContractViolation):
            acos(fx.from_float(value))


class TestAsin:
    """Арксинус."""

    def test_exact_points(self, fx):
        """asin(0) == 0, asin(1) == π/2."""
        assert asin(fx.ZERO) == fx.ZERO
        assert asin(fx.ONE) == fx.PI_OVER_2

    def test_minus_one(self, fx):
        """asin(-1) ≈ -π/2."""
        assert asin(fx.NEG_ONE).to_float() == pytest.approx(-math.pi / 2, abs=1e-4)

    def test_accuracy(self):
        """Q32.32 на (-1, 1)."""
        for i in range(-95, 96, 5):
            x = Fixed64.from_float(i / 100)
            assert asin(x).to_float() == pytest.approx(math.asin(x.to_float()), abs=1e-6), i

    def test_out_of_range_violates_contract(self, fx):
        """asin(2) — нарушение контракта."""
        with pytest.raises(ContractViolation):
            asin(fx.from_int(2))


# =============================================================================
# ATAN2
# =============================================================================


class TestAtan2:
    """Угол вектора."""

    def test_axes(self, fx):
        """Точные значения на осях."""
        one, zero = fx.ONE, fx.ZERO
        assert atan2(zero, zero) == zero
        assert atan2(zero, one) == zero
        assert atan2(zero, -one) == fx.PI
        assert atan2(one, zero) == fx.PI_OVER_2
        assert atan2(-one, zero) == -fx.PI_OVER_2

    def test_grid(self):
        """Q32.32: сетка [-1, 0.9] x [-1, 0.9], ошибка приближения."""
        for i in range(-10, 10):
            for j in range(-10, 10):
                if i == 0 and j == 0:
                    continue
                y = Fixed64.from_float(i / 10)
                x = Fixed64.from_float(j / 10)
                expected = math.atan2(y.to_float(), x.to_float())
                assert atan2(y, x).to_float() == pytest.approx(expected, abs=0.006), (i, j)

    def test_saturated_denominator(self):
        """Огромное y/x → ±π/2."""
        tiny = Fixed64(1)
        assert atan2(Fixed64.from_int(1000000), tiny) == Fixed64.PI_OVER_2
        assert atan2(Fixed64.from_int(-1000000), tiny) == -Fixed64.PI_OVER_2

    def test_mixed_formats_rejected(self):
        """Разные форматы → TypeError."""
        with pytest.raises(TypeError):
            atan2(Fixed64.ONE, Fixed32.ONE)
