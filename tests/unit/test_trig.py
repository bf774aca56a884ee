"""
Tests for Trigonometry и Lookup-таблиц

Проверяемые инварианты:
1. sin/cos точны в кратных π/2 (в том числе для отрицательных углов)
2. Точность sin/cos: ~1e-6 (Q32.32) с интерполяцией, ~1e-3 без неё
3. tan нечётен, tan(0) == tan(π) == 0, у асимптоты насыщается
4. Таблицы строятся один раз на формат, даже при конкурентном доступе
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor

import pytest

from fxmath.core.config import TRIG_LUT_SIZE
from fxmath.core.domain.fixed_format import FixedFormat
from fxmath.core.domain.fixed_point import Fixed32, Fixed64
from fxmath.core.math.lut import clamp_to_quadrant, get_trig_tables
from fxmath.core.math.trig import cos, fast_cos, fast_sin, sin, tan


@pytest.fixture(params=[Fixed32, Fixed64], ids=["Q16.16", "Q32.32"])
def fx(request):
    """Оба эталонных формата."""
    return request.param


def _quarter_turns(fx):
    """(угол, sin, cos) в кратных π/2 от -2π до 2π."""
    pi, half_pi, two_pi = fx.PI, fx.PI_OVER_2, fx.TWO_PI
    one, zero, neg = fx.ONE, fx.ZERO, fx.NEG_ONE
    return [
        (zero, zero, one),
        (half_pi, one, zero),
        (pi, zero, neg),
        (pi + half_pi, neg, zero),
        (two_pi, zero, one),
        (-half_pi, neg, zero),
        (-pi, zero, neg),
        (-pi - half_pi, one, zero),
        (-two_pi, zero, one),
    ]


def _sweep(start, stop, step):
    count = int(round((stop - start) / step))
    return [start + i * step for i in range(count + 1)]


# =============================================================================
# SIN / COS
# =============================================================================


class TestSinCosExact:
    """Точные значения в кратных π/2."""

    def test_sin(self, fx):
        """sin с интерполяцией."""
        for angle, expected, _ in _quarter_turns(fx):
            assert sin(angle) == expected, angle

    def test_fast_sin(self, fx):
        """sin без интерполяции."""
        for angle, expected, _ in _quarter_turns(fx):
            assert fast_sin(angle) == expected, angle

    def test_cos(self, fx):
        """cos с интерполяцией."""
        for angle, _, expected in _quarter_turns(fx):
            assert cos(angle) == expected, angle

    def test_fast_cos(self, fx):
        """cos без интерполяции."""
        for angle, _, expected in _quarter_turns(fx):
            assert fast_cos(angle) == expected, angle


class TestSinCosAccuracy:
    """Сравнение с math.sin / math.cos на [-2π, 2π]."""

    @pytest.mark.parametrize(
        "func,reference",
        [(sin, math.sin), (cos, math.cos)],
        ids=["sin", "cos"],
    )
    def test_interpolated(self, fx, func, reference):
        """Q32.32: 1e-6, Q16.16: 1e-3."""
        margin = 1e-6 if fx is Fixed64 else 1e-3
        for t in _sweep(-2 * math.pi, 2 * math.pi, 0.001):
            angle = fx.from_float(t)
            expected = reference(angle.to_float())
            assert func(angle).to_float() == pytest.approx(expected, abs=margin), t

    @pytest.mark.parametrize(
        "func,reference",
        [(fast_sin, math.sin), (fast_cos, math.cos)],
        ids=["fast_sin", "fast_cos"],
    )
    def test_fast(self, fx, func, reference):
        """Без интерполяции ошибка около шага таблицы."""
        margin = 1e-3 if fx is Fixed64 else 2e-3
        for t in _sweep(-2 * math.pi, 2 * math.pi, 0.001):
            angle = fx.from_float(t)
            expected = reference(angle.to_float())
            assert func(angle).to_float() == pytest.approx(expected, abs=margin), t

    def test_large_angle(self):
        """Большие углы сводятся по LargePi без потери знака."""
        angle = Fixed64.from_float(1000.25)
        assert sin(angle).to_float() == pytest.approx(math.sin(angle.to_float()), abs=1e-5)
        assert cos(-angle).to_float() == pytest.approx(math.cos(angle.to_float()), abs=1e-5)


# =============================================================================
# TAN
# =============================================================================


class TestTan:
    """Тангенс."""

    def test_zero_and_pi(self, fx):
        """tan(0) == tan(±π) == tan(2π) == 0."""
        assert tan(fx.ZERO) == fx.ZERO
        assert tan(fx.PI) == fx.ZERO
        assert tan(-fx.PI) == fx.ZERO
        assert tan(fx.TWO_PI) == fx.ZERO

    def test_near_asymptote(self, fx):
        """У π/2 значение огромное, знак — по стороне асимптоты."""
        huge = fx.from_int(10000)
        assert tan(fx.PI_OVER_2) > huge
        assert tan(-fx.PI_OVER_2) < -huge

    def test_odd(self, fx):
        """tan(-x) == -tan(x)."""
        for value in (0.1, 0.5, 1.0, 1.3):
            angle = fx.from_float(value)
            assert tan(-angle) == -tan(angle)

    def test_accuracy(self, fx):
        """Сравнение с math.tan на [-1, 1]."""
        margin = 1e-5 if fx is Fixed64 else 1e-3
        for t in _sweep(-1.0, 1.0, 0.001):
            angle = fx.from_float(t)
            expected = math.tan(angle.to_float())
            assert tan(angle).to_float() == pytest.approx(expected, abs=margin), t

    def test_period(self):
        """tan(x + π) ≈ tan(x)."""
        angle = Fixed64.from_float(0.7)
        assert tan(angle + Fixed64.PI).to_float() == pytest.approx(
            tan(angle).to_float(), abs=1e-5
        )


# =============================================================================
# LOOKUP TABLES
# =============================================================================


class TestTrigTables:
    """Содержимое и жизненный цикл таблиц."""

    def test_sin_table(self, fx):
        """sin[0] == 0, sin[N-1] == One, монотонность."""
        table = get_trig_tables(fx.fmt).sin
        assert len(table) == TRIG_LUT_SIZE
        assert table[0] == 0
        assert table[-1] == fx.fmt.raw_one
        assert all(a <= b for a, b in zip(table, table[1:]))

    def test_tan_table_saturates(self, fx):
        """Последняя запись tan — MaxValue."""
        tables = get_trig_tables(fx.fmt)
        assert tables.tan[0] == 0
        assert tables.tan[-1] == fx.fmt.raw_max
        assert tables.size == TRIG_LUT_SIZE

    def test_same_instance(self, fx):
        """Повторный вызов возвращает тот же объект."""
        assert get_trig_tables(fx.fmt) is get_trig_tables(fx.fmt)

    def test_concurrent_first_access(self):
        """Конкурентный первый доступ видит один экземпляр."""
        fmt = FixedFormat(width=64, frac_bits=28)
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: get_trig_tables(fmt), range(32)))
        assert all(tables is results[0] for tables in results)

    def test_build_is_logged(self, caplog):
        """Построение логируется на уровне DEBUG."""
        fmt = FixedFormat(width=64, frac_bits=26)
        with caplog.at_level(logging.DEBUG, logger="fxmath.core.math.lut"):
            get_trig_tables(fmt)
            get_trig_tables(fmt)
        messages = [r.getMessage() for r in caplog.records if "trig lookup tables" in r.getMessage()]
        assert messages == [f"Building {TRIG_LUT_SIZE}-entry trig lookup tables for Q38.26"]


class TestQuadrantFolding:
    """clamp_to_quadrant."""

    def test_zero(self, fx):
        """0 — первая четверть без отражений."""
        quadrant = clamp_to_quadrant(0, fx.constants, fx.fmt)
        assert quadrant == (0, False, False)

    def test_half_pi(self, fx):
        """π/2 — начало второй четверти: индекс зеркалится."""
        quadrant = clamp_to_quadrant(fx.PI_OVER_2.raw, fx.constants, fx.fmt)
        assert quadrant.raw == 0
        assert quadrant.flip_h
        assert not quadrant.flip_v

    def test_negative_angle(self, fx):
        """-π/2 эквивалентно 3π/2: отражение по вертикали."""
        quadrant = clamp_to_quadrant((-fx.PI_OVER_2).raw, fx.constants, fx.fmt)
        assert quadrant.flip_v
        assert quadrant.flip_h
