"""
Tests for Vector2

Проверяемые инварианты:
1. Компоненты одного FixedPoint типа, экземпляр immutable и hashable
2. Покомпонентная арифметика, dot/cross/project
3. Углы в градусах, повороты против часовой стрелки
"""

from dataclasses import FrozenInstanceError

import pytest

from fxmath.core.domain.fixed_point import Fixed32, Fixed64
from fxmath.core.domain.vector2 import Vector2


def v(x, y, fx=Fixed64):
    return Vector2(fx.from_float(x), fx.from_float(y))


def assert_close(actual, expected, abs_tol=1e-5):
    assert actual.x.to_float() == pytest.approx(expected.x.to_float(), abs=abs_tol)
    assert actual.y.to_float() == pytest.approx(expected.y.to_float(), abs=abs_tol)


# =============================================================================
# КОНСТРУИРОВАНИЕ
# =============================================================================


class TestVector2Construction:
    """Создание и свойства value-типа."""

    def test_default_is_zero(self):
        """Vector2() == ZERO."""
        assert Vector2() == Vector2.ZERO
        assert Vector2().scalar_type is Fixed64

    def test_constants(self):
        """Направления."""
        assert Vector2.RIGHT == v(1, 0)
        assert Vector2.LEFT == v(-1, 0)
        assert Vector2.UP == v(0, 1)
        assert Vector2.DOWN == v(0, -1)
        assert Vector2.ONE == v(1, 1)

    def test_mixed_component_types_rejected(self):
        """Компоненты разных форматов → TypeError."""
        with pytest.raises(TypeError):
            Vector2(Fixed64.ONE, Fixed32.ONE)
        with pytest.raises(TypeError):
            Vector2(1, 2)

    def test_frozen(self):
        """Изменение компоненты запрещено."""
        vec = v(1, 2)
        with pytest.raises(FrozenInstanceError):
            vec.x = Fixed64.ZERO

    def test_hashable(self):
        """Равные векторы — один ключ словаря."""
        assert {Vector2.ONE: "one"}[v(1, 1)] == "one"

    def test_indexing(self):
        """v[0] == x, v[1] == y."""
        vec = v(1, 2)
        assert vec[0] == Fixed64.ONE
        assert vec[1] == Fixed64.from_int(2)

    def test_repr(self):
        """Значения компонент в repr."""
        assert repr(v(1, 2.5)) == "Vector2(1.0, 2.5)"

    def test_fixed32_components(self):
        """Вектор над Q16.16."""
        vec = v(3, 4, Fixed32)
        assert vec.scalar_type is Fixed32
        assert vec.magnitude() == Fixed32.from_int(5)


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestVector2Arithmetic:
    """Операторы и произведения."""

    def test_add_sub(self):
        """Покомпонентно."""
        a, b = v(1, 2), v(3, 4)
        assert a + b == v(4, 6)
        assert a - b == v(-2, -2)

    def test_component_wise_mul(self):
        """Vector2 * Vector2 — покомпонентно."""
        assert v(1, 2) * v(3, 4) == v(3, 8)

    def test_scalar(self):
        """Умножение и деление на скаляр."""
        a, two = v(1, 2), Fixed64.from_int(2)
        assert a * two == v(2, 4)
        assert two * a == v(2, 4)
        assert a / two == v(0.5, 1)

    def test_non_vector_operand_rejected(self):
        """Vector2 + скаляр → TypeError."""
        with pytest.raises(TypeError):
            Vector2.ONE + Fixed64.ONE

    def test_dot_cross(self):
        """dot == 11, cross == -2."""
        a, b = v(1, 2), v(3, 4)
        assert Vector2.dot(a, b) == Fixed64.from_int(11)
        assert Vector2.cross(a, b) == Fixed64.from_int(-2)

    def test_magnitude(self):
        """|(3, 4)| == 5."""
        vec = v(3, 4)
        assert vec.sqr_magnitude() == Fixed64.from_int(25)
        assert vec.magnitude() == Fixed64.from_int(5)

    def test_distance(self):
        """Расстояние между точками."""
        assert Vector2.distance(v(1, 1), v(4, 5)) == Fixed64.from_int(5)
        assert Vector2.distance_squared(v(1, 1), v(4, 5)) == Fixed64.from_int(25)

    def test_normalize(self):
        """Единичный вектор; нулевой остаётся нулевым."""
        assert_close(v(3, 4).normalized(), v(0.6, 0.8))
        assert Vector2.normalize(Vector2.ZERO) == Vector2.ZERO

    def test_project(self):
        """Проекция на единичное направление."""
        assert Vector2.project(v(2, 3), Vector2.RIGHT) == v(2, 0)

    def test_reverse_project(self):
        """Вектор вдоль b с проекцией a; ортогональные → ZERO."""
        assert Vector2.reverse_project(v(2, 0), v(1, 1)) == v(2, 2)
        assert Vector2.reverse_project(Vector2.RIGHT, Vector2.UP) == Vector2.ZERO

    def test_slope(self):
        """Наклон; вертикальный отрезок → MaxValue."""
        assert Vector2.slope(v(0, 0), v(2, -4)) == Fixed64.from_int(2)
        assert Vector2.slope(v(1, 0), v(1, 5)) == Fixed64.MAX_VALUE

    def test_reflect(self):
        """Отражение от горизонтали."""
        assert Vector2.reflect(v(1, -1), Vector2.UP) == v(1, 1)

    def test_approx_equal(self):
        """Сравнение с игнорированием младших бит."""
        a = Vector2(Fixed64(1), Fixed64(1))
        b = Vector2(Fixed64(3), Fixed64(3))
        assert Vector2.approx_equal(a, b)
        assert not Vector2.approx_equal(Vector2.ONE, Vector2.ZERO)


# =============================================================================
# УГЛЫ И ПОВОРОТЫ
# =============================================================================


class TestVector2Rotation:
    """Углы в градусах и повороты."""

    def test_rotate90(self):
        """Повороты на 90° как отражения компонент."""
        assert Vector2.rotate90_clockwise(v(1, 2)) == v(1, -2)
        assert Vector2.rotate90_counter_clockwise(v(1, 2)) == v(-1, 2)

    def test_angle(self):
        """Неориентированный угол."""
        assert Vector2.angle(Vector2.RIGHT, Vector2.UP).to_float() == pytest.approx(90, abs=1e-5)
        assert Vector2.angle(Vector2.RIGHT, Vector2.LEFT).to_float() == pytest.approx(180, abs=1e-5)
        assert Vector2.angle(v(2, 2), v(3, 0)).to_float() == pytest.approx(45, abs=1e-4)

    def test_angle_with_zero_vector(self):
        """Угол с нулевым вектором == 0."""
        assert Vector2.angle(Vector2.ZERO, Vector2.RIGHT) == Fixed64.ZERO

    def test_signed_angle(self):
        """Против часовой — плюс, по часовой — минус."""
        assert Vector2.signed_angle(Vector2.RIGHT, Vector2.UP).to_float() == pytest.approx(90, abs=1e-5)
        assert Vector2.signed_angle(Vector2.UP, Vector2.RIGHT).to_float() == pytest.approx(-90, abs=1e-5)

    def test_rotate(self):
        """Поворот на 90° переводит RIGHT в UP."""
        assert_close(Vector2.rotate(Vector2.RIGHT, Fixed64.from_int(90)), Vector2.UP)
        assert_close(Vector2.rotate(Vector2.RIGHT, Fixed64.from_int(-90)), Vector2.DOWN)

    def test_rotate_zero_returns_same(self):
        """Нулевой угол возвращает исходный вектор."""
        vec = v(1.5, -2)
        assert Vector2.rotate_by_radians(vec, Fixed64.ZERO) is vec

    def test_rotate_around_axis(self):
        """Поворот на 180° вокруг (1, 1)."""
        result = Vector2.rotate_around_axis(v(2, 1), Fixed64.from_int(180), v(1, 1))
        assert_close(result, v(0, 1))

    def test_rotate_by_radians_around_axis(self):
        """Поворот на π/2 вокруг (1, 0)."""
        result = Vector2.rotate_by_radians_around_axis(v(2, 0), Fixed64.PI_OVER_2, v(1, 0))
        assert_close(result, v(1, 1))
