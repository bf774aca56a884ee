"""
Vector2 — двумерный вектор над FixedPoint

Immutable value-тип из двух компонент одного FixedPoint типа (по умолчанию
Fixed64). Строится только из скалярных операций ядра, поэтому детерминирован
так же, как и сам FixedPoint.

Углы в публичном API (angle, signed_angle, rotate, rotate_around_axis) —
в градусах; rotate_by_radians* принимают радианы.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Обе компоненты имеют один и тот же FixedPoint тип
2. Экземпляры immutable и hashable
3. magnitude использует fast_sqrt: для |v|² > ~1e9 точность падает
"""

from dataclasses import dataclass, replace
from typing import ClassVar

from fxmath.core.domain.fixed_point import Fixed64, FixedPoint
from fxmath.core.math.elementary import approx_equal, approx_zero, clamp, sign
from fxmath.core.math.inverse_trig import acos
from fxmath.core.math.sqrt import fast_sqrt, sqrt
from fxmath.core.math.trig import cos, sin


@dataclass(frozen=True)
class Vector2:
    """
    Двумерный вектор.

    Attributes:
        x: Абсцисса
        y: Ордината
    """

    x: FixedPoint = Fixed64.ZERO
    y: FixedPoint = Fixed64.ZERO

    ZERO: ClassVar["Vector2"]
    ONE: ClassVar["Vector2"]
    RIGHT: ClassVar["Vector2"]
    LEFT: ClassVar["Vector2"]
    UP: ClassVar["Vector2"]
    DOWN: ClassVar["Vector2"]

    def __post_init__(self) -> None:
        if not isinstance(self.x, FixedPoint) or type(self.x) is not type(self.y):
            raise TypeError(
                f"Vector2 components must share a FixedPoint type: "
                f"{type(self.x).__name__} vs {type(self.y).__name__}"
            )

    @property
    def scalar_type(self) -> type[FixedPoint]:
        return type(self.x)

    def _zero(self) -> "Vector2":
        zero = self.scalar_type.ZERO
        return Vector2(zero, zero)

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "Vector2":
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: object) -> "Vector2":
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, other: object) -> "Vector2":
        """Покомпонентное произведение с вектором или умножение на скаляр."""
        if isinstance(other, Vector2):
            return Vector2(self.x * other.x, self.y * other.y)
        if isinstance(other, FixedPoint):
            return Vector2(self.x * other, self.y * other)
        return NotImplemented

    def __rmul__(self, other: object) -> "Vector2":
        if isinstance(other, FixedPoint):
            return Vector2(other * self.x, other * self.y)
        return NotImplemented

    def __truediv__(self, other: object) -> "Vector2":
        if not isinstance(other, FixedPoint):
            return NotImplemented
        return Vector2(self.x / other, self.y / other)

    def __getitem__(self, index: int) -> FixedPoint:
        """v[0] == x, v[1] == y (учитывается только младший бит индекса)."""
        return self.y if index & 1 else self.x

    def __repr__(self) -> str:
        return f"Vector2({self.x.to_float()!r}, {self.y.to_float()!r})"

    # -------------------------------------------------------------------------
    # Длина
    # -------------------------------------------------------------------------

    def sqr_magnitude(self) -> FixedPoint:
        return self.x * self.x + self.y * self.y

    def magnitude(self) -> FixedPoint:
        # fast_sqrt теряет точность для квадратов длины выше ~1e9
        return fast_sqrt(self.sqr_magnitude())

    def normalized(self) -> "Vector2":
        return Vector2.normalize(self)

    # -------------------------------------------------------------------------
    # Операции над парами векторов
    # -------------------------------------------------------------------------

    @staticmethod
    def dot(a: "Vector2", b: "Vector2") -> FixedPoint:
        return a.x * b.x + a.y * b.y

    @staticmethod
    def cross(a: "Vector2", b: "Vector2") -> FixedPoint:
        """Z-компонента векторного произведения: a.x * b.y - a.y * b.x."""
        return a.x * b.y - a.y * b.x

    @staticmethod
    def project(a: "Vector2", b_normalized: "Vector2") -> "Vector2":
        """Проекция a на направление b_normalized (ожидается единичный вектор)."""
        return Vector2.dot(a, b_normalized) * b_normalized

    @staticmethod
    def reverse_project(a: "Vector2", b: "Vector2") -> "Vector2":
        """
        Вектор вдоль b, проекция которого на a равна a.

        Returns:
            b * (|a|² / dot(a, b)); ZERO если a и b ортогональны
        """
        prod = Vector2.dot(a, b)
        if prod == a.scalar_type.ZERO:
            return a._zero()
        return b * (a.sqr_magnitude() / prod)

    @staticmethod
    def normalize(vec: "Vector2") -> "Vector2":
        """Единичный вектор того же направления; почти нулевой вектор → ZERO."""
        length = vec.magnitude()
        if approx_zero(length):
            return vec._zero()
        return vec / length

    @staticmethod
    def distance(a: "Vector2", b: "Vector2") -> FixedPoint:
        return (a - b).magnitude()

    @staticmethod
    def distance_squared(a: "Vector2", b: "Vector2") -> FixedPoint:
        return (a - b).sqr_magnitude()

    @staticmethod
    def slope(a: "Vector2", b: "Vector2") -> FixedPoint:
        """
        Наклон отрезка a→b.

        Returns:
            (a.y - b.y) / (b.x - a.x); MaxValue для вертикального отрезка
        """
        dy = a.y - b.y
        dx = b.x - a.x
        if approx_zero(dx):
            return a.scalar_type.MAX_VALUE
        return dy / dx

    @staticmethod
    def rotate90_clockwise(vec: "Vector2") -> "Vector2":
        return replace(vec, y=-vec.y)

    @staticmethod
    def rotate90_counter_clockwise(vec: "Vector2") -> "Vector2":
        return replace(vec, x=-vec.x)

    # -------------------------------------------------------------------------
    # Углы и повороты
    # -------------------------------------------------------------------------

    @staticmethod
    def angle(from_vec: "Vector2", to_vec: "Vector2") -> FixedPoint:
        """
        Неориентированный угол между векторами в градусах, [0, 180].

        Для нулевого вектора возвращает 0.
        """
        cls = from_vec.scalar_type
        # sqrt(a) * sqrt(b) == sqrt(a * b) для неотрицательных a, b
        denominator = sqrt(from_vec.sqr_magnitude() * to_vec.sqr_magnitude())
        if approx_zero(denominator):
            return cls.ZERO

        cosine = clamp(Vector2.dot(from_vec, to_vec) / denominator, cls.NEG_ONE, cls.ONE)
        return acos(cosine) * cls.RAD2DEG

    @staticmethod
    def signed_angle(from_vec: "Vector2", to_vec: "Vector2") -> FixedPoint:
        """Угол в градусах со знаком векторного произведения (против часовой — плюс)."""
        unsigned = Vector2.angle(from_vec, to_vec)
        return unsigned * sign(Vector2.cross(from_vec, to_vec))

    @staticmethod
    def rotate(vec: "Vector2", degrees: FixedPoint) -> "Vector2":
        return Vector2.rotate_by_radians(vec, degrees * vec.scalar_type.DEG2RAD)

    @staticmethod
    def rotate_around_axis(vec: "Vector2", degrees: FixedPoint, axis: "Vector2") -> "Vector2":
        return Vector2.rotate_by_radians_around_axis(vec, degrees * vec.scalar_type.DEG2RAD, axis)

    @staticmethod
    def rotate_by_radians(vec: "Vector2", radians: FixedPoint) -> "Vector2":
        """
        Поворот против часовой стрелки на radians.

        Args:
            vec: Исходный вектор
            radians: Угол поворота

        Returns:
            (x·cos - y·sin, x·sin + y·cos); при нулевом угле — сам vec
        """
        if radians == vec.scalar_type.ZERO:
            return vec

        s = sin(radians)
        c = cos(radians)
        return Vector2(vec.x * c - vec.y * s, vec.x * s + vec.y * c)

    @staticmethod
    def rotate_by_radians_around_axis(vec: "Vector2", radians: FixedPoint, axis: "Vector2") -> "Vector2":
        return Vector2.rotate_by_radians(vec - axis, radians) + axis

    @staticmethod
    def reflect(vec: "Vector2", normal: "Vector2") -> "Vector2":
        """Отражение vec относительно прямой с единичной нормалью normal."""
        multiplier = vec.scalar_type.from_int(2) * Vector2.dot(vec, normal)
        return Vector2(vec.x - multiplier * normal.x, vec.y - multiplier * normal.y)

    @staticmethod
    def approx_equal(a: "Vector2", b: "Vector2", ignore_bits: int | None = None) -> bool:
        return approx_equal(a.x, b.x, ignore_bits) and approx_equal(a.y, b.y, ignore_bits)


Vector2.ZERO = Vector2(Fixed64.ZERO, Fixed64.ZERO)
Vector2.ONE = Vector2(Fixed64.ONE, Fixed64.ONE)
Vector2.RIGHT = Vector2(Fixed64.ONE, Fixed64.ZERO)
Vector2.LEFT = Vector2(Fixed64.NEG_ONE, Fixed64.ZERO)
Vector2.UP = Vector2(Fixed64.ZERO, Fixed64.ONE)
Vector2.DOWN = Vector2(Fixed64.ZERO, Fixed64.NEG_ONE)
