"""
Core of the fixed-point library.

Конфигурация, контракты, доменные типы (FixedFormat, FixedPoint, Vector2)
и математические примитивы над ними.
"""
