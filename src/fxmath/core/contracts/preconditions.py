"""
Preconditions — контрактные проверки области определения

Операции с ограниченной областью определения (деление на ноль, корень из
отрицательного числа, логарифм неположительного числа, acos/asin вне [-1, 1],
fx_pow(0, e) при e <= 0) не возвращают «ошибочное» значение и не имеют
recoverable error path. Нарушение такого контракта — ошибка программиста.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. ContractViolation наследует AssertionError (семантика assert)
2. При запуске с `python -O` проверки отключаются (__debug__ is False),
   соблюдение предусловий становится обязанностью вызывающего
3. Насыщение (saturation) в safe-арифметике НЕ является нарушением контракта
"""


class ContractViolation(AssertionError):
    """
    Нарушение предусловия fixed-point операции.

    Возникает только в debug-режиме интерпретатора. Перехватывать это
    исключение для восстановления не предполагается: вызывающий код обязан
    валидировать аргументы до вызова.
    """

    pass


def require(condition: bool, message: str) -> None:
    """
    Проверка предусловия.

    Args:
        condition: Условие, которое обязано выполняться
        message: Описание нарушенного контракта

    Raises:
        ContractViolation: Если condition ложно (только при __debug__)
    """
    if __debug__ and not condition:
        raise ContractViolation(message)
