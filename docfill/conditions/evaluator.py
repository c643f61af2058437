"""
Вычислитель логических выражений.

Проходит по AST выражения и вычисляет его значение, разрешая переменные
через контекст вычисления. Вычисление чистое и тотальное: неразрешённая
переменная ложна, несравнимые значения считаются равными, исключения
наружу не выходят.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Sized
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Tuple, cast

from .model import (
    Condition,
    ConditionType,
    ComparisonOperator,
    ComparisonCondition,
    Operand,
    VariableCondition,
    LiteralCondition,
    GroupCondition,
    NotCondition,
    BinaryCondition,
)
from ..context.base import EvaluationContext

logger = logging.getLogger(__name__)


class EvaluationError(Exception):
    """Ошибка при вычислении выражения (неизвестный тип узла)."""
    pass


def is_truthy(value: Any) -> bool:
    """
    Правила истинности значений данных.

    - None → ложь
    - bool → само значение
    - строка → ложь, если пустая, из пробелов, "false" (любой регистр) или "0"
    - число → ложь, если равно нулю
    - коллекция → ложь, если пустая
    - всё остальное → истина
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        return bool(stripped) and stripped.lower() != "false" and stripped != "0"
    if isinstance(value, (int, float, Decimal)):
        return value != 0
    if isinstance(value, Sized):
        return len(value) > 0
    return True


class ExpressionEvaluator:
    """
    Вычислитель логических выражений.

    Принимает AST выражения и контекст вычисления, возвращает булево значение.
    """

    def __init__(self, context: EvaluationContext):
        """
        Инициализирует вычислитель с контекстом.

        Args:
            context: Контекст, разрешающий имена переменных в значения
        """
        self.context = context

    def evaluate(self, condition: Condition) -> bool:
        """
        Вычисляет значение выражения.

        Args:
            condition: Корневой узел AST

        Returns:
            Булево значение результата вычисления

        Raises:
            EvaluationError: При неизвестном типе узла
        """
        condition_type = condition.get_type()

        if condition_type == ConditionType.VARIABLE:
            return self._evaluate_variable(cast(VariableCondition, condition))
        elif condition_type == ConditionType.LITERAL:
            return is_truthy(cast(LiteralCondition, condition).value)
        elif condition_type == ConditionType.COMPARISON:
            return self._evaluate_comparison(cast(ComparisonCondition, condition))
        elif condition_type == ConditionType.GROUP:
            return self.evaluate(cast(GroupCondition, condition).condition)
        elif condition_type == ConditionType.NOT:
            return not self.evaluate(cast(NotCondition, condition).condition)
        elif condition_type == ConditionType.AND:
            return self._evaluate_and(cast(BinaryCondition, condition))
        elif condition_type == ConditionType.OR:
            return self._evaluate_or(cast(BinaryCondition, condition))
        else:
            raise EvaluationError(f"Unknown condition type: {condition_type}")

    def _evaluate_variable(self, condition: VariableCondition) -> bool:
        value, found = self.context.resolve(condition.name)
        if not found:
            logger.debug(f"Variable '{condition.name}' not resolved, treating as false")
            return False
        return is_truthy(value)

    def _evaluate_and(self, condition: BinaryCondition) -> bool:
        """Логическое И с коротким вычислением."""
        if not self.evaluate(condition.left):
            return False
        return self.evaluate(condition.right)

    def _evaluate_or(self, condition: BinaryCondition) -> bool:
        """Логическое ИЛИ с коротким вычислением."""
        if self.evaluate(condition.left):
            return True
        return self.evaluate(condition.right)

    def _evaluate_comparison(self, condition: ComparisonCondition) -> bool:
        left = self._operand_value(condition.left)
        right = self._operand_value(condition.right)
        operator = condition.operator

        if operator == ComparisonOperator.EQ:
            return values_equal(left, right)
        if operator == ComparisonOperator.NE:
            return not values_equal(left, right)

        order = compare_values(left, right)
        if operator == ComparisonOperator.GT:
            return order > 0
        if operator == ComparisonOperator.LT:
            return order < 0
        if operator == ComparisonOperator.GE:
            return order >= 0
        return order <= 0

    def _operand_value(self, operand: Operand) -> Any:
        if isinstance(operand, LiteralCondition):
            return operand.value
        value, found = self.context.resolve(operand.name)
        return value if found else None


def values_equal(left: Any, right: Any) -> bool:
    """
    Проверяет равенство значений данных и литералов.

    Числа (включая числовые строки) сравниваются численно, остальные
    значения сравниваются по строковому представлению. None равен только None.
    """
    if left is None or right is None:
        return left is None and right is None

    left_number = _as_number(left)
    right_number = _as_number(right)
    if left_number is not None and right_number is not None:
        return left_number == right_number

    return _as_text(left) == _as_text(right)


def compare_values(left: Any, right: Any) -> int:
    """
    Сравнивает значения в естественном порядке левого операнда.

    Returns:
        Отрицательное число, ноль или положительное число. Несравнимые
        значения (в том числе неразрешённые) считаются равными.
    """
    if left is None or right is None:
        return 0

    left_number = _as_number(left)
    right_number = _as_number(right)
    if left_number is not None and right_number is not None:
        return _sign(left_number, right_number)

    if isinstance(left, str) and isinstance(right, str):
        return _sign(left, right)

    if isinstance(left, (datetime.date, datetime.datetime)) and isinstance(right, str):
        right_date = _parse_date(right)
        if right_date is not None:
            left, right = _align_dates(left, right_date)

    try:
        return _sign(left, right)
    except TypeError:
        logger.debug(f"Values {left!r} and {right!r} are not comparable")
        return 0


def _sign(left: Any, right: Any) -> int:
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def _as_number(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, Decimal)):
        number = Decimal(value)
    elif isinstance(value, float):
        number = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    return number if number.is_finite() else None


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_date(text: str) -> Optional[datetime.datetime]:
    try:
        return datetime.datetime.fromisoformat(text.strip())
    except ValueError:
        return None


def _align_dates(left: Any, right: datetime.datetime) -> Tuple[Any, Any]:
    if isinstance(left, datetime.datetime):
        return left.replace(tzinfo=None), right.replace(tzinfo=None)
    return left, right.date()


def evaluate_condition_string(condition_str: str, context: EvaluationContext) -> bool:
    """
    Удобная функция для вычисления выражения из строки.

    Args:
        condition_str: Строка выражения
        context: Контекст вычисления

    Returns:
        Результат вычисления выражения

    Raises:
        ParseError: При ошибке парсинга
        ValueError: При ошибке токенизации
    """
    from .parser import ExpressionParser

    parser = ExpressionParser()
    ast = parser.parse(condition_str)

    evaluator = ExpressionEvaluator(context)
    return evaluator.evaluate(ast)


__all__ = [
    "EvaluationError",
    "ExpressionEvaluator",
    "is_truthy",
    "values_equal",
    "compare_values",
    "evaluate_condition_string",
]
