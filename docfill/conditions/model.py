"""
Модели данных для логических выражений.

Содержит классы для представления узлов дерева выражения,
используемого в условных блоках и плейсхолдерах-выражениях.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class ConditionType(Enum):
    """Типы узлов выражения."""
    VARIABLE = "variable"
    LITERAL = "literal"
    COMPARISON = "comparison"
    AND = "and"
    OR = "or"
    NOT = "not"
    GROUP = "group"  # для явной группировки в скобках


class ComparisonOperator(Enum):
    """Операторы сравнения. Оператор ``=`` нормализуется в ``==``."""
    EQ = "=="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="

    @classmethod
    def from_symbol(cls, symbol: str) -> ComparisonOperator:
        if symbol == "=":
            return cls.EQ
        return cls(symbol)


@dataclass
class Condition(ABC):
    """Базовый абстрактный класс для всех узлов выражения."""

    @abstractmethod
    def get_type(self) -> ConditionType:
        """Возвращает тип узла."""
        pass

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        """Внутренний метод для создания строкового представления."""
        pass


@dataclass
class VariableCondition(Condition):
    """
    Ссылка на переменную: Customer.IsActive, @first, Items[0].Name

    Как самостоятельное условие истинна, если значение переменной
    истинно по правилам truthiness. Неразрешённая переменная ложна.
    """
    name: str

    def get_type(self) -> ConditionType:
        return ConditionType.VARIABLE

    def _to_string(self) -> str:
        return self.name


@dataclass
class LiteralCondition(Condition):
    """Литерал: число, строка, true, false или null."""
    value: Any

    def get_type(self) -> ConditionType:
        return ConditionType.LITERAL

    def _to_string(self) -> str:
        if self.value is None:
            return "null"
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        if isinstance(self.value, str):
            escaped = self.value.replace('\\', '\\\\').replace('"', '\\"')
            return f'"{escaped}"'
        return str(self.value)


# Операнды сравнения: переменная или литерал
Operand = Union[VariableCondition, LiteralCondition]


@dataclass
class ComparisonCondition(Condition):
    """
    Сравнение: left op right

    Операнды: переменные или литералы. Упорядочивающие операторы
    используют естественный порядок левого операнда.
    """
    left: Operand
    operator: ComparisonOperator
    right: Operand

    def get_type(self) -> ConditionType:
        return ConditionType.COMPARISON

    def _to_string(self) -> str:
        return f"{self.left} {self.operator.value} {self.right}"


@dataclass
class GroupCondition(Condition):
    """
    Группа в скобках: (condition)

    Используется для явной группировки и изменения приоритета операторов.
    """
    condition: Condition

    def get_type(self) -> ConditionType:
        return ConditionType.GROUP

    def _to_string(self) -> str:
        return f"({self.condition})"


@dataclass
class NotCondition(Condition):
    """
    Отрицание: not condition

    Инвертирует результат вычисления вложенного условия.
    """
    condition: Condition

    def get_type(self) -> ConditionType:
        return ConditionType.NOT

    def _to_string(self) -> str:
        return f"not {self.condition}"


@dataclass
class BinaryCondition(Condition):
    """
    Бинарная логическая операция: left op right

    Поддерживаемые операторы:
    - and: истинно, если оба операнда истинны
    - or: истинно, если хотя бы один операнд истинен
    """
    left: Condition
    right: Condition
    operator: ConditionType  # AND или OR

    def get_type(self) -> ConditionType:
        return self.operator

    def _to_string(self) -> str:
        op_str = "and" if self.operator == ConditionType.AND else "or"
        return f"{self.left} {op_str} {self.right}"


__all__ = [
    "Condition",
    "ConditionType",
    "ComparisonOperator",
    "Operand",
    "VariableCondition",
    "LiteralCondition",
    "ComparisonCondition",
    "GroupCondition",
    "NotCondition",
    "BinaryCondition",
]
