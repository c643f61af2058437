"""
Логические выражения шаблонов: ``(A and B)``, ``Status = "Active"``,
``not IsDraft``, ``(Count >= 3 or @first)``.
"""

from __future__ import annotations

from .evaluator import (
    EvaluationError,
    ExpressionEvaluator,
    compare_values,
    evaluate_condition_string,
    is_truthy,
    values_equal,
)
from .lexer import ExpressionLexer, Token
from .model import (
    BinaryCondition,
    ComparisonCondition,
    ComparisonOperator,
    Condition,
    ConditionType,
    GroupCondition,
    LiteralCondition,
    NotCondition,
    VariableCondition,
)
from .parser import ExpressionParser, ParseError, parse_expression

__all__ = [
    "BinaryCondition",
    "ComparisonCondition",
    "ComparisonOperator",
    "Condition",
    "ConditionType",
    "EvaluationError",
    "ExpressionEvaluator",
    "ExpressionLexer",
    "ExpressionParser",
    "GroupCondition",
    "LiteralCondition",
    "NotCondition",
    "ParseError",
    "Token",
    "VariableCondition",
    "compare_values",
    "evaluate_condition_string",
    "is_truthy",
    "parse_expression",
    "values_equal",
]
