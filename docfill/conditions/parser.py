"""
Парсер логических выражений с рекурсивным спуском.

Строит абстрактное синтаксическое дерево (AST) из последовательности токенов.
Поддерживает приоритеты операторов и группировку в скобках.

Грамматика:
expression     → or_expression
or_expression  → and_expression ("or" and_expression)*
and_expression → not_expression ("and" not_expression)*
not_expression → ("not" | "!") not_expression | comparison
comparison     → "(" expression ")" | operand (COMPARE_OP operand)?
operand        → NUMBER | STRING | "true" | "false" | "null" | IDENTIFIER

COMPARE_OP     → "=" | "==" | "!=" | ">=" | "<=" | ">" | "<"
"""

from __future__ import annotations

from typing import List, Optional

from .lexer import ExpressionLexer, Token
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


class ParseError(Exception):
    """Ошибка парсинга логического выражения."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Parse error at position {position}: {message}")


_COMPARISON_SYMBOLS = {"=", "==", "!=", ">=", "<=", ">", "<"}


class ExpressionParser:
    """
    Парсер логических выражений с рекурсивным спуском.

    Преобразует список токенов в абстрактное синтаксическое дерево,
    соблюдая приоритеты операторов и правила группировки.
    """

    def __init__(self):
        self.lexer = ExpressionLexer()
        self._tokens: List[Token] = []
        self._position = 0

    def parse(self, expression: str) -> Condition:
        """
        Парсит строку выражения в AST.

        Args:
            expression: Строка выражения, со скобками или без

        Returns:
            Корневой узел AST

        Raises:
            ParseError: При синтаксической ошибке
            ValueError: При ошибке токенизации
        """
        self._tokens = self.lexer.tokenize(expression)
        self._position = 0

        if len(self._tokens) == 1:
            raise ParseError("Empty expression", 0)

        result = self._parse_expression()

        if not self._is_at_end():
            current = self._current_token()
            raise ParseError(f"Unexpected token '{current.value}'", current.position)

        return result

    def _parse_expression(self) -> Condition:
        """Парсит полное выражение (начальный символ грамматики)."""
        return self._parse_or_expression()

    def _parse_or_expression(self) -> Condition:
        """Парсит выражение с оператором or (низший приоритет)."""
        left = self._parse_and_expression()

        while self._match_keyword("or"):
            right = self._parse_and_expression()
            left = BinaryCondition(left=left, right=right, operator=ConditionType.OR)

        return left

    def _parse_and_expression(self) -> Condition:
        """Парсит выражение с оператором and (средний приоритет)."""
        left = self._parse_not_expression()

        while self._match_keyword("and"):
            right = self._parse_not_expression()
            left = BinaryCondition(left=left, right=right, operator=ConditionType.AND)

        return left

    def _parse_not_expression(self) -> Condition:
        """Парсит выражение с оператором not (высокий приоритет)."""
        if self._match_keyword("not") or self._match_operator("!"):
            condition = self._parse_not_expression()  # Правая ассоциативность для not
            return NotCondition(condition=condition)

        return self._parse_comparison()

    def _parse_comparison(self) -> Condition:
        """Парсит группу в скобках или сравнение/одиночный операнд."""
        if self._match_symbol("("):
            expr = self._parse_expression()
            if not self._match_symbol(")"):
                raise ParseError("Expected ')' after grouped expression", self._current_position())
            if self._check_comparison_operator():
                raise ParseError(
                    "Only variables and literals can be compared", self._current_position()
                )
            return GroupCondition(condition=expr)

        left = self._parse_operand()

        operator = self._match_comparison_operator()
        if operator is None:
            return left

        right = self._parse_operand()
        return ComparisonCondition(left=left, operator=operator, right=right)

    def _parse_operand(self) -> Operand:
        """Парсит операнд: литерал или ссылку на переменную."""
        current = self._current_token()

        if current.type == 'NUMBER':
            self._advance()
            if "." in current.value:
                return LiteralCondition(value=float(current.value))
            return LiteralCondition(value=int(current.value))

        if current.type == 'STRING':
            self._advance()
            return LiteralCondition(value=current.value)

        if current.type == 'KEYWORD' and current.value in ("true", "false", "null"):
            self._advance()
            literal = {"true": True, "false": False, "null": None}[current.value]
            return LiteralCondition(value=literal)

        if current.type == 'IDENTIFIER':
            self._advance()
            return VariableCondition(name=current.value)

        if current.type == 'EOF':
            raise ParseError("Unexpected end of expression", current.position)
        raise ParseError(f"Unexpected token '{current.value}'", current.position)

    # ---- Навигация по токенам ----

    def _current_token(self) -> Token:
        """Текущий токен (EOF за концом списка)."""
        if self._position >= len(self._tokens):
            return Token(type='EOF', value='', position=len(self._tokens))
        return self._tokens[self._position]

    def _current_position(self) -> int:
        return self._current_token().position

    def _is_at_end(self) -> bool:
        return self._current_token().type == 'EOF'

    def _advance(self) -> Token:
        """Сдвигается на один токен; возвращает пройденный."""
        if not self._is_at_end():
            self._position += 1
        return self._tokens[self._position - 1] if self._position > 0 else self._current_token()

    def _match_keyword(self, keyword: str) -> bool:
        """Проверяет и потребляет ключевое слово."""
        current = self._current_token()
        if current.type == 'KEYWORD' and current.value == keyword:
            self._advance()
            return True
        return False

    def _match_symbol(self, symbol: str) -> bool:
        """Проверяет и потребляет символ."""
        current = self._current_token()
        if current.type == 'SYMBOL' and current.value == symbol:
            self._advance()
            return True
        return False

    def _match_operator(self, operator: str) -> bool:
        """Проверяет и потребляет оператор."""
        current = self._current_token()
        if current.type == 'OPERATOR' and current.value == operator:
            self._advance()
            return True
        return False

    def _check_comparison_operator(self) -> bool:
        current = self._current_token()
        return current.type == 'OPERATOR' and current.value in _COMPARISON_SYMBOLS

    def _match_comparison_operator(self) -> Optional[ComparisonOperator]:
        """Потребляет оператор сравнения, если он стоит в текущей позиции."""
        if not self._check_comparison_operator():
            return None
        return ComparisonOperator.from_symbol(self._advance().value)


def parse_expression(text: str) -> Optional[Condition]:
    """
    Разбирает выражение-плейсхолдер.

    Выражением считается только текст, начинающийся с ``(``; в остальных
    случаях, а также при синтаксической ошибке возвращается None, и
    вызывающая сторона трактует текст как обычную ссылку на переменную.

    Args:
        text: Текст выражения, например ``(IsActive and Count > 0)``

    Returns:
        Корневой узел AST или None
    """
    if text is None or not text.strip().startswith("("):
        return None

    try:
        return ExpressionParser().parse(text)
    except (ParseError, ValueError):
        return None


__all__ = ["ParseError", "ExpressionParser", "parse_expression"]
