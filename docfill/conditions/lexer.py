"""
Лексер для разбора логических выражений.

Выполняет токенизацию строки выражения, разбивая её на значимые элементы:
- Ключевые слова (and, or, not, true, false, null) без учёта регистра
- Идентификаторы (пути к переменным, включая @index и Items[0].Name)
- Числа и строки в кавычках
- Операторы сравнения и скобки
- Пробелы (игнорируются)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List


@dataclass
class Token:
    """
    Токен для парсинга выражений.

    Attributes:
        type: Тип токена (KEYWORD, IDENTIFIER, NUMBER, STRING, OPERATOR, SYMBOL, EOF)
        value: Значение токена (для строк без кавычек и экранирования)
        position: Позиция в исходной строке
    """
    type: str
    value: str
    position: int

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', pos={self.position})"


class ExpressionLexer:
    """
    Лексер для разбиения строки выражения на токены.

    Поддерживаемые токены:
    - KEYWORD: and, or, not, true, false, null
    - IDENTIFIER: имена переменных и пути к свойствам
    - NUMBER: целые и дробные числа, в том числе отрицательные
    - STRING: строки в одинарных или двойных кавычках
    - OPERATOR: ==, =, !=, >=, <=, >, <, !
    - SYMBOL: (, )
    - EOF: конец строки
    """

    # Спецификация токенов: (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r'\s+', 'WHITESPACE', True),

        (r'\(', 'SYMBOL', False),
        (r'\)', 'SYMBOL', False),

        # Двухсимвольные операторы проверяются раньше односимвольных
        (r'==|!=|>=|<=', 'OPERATOR', False),
        (r'[=><!]', 'OPERATOR', False),

        (r'"(?:\\.|[^"\\])*"', 'STRING', False),
        (r"'(?:\\.|[^'\\])*'", 'STRING', False),

        (r'-?\d+(?:\.\d+)?(?![\w.\[])', 'NUMBER', False),

        # Идентификаторы: @index, Customer.Name, Items[0].Title, а также "."
        (r'@?\w[\w.\[\]]*', 'IDENTIFIER', False),
        (r'\.(?![\w.])', 'IDENTIFIER', False),

        (r'.', 'UNKNOWN', False),
    ]

    # Ключевые слова для постпроцессинга (сравниваются в нижнем регистре)
    KEYWORDS = {'and', 'or', 'not', 'true', 'false', 'null'}

    def __init__(self):
        self._compiled_patterns = [
            (re.compile(pattern), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str) -> List[Token]:
        """
        Разбивает строку на токены.

        Args:
            text: Строка выражения для разбора

        Returns:
            Список токенов, включая EOF в конце

        Raises:
            ValueError: При обнаружении неизвестного символа или незакрытой строки
        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if not match:
                    continue

                value = match.group(0)

                if not ignore:
                    if token_type == 'UNKNOWN':
                        if value in ('"', "'"):
                            raise ValueError(f"Unterminated string starting at position {position}")
                        raise ValueError(f"Unexpected character '{value}' at position {position}")

                    tokens.append(self._make_token(token_type, value, position))

                position = match.end()
                break

        tokens.append(Token(type='EOF', value='', position=position))

        return tokens

    def _make_token(self, token_type: str, value: str, position: int) -> Token:
        if token_type == 'IDENTIFIER' and value.lower() in self.KEYWORDS:
            return Token(type='KEYWORD', value=value.lower(), position=position)

        if token_type == 'STRING':
            return Token(type='STRING', value=_unescape(value[1:-1]), position=position)

        return Token(type=token_type, value=value, position=position)


def _unescape(raw: str) -> str:
    """Снимает экранирование обратной косой чертой."""
    return re.sub(r'\\(.)', r'\1', raw)


__all__ = ["Token", "ExpressionLexer"]
