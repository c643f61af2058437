"""
Лексический анализатор текстовых шаблонов.

Разбивает строку на текст, плейсхолдеры и маркеры блоков той же
грамматики, что используется в документах.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import List, Optional


class TokenType(enum.Enum):
    """Типы токенов текстового шаблона."""
    TEXT = "TEXT"
    PLACEHOLDER = "PLACEHOLDER"      # {{Name}}, {{Name:fmt}}, {{(expr)}}

    IF = "IF"                        # {{#if expr}}
    ELSEIF = "ELSEIF"                # {{#elseif expr}}
    ELSE = "ELSE"                    # {{else}}
    ENDIF = "ENDIF"                  # {{/if}}

    FOREACH = "FOREACH"              # {{#foreach [item in] Items}}
    EMPTY = "EMPTY"                  # {{#empty}}
    ENDEMPTY = "ENDEMPTY"            # {{/empty}}
    ENDFOREACH = "ENDFOREACH"        # {{/foreach}}

    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """
    Токен с позицией в исходном тексте.

    Attributes:
        type: Тип токена
        value: Исходная разметка или текст
        position: Смещение начала токена
        argument: Выражение условия, имя коллекции или имя плейсхолдера
        extra: Имя переменной итерации или спецификатор формата
    """
    type: TokenType
    value: str
    position: int
    argument: Optional[str] = None
    extra: Optional[str] = None

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.position})"


_MARKUP_RE = re.compile(
    r"(?P<if>\{\{#if\s+(?P<if_expr>.+?)\}\})"
    r"|(?P<elseif>\{\{#elseif\s+(?P<elseif_expr>.+?)\}\})"
    r"|(?P<else>\{\{else\}\})"
    r"|(?P<endif>\{\{/if\}\})"
    r"|(?P<foreach>\{\{#foreach\s+(?:(?P<variable>\w+)\s+in\s+)?(?P<collection>[\w.\[\]]+)\}\})"
    r"|(?P<empty>\{\{#empty\}\})"
    r"|(?P<endempty>\{\{/empty\}\})"
    r"|(?P<endforeach>\{\{/foreach\}\})"
    r"|(?P<placeholder>\{\{(?P<name>\.|this|@?[\w.\[\]]+|\([^}]+\))(?::(?P<format>\w+))?\}\})",
    re.IGNORECASE,
)


class TemplateLexer:
    """
    Лексический анализатор текстовых шаблонов.

    Маркеры блоков распознаются без учёта регистра; всё, что не является
    разметкой, становится текстовыми токенами.
    """

    def __init__(self, text: str):
        self.text = text

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        position = 0

        for match in _MARKUP_RE.finditer(self.text):
            if match.start() > position:
                tokens.append(Token(TokenType.TEXT, self.text[position:match.start()], position))
            tokens.append(self._make_token(match))
            position = match.end()

        if position < len(self.text):
            tokens.append(Token(TokenType.TEXT, self.text[position:], position))

        tokens.append(Token(TokenType.EOF, "", len(self.text)))
        return tokens

    def _make_token(self, match: re.Match) -> Token:
        kind = match.lastgroup
        raw = match.group(0)
        start = match.start()

        if kind == "if":
            return Token(TokenType.IF, raw, start, match.group("if_expr").strip())
        if kind == "elseif":
            return Token(TokenType.ELSEIF, raw, start, match.group("elseif_expr").strip())
        if kind == "foreach":
            return Token(TokenType.FOREACH, raw, start, match.group("collection"), match.group("variable"))
        if kind == "placeholder":
            return Token(TokenType.PLACEHOLDER, raw, start, match.group("name"), match.group("format"))
        return Token(TokenType[kind.upper()], raw, start)


__all__ = ["TokenType", "Token", "TemplateLexer"]
