"""
Парсер текстовых шаблонов.

Преобразует последовательность токенов в AST с поддержкой условных
блоков с ветвями elseif/else, циклов с ветвью empty и плейсхолдеров.
"""

from __future__ import annotations

from typing import List, Optional, Set

from .lexer import Token, TokenType, TemplateLexer
from .nodes import (
    BranchNode,
    ConditionalNode,
    LoopNode,
    PlaceholderNode,
    TemplateAST,
    TemplateNode,
    TextNode,
)
from ..errors import TemplateSyntaxError


class TemplateParser:
    """
    Рекурсивный парсер для текстовых шаблонов.

    Ошибки структуры (несбалансированные маркеры, else вне условия,
    повторный else) сообщаются через TemplateSyntaxError.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.position = 0

    def parse(self) -> TemplateAST:
        """
        Парсит всю последовательность токенов в AST.

        Raises:
            TemplateSyntaxError: При ошибке структуры шаблона
        """
        ast = self._parse_until(set())
        if not self._is_at_end():
            self._raise_stray(self._current_token())
        return ast

    def _parse_until(self, stop: Set[TokenType]) -> List[TemplateNode]:
        nodes: List[TemplateNode] = []

        while not self._is_at_end():
            token = self._current_token()
            if token.type in stop:
                break

            if token.type == TokenType.TEXT:
                self._advance()
                nodes.append(TextNode(token.value))
            elif token.type == TokenType.PLACEHOLDER:
                self._advance()
                nodes.append(PlaceholderNode(token.argument or "", token.value, token.extra))
            elif token.type == TokenType.IF:
                nodes.append(self._parse_conditional())
            elif token.type == TokenType.FOREACH:
                nodes.append(self._parse_loop())
            else:
                self._raise_stray(token)

        return nodes

    def _parse_conditional(self) -> ConditionalNode:
        opener = self._advance()
        stop = {TokenType.ELSEIF, TokenType.ELSE, TokenType.ENDIF}
        branches = [BranchNode(opener.argument, self._parse_until(stop))]

        while True:
            token = self._current_token()
            if token.type == TokenType.EOF:
                raise TemplateSyntaxError(
                    f"Conditional start marker '{opener.value}' has no matching '{{{{/if}}}}'."
                )

            self._advance()
            if token.type == TokenType.ENDIF:
                return ConditionalNode(branches, opener.value)

            if branches[-1].condition is None:
                if token.type == TokenType.ELSE:
                    raise TemplateSyntaxError(
                        f"Conditional '{opener.value}' has more than one '{{{{else}}}}' branch."
                    )
                raise TemplateSyntaxError(
                    f"Marker '{token.value}' cannot follow '{{{{else}}}}' in conditional '{opener.value}'."
                )

            condition = token.argument if token.type == TokenType.ELSEIF else None
            branches.append(BranchNode(condition, self._parse_until(stop)))

    def _parse_loop(self) -> LoopNode:
        opener = self._advance()
        body = self._parse_until({TokenType.EMPTY, TokenType.ENDFOREACH})
        empty_body: Optional[List[TemplateNode]] = None

        if self._current_token().type == TokenType.EMPTY:
            self._advance()
            empty_body = self._parse_until({TokenType.ENDEMPTY})
            if self._current_token().type != TokenType.ENDEMPTY:
                raise TemplateSyntaxError(
                    f"Marker '{{{{#empty}}}}' in loop '{opener.value}' has no matching '{{{{/empty}}}}'."
                )
            self._advance()
            body.extend(self._parse_until({TokenType.EMPTY, TokenType.ENDFOREACH}))
            if self._current_token().type == TokenType.EMPTY:
                raise TemplateSyntaxError(f"Loop '{opener.value}' has more than one '{{{{#empty}}}}' branch.")

        if self._current_token().type != TokenType.ENDFOREACH:
            raise TemplateSyntaxError(
                f"Loop start marker '{opener.value}' has no matching '{{{{/foreach}}}}'."
            )
        self._advance()

        return LoopNode(
            collection=opener.argument or "",
            raw=opener.value,
            variable=opener.extra,
            body=body,
            empty_body=empty_body,
        )

    def _raise_stray(self, token: Token) -> None:
        if token.type == TokenType.ENDIF:
            raise TemplateSyntaxError("Conditional end marker '{{/if}}' has no matching '{{#if}}'.")
        if token.type == TokenType.ENDFOREACH:
            raise TemplateSyntaxError("Loop end marker '{{/foreach}}' has no matching '{{#foreach}}'.")
        if token.type in (TokenType.EMPTY, TokenType.ENDEMPTY):
            raise TemplateSyntaxError("Marker '{{#empty}}' is only allowed inside a '{{#foreach}}' block.")
        raise TemplateSyntaxError(f"Marker '{token.value}' is only allowed inside an open '{{{{#if}}}}' block.")

    # ---- Навигация по токенам ----

    def _current_token(self) -> Token:
        return self.tokens[self.position]

    def _is_at_end(self) -> bool:
        return self._current_token().type == TokenType.EOF

    def _advance(self) -> Token:
        token = self.tokens[self.position]
        if token.type != TokenType.EOF:
            self.position += 1
        return token


def parse_template(text: str) -> TemplateAST:
    """Удобная функция: токенизация и разбор текста шаблона."""
    return TemplateParser(TemplateLexer(text).tokenize()).parse()


__all__ = ["TemplateParser", "parse_template"]
