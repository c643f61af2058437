"""Текстовый движок шаблонов: лексер, парсер, AST, рендерер."""

from .lexer import TemplateLexer, Token, TokenType
from .nodes import (
    BranchNode,
    ConditionalNode,
    LoopNode,
    PlaceholderNode,
    TemplateAST,
    TemplateNode,
    TextNode,
)
from .parser import TemplateParser, parse_template
from .processor import TextTemplateProcessor, render_pieces, render_text
from .renderer import RenderedPiece, TemplateRenderer

__all__ = [
    "TemplateLexer",
    "Token",
    "TokenType",
    "BranchNode",
    "ConditionalNode",
    "LoopNode",
    "PlaceholderNode",
    "TemplateAST",
    "TemplateNode",
    "TextNode",
    "TemplateParser",
    "parse_template",
    "TextTemplateProcessor",
    "render_pieces",
    "render_text",
    "RenderedPiece",
    "TemplateRenderer",
]
