"""
AST-узлы текстового шаблона.

Неизменяемые узлы, которые строит парсер и обходит рендерер.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class TemplateNode:
    """Базовый класс для всех узлов AST шаблона."""
    pass


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """Статический текст, выводится как есть."""
    text: str


@dataclass(frozen=True)
class PlaceholderNode(TemplateNode):
    """
    Плейсхолдер ``{{Name}}``.

    raw хранит исходную разметку, чтобы её можно было оставить
    неизменной при неразрешённой переменной.
    """
    name: str
    raw: str
    format: Optional[str] = None


@dataclass(frozen=True)
class BranchNode(TemplateNode):
    """Ветвь условного блока; condition равно None для ``{{else}}``."""
    condition: Optional[str]
    body: List[TemplateNode] = field(default_factory=list)


@dataclass(frozen=True)
class ConditionalNode(TemplateNode):
    """Условный блок: ветви if, elseif* и необязательная else."""
    branches: List[BranchNode]
    raw: str


@dataclass(frozen=True)
class LoopNode(TemplateNode):
    """Цикл ``{{#foreach}}`` с необязательной ветвью ``{{#empty}}``."""
    collection: str
    raw: str
    variable: Optional[str] = None
    body: List[TemplateNode] = field(default_factory=list)
    empty_body: Optional[List[TemplateNode]] = None


# Алиас для списка узлов (AST)
TemplateAST = List[TemplateNode]


__all__ = [
    "TemplateNode",
    "TextNode",
    "PlaceholderNode",
    "BranchNode",
    "ConditionalNode",
    "LoopNode",
    "TemplateAST",
]
