"""Обход документа и посетители элементов шаблона."""

from .base import TemplateVisitor
from .composite import CompositeVisitor, build_visitor
from .conditional import ConditionalVisitor
from .loop import LoopVisitor
from .placeholder import PlaceholderVisitor
from .walker import DocumentWalker

__all__ = [
    "TemplateVisitor",
    "CompositeVisitor",
    "build_visitor",
    "ConditionalVisitor",
    "LoopVisitor",
    "PlaceholderVisitor",
    "DocumentWalker",
]
