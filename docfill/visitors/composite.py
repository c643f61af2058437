"""
Композитный посетитель и сборка цепочки посетителей.
"""

from __future__ import annotations

from typing import Any, List

from .base import TemplateVisitor
from .conditional import ConditionalVisitor
from .loop import LoopVisitor
from .placeholder import PlaceholderVisitor
from .walker import DocumentWalker
from ..context import EvaluationContext
from ..markup import ConditionalBlock, LoopBlock, PlaceholderMatch
from ..resolution import PlaceholderResolver


class CompositeVisitor(TemplateVisitor):
    """Передаёт каждый элемент всем посетителям по порядку."""

    def __init__(self, *visitors: TemplateVisitor):
        self.visitors: List[TemplateVisitor] = list(visitors)

    def visit_conditional(self, block: ConditionalBlock, context: EvaluationContext) -> None:
        for visitor in self.visitors:
            visitor.visit_conditional(block, context)

    def visit_loop(self, block: LoopBlock, context: EvaluationContext) -> None:
        for visitor in self.visitors:
            visitor.visit_loop(block, context)

    def visit_placeholder(self, placeholder: PlaceholderMatch, paragraph: Any, context: EvaluationContext) -> None:
        for visitor in self.visitors:
            visitor.visit_placeholder(placeholder, paragraph, context)

    def visit_paragraph(self, paragraph: Any, context: EvaluationContext) -> None:
        for visitor in self.visitors:
            visitor.visit_paragraph(paragraph, context)


def build_visitor(walker: DocumentWalker, resolver: PlaceholderResolver, newlines: bool = True) -> CompositeVisitor:
    """
    Собирает итоговый композитный посетитель в две фазы.

    Посетителю циклов нужен итоговый композит, в который входит он сам,
    поэтому сначала он создаётся с временным композитом без себя, а
    затем получает итоговый через set_nested_visitor.
    """
    conditional = ConditionalVisitor(resolver, newlines)
    placeholder = PlaceholderVisitor(resolver, newlines)

    provisional = CompositeVisitor(conditional, placeholder)
    loop = LoopVisitor(walker, provisional, resolver, newlines)

    final = CompositeVisitor(conditional, loop, placeholder)
    loop.set_nested_visitor(final)
    return final


__all__ = ["CompositeVisitor", "build_visitor"]
