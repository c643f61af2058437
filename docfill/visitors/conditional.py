"""
Посетитель условных блоков.
"""

from __future__ import annotations

import logging
from typing import Optional

from .base import TemplateVisitor
from ..context import EvaluationContext
from ..document.elements import paragraph_text, remove_all
from ..document.runs import set_paragraph_pieces
from ..markup import ConditionalBlock, ConditionalBranch
from ..resolution import PlaceholderResolver
from ..text.processor import render_pieces

logger = logging.getLogger(__name__)


class ConditionalVisitor(TemplateVisitor):
    """
    Оставляет содержимое ровно одной ветви условного блока.

    Условия ветвей вычисляются сверху вниз (if, elseif*, else); первая
    истинная ветвь остаётся на месте, остальные ветви и все маркеры
    удаляются. Если ни одна ветвь не подошла и else нет, блок удаляется
    целиком. Inline-блоки вычисляются на уровне текста абзаца.
    """

    def __init__(self, resolver: PlaceholderResolver, newlines: bool = True):
        self.resolver = resolver
        self.newlines = newlines

    def visit_conditional(self, block: ConditionalBlock, context: EvaluationContext) -> None:
        if block.is_inline:
            self._process_inline(block, context)
            return

        chosen = self._choose_branch(block, context)
        for branch in block.branches:
            if branch is not chosen:
                remove_all(branch.content)
        remove_all(block.markers)

    def _choose_branch(self, block: ConditionalBlock, context: EvaluationContext) -> Optional[ConditionalBranch]:
        for branch in block.branches:
            if branch.is_else or self.resolver.evaluate_condition(branch.condition, context):
                logger.debug(f"Conditional '{block.condition}': branch '{branch.condition or 'else'}' chosen")
                return branch
        logger.debug(f"Conditional '{block.condition}': no branch chosen, block removed")
        return None

    def _process_inline(self, block: ConditionalBlock, context: EvaluationContext) -> None:
        paragraph = block.start_marker
        pieces = render_pieces(paragraph_text(paragraph), context, self.resolver, resolve_placeholders=False)
        set_paragraph_pieces(paragraph, pieces, self.newlines)


__all__ = ["ConditionalVisitor"]
