"""
Рендерер AST текстового шаблона.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from .nodes import (
    ConditionalNode,
    LoopNode,
    PlaceholderNode,
    TemplateAST,
    TemplateNode,
    TextNode,
)
from ..context import EvaluationContext, LoopEvaluationContext
from ..resolution import PlaceholderResolver

logger = logging.getLogger(__name__)

# Фрагмент результата: (текст, получен ли он из значения данных)
RenderedPiece = Tuple[str, bool]


class TemplateRenderer:
    """
    Превращает AST в строку, разрешая разметку через PlaceholderResolver.

    При resolve_placeholders=False плейсхолдеры верхнего уровня
    остаются исходной разметкой: так абзацы документа сохраняют их
    для последующего прохода по плейсхолдерам с учётом форматирования.
    Внутри тел циклов плейсхолдеры разрешаются всегда, так как только
    здесь доступен контекст итерации.

    render_pieces() отделяет подставленные значения от текста шаблона:
    markdown-выделение раскрывается только в значениях.
    """

    def __init__(self, resolver: PlaceholderResolver, resolve_placeholders: bool = True):
        self.resolver = resolver
        self.resolve_placeholders = resolve_placeholders

    def render(self, ast: TemplateAST, context: EvaluationContext) -> str:
        return "".join(text for text, _ in self.render_pieces(ast, context))

    def render_pieces(self, ast: TemplateAST, context: EvaluationContext) -> List[RenderedPiece]:
        return self._render_nodes(ast, context, self.resolve_placeholders)

    def _render_nodes(self, nodes: List[TemplateNode], context: EvaluationContext, resolve: bool) -> List[RenderedPiece]:
        pieces: List[RenderedPiece] = []
        for node in nodes:
            pieces.extend(self._render_node(node, context, resolve))
        return pieces

    def _render_node(self, node: TemplateNode, context: EvaluationContext, resolve: bool) -> List[RenderedPiece]:
        if isinstance(node, TextNode):
            return [(node.text, False)]
        if isinstance(node, PlaceholderNode):
            return [self._render_placeholder(node, context, resolve)]
        if isinstance(node, ConditionalNode):
            return self._render_conditional(node, context, resolve)
        if isinstance(node, LoopNode):
            return self._render_loop(node, context)
        raise TypeError(f"Unknown template node: {type(node).__name__}")

    def _render_placeholder(self, node: PlaceholderNode, context: EvaluationContext, resolve: bool) -> RenderedPiece:
        if not resolve:
            return node.raw, False
        text = self.resolver.resolve(node.name, node.format, context)
        if text is None:
            return node.raw, False
        return text, True

    def _render_conditional(
        self, node: ConditionalNode, context: EvaluationContext, resolve: bool
    ) -> List[RenderedPiece]:
        for branch in node.branches:
            if branch.condition is None or self.resolver.evaluate_condition(branch.condition, context):
                logger.debug(f"Inline conditional '{node.raw}': branch '{branch.condition or 'else'}' chosen")
                return self._render_nodes(branch.body, context, resolve)
        return []

    def _render_loop(self, node: LoopNode, context: EvaluationContext) -> List[RenderedPiece]:
        contexts = self.resolver.resolve_collection(node.collection, node.variable, context)
        if contexts is None:
            return []

        if not contexts:
            if node.empty_body is None:
                return []
            return self._render_nodes(node.empty_body, context, True)

        logger.debug(f"Inline loop over '{node.collection}' expanded {len(contexts)} time(s)")
        pieces: List[RenderedPiece] = []
        for loop in contexts:
            pieces.extend(self._render_nodes(node.body, LoopEvaluationContext(loop, context), True))
        return pieces


__all__ = ["RenderedPiece", "TemplateRenderer"]
