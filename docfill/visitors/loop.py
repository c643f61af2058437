"""
Посетитель циклов.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from docx.oxml.ns import qn

from .base import TemplateVisitor
from .walker import DocumentWalker
from ..context import EvaluationContext, LoopEvaluationContext
from ..document.elements import ElementKind, clone_all, insert_after, kind_of, paragraph_text, remove_all
from ..document.runs import replace_text_range, set_paragraph_pieces
from ..markup import LoopBlock
from ..markup.blocks import Element
from ..markup.patterns import EMPTY_END, EMPTY_START
from ..resolution import PlaceholderResolver
from ..text.processor import render_pieces

logger = logging.getLogger(__name__)


class LoopVisitor(TemplateVisitor):
    """
    Разворачивает циклы.

    Для каждого элемента коллекции тело цикла клонируется, вставляется
    после закрывающего маркера и обходится вложенным посетителем с
    новым контекстом итерации. Вложенный посетитель это итоговый
    композитный посетитель, в который входит и этот посетитель, поэтому
    он устанавливается после создания через set_nested_visitor.
    """

    def __init__(
        self,
        walker: DocumentWalker,
        nested_visitor: TemplateVisitor,
        resolver: PlaceholderResolver,
        newlines: bool = True,
    ):
        self.walker = walker
        self._nested_visitor: Optional[TemplateVisitor] = nested_visitor
        self.resolver = resolver
        self.newlines = newlines

    def set_nested_visitor(self, visitor: TemplateVisitor) -> None:
        """
        Устанавливает посетителя для обхода клонированного содержимого.

        Args:
            visitor: Итоговый композитный посетитель
        """
        self._nested_visitor = visitor

    @property
    def nested_visitor(self) -> TemplateVisitor:
        assert self._nested_visitor is not None, "Nested visitor must be set before use"
        return self._nested_visitor

    def visit_loop(self, block: LoopBlock, context: EvaluationContext) -> None:
        if block.is_inline:
            self._process_inline(block, context)
            return

        contexts = self.resolver.resolve_collection(block.collection_name, block.variable_name, context)
        if contexts is None:
            remove_all(block.all_elements)
            return

        if not contexts:
            if block.has_empty_branch:
                logger.debug(f"Loop over '{block.collection_name}' is empty, rendering empty branch")
                self._instantiate(block, block.empty_content, context, strip_empty_markers=True)
            remove_all(block.all_elements)
            return

        # Вставка после закрывающего маркера в обратном порядке даёт итоговый прямой порядок
        for loop in reversed(contexts):
            self._instantiate(block, block.content, LoopEvaluationContext(loop, context))

        logger.debug(f"Loop over '{block.collection_name}' expanded {len(contexts)} time(s)")
        remove_all(block.all_elements)

    def _instantiate(
        self,
        block: LoopBlock,
        content: List[Element],
        context: EvaluationContext,
        strip_empty_markers: bool = False,
    ) -> None:
        clones = clone_all(content)
        insert_after(block.end_marker, clones)
        if strip_empty_markers:
            self._strip_empty_markers(clones)
        self.walker.walk_elements(clones, self.nested_visitor, context)

    def _strip_empty_markers(self, elements: List[Element]) -> None:
        for element in elements:
            if kind_of(element) == ElementKind.PARAGRAPH:
                paragraphs = [element]
            else:
                paragraphs = list(element.iter(qn("w:p")))
            for paragraph in paragraphs:
                text = paragraph_text(paragraph)
                spans = [m.span() for m in EMPTY_START.finditer(text)]
                spans.extend(m.span() for m in EMPTY_END.finditer(text))
                for start, end in sorted(spans, reverse=True):
                    replace_text_range(paragraph, start, end - start, "", self.newlines)

    def _process_inline(self, block: LoopBlock, context: EvaluationContext) -> None:
        paragraph = block.start_marker
        pieces = render_pieces(paragraph_text(paragraph), context, self.resolver, resolve_placeholders=False)
        set_paragraph_pieces(paragraph, pieces, self.newlines)


__all__ = ["LoopVisitor"]
