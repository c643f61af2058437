"""
Обходчик дерева документа.

Владеет порядком обработки одной области:

1. условные блоки текущего уровня, от самых глубоких к внешним;
2. циклы в ещё присоединённых элементах;
3. плейсхолдеры в оставшихся абзацах справа налево.

Таблицы обходятся по строкам: сначала блоки из целых строк, затем
содержимое каждой ячейки как отдельная область.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from .base import TemplateVisitor
from ..context import EvaluationContext
from ..document.elements import (
    ElementKind,
    block_children,
    ensure_cell_paragraph,
    is_attached,
    kind_of,
    paragraph_text,
    row_cells,
    table_rows,
)
from ..markup import (
    ConditionalBlock,
    LoopBlock,
    PlaceholderFinder,
    detect_conditionals,
    detect_loops,
    is_marker_paragraph,
)
from ..markup.blocks import Element

logger = logging.getLogger(__name__)


class DocumentWalker:
    """
    Обходчик областей документа.

    Args:
        root: Корень обрабатываемого дерева (обычно ``w:body``); элементы,
              отсоединённые от него, при обходе пропускаются
    """

    def __init__(self, root: Element):
        self.root = root
        self.finder = PlaceholderFinder()

    def walk(self, visitor: TemplateVisitor, context: EvaluationContext) -> None:
        """Обходит всё содержимое корня."""
        self.walk_elements(block_children(self.root), visitor, context)

    def walk_elements(
        self,
        elements: Iterable[Element],
        visitor: TemplateVisitor,
        context: EvaluationContext,
    ) -> None:
        """
        Обходит последовательность соседних элементов одной области.

        Список элементов фиксируется в начале обхода: содержимое,
        вставленное посетителями (клоны итераций), обходится ими самими.
        """
        elements = list(elements)
        if not elements:
            return

        if all(kind_of(e) == ElementKind.ROW for e in elements):
            self._walk_rows(elements, visitor, context)
            return

        self._visit_conditionals(detect_conditionals(elements), visitor, context)
        self._visit_loops(detect_loops(self._attached(elements)), visitor, context)

        for element in elements:
            if not self.is_attached(element):
                continue
            kind = kind_of(element)
            if kind == ElementKind.PARAGRAPH:
                self._visit_paragraph(element, visitor, context)
            elif kind == ElementKind.TABLE:
                self._walk_rows(table_rows(element), visitor, context)
            elif kind == ElementKind.ROW:
                self._walk_cells(element, visitor, context)

    def is_attached(self, element: Element) -> bool:
        return is_attached(element, self.root)

    # ---- Внутренние шаги ----

    def _walk_rows(self, rows: Sequence[Element], visitor: TemplateVisitor, context: EvaluationContext) -> None:
        rows = list(rows)
        self._visit_conditionals(detect_conditionals(rows, rows=True), visitor, context)
        self._visit_loops(detect_loops(self._attached(rows), rows=True), visitor, context)

        for row in rows:
            if self.is_attached(row):
                self._walk_cells(row, visitor, context)

    def _walk_cells(self, row: Element, visitor: TemplateVisitor, context: EvaluationContext) -> None:
        for cell in row_cells(row):
            self.walk_elements(block_children(cell), visitor, context)
            ensure_cell_paragraph(cell)

    def _visit_conditionals(
        self,
        blocks: List[ConditionalBlock],
        visitor: TemplateVisitor,
        context: EvaluationContext,
    ) -> None:
        for block in sorted(blocks, key=lambda b: b.nesting_level, reverse=True):
            if not (self.is_attached(block.start_marker) and self.is_attached(block.end_marker)):
                continue
            visitor.visit_conditional(block, context)

    def _visit_loops(self, blocks: List[LoopBlock], visitor: TemplateVisitor, context: EvaluationContext) -> None:
        for block in blocks:
            if not (self.is_attached(block.start_marker) and self.is_attached(block.end_marker)):
                continue
            visitor.visit_loop(block, context)

    def _visit_paragraph(self, paragraph: Element, visitor: TemplateVisitor, context: EvaluationContext) -> None:
        if is_marker_paragraph(paragraph):
            logger.debug("Skipping leftover marker paragraph")
            return

        placeholders = self.finder.find_all(paragraph_text(paragraph))
        if not placeholders:
            visitor.visit_paragraph(paragraph, context)
            return

        # Справа налево, чтобы замена не сдвигала позиции ещё не обработанных плейсхолдеров
        for placeholder in sorted(placeholders, key=lambda p: p.start, reverse=True):
            visitor.visit_placeholder(placeholder, paragraph, context)

    def _attached(self, elements: Iterable[Element]) -> List[Element]:
        return [e for e in elements if self.is_attached(e)]


__all__ = ["DocumentWalker"]
