"""
Детектор блоков разметки.

Находит сбалансированные условные блоки и циклы в последовательности
элементов одной области (тело документа, ячейка таблицы, клон тела
цикла или строки таблицы) по глубине вложенности маркеров. Блоки
ничего не вычисляют: они только описывают границы и ветви.

Особенности:
- условные блоки внутри тел циклов на текущем уровне не ищутся, они
  обрабатываются в каждой итерации со своим контекстом;
- абзац, в котором все маркеры сбалансированы, считается inline-блоком;
- в режиме строк таблицы единицей является строка, а строка со
  сбалансированными маркерами обрабатывается на уровне ячеек.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .blocks import ConditionalBlock, ConditionalBranch, Element, LoopBlock
from .patterns import (
    ELSE,
    ELSEIF,
    EMPTY_END,
    EMPTY_START,
    FOREACH_END,
    FOREACH_START,
    IF_END,
    IF_START,
    MARKER_FRAGMENTS,
)
from ..document.elements import element_text, paragraph_text
from ..errors import TemplateSyntaxError

logger = logging.getLogger(__name__)


@dataclass
class _Markers:
    """Маркеры, найденные в тексте одного элемента."""
    if_open: List[re.Match] = field(default_factory=list)
    if_close: int = 0
    elseif: List[re.Match] = field(default_factory=list)
    else_count: int = 0
    loop_open: List[re.Match] = field(default_factory=list)
    loop_close: int = 0
    empty_open: int = 0
    empty_close: int = 0
    text: str = ""

    @property
    def if_depth(self) -> int:
        return len(self.if_open) - self.if_close

    @property
    def loop_depth(self) -> int:
        return len(self.loop_open) - self.loop_close

    @property
    def has_if_markers(self) -> bool:
        return bool(self.if_open or self.if_close or self.elseif or self.else_count)

    @property
    def has_loop_markers(self) -> bool:
        return bool(self.loop_open or self.loop_close)

    @property
    def has_branch_markers(self) -> bool:
        return bool(self.elseif or self.else_count)

    @property
    def is_balanced(self) -> bool:
        return (
            (self.has_if_markers or self.has_loop_markers)
            and self.if_depth == 0
            and self.loop_depth == 0
            and bool(self.if_open or self.loop_open)
        )


def scan_markers(text: str) -> _Markers:
    return _Markers(
        if_open=list(IF_START.finditer(text)),
        if_close=len(IF_END.findall(text)),
        elseif=list(ELSEIF.finditer(text)),
        else_count=len(ELSE.findall(text)),
        loop_open=list(FOREACH_START.finditer(text)),
        loop_close=len(FOREACH_END.findall(text)),
        empty_open=len(EMPTY_START.findall(text)),
        empty_close=len(EMPTY_END.findall(text)),
        text=text,
    )


def _scan(element: Element) -> Optional[_Markers]:
    text = element_text(element)
    if text is None:
        return None
    return scan_markers(text)


def _unclosed_opener(text: str, opener: re.Pattern, closer: re.Pattern) -> Optional[re.Match]:
    """Первый открывающий маркер, не закрытый в пределах того же текста."""
    events = [(m.start(), True, m) for m in opener.finditer(text)]
    events.extend((m.start(), False, m) for m in closer.finditer(text))
    events.sort(key=lambda e: e[0])

    stack: List[re.Match] = []
    for _, is_open, match in events:
        if is_open:
            stack.append(match)
        elif stack:
            stack.pop()
    return stack[0] if stack else None


def is_marker_paragraph(paragraph: Element) -> bool:
    """Содержит ли абзац хотя бы один маркер блока."""
    text = paragraph_text(paragraph).lower()
    return any(fragment in text for fragment in MARKER_FRAGMENTS)


# ---- Условные блоки ----

def detect_conditionals(
    elements: Sequence[Element],
    nesting_level: int = 0,
    rows: bool = False,
) -> List[ConditionalBlock]:
    """
    Находит условные блоки в последовательности элементов.

    Вложенные условные блоки возвращаются вместе с внешними, с уровнем
    вложенности на единицу больше; вызывающая сторона обрабатывает их
    от самых глубоких к внешним.

    Args:
        elements: Элементы одной области
        nesting_level: Уровень вложенности элементов области
        rows: Элементы являются строками одной таблицы

    Returns:
        Список дескрипторов условных блоков

    Raises:
        TemplateSyntaxError: При несбалансированных или неверно упорядоченных маркерах
    """
    blocks: List[ConditionalBlock] = []
    i = 0

    while i < len(elements):
        markers = _scan(elements[i])
        if markers is None:
            i += 1
            continue

        if markers.loop_depth > 0:
            _, end = _build_loop(elements, i, markers, rows)
            i = end + 1
            continue

        if markers.is_balanced:
            if not rows and markers.if_open and not markers.loop_open:
                blocks.append(_inline_conditional(elements[i], markers, nesting_level))
            i += 1
            continue

        if markers.if_depth > 0:
            block, end = _build_conditional(elements, i, markers, nesting_level, rows)
            blocks.append(block)
            for branch in block.branches:
                blocks.extend(detect_conditionals(branch.content, nesting_level + 1, rows))
            i = end + 1
            continue

        if markers.if_depth < 0:
            raise TemplateSyntaxError("Conditional end marker '{{/if}}' has no matching '{{#if}}'.")
        if markers.else_count:
            raise TemplateSyntaxError("Marker '{{else}}' is only allowed inside an open '{{#if}}' block.")
        if markers.elseif:
            raise TemplateSyntaxError(
                f"Marker '{markers.elseif[0].group(0)}' is only allowed inside an open '{{{{#if}}}}' block."
            )
        i += 1

    return blocks


def _inline_conditional(element: Element, markers: _Markers, nesting_level: int) -> ConditionalBlock:
    condition = markers.if_open[0].group(1).strip()
    return ConditionalBlock(
        branches=[ConditionalBranch(condition, element)],
        start_marker=element,
        end_marker=element,
        nesting_level=nesting_level,
    )


def _build_conditional(
    elements: Sequence[Element],
    start: int,
    markers: _Markers,
    nesting_level: int,
    rows: bool,
) -> Tuple[ConditionalBlock, int]:
    opener = _unclosed_opener(markers.text, IF_START, IF_END) or markers.if_open[0]
    branches = [ConditionalBranch(opener.group(1).strip(), elements[start])]
    depth = markers.if_depth

    for j in range(start + 1, len(elements)):
        element = elements[j]
        current = _scan(element)
        if current is None:
            branches[-1].content.append(element)
            continue

        if depth == 1 and not current.if_open and not current.if_close and current.has_branch_markers:
            if branches[-1].is_else:
                if current.else_count:
                    raise TemplateSyntaxError(
                        f"Conditional '{opener.group(0)}' has more than one '{{{{else}}}}' branch."
                    )
                raise TemplateSyntaxError(
                    f"Marker '{current.elseif[0].group(0)}' cannot follow '{{{{else}}}}' "
                    f"in conditional '{opener.group(0)}'."
                )
            condition = current.elseif[0].group(1).strip() if current.elseif else None
            branches.append(ConditionalBranch(condition, element))
            continue

        depth += current.if_depth
        if depth <= 0:
            block = ConditionalBlock(
                branches=branches,
                start_marker=elements[start],
                end_marker=element,
                nesting_level=nesting_level,
                is_table_row=rows,
            )
            logger.debug(
                f"Detected conditional '{block.condition}' with {len(branches)} branch(es) "
                f"at level {nesting_level}"
            )
            return block, j

        branches[-1].content.append(element)

    raise TemplateSyntaxError(
        f"Conditional start marker '{opener.group(0)}' has no matching '{{{{/if}}}}'."
    )


# ---- Циклы ----

def detect_loops(elements: Sequence[Element], rows: bool = False) -> List[LoopBlock]:
    """
    Находит циклы верхнего уровня в последовательности элементов.

    Вложенные циклы остаются частью тела и находятся при обходе
    каждой итерации.

    Raises:
        TemplateSyntaxError: При несбалансированных маркерах цикла или ветви empty
    """
    blocks: List[LoopBlock] = []
    i = 0

    while i < len(elements):
        markers = _scan(elements[i])
        if markers is None:
            i += 1
            continue

        if markers.loop_depth > 0:
            block, end = _build_loop(elements, i, markers, rows)
            blocks.append(block)
            i = end + 1
            continue

        if markers.loop_depth < 0:
            raise TemplateSyntaxError("Loop end marker '{{/foreach}}' has no matching '{{#foreach}}'.")

        if markers.has_loop_markers:
            if not rows and markers.is_balanced:
                blocks.append(_inline_loop(elements[i], markers))
            i += 1
            continue

        if markers.empty_open or markers.empty_close:
            raise TemplateSyntaxError("Marker '{{#empty}}' is only allowed inside a '{{#foreach}}' block.")
        i += 1

    return blocks


def _inline_loop(element: Element, markers: _Markers) -> LoopBlock:
    opener = markers.loop_open[0]
    return LoopBlock(
        collection_name=opener.group(2),
        content=[],
        start_marker=element,
        end_marker=element,
        variable_name=opener.group(1),
    )


def _build_loop(
    elements: Sequence[Element],
    start: int,
    markers: _Markers,
    rows: bool,
) -> Tuple[LoopBlock, int]:
    opener = _unclosed_opener(markers.text, FOREACH_START, FOREACH_END) or markers.loop_open[0]
    depth = markers.loop_depth
    content: List[Element] = []
    empty_content: List[Element] = []
    empty_markers: List[Element] = []
    in_empty = False

    for j in range(start + 1, len(elements)):
        element = elements[j]
        current = _scan(element)

        if current is not None and depth == 1 and not current.has_loop_markers:
            if current.empty_open:
                if empty_markers:
                    raise TemplateSyntaxError(
                        f"Loop '{opener.group(0)}' has more than one '{{{{#empty}}}}' branch."
                    )
                empty_markers.append(element)
                if current.empty_close:
                    # {{#empty}}…{{/empty}} в одном абзаце
                    empty_content.append(element)
                else:
                    in_empty = True
                continue
            if current.empty_close:
                if not in_empty:
                    raise TemplateSyntaxError("Marker '{{/empty}}' has no matching '{{#empty}}'.")
                empty_markers.append(element)
                in_empty = False
                continue

        if current is not None:
            depth += current.loop_depth
            if depth <= 0:
                if in_empty:
                    raise TemplateSyntaxError(
                        f"Marker '{{{{#empty}}}}' in loop '{opener.group(0)}' has no matching '{{{{/empty}}}}'."
                    )
                block = LoopBlock(
                    collection_name=opener.group(2),
                    content=content,
                    start_marker=elements[start],
                    end_marker=element,
                    variable_name=opener.group(1),
                    empty_content=empty_content,
                    empty_markers=empty_markers,
                    is_table_row=rows,
                )
                logger.debug(
                    f"Detected loop over '{block.collection_name}' with {len(content)} element(s)"
                    + (" (table rows)" if rows else "")
                )
                return block, j

        (empty_content if in_empty else content).append(element)

    raise TemplateSyntaxError(
        f"Loop start marker '{opener.group(0)}' has no matching '{{{{/foreach}}}}'."
    )


__all__ = ["detect_conditionals", "detect_loops", "is_marker_paragraph", "scan_markers"]
