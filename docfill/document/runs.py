"""
Перестройка run-ов абзаца при подстановке текста.

Плейсхолдер может быть разбит между несколькими run-ами. Подстановка
заменяет диапазон символов плоского текста абзаца, сохраняя
форматирование run-а, в котором начинался плейсхолдер. Значения с
переводами строк или markdown-выделением раскладываются на отдельные
run-ы, каждый из которых наследует форматирование исходного run-а.
"""

from __future__ import annotations

import copy
import logging
from typing import List, Optional, Sequence, Tuple

from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.text.run import Run
from lxml import etree

from .elements import text_nodes
from ..formatting.emphasis import EmphasisSegment, has_emphasis, split_emphasis

logger = logging.getLogger(__name__)

_XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"


def replace_text_range(
    paragraph: etree._Element,
    start: int,
    length: int,
    value: str,
    newlines: bool = True,
) -> None:
    """
    Заменяет диапазон плоского текста абзаца значением.

    Args:
        paragraph: Элемент ``w:p``
        start: Начало диапазона в плоском тексте
        length: Длина диапазона
        value: Подставляемый текст
        newlines: Превращать ли переводы строк в разрывы ``w:br``
    """
    nodes = _locate(paragraph, start, length)
    if nodes is None:
        logger.debug(f"Range {start}+{length} is outside of the paragraph text")
        return

    (first, first_offset), (last, last_offset), middle = nodes
    prefix = (first.text or "")[:start - first_offset]
    suffix = (last.text or "")[start + length - last_offset:]

    for node in middle:
        _set_text(node, "")

    if not _needs_runs(value, newlines):
        if first is last:
            _set_text(first, prefix + value + suffix)
        else:
            _set_text(first, prefix + value)
            _set_text(last, suffix)
        return

    base_run = first.getparent()
    _set_text(first, prefix)
    if first is not last:
        _set_text(last, suffix)
        suffix = ""

    anchor = base_run
    for segment in _segments(value):
        run = _new_run(base_run, segment.text, newlines)
        _apply_emphasis(run, segment)
        anchor.addnext(run)
        anchor = run

    if suffix:
        anchor.addnext(_new_run(base_run, suffix, newlines=False))


def set_paragraph_pieces(
    paragraph: etree._Element,
    pieces: Sequence[Tuple[str, bool]],
    newlines: bool = True,
) -> None:
    """
    Заменяет всё содержимое абзаца текстом из фрагментов.

    Фрагмент задаётся парой (текст, является ли он значением). Выделение
    раскрывается только во фрагментах-значениях, текст шаблона
    вставляется как есть. Соседние простые сегменты сливаются в один
    run. Форматирование берётся у первого run-а, у которого оно есть.
    """
    runs = paragraph.findall(qn("w:r"))
    base_run = next((r for r in runs if r.find(qn("w:rPr")) is not None), None)

    for run in runs:
        paragraph.remove(run)
    for hyperlink in paragraph.findall(qn("w:hyperlink")):
        paragraph.remove(hyperlink)

    segments: List[EmphasisSegment] = []
    for text, is_value in pieces:
        for segment in (_segments(text) if is_value else [EmphasisSegment(text)]):
            if segments and segment.is_plain and segments[-1].is_plain:
                segments[-1] = EmphasisSegment(segments[-1].text + segment.text)
            else:
                segments.append(segment)

    for segment in segments or [EmphasisSegment("")]:
        run = _new_run(base_run, segment.text, newlines)
        _apply_emphasis(run, segment)
        paragraph.append(run)


def _locate(
    paragraph: etree._Element, start: int, length: int
) -> Optional[Tuple[Tuple[etree._Element, int], Tuple[etree._Element, int], List[etree._Element]]]:
    end = start + length
    first: Optional[Tuple[etree._Element, int]] = None
    last: Optional[Tuple[etree._Element, int]] = None
    middle: List[etree._Element] = []
    offset = 0

    for node in text_nodes(paragraph):
        size = len(node.text or "")
        node_end = offset + size
        if first is None:
            if offset <= start < node_end or (length == 0 and start == node_end):
                first = (node, offset)
        elif offset < end:
            middle.append(node)
        if first is not None and (end <= node_end or length == 0):
            last = (node, offset)
            break
        offset = node_end

    if first is None or last is None:
        return None
    if middle and middle[-1] is last[0]:
        middle.pop()
    return first, last, middle


def _needs_runs(value: str, newlines: bool) -> bool:
    if newlines and "\n" in value:
        return True
    return has_emphasis(value)


def _segments(value: str) -> List[EmphasisSegment]:
    if has_emphasis(value):
        return split_emphasis(value)
    return [EmphasisSegment(value)] if value else []


def _new_run(base_run: etree._Element, text: str, newlines: bool) -> etree._Element:
    run = OxmlElement("w:r")
    properties = base_run.find(qn("w:rPr")) if base_run is not None else None
    if properties is not None:
        run.append(copy.deepcopy(properties))
    _append_text(run, text, newlines)
    return run


def _append_text(run: etree._Element, text: str, newlines: bool) -> None:
    text = text.replace("\r\n", "\n")
    if newlines and "\n" in text:
        lines = text.split("\n")
        for index, line in enumerate(lines):
            if index:
                run.append(OxmlElement("w:br"))
            if line:
                run.append(_new_text(line))
        return
    run.append(_new_text(text))


def _new_text(text: str) -> etree._Element:
    node = OxmlElement("w:t")
    _set_text(node, text)
    return node


def _set_text(node: etree._Element, text: str) -> None:
    node.text = text
    if text != text.strip() or "  " in text:
        node.set(_XML_SPACE, "preserve")


def _apply_emphasis(run: etree._Element, segment: EmphasisSegment) -> None:
    """Объединяет выделение сегмента с унаследованным форматированием."""
    if segment.is_plain:
        return
    wrapper = Run(run, None)
    if segment.bold:
        wrapper.bold = True
    if segment.italic:
        wrapper.italic = True
    if segment.strike:
        wrapper.font.strike = True


__all__ = ["replace_text_range", "set_paragraph_pieces"]
