"""
Вспомогательные функции для элементов дерева документа.

Движок работает напрямую с lxml-элементами python-docx (``w:p``, ``w:tbl``,
``w:tr``, ``w:tc``): читает их текст, клонирует, вставляет и удаляет.
"""

from __future__ import annotations

import copy
from enum import Enum
from typing import Any, Iterable, List, Optional

from docx.oxml import OxmlElement
from docx.oxml.ns import nsmap, qn
from lxml import etree


class ElementKind(Enum):
    PARAGRAPH = "paragraph"
    RUN = "run"
    TABLE = "table"
    ROW = "row"
    CELL = "cell"
    OTHER = "other"


_KINDS = {
    qn("w:p"): ElementKind.PARAGRAPH,
    qn("w:r"): ElementKind.RUN,
    qn("w:tbl"): ElementKind.TABLE,
    qn("w:tr"): ElementKind.ROW,
    qn("w:tc"): ElementKind.CELL,
}

# Текстовые узлы абзаца, включая гиперссылки и вставки рецензирования,
# но не абзацы вложенных надписей
_TEXT_XPATH = etree.XPath(
    "./w:r/w:t | ./w:hyperlink/w:r/w:t | ./w:ins/w:r/w:t | ./w:smartTag/w:r/w:t",
    namespaces=nsmap,
)


def kind_of(element: etree._Element) -> ElementKind:
    return _KINDS.get(element.tag, ElementKind.OTHER)


def text_nodes(paragraph: etree._Element) -> List[etree._Element]:
    """``w:t`` элементы абзаца в порядке документа."""
    return list(_TEXT_XPATH(paragraph))


def paragraph_text(paragraph: etree._Element) -> str:
    return "".join(t.text or "" for t in text_nodes(paragraph))


def element_text(element: etree._Element) -> Optional[str]:
    """
    Плоский текст элемента для поиска маркеров.

    Абзац даёт свой текст, строка таблицы даёт текст всех ячеек подряд.
    Для таблиц и прочих элементов возвращается None: их содержимое
    обходится отдельно.
    """
    kind = kind_of(element)
    if kind == ElementKind.PARAGRAPH:
        return paragraph_text(element)
    if kind == ElementKind.ROW:
        return "".join(
            paragraph_text(p)
            for cell in row_cells(element)
            for p in cell.iter(qn("w:p"))
        )
    return None


def is_attached(element: etree._Element, root: etree._Element) -> bool:
    """Проверяет, что элемент всё ещё находится в дереве под root."""
    node = element
    while node is not None:
        if node is root:
            return True
        node = node.getparent()
    return False


def clone(element: etree._Element) -> etree._Element:
    return copy.deepcopy(element)


def clone_all(elements: Iterable[etree._Element]) -> List[etree._Element]:
    return [clone(e) for e in elements]


def insert_after(anchor: etree._Element, elements: Iterable[etree._Element]) -> etree._Element:
    """
    Вставляет элементы подряд после anchor.

    Returns:
        Последний вставленный элемент (или anchor, если вставлять нечего)
    """
    last = anchor
    for element in elements:
        last.addnext(element)
        last = element
    return last


def remove(element: Optional[etree._Element]) -> None:
    """Отсоединяет элемент от родителя; повторное удаление ничего не делает."""
    if element is None:
        return
    parent = element.getparent()
    if parent is not None:
        parent.remove(element)


def remove_all(elements: Iterable[Optional[etree._Element]]) -> None:
    for element in elements:
        remove(element)


def body_of(document: Any) -> etree._Element:
    """Возвращает ``w:body`` документа python-docx (или объекта с ``element.body``)."""
    element = getattr(document, "element", None)
    body = getattr(element, "body", None)
    if body is None:
        raise TypeError(f"Expected a python-docx Document, got {type(document).__name__}")
    return body


def block_children(container: etree._Element) -> List[etree._Element]:
    """Дочерние блоки тела документа или ячейки: всё, кроме свойств секции и ячейки."""
    skipped = (qn("w:sectPr"), qn("w:tcPr"))
    return [child for child in container if child.tag not in skipped]


def table_rows(table: etree._Element) -> List[etree._Element]:
    return table.findall(qn("w:tr"))


def row_cells(row: etree._Element) -> List[etree._Element]:
    return row.findall(qn("w:tc"))


def ensure_cell_paragraph(cell: etree._Element) -> None:
    """Ячейка таблицы обязана содержать хотя бы один абзац."""
    if cell.find(qn("w:p")) is None:
        cell.append(OxmlElement("w:p"))


__all__ = [
    "ElementKind",
    "kind_of",
    "text_nodes",
    "paragraph_text",
    "element_text",
    "is_attached",
    "clone",
    "clone_all",
    "insert_after",
    "remove",
    "remove_all",
    "body_of",
    "block_children",
    "table_rows",
    "row_cells",
    "ensure_cell_paragraph",
]
