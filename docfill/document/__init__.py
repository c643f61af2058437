"""Работа с деревом документа python-docx на уровне lxml-элементов."""

from .elements import (
    ElementKind,
    block_children,
    body_of,
    element_text,
    is_attached,
    kind_of,
    paragraph_text,
    row_cells,
    table_rows,
)
from .runs import replace_text_range, set_paragraph_pieces

__all__ = [
    "ElementKind",
    "block_children",
    "body_of",
    "element_text",
    "is_attached",
    "kind_of",
    "paragraph_text",
    "row_cells",
    "table_rows",
    "replace_text_range",
    "set_paragraph_pieces",
]
