"""
Дескрипторы блоков разметки: условные блоки и циклы.

Дескриптор создаётся детектором, один раз потребляется посетителем и
отбрасывается. Элементы это lxml-узлы документа (абзацы или строки таблиц).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

Element = Any  # lxml-элемент документа


@dataclass
class ConditionalBranch:
    """
    Ветвь условного блока.

    Attributes:
        condition: Текст условия; None для ветви ``{{else}}``
        marker: Элемент с маркером, открывающим ветвь
        content: Элементы между этим маркером и следующим
    """
    condition: Optional[str]
    marker: Element
    content: List[Element] = field(default_factory=list)

    @property
    def is_else(self) -> bool:
        return self.condition is None


@dataclass
class ConditionalBlock:
    """
    Условный блок ``{{#if}}…{{#elseif}}…{{else}}…{{/if}}``.

    Ветви упорядочены: if, затем elseif, затем необязательный else.
    """
    branches: List[ConditionalBranch]
    start_marker: Element
    end_marker: Element
    nesting_level: int = 0
    is_table_row: bool = False

    @property
    def condition(self) -> str:
        return self.branches[0].condition or ""

    @property
    def is_inline(self) -> bool:
        """Все маркеры блока находятся в одном абзаце."""
        return self.start_marker is self.end_marker

    @property
    def markers(self) -> List[Element]:
        result = [self.start_marker]
        result.extend(b.marker for b in self.branches[1:])
        if self.end_marker is not self.start_marker:
            result.append(self.end_marker)
        return result

    @property
    def content(self) -> List[Element]:
        return [e for branch in self.branches for e in branch.content]


@dataclass
class LoopBlock:
    """
    Цикл ``{{#foreach [item in] Collection}}…{{/foreach}}``.

    Attributes:
        collection_name: Имя или путь коллекции
        content: Тело цикла без ветви empty
        start_marker: Элемент с открывающим маркером
        end_marker: Элемент с закрывающим маркером
        variable_name: Имя переменной итерации, если задано
        empty_content: Содержимое ``{{#empty}}…{{/empty}}``
        empty_markers: Элементы маркеров ветви empty
        is_table_row: Маркеры занимают отдельные строки таблицы
    """
    collection_name: str
    content: List[Element]
    start_marker: Element
    end_marker: Element
    variable_name: Optional[str] = None
    empty_content: List[Element] = field(default_factory=list)
    empty_markers: List[Element] = field(default_factory=list)
    is_table_row: bool = False

    @property
    def is_inline(self) -> bool:
        return self.start_marker is self.end_marker

    @property
    def has_empty_branch(self) -> bool:
        return bool(self.empty_markers)

    @property
    def all_elements(self) -> List[Element]:
        """Все элементы блока, включая маркеры и ветвь empty."""
        result = [self.start_marker, *self.content, *self.empty_markers, *self.empty_content]
        if self.end_marker is not self.start_marker:
            result.append(self.end_marker)
        return result


__all__ = ["ConditionalBranch", "ConditionalBlock", "LoopBlock"]
