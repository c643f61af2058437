"""
Поиск плейсхолдеров в плоском тексте.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .patterns import PLACEHOLDER, RESERVED_NAMES


@dataclass(frozen=True)
class PlaceholderMatch:
    """
    Найденный плейсхолдер.

    Attributes:
        full_match: Исходная разметка, например ``{{Price:yesno}}``
        variable_name: Имя переменной, путь или текст выражения в скобках
        start: Позиция начала в тексте
        length: Длина разметки
        format: Необязательный спецификатор формата
    """
    full_match: str
    variable_name: str
    start: int
    length: int
    format: Optional[str] = None

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def is_expression(self) -> bool:
        return self.variable_name.startswith("(")


class PlaceholderFinder:
    """Находит все плейсхолдеры в тексте слева направо."""

    def find_all(self, text: str) -> List[PlaceholderMatch]:
        if not text:
            return []

        matches: List[PlaceholderMatch] = []
        for match in PLACEHOLDER.finditer(text):
            name = match.group(1)
            if name.lower() in RESERVED_NAMES:
                continue
            matches.append(PlaceholderMatch(
                full_match=match.group(0),
                variable_name=name,
                start=match.start(),
                length=match.end() - match.start(),
                format=match.group(2),
            ))
        return matches

    def unique_names(self, text: str) -> List[str]:
        """Уникальные имена переменных в порядке первого появления."""
        names: List[str] = []
        for match in self.find_all(text):
            if match.variable_name not in names:
                names.append(match.variable_name)
        return names

    def contains_placeholders(self, text: str) -> bool:
        return bool(self.find_all(text))


__all__ = ["PlaceholderMatch", "PlaceholderFinder"]
