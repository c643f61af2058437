"""
Модели данных для путей к свойствам.

Путь вида ``Customer.Address.City`` или ``Items[0].Name`` разбирается
один раз в упорядоченный список сегментов.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class PathSegment:
    """
    Один сегмент пути к свойству.

    Attributes:
        name: Имя поля или сырое содержимое скобок индексатора
        is_indexer: True для сегментов вида ``[0]`` или ``[key]``
        index: Числовой индекс, если содержимое индексатора является числом
    """
    name: str
    is_indexer: bool = False
    index: Optional[int] = None

    @property
    def is_numeric(self) -> bool:
        return self.index is not None

    def __str__(self) -> str:
        return f"[{self.name}]" if self.is_indexer else self.name


@dataclass(frozen=True)
class PropertyPath:
    """Разобранный путь к свойству: как минимум один сегмент."""
    segments: Tuple[PathSegment, ...]

    @property
    def root(self) -> PathSegment:
        return self.segments[0]

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        parts = []
        for segment in self.segments:
            if segment.is_indexer or not parts:
                parts.append(str(segment))
            else:
                parts.append(f".{segment}")
        return "".join(parts)


__all__ = ["PathSegment", "PropertyPath"]
