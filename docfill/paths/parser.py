"""
Парсер путей к свойствам.

Грамматика:
path     → name (("." name) | indexer)*
name     → [A-Za-z0-9_]+
indexer  → "[" (любые символы, кроме "[", "]", ".")+ "]"
"""

from __future__ import annotations

from typing import List, Optional

from .model import PathSegment, PropertyPath


class PropertyPathError(ValueError):
    """Ошибка разбора пути к свойству."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Invalid property path at position {position}: {message}")


class PropertyPathParser:
    """
    Посимвольный парсер путей к свойствам.

    Отклоняет подряд идущие точки, точки внутри скобок, вложенные,
    пустые и незакрытые скобки.
    """

    def __init__(self):
        self._text = ""
        self._position = 0
        self._segments: List[PathSegment] = []
        self._buffer: List[str] = []
        # Тип предыдущего элемента: None (начало), "name", "dot", "index"
        self._previous: Optional[str] = None

    def parse(self, text: str) -> PropertyPath:
        """
        Разбирает строку пути в PropertyPath.

        Args:
            text: Строка пути, например ``Items[0].Name``

        Returns:
            Разобранный путь

        Raises:
            PropertyPathError: При синтаксической ошибке
        """
        self._text = text or ""
        self._position = 0
        self._segments = []
        self._buffer = []
        self._previous = None

        if not self._text.strip():
            raise PropertyPathError("Path cannot be empty", 0)

        while self._position < len(self._text):
            char = self._text[self._position]

            if char == ".":
                self._parse_dot()
            elif char == "[":
                self._parse_indexer()
            elif char == "]":
                raise PropertyPathError("Unexpected ']'", self._position)
            elif char.isalnum() or char == "_":
                if self._previous == "index":
                    raise PropertyPathError(
                        f"Expected '.' or '[' after indexer, got '{char}'", self._position
                    )
                self._buffer.append(char)
                self._previous = "name"
                self._position += 1
            else:
                raise PropertyPathError(f"Unexpected character '{char}'", self._position)

        if self._previous == "dot":
            raise PropertyPathError("Path cannot end with '.'", self._position)

        self._flush_name()

        if not self._segments:
            raise PropertyPathError("Path has no segments", 0)

        return PropertyPath(segments=tuple(self._segments))

    def _parse_dot(self) -> None:
        if self._previous is None:
            raise PropertyPathError("Path cannot start with '.'", self._position)
        if self._previous == "dot":
            raise PropertyPathError("Consecutive dots are not allowed", self._position)

        self._flush_name()
        self._previous = "dot"
        self._position += 1

    def _parse_indexer(self) -> None:
        start = self._position

        if self._previous is None:
            raise PropertyPathError("Path cannot start with an indexer", start)
        if self._previous == "dot":
            raise PropertyPathError("Indexer cannot follow '.'", start)

        self._flush_name()

        content: List[str] = []
        position = start + 1
        while position < len(self._text):
            char = self._text[position]
            if char == "]":
                break
            if char == "[":
                raise PropertyPathError("Nested brackets are not allowed", position)
            if char == ".":
                raise PropertyPathError("'.' is not allowed inside brackets", position)
            content.append(char)
            position += 1
        else:
            raise PropertyPathError("Unclosed bracket", start)

        raw = "".join(content).strip()
        if not raw:
            raise PropertyPathError("Empty brackets", start)

        index = int(raw) if raw.isdigit() else None
        self._segments.append(PathSegment(name=raw, is_indexer=True, index=index))
        self._previous = "index"
        self._position = position + 1

    def _flush_name(self) -> None:
        if self._buffer:
            self._segments.append(PathSegment(name="".join(self._buffer)))
            self._buffer = []


def parse_path(text: str) -> PropertyPath:
    """
    Удобная функция для разбора пути.

    Raises:
        PropertyPathError: При синтаксической ошибке
    """
    return PropertyPathParser().parse(text)


def try_parse_path(text: str) -> Optional[PropertyPath]:
    """Разбирает путь или возвращает None, если путь некорректен."""
    try:
        return parse_path(text)
    except PropertyPathError:
        return None


__all__ = ["PropertyPathError", "PropertyPathParser", "parse_path", "try_parse_path"]
