"""
Разбор markdown-выделения внутри подставляемых значений.

Поддерживаются ``***bold italic***``, ``**bold**``/``__bold__``,
``*italic*``/``_italic_`` и ``~~strike~~``. Результат: список
сегментов, каждый из которых потом становится отдельным run.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

_EMPHASIS_RE = re.compile(
    r"(~~(?P<strike>[^~]+?)~~)"
    r"|((?<!\*)\*\*\*(?P<bolditalic>[^*]+?)\*\*\*(?!\*))"
    r"|(?<!\*)\*\*(?P<bold>[^*]+?)\*\*(?!\*)"
    r"|__(?P<bold2>[^_]+?)__"
    r"|(?<![*_])\*(?P<italic>[^*]+?)\*(?![*_])"
    r"|(?<![*_])_(?P<italic2>[^_]+?)_(?![*_])"
)


@dataclass(frozen=True)
class EmphasisSegment:
    text: str
    bold: bool = False
    italic: bool = False
    strike: bool = False

    @property
    def is_plain(self) -> bool:
        return not (self.bold or self.italic or self.strike)


def has_emphasis(text: str) -> bool:
    return bool(text) and _EMPHASIS_RE.search(text) is not None


def split_emphasis(text: str) -> List[EmphasisSegment]:
    """
    Разбивает текст на сегменты с признаками выделения.

    Пустые сегменты не возвращаются. Текст без разметки даёт
    один простой сегмент.
    """
    segments: List[EmphasisSegment] = []
    last = 0

    for match in _EMPHASIS_RE.finditer(text):
        if match.start() > last:
            segments.append(EmphasisSegment(text[last:match.start()]))

        groups = match.groupdict()
        if groups["strike"] is not None:
            segments.append(EmphasisSegment(groups["strike"], strike=True))
        elif groups["bolditalic"] is not None:
            segments.append(EmphasisSegment(groups["bolditalic"], bold=True, italic=True))
        elif groups["bold"] is not None or groups["bold2"] is not None:
            segments.append(EmphasisSegment(groups["bold"] or groups["bold2"], bold=True))
        else:
            segments.append(EmphasisSegment(groups["italic"] or groups["italic2"], italic=True))

        last = match.end()

    if last < len(text):
        segments.append(EmphasisSegment(text[last:]))

    result = [s for s in segments if s.text]
    if not result and text:
        return [EmphasisSegment(text)]
    return result


__all__ = ["EmphasisSegment", "has_emphasis", "split_emphasis"]
