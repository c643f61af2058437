"""
Текстовые подстановки, применяемые к значениям перед вставкой в документ.

Подстановки выполняются до разбора markdown-выделения, поэтому
``<br>`` из значения превращается в перевод строки, а он затем в разрыв
строки документа.
"""

from __future__ import annotations

import re
from typing import Dict, Mapping

_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)


class TextReplacements:
    """Готовые наборы подстановок."""

    HTML_ENTITIES: Dict[str, str] = {
        "<br>": "\n",
        "<br/>": "\n",
        "<br />": "\n",
        "&nbsp;": "\u00a0",
        "&lt;": "<",
        "&gt;": ">",
        "&quot;": "\"",
        "&apos;": "'",
        "&mdash;": "\u2014",
        "&ndash;": "\u2013",
        # &amp; последним: "&amp;lt;" даёт "&lt;"
        "&amp;": "&",
    }

    PRESETS: Dict[str, Dict[str, str]] = {"html": HTML_ENTITIES}


def apply_replacements(text: str, mapping: Mapping[str, str]) -> str:
    """
    Применяет подстановки последовательно в порядке словаря.

    Ключи ``<br>`` сравниваются без учёта регистра, остальные точно.
    """
    if not text or not mapping:
        return text

    for source, target in mapping.items():
        if not source:
            continue
        if _BR_RE.fullmatch(source):
            text = _BR_RE.sub(lambda _m: target, text)
        else:
            text = text.replace(source, target)
    return text


__all__ = ["TextReplacements", "apply_replacements"]
