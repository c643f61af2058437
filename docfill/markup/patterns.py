"""
Регулярные выражения разметки шаблона.

Все маркеры блоков распознаются без учёта регистра.
"""

from __future__ import annotations

import re

IF_START = re.compile(r"\{\{#if\s+(.+?)\}\}", re.IGNORECASE)
ELSEIF = re.compile(r"\{\{#elseif\s+(.+?)\}\}", re.IGNORECASE)
ELSE = re.compile(r"\{\{else\}\}", re.IGNORECASE)
IF_END = re.compile(r"\{\{/if\}\}", re.IGNORECASE)

# {{#foreach Items}} или {{#foreach item in Items}}
FOREACH_START = re.compile(r"\{\{#foreach\s+(?:(\w+)\s+in\s+)?([\w.\[\]]+)\}\}", re.IGNORECASE)
FOREACH_END = re.compile(r"\{\{/foreach\}\}", re.IGNORECASE)
EMPTY_START = re.compile(r"\{\{#empty\}\}", re.IGNORECASE)
EMPTY_END = re.compile(r"\{\{/empty\}\}", re.IGNORECASE)

# {{Name}}, {{Order.Customer.Name}}, {{Items[0]}}, {{.}}, {{this}}, {{@index}},
# {{(A and B)}}, {{IsActive:yesno}}
PLACEHOLDER = re.compile(r"\{\{(\.|this|@?[\w.\[\]]+|\([^}]+\))(?::(\w+))?\}\}")

# Фрагменты, по которым абзац считается маркерным (текст в нижнем регистре)
MARKER_FRAGMENTS = (
    "{{#if",
    "{{#elseif",
    "{{else}}",
    "{{/if}}",
    "{{#foreach",
    "{{/foreach}}",
    "{{#empty}}",
    "{{/empty}}",
)

# Слова, которые синтаксически похожи на плейсхолдер, но являются маркерами
RESERVED_NAMES = frozenset({"else"})


__all__ = [
    "IF_START",
    "ELSEIF",
    "ELSE",
    "IF_END",
    "FOREACH_START",
    "FOREACH_END",
    "EMPTY_START",
    "EMPTY_END",
    "PLACEHOLDER",
    "MARKER_FRAGMENTS",
    "RESERVED_NAMES",
]
