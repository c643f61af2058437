"""
Посетитель плейсхолдеров.
"""

from __future__ import annotations

from typing import Any

from .base import TemplateVisitor
from ..context import EvaluationContext
from ..document.runs import replace_text_range
from ..markup import PlaceholderMatch
from ..resolution import PlaceholderResolver


class PlaceholderVisitor(TemplateVisitor):
    """
    Заменяет плейсхолдер в абзаце текстом значения.

    Форматирование run-а, в котором начинался плейсхолдер, сохраняется;
    переводы строк и markdown-выделение в значении дают отдельные run-ы.
    """

    def __init__(self, resolver: PlaceholderResolver, newlines: bool = True):
        self.resolver = resolver
        self.newlines = newlines

    @property
    def replacement_count(self) -> int:
        return self.resolver.replacement_count

    def visit_placeholder(self, placeholder: PlaceholderMatch, paragraph: Any, context: EvaluationContext) -> None:
        text = self.resolver.resolve(placeholder.variable_name, placeholder.format, context)
        if text is None:
            return
        replace_text_range(paragraph, placeholder.start, placeholder.length, text, self.newlines)


__all__ = ["PlaceholderVisitor"]
