"""
Базовый интерфейс посетителя элементов шаблона.

Обходчик документа находит элементы шаблона и передаёт их посетителю;
каждый посетитель реагирует только на свой вид элементов, остальные
методы по умолчанию ничего не делают.
"""

from __future__ import annotations

from typing import Any

from ..context import EvaluationContext
from ..markup import ConditionalBlock, LoopBlock, PlaceholderMatch


class TemplateVisitor:
    """Посетитель элементов шаблона с пустыми реализациями по умолчанию."""

    def visit_conditional(self, block: ConditionalBlock, context: EvaluationContext) -> None:
        pass

    def visit_loop(self, block: LoopBlock, context: EvaluationContext) -> None:
        pass

    def visit_placeholder(self, placeholder: PlaceholderMatch, paragraph: Any, context: EvaluationContext) -> None:
        pass

    def visit_paragraph(self, paragraph: Any, context: EvaluationContext) -> None:
        pass


__all__ = ["TemplateVisitor"]
