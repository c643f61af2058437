"""
Обработка текстовых шаблонов.

Та же грамматика, что и в документах, применённая к обычной строке:
письма, темы сообщений, короткие уведомления.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .parser import parse_template
from .renderer import RenderedPiece, TemplateRenderer
from ..context import EvaluationContext, GlobalEvaluationContext
from ..errors import DocfillError
from ..resolution import PlaceholderResolver
from ..results import TextProcessingResult, WarningCollector
from ..types import DataModel, ProcessingOptions

logger = logging.getLogger(__name__)


class TextTemplateProcessor:
    """Обработчик текстовых шаблонов."""

    def __init__(self, options: Optional[ProcessingOptions] = None):
        self.options = options or ProcessingOptions()

    def process(self, text: str, data: DataModel) -> TextProcessingResult:
        """
        Обрабатывает текст шаблона.

        Args:
            text: Текст шаблона
            data: Модель данных

        Returns:
            Результат с итоговым текстом или с сообщением об ошибке
        """
        collector = WarningCollector()
        try:
            resolver = PlaceholderResolver(self.options, collector)
            rendered = render_text(text, GlobalEvaluationContext(data), resolver)
        except DocfillError as e:
            logger.debug(f"Text template processing failed: {e}")
            return TextProcessingResult.failure(str(e), collector)

        logger.info(f"Text template processed: {resolver.replacement_count} replacement(s), {len(collector)} warning(s)")
        return TextProcessingResult.ok_text(rendered, resolver.replacement_count, collector)


def render_text(
    text: str,
    context: EvaluationContext,
    resolver: PlaceholderResolver,
    resolve_placeholders: bool = True,
) -> str:
    """
    Разбирает и рендерит текст шаблона в заданном контексте.

    Raises:
        TemplateSyntaxError: При ошибке структуры разметки
        TemplateDataError: Коллекция цикла не является коллекцией
        MissingVariableError: При политике FAIL
    """
    ast = parse_template(text)
    return TemplateRenderer(resolver, resolve_placeholders).render(ast, context)


def render_pieces(
    text: str,
    context: EvaluationContext,
    resolver: PlaceholderResolver,
    resolve_placeholders: bool = True,
) -> List[RenderedPiece]:
    """То же, что render_text, но фрагментами: текст шаблона отдельно от значений."""
    return TemplateRenderer(resolver, resolve_placeholders).render_pieces(parse_template(text), context)


__all__ = ["TextTemplateProcessor", "render_pieces", "render_text"]
