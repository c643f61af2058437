"""
Обработчик документов: точка входа движка.

Один вызов process() строит свой набор посетителей, накопитель
предупреждений и корневой контекст, затем обходит тело документа.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import docx

from .context import GlobalEvaluationContext
from .document import body_of
from .errors import DocfillError
from .json_data import parse_json_data
from .resolution import PlaceholderResolver
from .results import ProcessingResult, WarningCollector
from .types import DataModel, ProcessingOptions
from .visitors import DocumentWalker, build_visitor

logger = logging.getLogger(__name__)


class DocumentTemplateProcessor:
    """
    Заполняет docx-шаблон данными.

    Документ изменяется на месте. Структурные ошибки и ошибки данных
    возвращаются как неуспешный результат; документ при этом может
    остаться частично изменённым.
    """

    def __init__(self, options: Optional[ProcessingOptions] = None):
        self.options = options or ProcessingOptions()

    def process(self, document: Any, data: DataModel) -> ProcessingResult:
        """
        Обрабатывает тело документа.

        Args:
            document: Документ python-docx (или объект с ``element.body``)
            data: Модель данных

        Returns:
            Результат с числом замен, предупреждениями и пропущенными переменными
        """
        body = body_of(document)
        collector = WarningCollector()
        resolver = PlaceholderResolver(self.options, collector)

        walker = DocumentWalker(body)
        visitor = build_visitor(walker, resolver, self.options.enable_newline_support)

        try:
            walker.walk(visitor, GlobalEvaluationContext(data))
        except DocfillError as e:
            logger.debug(f"Document processing failed: {e}")
            return ProcessingResult.failure(str(e), collector)

        logger.info(
            f"Document processed: {resolver.replacement_count} replacement(s), "
            f"{len(collector)} warning(s)"
        )
        return ProcessingResult.ok(resolver.replacement_count, collector)

    def process_json(self, document: Any, json_text: str) -> ProcessingResult:
        """Обрабатывает документ данными из JSON-текста."""
        try:
            data = parse_json_data(json_text)
        except DocfillError as e:
            return ProcessingResult.failure(str(e))
        return self.process(document, data)

    def process_file(self, template_path: Path, output_path: Path, data: DataModel) -> ProcessingResult:
        """
        Открывает шаблон, обрабатывает и сохраняет результат.

        Выходной файл записывается только при успешной обработке.
        """
        document = docx.Document(str(template_path))
        result = self.process(document, data)
        if result.success:
            document.save(str(output_path))
            logger.debug(f"Saved processed document to {output_path}")
        return result


__all__ = ["DocumentTemplateProcessor"]
