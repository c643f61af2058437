"""
Запуск движка в тестах.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from docfill import (
    DocumentTemplateProcessor,
    MissingVariablePolicy,
    ProcessingOptions,
    ProcessingResult,
    TextProcessingResult,
    TextTemplateProcessor,
)


def make_options(
    missing: MissingVariablePolicy = MissingVariablePolicy.LEAVE_UNCHANGED,
    locale: str = "en-US",
    **overrides: Any,
) -> ProcessingOptions:
    """Собирает ProcessingOptions с компактными именами для частых полей."""
    return ProcessingOptions(missing_variables=missing, locale=locale, **overrides)


def process(document, data: Mapping[str, Any], options: Optional[ProcessingOptions] = None) -> ProcessingResult:
    return DocumentTemplateProcessor(options).process(document, data)


def process_text(text: str, data: Mapping[str, Any], options: Optional[ProcessingOptions] = None) -> TextProcessingResult:
    return TextTemplateProcessor(options).process(text, data)


__all__ = ["make_options", "process", "process_text"]
