"""
docfill: заполнение docx-шаблонов данными.

Основные точки входа:

    from docfill import DocumentTemplateProcessor, ProcessingOptions
    result = DocumentTemplateProcessor(ProcessingOptions(locale="de")).process(document, data)
"""

from __future__ import annotations

from .config import load_options
from .engine import DocumentTemplateProcessor
from .errors import (
    ConfigError,
    DocfillError,
    MissingVariableError,
    TemplateDataError,
    TemplateSyntaxError,
)
from .formatting import BooleanFormatter, BooleanFormatterRegistry
from .json_data import parse_json_data
from .replacements import TextReplacements, apply_replacements
from .report import build_report_data, generate_warning_report
from .results import (
    ProcessingResult,
    ProcessingWarning,
    TextProcessingResult,
    WarningType,
)
from .text import TextTemplateProcessor
from .types import MissingVariablePolicy, ProcessingOptions
from .validation import ValidationError, ValidationErrorType, ValidationResult, validate_template
from .version import tool_version

__all__ = [
    "DocumentTemplateProcessor",
    "TextTemplateProcessor",
    "ProcessingOptions",
    "MissingVariablePolicy",
    "ProcessingResult",
    "TextProcessingResult",
    "ProcessingWarning",
    "WarningType",
    "BooleanFormatter",
    "BooleanFormatterRegistry",
    "TextReplacements",
    "apply_replacements",
    "parse_json_data",
    "load_options",
    "validate_template",
    "ValidationResult",
    "ValidationError",
    "ValidationErrorType",
    "build_report_data",
    "generate_warning_report",
    "DocfillError",
    "TemplateSyntaxError",
    "TemplateDataError",
    "MissingVariableError",
    "ConfigError",
    "tool_version",
]
