"""
Отчёт о предупреждениях обработки в виде docx-документа.

Шаблон отчёта строится через python-docx и заполняется самим движком:
сводная таблица и по разделу с таблицей на каждую категорию предупреждений.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

import docx
from docx.document import Document

from .engine import DocumentTemplateProcessor
from .results import ProcessingWarning, WarningType

# Категория -> (ключ списка, ключ количества, ключ флага, заголовок раздела, пояснение, заголовок колонки)
_SECTIONS = (
    (
        WarningType.MISSING_VARIABLE,
        "MissingVariables", "MissingVariableCount", "HasMissingVariables",
        "Missing Variables",
        "The following variables were referenced in the template but not found in the data:",
        "Variable Name",
    ),
    (
        WarningType.MISSING_LOOP_COLLECTION,
        "MissingCollections", "MissingCollectionCount", "HasMissingCollections",
        "Missing Loop Collections",
        "The following collections were referenced in loops but not found in the data:",
        "Collection Name",
    ),
    (
        WarningType.NULL_LOOP_COLLECTION,
        "NullCollections", "NullCollectionCount", "HasNullCollections",
        "Null Loop Collections",
        "The following collections were found but had null values:",
        "Collection Name",
    ),
    (
        WarningType.EMPTY_LOOP_COLLECTION,
        "EmptyCollections", "EmptyCollectionCount", "HasEmptyCollections",
        "Empty Loop Collections",
        "The following collections were found but contained no items:",
        "Collection Name",
    ),
    (
        WarningType.EXPRESSION_FAILED,
        "FailedExpressions", "FailedExpressionCount", "HasFailedExpressions",
        "Failed Expressions",
        "The following expressions could not be evaluated:",
        "Expression",
    ),
)


def build_report_data(
    warnings: Iterable[ProcessingWarning],
    generated_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Готовит модель данных отчёта: счётчики, флаги и списки по категориям.

    Каждый элемент списка содержит VariableName, Context и Message.
    """
    warnings = list(warnings)
    stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")

    data: Dict[str, Any] = {
        "GeneratedAt": stamp,
        "TotalWarnings": len(warnings),
    }
    for warning_type, list_key, count_key, flag_key, *_ in _SECTIONS:
        items: List[Dict[str, str]] = [
            {
                "VariableName": w.variable_name or "",
                "Context": w.context or "",
                "Message": w.message,
            }
            for w in warnings
            if w.type == warning_type
        ]
        data[list_key] = items
        data[count_key] = len(items)
        data[flag_key] = bool(items)
    return data


def build_report_template() -> Document:
    """Строит шаблон отчёта с разметкой движка."""
    document = docx.Document()

    document.add_paragraph().add_run("Template Processing Warning Report").bold = True
    document.add_paragraph("Generated: {{GeneratedAt}}")

    document.add_paragraph().add_run("Summary").bold = True
    document.add_paragraph("Total Warnings: {{TotalWarnings}}")

    summary = document.add_table(rows=1, cols=2)
    _fill_row(summary.rows[0], "Warning Type", "Count", bold=True)
    for _, _, count_key, _, title, _, _ in _SECTIONS:
        _fill_row(summary.add_row(), title, f"{{{{{count_key}}}}}")

    for _, list_key, _, flag_key, title, description, column in _SECTIONS:
        document.add_paragraph(f"{{{{#if {flag_key}}}}}")
        document.add_paragraph().add_run(title).bold = True
        document.add_paragraph(description)

        table = document.add_table(rows=1, cols=2)
        _fill_row(table.rows[0], column, "Context", bold=True)
        _fill_row(table.add_row(), f"{{{{#foreach {list_key}}}}}", "")
        _fill_row(table.add_row(), "{{VariableName}}", "{{Context}}")
        _fill_row(table.add_row(), "{{/foreach}}", "")

        document.add_paragraph("{{/if}}")

    document.add_paragraph("End of Warning Report")
    return document


def _fill_row(row: Any, left: str, right: str, bold: bool = False) -> None:
    for cell, text in zip(row.cells, (left, right)):
        run = cell.paragraphs[0].add_run(text)
        if bold:
            run.bold = True


def generate_warning_report(
    warnings: Iterable[ProcessingWarning],
    generated_at: Optional[datetime] = None,
) -> Document:
    """
    Формирует документ-отчёт по предупреждениям.

    Raises:
        RuntimeError: Если шаблон отчёта не удалось заполнить
    """
    document = build_report_template()
    result = DocumentTemplateProcessor().process(document, build_report_data(warnings, generated_at))
    if not result.success:
        raise RuntimeError(f"Warning report rendering failed: {result.error_message}")
    return document


__all__ = ["build_report_data", "build_report_template", "generate_warning_report"]
