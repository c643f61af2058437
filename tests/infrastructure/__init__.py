"""
Unified test infrastructure for docfill.

Modules:
- docx_builders: building in-memory documents and reading their text back
- processing_utils: running the engine with compact option sets
"""

from .docx_builders import (
    add_paragraph,
    add_table,
    body_texts,
    make_document,
    run_properties,
    table_texts,
)
from .processing_utils import make_options, process, process_text

__all__ = [
    # Document builders
    "make_document", "add_paragraph", "add_table",

    # Readers
    "body_texts", "table_texts", "run_properties",

    # Processing
    "make_options", "process", "process_text",
]
