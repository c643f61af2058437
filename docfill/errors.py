"""
Base exceptions for user-facing errors.

All expected errors that should be reported to the caller as a clean
failure message (without stack traces) must inherit from DocfillError.
The processor boundary converts them into a failed ProcessingResult.

Programming errors and bugs should NOT inherit from DocfillError;
they will propagate with full tracebacks.
"""

from __future__ import annotations


class DocfillError(Exception):
    """
    Base class for all user-facing errors in docfill.

    These errors indicate problems that the template author or the caller
    can fix: broken markup, unusable data, invalid options, etc.
    """
    pass


class TemplateSyntaxError(DocfillError):
    """
    Structural markup error: unbalanced or misordered block markers.

    Fatal for the whole pass, since safe partial output cannot be
    guaranteed once block matching fails.
    """
    pass


class TemplateDataError(DocfillError):
    """Data model value cannot be used the way the template requires."""
    pass


class MissingVariableError(DocfillError):
    """Raised by the fail-fast missing variable policy."""

    def __init__(self, variable_name: str):
        self.variable_name = variable_name
        super().__init__(f"Missing variable or invalid expression: {variable_name}")


class ConfigError(DocfillError):
    """Invalid processing options file."""
    pass


__all__ = [
    "DocfillError",
    "TemplateSyntaxError",
    "TemplateDataError",
    "MissingVariableError",
    "ConfigError",
]
