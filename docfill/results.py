"""
Результаты обработки и нефатальные предупреждения.

Предупреждения накапливаются в WarningCollector на протяжении прохода;
фатальные ошибки превращаются в неуспешный результат с сообщением.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class WarningType(Enum):
    """Категории нефатальных предупреждений."""
    MISSING_VARIABLE = "MissingVariable"
    MISSING_LOOP_COLLECTION = "MissingLoopCollection"
    NULL_LOOP_COLLECTION = "NullLoopCollection"
    EMPTY_LOOP_COLLECTION = "EmptyLoopCollection"
    EXPRESSION_FAILED = "ExpressionFailed"


@dataclass(frozen=True)
class ProcessingWarning:
    """
    Предупреждение, записанное во время обработки.

    Attributes:
        type: Категория предупреждения
        message: Человекочитаемое сообщение
        variable_name: Имя переменной, коллекции или текст выражения
        context: Где возникло предупреждение (``placeholder``, ``loop: Items``)
    """
    type: WarningType
    message: str
    variable_name: Optional[str] = None
    context: Optional[str] = None

    @classmethod
    def missing_variable(cls, variable_name: str) -> ProcessingWarning:
        return cls(
            WarningType.MISSING_VARIABLE,
            f"Variable '{variable_name}' was not found in the data.",
            variable_name,
            "placeholder",
        )

    @classmethod
    def missing_loop_collection(cls, collection_name: str) -> ProcessingWarning:
        return cls(
            WarningType.MISSING_LOOP_COLLECTION,
            f"Loop collection '{collection_name}' was not found in the data.",
            collection_name,
            f"loop: {collection_name}",
        )

    @classmethod
    def null_loop_collection(cls, collection_name: str) -> ProcessingWarning:
        return cls(
            WarningType.NULL_LOOP_COLLECTION,
            f"Loop collection '{collection_name}' is null.",
            collection_name,
            f"loop: {collection_name}",
        )

    @classmethod
    def empty_loop_collection(cls, collection_name: str) -> ProcessingWarning:
        return cls(
            WarningType.EMPTY_LOOP_COLLECTION,
            f"Loop collection '{collection_name}' is empty.",
            collection_name,
            f"loop: {collection_name}",
        )

    @classmethod
    def expression_failed(cls, expression: str, reason: str) -> ProcessingWarning:
        return cls(
            WarningType.EXPRESSION_FAILED,
            f"Expression '{expression}' could not be evaluated: {reason}",
            expression,
            "expression",
        )

    def __str__(self) -> str:
        context_part = f" [{self.context}]" if self.context else ""
        return f"{self.type.value}{context_part}: {self.message}"


class WarningCollector:
    """
    Накопитель предупреждений одного прохода.

    Предупреждение о пропущенной переменной записывается один раз
    на имя, остальные категории записываются на каждое появление.
    """

    def __init__(self):
        self._warnings: List[ProcessingWarning] = []
        self._missing_names: List[str] = []

    def add(self, warning: ProcessingWarning) -> None:
        if warning.type == WarningType.MISSING_VARIABLE:
            if warning.variable_name in self._missing_names:
                return
            self._missing_names.append(warning.variable_name)
        self._warnings.append(warning)

    @property
    def warnings(self) -> List[ProcessingWarning]:
        return list(self._warnings)

    @property
    def missing_variables(self) -> List[str]:
        """Отсортированные уникальные имена пропущенных переменных."""
        return sorted(self._missing_names)

    def __len__(self) -> int:
        return len(self._warnings)


@dataclass(frozen=True)
class ProcessingResult:
    """Итог обработки документа."""
    success: bool
    replacement_count: int = 0
    warnings: List[ProcessingWarning] = field(default_factory=list)
    missing_variables: List[str] = field(default_factory=list)
    error_message: Optional[str] = None

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @classmethod
    def ok(cls, replacement_count: int, collector: WarningCollector) -> ProcessingResult:
        return cls(
            success=True,
            replacement_count=replacement_count,
            warnings=collector.warnings,
            missing_variables=collector.missing_variables,
        )

    @classmethod
    def failure(cls, error_message: str, collector: Optional[WarningCollector] = None) -> ProcessingResult:
        return cls(
            success=False,
            warnings=collector.warnings if collector else [],
            missing_variables=collector.missing_variables if collector else [],
            error_message=error_message,
        )


@dataclass(frozen=True)
class TextProcessingResult(ProcessingResult):
    """Итог обработки текстового шаблона: дополнительно содержит текст."""
    text: str = ""

    @classmethod
    def ok_text(cls, text: str, replacement_count: int, collector: WarningCollector) -> TextProcessingResult:
        return cls(
            success=True,
            replacement_count=replacement_count,
            warnings=collector.warnings,
            missing_variables=collector.missing_variables,
            text=text,
        )


__all__ = [
    "WarningType",
    "ProcessingWarning",
    "WarningCollector",
    "ProcessingResult",
    "TextProcessingResult",
]
