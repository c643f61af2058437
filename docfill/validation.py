"""
Проверка шаблона без его изменения.

Проверяется структура разметки (парность маркеров, синтаксис условий),
собираются все упоминаемые имена, а при переданных данных ищутся
переменные, которых нет в данных. Имена внутри циклов проверяются
относительно элементов коллекции с учётом вложенности.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Optional, Set

from .conditions import (
    BinaryCondition,
    ComparisonCondition,
    Condition,
    ExpressionParser,
    GroupCondition,
    NotCondition,
    ParseError,
    VariableCondition,
)
from .context import (
    EvaluationContext,
    GlobalEvaluationContext,
    LoopEvaluationContext,
    create_loop_contexts,
    is_collection,
)
from .document.elements import (
    ElementKind,
    block_children,
    body_of,
    kind_of,
    paragraph_text,
    row_cells,
    table_rows,
)
from .errors import TemplateSyntaxError
from .markup import PlaceholderFinder, detect_conditionals, detect_loops, scan_markers
from .results import ProcessingWarning
from .text import ConditionalNode, LoopNode, PlaceholderNode, TemplateNode, parse_template
from .types import DataModel

logger = logging.getLogger(__name__)


class ValidationErrorType(Enum):
    UNMATCHED_CONDITIONAL_START = "UnmatchedConditionalStart"
    UNMATCHED_CONDITIONAL_END = "UnmatchedConditionalEnd"
    UNMATCHED_LOOP_START = "UnmatchedLoopStart"
    UNMATCHED_LOOP_END = "UnmatchedLoopEnd"
    INVALID_BLOCK_STRUCTURE = "InvalidBlockStructure"
    INVALID_CONDITIONAL_EXPRESSION = "InvalidConditionalExpression"
    INVALID_LOOP_COLLECTION = "InvalidLoopCollection"
    MISSING_VARIABLE = "MissingVariable"


@dataclass(frozen=True)
class ValidationError:
    type: ValidationErrorType
    message: str

    def __str__(self) -> str:
        return f"{self.type.value}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    """
    Итог проверки шаблона.

    Attributes:
        is_valid: Нет ни одной ошибки
        errors: Ошибки в порядке обнаружения
        all_placeholders: Все упоминаемые имена (отсортированы)
        missing_variables: Имена, отсутствующие в данных (отсортированы)
        warnings: Нефатальные замечания (пустые коллекции циклов)
    """
    is_valid: bool
    errors: List[ValidationError] = field(default_factory=list)
    all_placeholders: List[str] = field(default_factory=list)
    missing_variables: List[str] = field(default_factory=list)
    warnings: List[ProcessingWarning] = field(default_factory=list)


# Префиксы сообщений детектора -> тип ошибки
_SYNTAX_ERROR_TYPES = (
    ("Conditional start marker", ValidationErrorType.UNMATCHED_CONDITIONAL_START),
    ("Conditional end marker", ValidationErrorType.UNMATCHED_CONDITIONAL_END),
    ("Loop start marker", ValidationErrorType.UNMATCHED_LOOP_START),
    ("Loop end marker", ValidationErrorType.UNMATCHED_LOOP_END),
)

# Имена, которые не ищутся в данных
_SPECIAL_PREFIXES = ("@", ".")
_SPECIAL_NAMES = ("this",)


def _syntax_error_type(message: str) -> ValidationErrorType:
    for prefix, error_type in _SYNTAX_ERROR_TYPES:
        if message.startswith(prefix):
            return error_type
    return ValidationErrorType.INVALID_BLOCK_STRUCTURE


def _is_special(name: str) -> bool:
    return name.startswith(_SPECIAL_PREFIXES) or name.lower() in _SPECIAL_NAMES


def condition_variables(condition: Condition) -> List[str]:
    """Имена переменных, на которые ссылается выражение."""
    if isinstance(condition, VariableCondition):
        return [condition.name]
    if isinstance(condition, ComparisonCondition):
        return [op.name for op in (condition.left, condition.right) if isinstance(op, VariableCondition)]
    if isinstance(condition, (GroupCondition, NotCondition)):
        return condition_variables(condition.condition)
    if isinstance(condition, BinaryCondition):
        return condition_variables(condition.left) + condition_variables(condition.right)
    return []


# Набор альтернативных контекстов области: глобальный или по одному на элемент
# каждой охватывающей коллекции. None отключает проверку по данным.
Scopes = Optional[List[EvaluationContext]]


class TemplateValidator:
    """Однопроходный сборщик ошибок и имён шаблона."""

    def __init__(self):
        self.finder = PlaceholderFinder()
        self.errors: List[ValidationError] = []
        self.placeholders: Set[str] = set()
        self.missing: Set[str] = set()
        self.warnings: List[ProcessingWarning] = []

    def validate(self, document: Any, data: Optional[DataModel] = None) -> ValidationResult:
        scopes: Scopes = [GlobalEvaluationContext(data)] if data is not None else None
        self._scan_region(block_children(body_of(document)), scopes)

        logger.debug(
            f"Template validated: {len(self.errors)} error(s), "
            f"{len(self.placeholders)} name(s), {len(self.missing)} missing"
        )
        return ValidationResult(
            is_valid=not self.errors,
            errors=list(self.errors),
            all_placeholders=sorted(self.placeholders),
            missing_variables=sorted(self.missing),
            warnings=sorted(self.warnings, key=lambda w: w.message),
        )

    # ---- Области документа ----

    def _scan_region(self, elements: Iterable[Any], scopes: Scopes) -> None:
        elements = list(elements)
        if not elements:
            return

        rows = all(kind_of(e) == ElementKind.ROW for e in elements)
        try:
            conditionals = detect_conditionals(elements, rows=rows)
            loops = detect_loops(elements, rows=rows)
        except TemplateSyntaxError as e:
            self._syntax_error(str(e))
            return

        for block in conditionals:
            if block.is_inline:
                continue
            for branch in block.branches:
                if branch.condition is not None:
                    self._check_condition(branch.condition)

        consumed: Set[int] = set()
        for loop in loops:
            if loop.is_inline:
                continue
            consumed.update(id(e) for e in loop.all_elements)
            inner = self._enter_loop(loop.collection_name, loop.variable_name, scopes)
            self._scan_region(loop.content, inner)
            self._scan_region(loop.empty_content, scopes)

        for element in elements:
            if id(element) in consumed:
                continue
            kind = kind_of(element)
            if kind == ElementKind.PARAGRAPH:
                self._scan_paragraph(element, scopes)
            elif kind == ElementKind.TABLE:
                self._scan_region(table_rows(element), scopes)
            elif kind == ElementKind.ROW:
                for cell in row_cells(element):
                    self._scan_region(block_children(cell), scopes)

    def _scan_paragraph(self, paragraph: Any, scopes: Scopes) -> None:
        text = paragraph_text(paragraph)
        if scan_markers(text).is_balanced:
            try:
                nodes = parse_template(text)
            except TemplateSyntaxError as e:
                self._syntax_error(str(e))
                return
            self._scan_nodes(nodes, scopes)
            return

        if not self.finder.contains_placeholders(text):
            return
        for name in self.finder.unique_names(text):
            self._check_name(name, scopes)

    def _scan_nodes(self, nodes: List[TemplateNode], scopes: Scopes) -> None:
        for node in nodes:
            if isinstance(node, PlaceholderNode):
                self._check_name(node.name, scopes)
            elif isinstance(node, ConditionalNode):
                for branch in node.branches:
                    if branch.condition is not None:
                        self._check_condition(branch.condition)
                    self._scan_nodes(branch.body, scopes)
            elif isinstance(node, LoopNode):
                inner = self._enter_loop(node.collection, node.variable, scopes)
                self._scan_nodes(node.body, inner)
                if node.empty_body:
                    self._scan_nodes(node.empty_body, scopes)

    # ---- Проверки имён ----

    def _check_condition(self, expression: str) -> None:
        try:
            condition = ExpressionParser().parse(expression)
        except (ParseError, ValueError) as e:
            self.errors.append(ValidationError(
                ValidationErrorType.INVALID_CONDITIONAL_EXPRESSION,
                f"Invalid condition expression '{expression}': {e}",
            ))
            return
        self.placeholders.update(condition_variables(condition))

    def _check_name(self, name: str, scopes: Scopes) -> None:
        if name.startswith("("):
            # выражение в скобках
            self._check_condition(name)
            return

        self.placeholders.add(name)
        if scopes is None or _is_special(name) or name in self.missing:
            return
        if any(scope.has(name) for scope in scopes):
            return
        self._missing(name)

    def _enter_loop(self, collection_name: str, variable_name: Optional[str], scopes: Scopes) -> Scopes:
        """Строит контексты тела цикла: по одному на каждый элемент в каждой области."""
        self.placeholders.add(collection_name)
        if scopes is None:
            return None

        found = False
        inner: List[EvaluationContext] = []
        for scope in scopes:
            value, exists = scope.resolve(collection_name)
            if not exists or value is None:
                continue
            found = True
            if not is_collection(value):
                self.errors.append(ValidationError(
                    ValidationErrorType.INVALID_LOOP_COLLECTION,
                    f"Variable '{collection_name}' is not a collection. Cannot iterate.",
                ))
                return None
            for loop in create_loop_contexts(value, collection_name, variable_name):
                inner.append(LoopEvaluationContext(loop, scope))

        if not found:
            if collection_name not in self.missing:
                self._missing(collection_name)
            return None

        if not inner:
            self.warnings.append(ProcessingWarning.empty_loop_collection(collection_name))
            return None
        return inner

    def _missing(self, name: str) -> None:
        self.missing.add(name)
        self.errors.append(ValidationError(
            ValidationErrorType.MISSING_VARIABLE,
            f"Variable '{name}' is referenced in the template but not provided in the data.",
        ))

    def _syntax_error(self, message: str) -> None:
        self.errors.append(ValidationError(_syntax_error_type(message), message))


def validate_template(
    document: Any,
    data: Optional[DataModel] = None,
) -> ValidationResult:
    """
    Проверяет шаблон, не изменяя документ.

    Args:
        document: Документ python-docx
        data: Данные для поиска пропущенных переменных; без них
              проверяется только структура

    Пустые коллекции циклов всегда дают предупреждение EmptyLoopCollection.
    """
    return TemplateValidator().validate(document, data)


__all__ = [
    "ValidationErrorType",
    "ValidationError",
    "ValidationResult",
    "TemplateValidator",
    "condition_variables",
    "validate_template",
]
