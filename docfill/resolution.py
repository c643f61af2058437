"""
Разрешение плейсхолдеров, условий и коллекций через контекст вычисления.

Общий компонент для посетителей документа и текстового движка: здесь
применяется политика пропущенных переменных, считаются замены и
записываются предупреждения.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from .conditions import ExpressionEvaluator, ExpressionParser, ParseError, parse_expression
from .context import EvaluationContext, LoopContext, create_loop_contexts, is_collection
from .errors import MissingVariableError, TemplateDataError
from .formatting import ValueConverter
from .replacements import apply_replacements
from .results import ProcessingWarning, WarningCollector
from .types import MissingVariablePolicy, ProcessingOptions

logger = logging.getLogger(__name__)


class PlaceholderResolver:
    """
    Разрешает разметку шаблона в текст.

    Один экземпляр живёт в течение одного прохода обработки и
    накапливает счётчик выполненных замен.
    """

    def __init__(self, options: ProcessingOptions, collector: WarningCollector):
        self.options = options
        self.collector = collector
        self.converter = ValueConverter(options.locale, options.formatter_registry())
        self.replacement_count = 0

    def lookup(self, name: str, context: EvaluationContext) -> Tuple[Any, bool]:
        """
        Находит значение переменной, пути или выражения в скобках.

        Выражение вычисляется в булево значение; выражение, которое не
        удалось разобрать, считается неразрешённым.
        """
        if name.startswith("("):
            condition = parse_expression(name)
            if condition is None:
                return None, False
            return ExpressionEvaluator(context).evaluate(condition), True
        return context.resolve(name)

    def resolve(self, name: str, format_name: Optional[str], context: EvaluationContext) -> Optional[str]:
        """
        Возвращает текст для подстановки вместо плейсхолдера.

        Args:
            name: Имя переменной, путь или выражение в скобках
            format_name: Спецификатор формата из разметки
            context: Активный контекст вычисления

        Returns:
            Текст замены или None, если разметку нужно оставить как есть

        Raises:
            MissingVariableError: Переменная не найдена при политике FAIL
        """
        value, found = self.lookup(name, context)

        if not found:
            self.collector.add(ProcessingWarning.missing_variable(name))
            policy = self.options.missing_variables
            if policy == MissingVariablePolicy.FAIL:
                raise MissingVariableError(name)
            if policy == MissingVariablePolicy.REPLACE_WITH_EMPTY:
                self.replacement_count += 1
                return ""
            logger.debug(f"Placeholder '{name}' not resolved, leaving markup unchanged")
            return None

        text = self.converter.to_string(value, format_name)
        text = apply_replacements(text, self.options.text_replacements)
        self.replacement_count += 1
        logger.debug(f"Placeholder '{name}' resolved")
        return text

    def evaluate_condition(self, expression: str, context: EvaluationContext) -> bool:
        """
        Вычисляет условие ``{{#if}}``/``{{#elseif}}``.

        Условие, которое не удалось разобрать, даёт предупреждение
        ExpressionFailed и считается ложным.
        """
        try:
            condition = ExpressionParser().parse(expression)
        except (ParseError, ValueError) as e:
            self.collector.add(ProcessingWarning.expression_failed(expression, str(e)))
            return False
        return ExpressionEvaluator(context).evaluate(condition)

    def resolve_collection(
        self,
        collection_name: str,
        variable_name: Optional[str],
        context: EvaluationContext,
    ) -> Optional[List[LoopContext]]:
        """
        Разрешает коллекцию цикла в список контекстов итераций.

        Returns:
            None, если коллекция отсутствует или равна None (с предупреждением);
            иначе список контекстов, возможно пустой

        Raises:
            TemplateDataError: Значение не является коллекцией
        """
        value, found = context.resolve(collection_name)
        if not found:
            self.collector.add(ProcessingWarning.missing_loop_collection(collection_name))
            return None

        if value is None:
            self.collector.add(ProcessingWarning.null_loop_collection(collection_name))
            return None

        if not is_collection(value):
            raise TemplateDataError(f"Variable '{collection_name}' is not a collection. Cannot iterate.")

        contexts = create_loop_contexts(value, collection_name, variable_name)
        if not contexts and self.options.warn_on_empty_loop_collections:
            self.collector.add(ProcessingWarning.empty_loop_collection(collection_name))
        return contexts


__all__ = ["PlaceholderResolver"]
