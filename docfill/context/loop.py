"""
Контекст итерации цикла.

LoopContext хранит элемент, позицию и метаданные одной итерации,
LoopEvaluationContext связывает его с родительским контекстом, так что
тело вложенного цикла видит свой элемент, элемент внешнего цикла и
глобальные данные без явной передачи.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping as MappingABC
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Tuple

from .base import EvaluationContext
from ..paths import PropertyPath, resolve_path, try_parse_path

# Имена метаданных цикла (сравниваются без учёта регистра)
METADATA_NAMES = ("@index", "@first", "@last", "@count")

# Ссылки на текущий элемент
CURRENT_ITEM_NAMES = (".", "this")

_SCALAR_TYPES = (str, bytes, bool, int, float, Decimal, date, datetime)


@dataclass(frozen=True)
class LoopContext:
    """
    Состояние одной итерации цикла.

    Attributes:
        item: Текущий элемент коллекции
        index: Индекс элемента (с нуля)
        count: Количество элементов в коллекции
        collection_name: Имя коллекции из маркера цикла
        variable_name: Имя переменной итерации (``item`` в ``{{#foreach item in Items}}``)
    """
    item: Any
    index: int
    count: int
    collection_name: str
    variable_name: Optional[str] = None

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index == self.count - 1

    def metadata(self, name: str) -> Tuple[Any, bool]:
        """Разрешает @index, @first, @last, @count."""
        key = name.lower()
        if key == "@index":
            return self.index, True
        if key == "@first":
            return self.is_first, True
        if key == "@last":
            return self.is_last, True
        if key == "@count":
            return self.count, True
        return None, False

    def resolve_item(self, name: str) -> Tuple[Any, bool]:
        """
        Разрешает имя относительно текущего элемента.

        ``.`` и ``this`` всегда дают сам элемент. Для скалярных элементов
        других имён нет; для словарей и объектов имя разбирается как путь.
        """
        if name in CURRENT_ITEM_NAMES:
            return self.item, True

        if self.item is None or isinstance(self.item, _SCALAR_TYPES):
            return None, False

        path = try_parse_path(name)
        if path is None:
            return None, False

        if self.variable_name is not None:
            rest = _strip_variable(path, self.variable_name)
            if rest is not None:
                return self.item if not rest.segments else resolve_path(self.item, rest)

        return resolve_path(self.item, path)


@dataclass(frozen=True)
class LoopEvaluationContext(EvaluationContext):
    """
    Контекст вычисления внутри итерации цикла.

    Порядок разрешения: метаданные цикла → переменная итерации →
    поля текущего элемента → родительский контекст.
    """
    loop: LoopContext
    parent_context: EvaluationContext

    def resolve(self, name: str) -> Tuple[Any, bool]:
        if name.startswith("@"):
            value, found = self.loop.metadata(name)
            if found:
                return value, True

        variable = self.loop.variable_name
        if variable is not None and name == variable:
            return self.loop.item, True

        value, found = self.loop.resolve_item(name)
        if found:
            return value, True

        return self.parent_context.resolve(name)

    @property
    def parent(self) -> Optional[EvaluationContext]:
        return self.parent_context

    @property
    def root_data(self) -> Mapping[str, Any]:
        return self.parent_context.root_data


def is_collection(value: Any) -> bool:
    """Коллекция для цикла: итерируемое значение, но не строка и не словарь."""
    if isinstance(value, (str, bytes, bytearray, MappingABC)):
        return False
    return isinstance(value, Iterable)


def create_loop_contexts(
    collection: Iterable,
    collection_name: str,
    variable_name: Optional[str] = None,
) -> List[LoopContext]:
    """
    Материализует коллекцию и создаёт контекст для каждого элемента.

    Args:
        collection: Итерируемая коллекция (список, кортеж, генератор)
        collection_name: Имя коллекции из маркера
        variable_name: Необязательное имя переменной итерации

    Returns:
        Список неизменяемых контекстов итераций
    """
    items = list(collection)
    count = len(items)
    return [
        LoopContext(
            item=item,
            index=index,
            count=count,
            collection_name=collection_name,
            variable_name=variable_name,
        )
        for index, item in enumerate(items)
    ]


def _strip_variable(path: PropertyPath, variable_name: str) -> Optional[PropertyPath]:
    root = path.root
    if root.is_indexer or root.name != variable_name:
        return None
    return PropertyPath(segments=path.segments[1:])


__all__ = [
    "METADATA_NAMES",
    "CURRENT_ITEM_NAMES",
    "LoopContext",
    "LoopEvaluationContext",
    "is_collection",
    "create_loop_contexts",
]
