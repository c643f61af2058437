"""
Навигация по вложенным данным по разобранному пути.

Поддерживает словари (Mapping, ключи с учётом регистра), последовательности
(list, tuple) и произвольные объекты (атрибуты без учёта регистра).
Отсутствие сегмента означает «не найдено», а не исключение.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Tuple

from .model import PathSegment, PropertyPath

# Результат разрешения: (значение, найдено ли)
Resolution = Tuple[Any, bool]

_NOT_FOUND: Resolution = (None, False)


def resolve_path(root: Any, path: PropertyPath) -> Resolution:
    """
    Разрешает путь относительно корневого значения.

    Промежуточное значение None даёт (None, True): путь существует,
    но ведёт в пустоту. Отсутствующий ключ, атрибут или индекс за
    границами даёт (None, False).

    Args:
        root: Корневое значение (обычно словарь данных)
        path: Разобранный путь

    Returns:
        Кортеж (значение, найдено)
    """
    current = root
    for segment in path.segments:
        if current is None:
            return None, True
        current, found = resolve_segment(current, segment)
        if not found:
            return _NOT_FOUND
    return current, True


def resolve_segment(value: Any, segment: PathSegment) -> Resolution:
    """Разрешает один сегмент пути относительно значения."""
    if segment.is_indexer:
        return _resolve_indexer(value, segment)
    return _resolve_member(value, segment.name)


def _resolve_indexer(value: Any, segment: PathSegment) -> Resolution:
    if isinstance(value, Mapping):
        if segment.is_numeric and segment.index in value:
            return value[segment.index], True
        return _lookup_key(value, segment.name)

    if segment.is_numeric and _is_sequence(value):
        if 0 <= segment.index < len(value):
            return value[segment.index], True
        return _NOT_FOUND

    if not segment.is_numeric:
        return _lookup_attribute(value, segment.name)

    return _NOT_FOUND


def _resolve_member(value: Any, name: str) -> Resolution:
    if isinstance(value, Mapping):
        return _lookup_key(value, name)
    if _is_sequence(value):
        # У последовательностей есть только Count/Length-подобные свойства
        if name.lower() in ("count", "length"):
            return len(value), True
        return _NOT_FOUND
    return _lookup_attribute(value, name)


def _lookup_key(mapping: Mapping, key: str) -> Resolution:
    if key in mapping:
        return mapping[key], True
    return _NOT_FOUND


def _lookup_attribute(value: Any, name: str) -> Resolution:
    if name.startswith("_") or isinstance(value, (str, bytes, int, float, bool)):
        return _NOT_FOUND

    if hasattr(value, name):
        attribute = getattr(value, name)
        if not callable(attribute):
            return attribute, True

    lowered = name.lower()
    for candidate in dir(value):
        if candidate.startswith("_") or candidate.lower() != lowered:
            continue
        attribute = getattr(value, candidate)
        if callable(attribute):
            continue
        return attribute, True

    return _NOT_FOUND


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


__all__ = ["Resolution", "resolve_path", "resolve_segment"]
