"""
Пути к свойствам: разбор ``Customer.Address.City`` / ``Items[0].Name``
и навигация по вложенным словарям, спискам и объектам.
"""

from __future__ import annotations

from .model import PathSegment, PropertyPath
from .parser import PropertyPathError, PropertyPathParser, parse_path, try_parse_path
from .resolver import Resolution, resolve_path, resolve_segment

__all__ = [
    "PathSegment",
    "PropertyPath",
    "PropertyPathError",
    "PropertyPathParser",
    "parse_path",
    "try_parse_path",
    "Resolution",
    "resolve_path",
    "resolve_segment",
]
