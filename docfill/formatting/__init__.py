"""Форматирование значений: числа, даты, булевы форматтеры, выделение."""

from .booleans import BooleanFormatter, BooleanFormatterRegistry, language_of
from .emphasis import EmphasisSegment, has_emphasis, split_emphasis
from .values import LocaleConventions, ValueConverter, conventions_for

__all__ = [
    "BooleanFormatter",
    "BooleanFormatterRegistry",
    "language_of",
    "EmphasisSegment",
    "has_emphasis",
    "split_emphasis",
    "LocaleConventions",
    "ValueConverter",
    "conventions_for",
]
