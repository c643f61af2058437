"""
Преобразование значений данных в текст для подстановки в документ.

Числа и даты форматируются с учётом локали (десятичный разделитель,
шаблон даты и времени), булевы значения со спецификатором формата
выводятся через реестр форматтеров.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from .booleans import BooleanFormatterRegistry, language_of


@dataclass(frozen=True)
class LocaleConventions:
    """
    Соглашения локали для чисел и дат.

    Шаблоны даты и времени заполняются через str.format полями
    year, month, day, hour, hour12, minute, second, ampm.
    """
    decimal_separator: str
    date_pattern: str
    time_pattern: str


_H24 = "{hour:02d}:{minute:02d}:{second:02d}"

# Ключ: полная локаль в нижнем регистре или двухбуквенный язык
_CONVENTIONS: Dict[str, LocaleConventions] = {
    "en": LocaleConventions(".", "{month}/{day}/{year}", "{hour12}:{minute:02d}:{second:02d} {ampm}"),
    "en-gb": LocaleConventions(".", "{day:02d}/{month:02d}/{year}", _H24),
    "de": LocaleConventions(",", "{day:02d}.{month:02d}.{year}", _H24),
    "fr": LocaleConventions(",", "{day:02d}/{month:02d}/{year}", _H24),
    "es": LocaleConventions(",", "{day:02d}/{month:02d}/{year}", _H24),
    "it": LocaleConventions(",", "{day:02d}/{month:02d}/{year}", _H24),
    "pt": LocaleConventions(",", "{day:02d}/{month:02d}/{year}", _H24),
    "nl": LocaleConventions(",", "{day}-{month}-{year}", _H24),
    "pl": LocaleConventions(",", "{day:02d}.{month:02d}.{year}", _H24),
    "ru": LocaleConventions(",", "{day:02d}.{month:02d}.{year}", _H24),
    "ja": LocaleConventions(".", "{year}/{month:02d}/{day:02d}", _H24),
    "zh": LocaleConventions(".", "{year}/{month}/{day}", _H24),
}


def conventions_for(locale: Optional[str]) -> LocaleConventions:
    """Подбирает соглашения: сначала полная локаль, затем язык, затем английский."""
    if locale:
        key = locale.replace("_", "-").lower()
        if key in _CONVENTIONS:
            return _CONVENTIONS[key]
    return _CONVENTIONS.get(language_of(locale), _CONVENTIONS["en"])


class ValueConverter:
    """
    Преобразователь значений в строки.

    - None → пустая строка
    - str → как есть
    - bool со спецификатором из реестра → вывод форматтера, иначе True/False
    - числа → с десятичным разделителем локали
    - datetime/date → по шаблону локали
    - прочее → str(value)
    """

    def __init__(self, locale: Optional[str] = None, registry: Optional[BooleanFormatterRegistry] = None):
        self.locale = locale
        self.conventions = conventions_for(locale)
        self.registry = registry if registry is not None else BooleanFormatterRegistry(locale)

    def to_string(self, value: Any, format_name: Optional[str] = None) -> str:
        """
        Преобразует значение в строку.

        Args:
            value: Значение из данных
            format_name: Необязательный спецификатор формата (``yesno``, ``checkbox``)

        Returns:
            Текстовое представление значения
        """
        if value is None:
            return ""

        if isinstance(value, str):
            return value

        if isinstance(value, bool):
            if format_name:
                formatted = self.registry.try_format(value, format_name)
                if formatted is not None:
                    return formatted
            return "True" if value else "False"

        if isinstance(value, (int, float, Decimal)):
            return self._format_number(value)

        if isinstance(value, datetime.datetime):
            return self._format_datetime(value)

        if isinstance(value, datetime.date):
            return self._format_date(value)

        return str(value)

    def _format_number(self, value: Any) -> str:
        if isinstance(value, float) and value.is_integer():
            text = str(int(value))
        else:
            text = str(value)
        if self.conventions.decimal_separator != ".":
            text = text.replace(".", self.conventions.decimal_separator)
        return text

    def _format_date(self, value: datetime.date) -> str:
        return self.conventions.date_pattern.format(year=value.year, month=value.month, day=value.day)

    def _format_datetime(self, value: datetime.datetime) -> str:
        hour12 = value.hour % 12 or 12
        time_text = self.conventions.time_pattern.format(
            hour=value.hour,
            hour12=hour12,
            minute=value.minute,
            second=value.second,
            ampm="AM" if value.hour < 12 else "PM",
        )
        return f"{self._format_date(value)} {time_text}"


__all__ = ["LocaleConventions", "ValueConverter", "conventions_for"]
