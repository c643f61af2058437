"""
Форматтеры булевых значений.

Плейсхолдер ``{{IsActive:yesno}}`` выводит булево значение через
именованный форматтер. Реестр заполнен встроенными форматтерами
(локализованными для основных языков) и расширяется вызывающей стороной.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BooleanFormatter:
    """Пара строк для истины и лжи."""
    true_value: str
    false_value: str

    def format(self, value: bool) -> str:
        return self.true_value if value else self.false_value


# Локализованные пары: имя форматтера -> язык -> (истина, ложь)
_LOCALIZED: Dict[str, Dict[str, Tuple[str, str]]] = {
    "yesno": {
        "en": ("Yes", "No"),
        "de": ("Ja", "Nein"),
        "fr": ("Oui", "Non"),
        "es": ("Sí", "No"),
        "it": ("Sì", "No"),
        "pt": ("Sim", "Não"),
        "nl": ("Ja", "Nee"),
        "pl": ("Tak", "Nie"),
        "ru": ("Да", "Нет"),
        "ja": ("はい", "いいえ"),
        "zh": ("是", "否"),
    },
    "truefalse": {
        "en": ("True", "False"),
        "de": ("Wahr", "Falsch"),
        "fr": ("Vrai", "Faux"),
        "es": ("Verdadero", "Falso"),
        "it": ("Vero", "Falso"),
        "pt": ("Verdadeiro", "Falso"),
        "nl": ("Waar", "Onwaar"),
        "pl": ("Prawda", "Fałsz"),
        "ru": ("Истина", "Ложь"),
    },
    "onoff": {
        "en": ("On", "Off"),
        "de": ("Ein", "Aus"),
        "fr": ("Activé", "Désactivé"),
        "es": ("Encendido", "Apagado"),
        "it": ("Acceso", "Spento"),
        "pt": ("Ligado", "Desligado"),
        "nl": ("Aan", "Uit"),
        "pl": ("Włączone", "Wyłączone"),
        "ru": ("Вкл", "Выкл"),
    },
    "enabled": {
        "en": ("Enabled", "Disabled"),
        "de": ("Aktiviert", "Deaktiviert"),
        "fr": ("Activé", "Désactivé"),
        "es": ("Habilitado", "Deshabilitado"),
        "it": ("Abilitato", "Disabilitato"),
        "pt": ("Ativado", "Desativado"),
        "nl": ("Ingeschakeld", "Uitgeschakeld"),
        "pl": ("Włączone", "Wyłączone"),
        "ru": ("Включено", "Отключено"),
    },
    "active": {
        "en": ("Active", "Inactive"),
        "de": ("Aktiv", "Inaktiv"),
        "fr": ("Actif", "Inactif"),
        "es": ("Activo", "Inactivo"),
        "it": ("Attivo", "Inattivo"),
        "pt": ("Ativo", "Inativo"),
        "nl": ("Actief", "Inactief"),
        "pl": ("Aktywny", "Nieaktywny"),
        "ru": ("Активно", "Неактивно"),
    },
}

# Символьные форматтеры не зависят от языка
_SYMBOLIC: Dict[str, Tuple[str, str]] = {
    "checkbox": ("☑", "☐"),
    "checkmark": ("✓", "✗"),
    "check": ("✓", "✗"),
}


def language_of(locale: Optional[str]) -> str:
    """Возвращает двухбуквенный код языка: ``de-DE`` → ``de``."""
    if not locale:
        return "en"
    return locale.replace("_", "-").split("-")[0].lower() or "en"


class BooleanFormatterRegistry:
    """
    Реестр именованных булевых форматтеров.

    Имена сравниваются без учёта регистра. Каждый экземпляр владеет
    своим словарём, поэтому регистрация не влияет на другие вызовы.
    """

    def __init__(self, locale: Optional[str] = None):
        """
        Args:
            locale: Локаль для встроенных форматтеров (``de``, ``fr-FR``);
                    None означает английский
        """
        self.language = language_of(locale)
        self._formatters: Dict[str, BooleanFormatter] = {}
        self._register_builtin_formatters()

    def _register_builtin_formatters(self) -> None:
        for name, variants in _LOCALIZED.items():
            true_value, false_value = variants.get(self.language, variants["en"])
            self._formatters[name] = BooleanFormatter(true_value, false_value)

        for name, (true_value, false_value) in _SYMBOLIC.items():
            self._formatters[name] = BooleanFormatter(true_value, false_value)

    def register(self, name: str, formatter: BooleanFormatter) -> None:
        """
        Регистрирует или переопределяет форматтер.

        Raises:
            ValueError: Если имя пустое
        """
        if not name or not name.strip():
            raise ValueError("Format name cannot be empty")
        self._formatters[name.strip().lower()] = formatter
        logger.debug(f"Registered boolean formatter '{name}'")

    def get(self, name: str) -> Optional[BooleanFormatter]:
        if not name:
            return None
        return self._formatters.get(name.strip().lower())

    def try_format(self, value: bool, name: str) -> Optional[str]:
        """Форматирует значение или возвращает None, если форматтер не найден."""
        formatter = self.get(name)
        if formatter is None:
            return None
        return formatter.format(value)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def names(self) -> Tuple[str, ...]:
        return tuple(sorted(self._formatters))


__all__ = ["BooleanFormatter", "BooleanFormatterRegistry", "language_of"]
