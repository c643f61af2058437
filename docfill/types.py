from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, NewType, Optional

from .formatting.booleans import BooleanFormatterRegistry


# ---- Aliases for clarity ----
LocaleName = NewType("LocaleName", str)  # "en-US" | "de" | "fr-CH" ...
DEFAULT_LOCALE: LocaleName = LocaleName("en-US")
DataModel = Mapping[str, Any]  # корневые имена -> скаляры, словари, списки


class MissingVariablePolicy(str, Enum):
    """Поведение при неразрешённом плейсхолдере. Выбирается один раз на проход."""
    LEAVE_UNCHANGED = "leave"       # разметка остаётся как есть
    REPLACE_WITH_EMPTY = "empty"    # разметка заменяется пустой строкой
    FAIL = "fail"                   # проход прерывается с ошибкой


# -----------------------------
@dataclass(frozen=True)
class ProcessingOptions:
    missing_variables: MissingVariablePolicy = MissingVariablePolicy.LEAVE_UNCHANGED
    locale: LocaleName = DEFAULT_LOCALE
    # Реестр булевых форматтеров; по умолчанию строится для locale
    boolean_formatters: Optional[BooleanFormatterRegistry] = None
    # Подстановки, применяемые к значениям до разбора inline-разметки
    text_replacements: Dict[str, str] = field(default_factory=dict)
    # Переводы строк в значениях превращаются в разрывы строки документа
    enable_newline_support: bool = True
    # Пустая коллекция цикла при обработке фиксируется как предупреждение;
    # validate_template сообщает о ней всегда
    warn_on_empty_loop_collections: bool = False

    def formatter_registry(self) -> BooleanFormatterRegistry:
        """Возвращает заданный реестр или встроенный для текущей локали."""
        if self.boolean_formatters is not None:
            return self.boolean_formatters
        return BooleanFormatterRegistry(self.locale)


__all__ = [
    "LocaleName",
    "DEFAULT_LOCALE",
    "DataModel",
    "MissingVariablePolicy",
    "ProcessingOptions",
]
