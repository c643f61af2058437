"""
Глобальный контекст вычисления: обёртка над корневым словарём данных.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from .base import EvaluationContext
from ..paths import resolve_path, try_parse_path


@dataclass(frozen=True)
class GlobalEvaluationContext(EvaluationContext):
    """
    Корень цепочки контекстов.

    Сначала выполняет прямой поиск ключа, затем, только если имя содержит
    ``.`` или ``[``, разбирает его как путь к свойству и разрешает
    относительно корневых данных.
    """
    data: Mapping[str, Any]

    def resolve(self, name: str) -> Tuple[Any, bool]:
        if name in self.data:
            return self.data[name], True

        if "." not in name and "[" not in name:
            return None, False

        path = try_parse_path(name)
        if path is None:
            return None, False

        return resolve_path(self.data, path)

    @property
    def parent(self) -> Optional[EvaluationContext]:
        return None

    @property
    def root_data(self) -> Mapping[str, Any]:
        return self.data


__all__ = ["GlobalEvaluationContext"]
