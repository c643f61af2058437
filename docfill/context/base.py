"""
Базовый контракт контекста вычисления.

Контекст разрешает имя (переменную, путь к свойству, метаданные цикла)
в значение и может ссылаться на родительский контекст для отката.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Tuple


class EvaluationContext(ABC):
    """Область разрешения имён, связанная с родителем для отката."""

    @abstractmethod
    def resolve(self, name: str) -> Tuple[Any, bool]:
        """
        Разрешает имя в значение.

        Args:
            name: Имя переменной или путь к свойству

        Returns:
            Кортеж (значение, найдено). Значение None при найдено=True
            означает, что переменная существует, но пуста.
        """
        pass

    @property
    @abstractmethod
    def parent(self) -> Optional[EvaluationContext]:
        """Родительский контекст или None для глобального."""
        pass

    @property
    @abstractmethod
    def root_data(self) -> Mapping[str, Any]:
        """Корневые данные, с которых начинается цепочка контекстов."""
        pass

    def has(self, name: str) -> bool:
        """Проверяет, разрешается ли имя в этом контексте."""
        return self.resolve(name)[1]


__all__ = ["EvaluationContext"]
