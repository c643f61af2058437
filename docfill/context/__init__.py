"""
Иерархия контекстов вычисления: глобальный контекст данных и
контексты итераций циклов, связанные с родителем.
"""

from __future__ import annotations

from .base import EvaluationContext
from .global_context import GlobalEvaluationContext
from .loop import (
    CURRENT_ITEM_NAMES,
    METADATA_NAMES,
    LoopContext,
    LoopEvaluationContext,
    create_loop_contexts,
    is_collection,
)

__all__ = [
    "EvaluationContext",
    "GlobalEvaluationContext",
    "LoopContext",
    "LoopEvaluationContext",
    "CURRENT_ITEM_NAMES",
    "METADATA_NAMES",
    "create_loop_contexts",
    "is_collection",
]
