"""Разметка шаблона: шаблоны маркеров, дескрипторы блоков, детекторы."""

from .blocks import ConditionalBlock, ConditionalBranch, LoopBlock
from .detector import detect_conditionals, detect_loops, is_marker_paragraph, scan_markers
from .placeholders import PlaceholderFinder, PlaceholderMatch

__all__ = [
    "ConditionalBlock",
    "ConditionalBranch",
    "LoopBlock",
    "detect_conditionals",
    "detect_loops",
    "is_marker_paragraph",
    "scan_markers",
    "PlaceholderFinder",
    "PlaceholderMatch",
]
