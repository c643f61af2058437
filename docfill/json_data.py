"""
Модель данных из JSON.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from .errors import TemplateDataError


def _convert_number(text: str) -> Any:
    value = float(text)
    if value.is_integer():
        return int(value)
    return value


def parse_json_data(text: str) -> Dict[str, Any]:
    """
    Разбирает JSON-текст в модель данных.

    Корень обязан быть объектом. Числа с нулевой дробной частью
    становятся int, остальные float.

    Raises:
        TemplateDataError: Некорректный JSON или корень не является объектом
    """
    try:
        data = json.loads(text, parse_float=_convert_number)
    except json.JSONDecodeError as e:
        raise TemplateDataError(f"Invalid JSON data: {e}") from e

    if not isinstance(data, dict):
        raise TemplateDataError(f"JSON data root must be an object, got {type(data).__name__}")
    return data


__all__ = ["parse_json_data"]
