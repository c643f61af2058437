"""
Загрузка параметров обработки из YAML-файла.

Пример файла::

    missing_variables: empty
    locale: de-DE
    newlines: true
    warn_on_empty_loops: true
    boolean_formatters:
      approval: ["Approved", "Rejected"]
    text_replacements:
      preset: html
      "(c)": "©"
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError
from .formatting import BooleanFormatter, BooleanFormatterRegistry
from .replacements import TextReplacements
from .types import LocaleName, MissingVariablePolicy, ProcessingOptions

_ALLOWED_KEYS = {
    "missing_variables",
    "locale",
    "newlines",
    "warn_on_empty_loops",
    "boolean_formatters",
    "text_replacements",
}

# --------------------------------------------------------------------------- #
# YAML loader
# --------------------------------------------------------------------------- #
_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    if not path.is_file():
        raise ConfigError(f"Options file not found: {path}")
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


# --------------------------------------------------------------------------- #
# HELPERS
# --------------------------------------------------------------------------- #
def _expect(value: Any, expected: type, key: str, path: Path) -> Any:
    if not isinstance(value, expected):
        raise ConfigError(f"'{key}' must be of type {expected.__name__} in {path}")
    return value


def _parse_policy(value: Any, path: Path) -> MissingVariablePolicy:
    text = _expect(value, str, "missing_variables", path)
    try:
        return MissingVariablePolicy(text.strip().lower())
    except ValueError:
        allowed = ", ".join(p.value for p in MissingVariablePolicy)
        raise ConfigError(f"'missing_variables' must be one of: {allowed} (got '{text}') in {path}") from None


def _parse_formatters(raw: Any, locale: str, path: Path) -> BooleanFormatterRegistry:
    registry = BooleanFormatterRegistry(locale)
    for name, pair in _expect(raw, dict, "boolean_formatters", path).items():
        if not isinstance(pair, list) or len(pair) != 2 or not all(isinstance(v, str) for v in pair):
            raise ConfigError(f"Boolean formatter '{name}' must be a list of two strings in {path}")
        try:
            registry.register(str(name), BooleanFormatter(pair[0], pair[1]))
        except ValueError as e:
            raise ConfigError(f"{e} in {path}") from e
    return registry


def _parse_replacements(raw: Any, path: Path) -> Dict[str, str]:
    replacements: Dict[str, str] = {}
    for source, target in _expect(raw, dict, "text_replacements", path).items():
        if source == "preset":
            preset = TextReplacements.PRESETS.get(str(target).lower())
            if preset is None:
                raise ConfigError(f"Unknown text replacement preset '{target}' in {path}")
            replacements.update(preset)
            continue
        if not isinstance(target, str):
            raise ConfigError(f"Replacement for '{source}' must be a string in {path}")
        replacements[str(source)] = target
    return replacements


# --------------------------------------------------------------------------- #
# PUBLIC API
# --------------------------------------------------------------------------- #
def load_options(path: Path) -> ProcessingOptions:
    """
    Загружает параметры обработки из YAML.

    Отсутствующие ключи получают значения по умолчанию.

    Raises:
        ConfigError: Файл отсутствует, не является словарём, содержит
                     неизвестные ключи или значения неверного типа
    """
    path = Path(path)
    raw = _read_yaml_map(path)

    unknown = sorted(set(raw) - _ALLOWED_KEYS)
    if unknown:
        raise ConfigError(f"Unknown option(s) {', '.join(unknown)} in {path}")

    defaults = ProcessingOptions()
    locale = str(_expect(raw.get("locale", defaults.locale), str, "locale", path))

    return ProcessingOptions(
        missing_variables=(
            _parse_policy(raw["missing_variables"], path)
            if "missing_variables" in raw else defaults.missing_variables
        ),
        locale=LocaleName(locale),
        boolean_formatters=(
            _parse_formatters(raw["boolean_formatters"], locale, path)
            if "boolean_formatters" in raw else None
        ),
        text_replacements=_parse_replacements(raw.get("text_replacements", {}), path),
        enable_newline_support=_expect(raw.get("newlines", defaults.enable_newline_support), bool, "newlines", path),
        warn_on_empty_loop_collections=_expect(
            raw.get("warn_on_empty_loops", defaults.warn_on_empty_loop_collections), bool, "warn_on_empty_loops", path
        ),
    )


__all__ = ["load_options"]
