"""
Тесты реестра булевых форматтеров.
"""

import pytest

from docfill.formatting import BooleanFormatter, BooleanFormatterRegistry, language_of


class TestBooleanFormatterRegistry:

    def test_builtin_english(self):
        registry = BooleanFormatterRegistry()

        assert registry.try_format(True, "yesno") == "Yes"
        assert registry.try_format(False, "yesno") == "No"
        assert registry.try_format(True, "checkbox") == "☑"
        assert registry.try_format(False, "checkmark") == "✗"
        assert registry.try_format(True, "onoff") == "On"
        assert registry.try_format(False, "enabled") == "Disabled"
        assert registry.try_format(True, "active") == "Active"
        assert registry.try_format(False, "truefalse") == "False"

    def test_names_are_case_insensitive(self):
        registry = BooleanFormatterRegistry()
        assert registry.try_format(True, "YesNo") == "Yes"
        assert "CHECKBOX" in registry

    @pytest.mark.parametrize("locale,expected", [
        ("de", "Ja"),
        ("de-DE", "Ja"),
        ("fr_FR", "Oui"),
        ("es", "Sí"),
        ("ru-RU", "Да"),
        ("xx", "Yes"),
    ])
    def test_localized_yesno(self, locale, expected):
        assert BooleanFormatterRegistry(locale).try_format(True, "yesno") == expected

    def test_unknown_formatter(self):
        assert BooleanFormatterRegistry().try_format(True, "nope") is None

    def test_register_custom(self):
        registry = BooleanFormatterRegistry()
        registry.register("Approval", BooleanFormatter("Approved", "Rejected"))

        assert registry.try_format(True, "approval") == "Approved"
        assert registry.try_format(False, "APPROVAL") == "Rejected"

    def test_register_overrides_builtin(self):
        registry = BooleanFormatterRegistry()
        registry.register("yesno", BooleanFormatter("Y", "N"))
        assert registry.try_format(True, "yesno") == "Y"

    def test_registries_are_independent(self):
        first = BooleanFormatterRegistry()
        first.register("custom", BooleanFormatter("1", "0"))
        assert "custom" not in BooleanFormatterRegistry()

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            BooleanFormatterRegistry().register("  ", BooleanFormatter("a", "b"))

    def test_language_of(self):
        assert language_of(None) == "en"
        assert language_of("pt-BR") == "pt"
