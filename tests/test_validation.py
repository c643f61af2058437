"""
Тесты валидации шаблонов.

Проверяет структуру блоков, сбор имён и поиск пропущенных переменных по данным.
"""

import pytest

from docfill import ValidationErrorType, WarningType, validate_template
from docfill.validation import condition_variables
from docfill.conditions import ExpressionParser

from tests.infrastructure import add_table, body_texts, make_document


def error_types(result):
    return [e.type for e in result.errors]


class TestStructure:

    @pytest.mark.parametrize("paragraphs,expected", [
        (("{{#if A}}", "x"), ValidationErrorType.UNMATCHED_CONDITIONAL_START),
        (("x", "{{/if}}"), ValidationErrorType.UNMATCHED_CONDITIONAL_END),
        (("{{#foreach Items}}", "x"), ValidationErrorType.UNMATCHED_LOOP_START),
        (("x", "{{/foreach}}"), ValidationErrorType.UNMATCHED_LOOP_END),
        (("{{#if A}}", "{{else}}", "{{else}}", "{{/if}}"), ValidationErrorType.INVALID_BLOCK_STRUCTURE),
        (("{{else}}",), ValidationErrorType.INVALID_BLOCK_STRUCTURE),
    ])
    def test_marker_errors(self, paragraphs, expected):
        result = validate_template(make_document(*paragraphs))

        assert not result.is_valid
        assert error_types(result) == [expected]

    def test_invalid_condition(self):
        result = validate_template(make_document("{{#if A ==}}", "x", "{{/if}}"))

        assert error_types(result) == [ValidationErrorType.INVALID_CONDITIONAL_EXPRESSION]
        assert result.errors[0].message.startswith("Invalid condition expression 'A =='")

    def test_invalid_inline_expression_placeholder(self):
        result = validate_template(make_document("{{(A and)}}"))
        assert error_types(result) == [ValidationErrorType.INVALID_CONDITIONAL_EXPRESSION]

    def test_valid_template_without_data(self):
        document = make_document(
            "{{Title}}", "{{#if Show and Count > 1}}", "{{#foreach Items}}", "{{Name}}", "{{/foreach}}", "{{/if}}",
        )
        result = validate_template(document)

        assert result.is_valid
        assert result.all_placeholders == ["Count", "Items", "Name", "Show", "Title"]
        assert result.missing_variables == []

    def test_marker_paragraphs_add_only_block_names(self):
        document = make_document("{{#if Show}}", "{{#foreach Items}}", "x", "{{/foreach}}", "{{/if}}")
        result = validate_template(document, {"Show": True, "Items": [1]})

        assert result.is_valid
        assert result.all_placeholders == ["Items", "Show"]
        assert result.warnings == []

    def test_document_not_modified(self):
        paragraphs = ("{{#if A}}", "{{Name}}", "{{/if}}")
        document = make_document(*paragraphs)

        validate_template(document, {"A": True, "Name": "x"})

        assert body_texts(document) == list(paragraphs)

    def test_inline_blocks_collected(self):
        result = validate_template(make_document("Hi {{#if Vip}}dear {{Name}}{{/if}}!"))
        assert result.all_placeholders == ["Name", "Vip"]

    def test_table_cells_scanned(self):
        document = make_document()
        add_table(document, [["{{#foreach Rows}}", ""], ["{{A}}", "{{B}}"], ["{{/foreach}}", ""]])

        result = validate_template(document)

        assert result.is_valid
        assert result.all_placeholders == ["A", "B", "Rows"]


class TestDataChecks:
    """Поиск пропущенных переменных с учётом областей циклов."""

    def test_missing_variables(self):
        result = validate_template(make_document("{{Name}} {{Age}} {{Age}}"), {"Name": "x"})

        assert not result.is_valid
        assert result.missing_variables == ["Age"]
        assert error_types(result) == [ValidationErrorType.MISSING_VARIABLE]
        assert result.errors[0].message == "Variable 'Age' is referenced in the template but not provided in the data."

    def test_names_inside_loop_checked_against_items(self, order_data):
        document = make_document("{{#foreach Items}}", "{{Name}} {{Customer.Name}} {{Sku}} {{@index}}", "{{/foreach}}")
        result = validate_template(document, order_data)

        assert result.missing_variables == ["Sku"]

    def test_name_present_in_some_items_is_not_missing(self):
        document = make_document("{{#foreach Rows}}", "{{Discount}}", "{{/foreach}}")
        result = validate_template(document, {"Rows": [{"Discount": 1}, {}]})

        assert result.is_valid

    def test_nested_loops(self):
        data = {"Groups": [{"Members": [{"Name": "a"}]}]}
        document = make_document(
            "{{#foreach Groups}}", "{{#foreach Members}}", "{{Name}} {{Role}}", "{{/foreach}}", "{{/foreach}}",
        )

        assert validate_template(document, data).missing_variables == ["Role"]

    def test_missing_collection(self):
        document = make_document("{{#foreach Lines}}", "{{Whatever}}", "{{/foreach}}")
        result = validate_template(document, {})

        assert result.missing_variables == ["Lines"]

    def test_not_a_collection(self):
        document = make_document("{{#foreach Items}}", "x", "{{/foreach}}")
        result = validate_template(document, {"Items": "abc"})

        assert error_types(result) == [ValidationErrorType.INVALID_LOOP_COLLECTION]

    def test_empty_collection_warns(self, order_data):
        document = make_document("{{#foreach Tags}}", "{{Label}}", "{{/foreach}}")
        result = validate_template(document, order_data)

        assert result.is_valid
        assert [w.type for w in result.warnings] == [WarningType.EMPTY_LOOP_COLLECTION]

    def test_empty_branch_checked_in_outer_scope(self):
        document = make_document(
            "{{#foreach Tags}}", "{{.}}", "{{#empty}}", "{{Fallback}}", "{{/empty}}", "{{/foreach}}",
        )
        result = validate_template(document, {"Tags": []})

        assert result.missing_variables == ["Fallback"]


class TestConditionVariables:

    def test_collects_operands(self):
        condition = ExpressionParser().parse('(A or not B) and C.D >= 3 and Name = "x"')
        assert condition_variables(condition) == ["A", "B", "C.D", "Name"]

    def test_literals_only(self):
        assert condition_variables(ExpressionParser().parse("true")) == []
