"""
Тесты условных блоков в документах.

Проверяет блоки из абзацев, inline-условия и условия по строкам таблиц.
"""

import pytest

from docfill import WarningType

from tests.infrastructure import add_table, body_texts, make_document, process, table_texts

BRANCHES = ("before", "{{#if A}}", "x", "{{#elseif B}}", "y", "{{else}}", "z", "{{/if}}", "after")


class TestDocumentConditionals:

    @pytest.mark.parametrize("a,b,expected", [
        (True, True, "x"),
        (True, False, "x"),
        (False, True, "y"),
        (False, False, "z"),
    ])
    def test_first_true_branch_survives(self, a, b, expected):
        document = make_document(*BRANCHES)
        result = process(document, {"A": a, "B": b})

        assert result.success
        assert body_texts(document) == ["before", expected, "after"]

    def test_no_branch_and_no_else_removes_block(self):
        document = make_document("before", "{{#if A}}", "x", "{{#elseif B}}", "y", "{{/if}}", "after")
        process(document, {"A": False, "B": False})
        assert body_texts(document) == ["before", "after"]

    def test_missing_condition_variable_is_false(self):
        document = make_document("{{#if Unknown}}", "x", "{{else}}", "fallback", "{{/if}}")
        result = process(document, {})

        assert body_texts(document) == ["fallback"]
        assert result.warnings == []

    def test_nested_conditionals(self):
        document = make_document(
            "{{#if A}}", "a-start", "{{#if B}}", "ab", "{{else}}", "a-not-b", "{{/if}}", "a-end", "{{/if}}",
        )
        process(document, {"A": True, "B": False})
        assert body_texts(document) == ["a-start", "a-not-b", "a-end"]

    def test_outer_false_drops_nested(self):
        document = make_document("{{#if A}}", "{{#if B}}", "ab", "{{/if}}", "{{/if}}", "tail")
        process(document, {"A": False, "B": True})
        assert body_texts(document) == ["tail"]

    def test_comparison_conditions(self, order_data):
        document = make_document(
            '{{#if Customer.Name = "Alice"}}', "is alice", "{{/if}}",
            "{{#if Items.Count >= 3 and not Notes}}", "many", "{{/if}}",
        )
        process(document, order_data)
        assert body_texts(document) == ["is alice", "many"]

    def test_placeholders_in_chosen_branch(self, order_data):
        document = make_document("{{#if Customer.IsVip}}", "VIP {{Customer.Name}}", "{{else}}", "{{Missing}}", "{{/if}}")
        result = process(document, order_data)

        assert body_texts(document) == ["VIP Alice"]
        assert result.missing_variables == []

    def test_inline_conditional(self, order_data):
        document = make_document("Dear {{#if Customer.IsVip}}valued {{else}}new {{/if}}{{Customer.Name}}")
        process(document, order_data)
        assert body_texts(document) == ["Dear valued Alice"]

    def test_inline_conditional_value_emphasis(self):
        document = make_document("Status_x_ {{#if A}}{{Note}}{{else}}none{{/if}}")
        process(document, {"A": True, "Note": "**hot**"})

        paragraph = document.paragraphs[0]
        assert paragraph.text == "Status_x_ hot"
        assert [r.text for r in paragraph.runs if r.bold] == ["hot"]

    def test_invalid_expression_warns(self):
        document = make_document("{{#if A ==}}", "x", "{{else}}", "y", "{{/if}}")
        result = process(document, {"A": 1})

        assert body_texts(document) == ["y"]
        assert result.warnings[0].type == WarningType.EXPRESSION_FAILED

    def test_unbalanced_markers_fail(self):
        document = make_document("{{#if A}}", "x")
        result = process(document, {"A": True})

        assert not result.success
        assert "has no matching" in result.error_message

    def test_stray_end_marker_fails(self):
        result = process(make_document("x", "{{/if}}"), {})
        assert not result.success
        assert "Conditional end marker" in result.error_message

    def test_conditional_around_table(self):
        document = make_document("{{#if Show}}")
        add_table(document, [["a", "b"]])
        document.add_paragraph("{{/if}}")
        document.add_paragraph("end")

        process(document, {"Show": False})

        assert document.tables == []
        assert body_texts(document) == ["end"]


class TestTableRowConditionals:
    """Условия, маркеры которых занимают отдельные строки таблицы."""

    def test_row_block(self):
        document = make_document()
        add_table(document, [
            ["Item", "Price"],
            ["{{#if ShowTotal}}", ""],
            ["Total", "{{Total}}"],
            ["{{/if}}", ""],
            ["Footer", ""],
        ])

        process(document, {"ShowTotal": True, "Total": 99})
        assert table_texts(document) == [["Item", "Price"], ["Total", "99"], ["Footer", ""]]

    def test_row_block_removed(self):
        document = make_document()
        add_table(document, [["{{#if ShowTotal}}", ""], ["Total", "{{Total}}"], ["{{/if}}", ""], ["Footer", ""]])

        process(document, {"ShowTotal": False})
        assert table_texts(document) == [["Footer", ""]]

    def test_conditional_inside_cell(self):
        document = make_document()
        table = add_table(document, [["{{Name}}", ""]])
        cell = table.rows[0].cells[1]
        cell.paragraphs[0].add_run("{{#if Paid}}")
        cell.add_paragraph("paid")
        cell.add_paragraph("{{else}}")
        cell.add_paragraph("open")
        cell.add_paragraph("{{/if}}")

        process(document, {"Name": "Inv-1", "Paid": False})
        assert table_texts(document) == [["Inv-1", "open"]]
