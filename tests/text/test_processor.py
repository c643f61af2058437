"""
Тесты обработки текстовых шаблонов.
"""

from docfill import MissingVariablePolicy, TextTemplateProcessor, WarningType

from tests.infrastructure import make_options, process_text


class TestTextTemplateProcessor:

    def test_placeholders(self, order_data):
        result = process_text("Order {{OrderId}} for {{Customer.Name}}", order_data)

        assert result.success
        assert result.text == "Order 1042 for Alice"
        assert result.replacement_count == 2

    def test_conditional_first_true_branch(self):
        template = "{{#if A}}x{{#elseif B}}y{{else}}z{{/if}}"

        assert process_text(template, {"A": True, "B": True}).text == "x"
        assert process_text(template, {"A": False, "B": True}).text == "y"
        assert process_text(template, {"A": False, "B": False}).text == "z"

    def test_conditional_without_else_renders_nothing(self):
        assert process_text("[{{#if A}}x{{/if}}]", {"A": False}).text == "[]"

    def test_loop_metadata(self):
        result = process_text(
            "{{#foreach Items}}{{@index}}:{{.}}{{#if @first}}(first){{/if}}{{#if @last}}(last){{/if}}/{{@count}} {{/foreach}}",
            {"Items": ["a", "b", "c"]},
        )
        assert result.text == "0:a(first)/3 1:b/3 2:c(last)/3 "

    def test_named_loop_variable(self, order_data):
        result = process_text("{{#foreach item in Items}}{{item.Name}}x{{item.Qty}};{{/foreach}}", order_data)
        assert result.text == "Penx2;Bookx1;Lampx3;"

    def test_empty_branch(self, order_data):
        assert process_text("{{#foreach Tags}}{{.}}{{#empty}}no tags{{/empty}}{{/foreach}}", order_data).text == "no tags"

    def test_nested_loops_see_outer_scope(self):
        data = {
            "Title": "T",
            "Groups": [{"Name": "G1", "Items": [1, 2]}, {"Name": "G2", "Items": [3]}],
        }
        result = process_text("{{#foreach Groups}}{{#foreach Items}}{{Title}}-{{Name}}-{{.}} {{/foreach}}{{/foreach}}", data)
        assert result.text == "T-G1-1 T-G1-2 T-G2-3 "

    def test_missing_leave_unchanged(self):
        result = process_text("Hi {{Missing}} and {{Missing}}", {})

        assert result.success
        assert result.text == "Hi {{Missing}} and {{Missing}}"
        assert result.missing_variables == ["Missing"]
        assert [w.type for w in result.warnings] == [WarningType.MISSING_VARIABLE]
        assert result.replacement_count == 0

    def test_missing_replace_with_empty(self):
        options = make_options(MissingVariablePolicy.REPLACE_WITH_EMPTY)
        result = process_text("Hi {{Missing}}!", {}, options)

        assert result.text == "Hi !"
        assert result.replacement_count == 1

    def test_missing_fail(self):
        options = make_options(MissingVariablePolicy.FAIL)
        result = process_text("Hi {{Missing}}!", {}, options)

        assert not result.success
        assert "Missing" in result.error_message
        assert result.missing_variables == ["Missing"]

    def test_syntax_error_is_failure(self):
        result = TextTemplateProcessor().process("{{#if A}}open", {"A": True})

        assert not result.success
        assert "has no matching" in result.error_message

    def test_not_a_collection_is_failure(self):
        result = process_text("{{#foreach Name}}x{{/foreach}}", {"Name": "abc"})

        assert not result.success
        assert result.error_message == "Variable 'Name' is not a collection. Cannot iterate."

    def test_missing_collection_warns(self):
        result = process_text("[{{#foreach Items}}x{{/foreach}}]", {})

        assert result.text == "[]"
        assert result.warnings[0].type == WarningType.MISSING_LOOP_COLLECTION

    def test_null_collection_warns(self, order_data):
        result = process_text("{{#foreach Notes}}x{{/foreach}}", order_data)
        assert result.warnings[0].type == WarningType.NULL_LOOP_COLLECTION

    def test_empty_collection_warning_is_opt_in(self, order_data):
        silent = process_text("{{#foreach Tags}}x{{/foreach}}", order_data)
        warned = process_text("{{#foreach Tags}}x{{/foreach}}", order_data, make_options(warn_on_empty_loop_collections=True))

        assert [w.type for w in warned.warnings] == [WarningType.EMPTY_LOOP_COLLECTION]
        assert silent.warnings == []

    def test_expression_placeholder(self):
        result = process_text("{{(A and not B):yesno}}", {"A": True, "B": False})
        assert result.text == "Yes"

    def test_invalid_condition_is_false_with_warning(self):
        result = process_text("{{#if A and}}x{{else}}y{{/if}}", {"A": True})

        assert result.text == "y"
        assert result.warnings[0].type == WarningType.EXPRESSION_FAILED

    def test_locale_and_formatters(self):
        options = make_options(locale="de-DE")
        result = process_text("{{Price}} {{Paid:yesno}}", {"Price": 9.5, "Paid": True}, options)
        assert result.text == "9,5 Ja"

    def test_text_replacements(self):
        options = make_options(text_replacements={"<br>": "\n", "(c)": "©"})
        result = process_text("{{Note}}", {"Note": "a<BR>b (c)"}, options)
        assert result.text == "a\nb ©"

    def test_rerun_on_resolved_text_makes_no_replacements(self, order_data):
        first = process_text("Order {{OrderId}}", order_data)
        second = process_text(first.text, order_data)

        assert second.success
        assert second.text == first.text
        assert second.replacement_count == 0
