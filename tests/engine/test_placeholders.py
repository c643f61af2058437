"""
Тесты подстановки плейсхолдеров в документах.
"""

from docfill import MissingVariablePolicy, WarningType

from tests.infrastructure import body_texts, make_document, make_options, process, run_properties


class TestDocumentPlaceholders:

    def test_simple_replacement(self, order_data):
        document = make_document("Hello {{Customer.Name}}!", "Order #{{OrderId}} from {{Customer.Address.City}}")
        result = process(document, order_data)

        assert result.success
        assert body_texts(document) == ["Hello Alice!", "Order #1042 from Berlin"]
        assert result.replacement_count == 3

    def test_text_without_markup_is_preserved(self, order_data):
        texts = ["Plain text.", "  spaced  out  ", "Braces { } and }} {{ alone"]
        document = make_document(*texts)

        result = process(document, order_data)

        assert body_texts(document) == texts
        assert result.replacement_count == 0

    def test_placeholder_split_across_runs(self, order_data):
        document = make_document(["Dear {{Cust", "omer.", "Name}}, welcome"])
        process(document, order_data)
        assert body_texts(document) == ["Dear Alice, welcome"]

    def test_indexer_path(self, order_data):
        document = make_document("{{Items[1].Name}} / {{Items[9].Name}}")
        result = process(document, order_data)

        assert body_texts(document) == ["Book / {{Items[9].Name}}"]
        assert result.missing_variables == ["Items[9].Name"]

    def test_formatting_of_values(self):
        document = make_document("{{Paid:yesno}} {{Done:checkbox}} {{Amount}}")
        process(document, {"Paid": False, "Done": True, "Amount": 12.5}, make_options(locale="de"))
        assert body_texts(document) == ["Nein ☑ 12,5"]

    def test_expression_placeholder(self):
        document = make_document("{{(Count > 3 and IsOpen):yesno}}")
        process(document, {"Count": 5, "IsOpen": True})
        assert body_texts(document) == ["Yes"]

    def test_multiline_value(self):
        document = make_document("Address: {{Address}}")
        process(document, {"Address": "Main St 1\nBerlin"})

        paragraph = document.paragraphs[0]
        assert paragraph.text == "Address: Main St 1\nBerlin"
        assert len(paragraph._p.xpath(".//w:br")) == 1

    def test_multiline_disabled(self):
        document = make_document("{{Address}}")
        process(document, {"Address": "a\nb"}, make_options(enable_newline_support=False))
        assert document.paragraphs[0]._p.xpath(".//w:br") == []

    def test_markdown_emphasis_in_value(self):
        document = make_document("Status: {{Status}}")
        process(document, {"Status": "**Approved** by *QA*"})

        runs = {r["text"]: r for r in run_properties(document.paragraphs[0])}
        assert runs["Approved"]["bold"] is True
        assert runs["QA"]["italic"] is True
        assert document.paragraphs[0].text == "Status: Approved by QA"

    def test_html_replacements_before_emphasis(self):
        from docfill import TextReplacements

        document = make_document("{{Note}}")
        options = make_options(text_replacements=dict(TextReplacements.HTML_ENTITIES))
        process(document, {"Note": "A&amp;B<br/>**C**"}, options)

        paragraph = document.paragraphs[0]
        assert paragraph.text == "A&B\nC"
        assert [r["bold"] for r in run_properties(paragraph) if r["text"] == "C"] == [True]


class TestMissingVariablePolicies:
    """Поведение при отсутствующих переменных."""

    def test_leave_unchanged(self):
        document = make_document("A {{Missing}} B {{Missing}}")
        result = process(document, {})

        assert result.success
        assert body_texts(document) == ["A {{Missing}} B {{Missing}}"]
        assert result.missing_variables == ["Missing"]
        assert [w.type for w in result.warnings] == [WarningType.MISSING_VARIABLE]

    def test_replace_with_empty(self):
        document = make_document("A {{Missing}} B")
        result = process(document, {}, make_options(MissingVariablePolicy.REPLACE_WITH_EMPTY))

        assert body_texts(document) == ["A  B"]
        assert result.replacement_count == 1

    def test_fail(self):
        document = make_document("A {{Missing}} B")
        result = process(document, {}, make_options(MissingVariablePolicy.FAIL))

        assert not result.success
        assert result.error_message == "Missing variable or invalid expression: Missing"

    def test_null_value_is_found(self):
        document = make_document("[{{Notes}}]")
        result = process(document, {"Notes": None})

        assert body_texts(document) == ["[]"]
        assert result.missing_variables == []

    def test_rerun_is_idempotent(self, order_data):
        document = make_document("Hello {{Customer.Name}}", "{{#if Customer.IsVip}}", "VIP", "{{/if}}")
        process(document, order_data)
        second = process(document, order_data)

        assert second.success
        assert second.replacement_count == 0
        assert body_texts(document) == ["Hello Alice", "VIP"]
