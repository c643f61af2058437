"""
Тесты точек входа DocumentTemplateProcessor.

Проверяет обработку документов в памяти, JSON-данных и файлов.
"""

import docx
import pytest

from docfill import DocumentTemplateProcessor, MissingVariablePolicy, ProcessingOptions

from tests.infrastructure import body_texts, make_document


class TestProcess:

    def test_requires_document(self):
        with pytest.raises(TypeError, match="Expected a python-docx Document"):
            DocumentTemplateProcessor().process("not a document", {})

    def test_syntax_error_reported_as_failure(self):
        result = DocumentTemplateProcessor().process(make_document("{{#if A}}", "{{else}}", "{{else}}", "{{/if}}"), {})

        assert not result.success
        assert "more than one" in result.error_message
        assert result.replacement_count == 0

    def test_failure_keeps_warnings_recorded_before_error(self):
        options = ProcessingOptions(missing_variables=MissingVariablePolicy.FAIL)
        document = make_document("{{#foreach Nothing}}", "x", "{{/foreach}}", "{{Missing}}")

        result = DocumentTemplateProcessor(options).process(document, {})

        assert not result.success
        assert result.missing_variables == ["Missing"]
        assert len(result.warnings) == 2

    def test_processor_is_reusable(self):
        processor = DocumentTemplateProcessor()
        first, second = make_document("{{Name}}"), make_document("{{Name}}")

        processor.process(first, {"Name": "a"})
        processor.process(second, {"Name": "b"})

        assert body_texts(first) == ["a"]
        assert body_texts(second) == ["b"]


class TestProcessJson:

    def test_valid_json(self):
        document = make_document("{{Customer.Name}} owes {{Total}}", "{{#foreach Lines}}", "{{.}}", "{{/foreach}}")
        result = DocumentTemplateProcessor().process_json(
            document, '{"Customer": {"Name": "Bob"}, "Total": 10.0, "Lines": ["a", "b"]}'
        )

        assert result.success
        assert body_texts(document) == ["Bob owes 10", "a", "b"]

    def test_invalid_json(self):
        document = make_document("{{Name}}")
        result = DocumentTemplateProcessor().process_json(document, "{not json")

        assert not result.success
        assert result.error_message.startswith("Invalid JSON data")
        assert body_texts(document) == ["{{Name}}"]

    def test_non_object_root(self):
        result = DocumentTemplateProcessor().process_json(make_document("x"), "[1, 2]")

        assert not result.success
        assert result.error_message == "JSON data root must be an object, got list"


class TestProcessFile:
    """Обработка шаблона с диска с записью результата в файл."""

    def test_saves_output_on_success(self, tmp_path):
        template = tmp_path / "template.docx"
        output = tmp_path / "out.docx"
        make_document("Hello {{Name}}").save(str(template))

        result = DocumentTemplateProcessor().process_file(template, output, {"Name": "World"})

        assert result.success
        assert body_texts(docx.Document(str(output))) == ["Hello World"]
        assert body_texts(docx.Document(str(template))) == ["Hello {{Name}}"]

    def test_no_output_on_failure(self, tmp_path):
        template = tmp_path / "template.docx"
        output = tmp_path / "out.docx"
        make_document("{{/foreach}}").save(str(template))

        result = DocumentTemplateProcessor().process_file(template, output, {})

        assert not result.success
        assert not output.exists()
