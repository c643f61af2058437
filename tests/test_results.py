"""
Тесты сборщика предупреждений и результата обработки.
"""

from docfill import ProcessingResult, ProcessingWarning, WarningType
from docfill.results import WarningCollector


class TestWarningCollector:
    """Сбор предупреждений: пропущенные переменные фиксируются однократно."""

    def test_missing_variable_recorded_once(self):
        collector = WarningCollector()
        collector.add(ProcessingWarning.missing_variable("B"))
        collector.add(ProcessingWarning.missing_variable("A"))
        collector.add(ProcessingWarning.missing_variable("B"))

        assert len(collector) == 2
        assert collector.missing_variables == ["A", "B"]

    def test_other_warnings_recorded_each_time(self):
        collector = WarningCollector()
        collector.add(ProcessingWarning.empty_loop_collection("Items"))
        collector.add(ProcessingWarning.empty_loop_collection("Items"))

        assert len(collector) == 2
        assert collector.missing_variables == []

    def test_warnings_is_a_copy(self):
        collector = WarningCollector()
        collector.add(ProcessingWarning.null_loop_collection("X"))
        collector.warnings.clear()
        assert len(collector) == 1


class TestProcessingWarning:

    def test_str(self):
        warning = ProcessingWarning.missing_loop_collection("Items")
        assert str(warning) == "MissingLoopCollection [loop: Items]: Loop collection 'Items' was not found in the data."

    def test_expression_failed(self):
        warning = ProcessingWarning.expression_failed("A ==", "Unexpected end of expression")

        assert warning.type == WarningType.EXPRESSION_FAILED
        assert warning.variable_name == "A =="
        assert warning.message.endswith("Unexpected end of expression")


class TestProcessingResult:

    def test_ok(self):
        collector = WarningCollector()
        collector.add(ProcessingWarning.missing_variable("X"))
        result = ProcessingResult.ok(4, collector)

        assert result.success and result.has_warnings
        assert result.replacement_count == 4
        assert result.missing_variables == ["X"]
        assert result.error_message is None

    def test_failure_without_collector(self):
        result = ProcessingResult.failure("boom")

        assert not result.success
        assert result.error_message == "boom"
        assert result.warnings == [] and not result.has_warnings
