"""
Тесты порядка обхода DocumentWalker и цепочки посетителей.
"""

from docfill.context import GlobalEvaluationContext
from docfill.document import body_of
from docfill.resolution import PlaceholderResolver
from docfill.results import WarningCollector
from docfill.types import ProcessingOptions
from docfill.visitors import (
    CompositeVisitor,
    ConditionalVisitor,
    DocumentWalker,
    LoopVisitor,
    PlaceholderVisitor,
    TemplateVisitor,
    build_visitor,
)

from tests.infrastructure import add_table, make_document


class RecordingVisitor(TemplateVisitor):
    """Записывает события обхода, не изменяя документ."""

    def __init__(self):
        self.events = []

    def visit_conditional(self, block, context):
        self.events.append(("if", block.condition))

    def visit_loop(self, block, context):
        self.events.append(("loop", block.collection_name))

    def visit_placeholder(self, placeholder, paragraph, context):
        self.events.append(("placeholder", placeholder.variable_name))

    def visit_paragraph(self, paragraph, context):
        self.events.append(("paragraph", None))


def walk(document):
    visitor = RecordingVisitor()
    DocumentWalker(body_of(document)).walk(visitor, GlobalEvaluationContext({}))
    return visitor.events


class TestWalkOrder:
    """Порядок событий обхода документа."""

    def test_deepest_conditional_first(self):
        events = walk(make_document("{{#if A}}", "{{#if B}}", "x", "{{/if}}", "{{/if}}"))
        assert [e for e in events if e[0] == "if"] == [("if", "B"), ("if", "A")]

    def test_conditionals_before_loops_before_placeholders(self):
        events = walk(make_document("{{Name}}", "{{#foreach Items}}", "y", "{{/foreach}}", "{{#if A}}", "x", "{{/if}}"))
        kinds = [kind for kind, _ in events]
        assert kinds.index("if") < kinds.index("loop") < kinds.index("placeholder")

    def test_placeholders_right_to_left(self):
        events = walk(make_document("{{A}} and {{B}} and {{C}}"))
        assert events == [("placeholder", "C"), ("placeholder", "B"), ("placeholder", "A")]

    def test_plain_paragraph_visited(self):
        assert walk(make_document("plain")) == [("paragraph", None)]

    def test_marker_paragraphs_not_visited_as_text(self):
        events = walk(make_document("{{#if A}}", "{{/if}}"))
        assert events == [("if", "A")]

    def test_table_cells_walked(self):
        document = make_document()
        add_table(document, [["{{A}}", "{{B}}"]])
        events = walk(document)
        assert events == [("placeholder", "A"), ("placeholder", "B")]


class TestBuildVisitor:

    def setup_method(self):
        self.document = make_document("x")
        self.walker = DocumentWalker(body_of(self.document))
        self.resolver = PlaceholderResolver(ProcessingOptions(), WarningCollector())

    def test_chain_order(self):
        visitor = build_visitor(self.walker, self.resolver)

        assert isinstance(visitor, CompositeVisitor)
        assert [type(v) for v in visitor.visitors] == [ConditionalVisitor, LoopVisitor, PlaceholderVisitor]

    def test_loop_visitor_nests_final_composite(self):
        visitor = build_visitor(self.walker, self.resolver)
        loop = visitor.visitors[1]

        assert loop.nested_visitor is visitor
        assert loop.walker is self.walker
