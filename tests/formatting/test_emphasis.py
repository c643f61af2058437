"""
Тесты разбора markdown-выделения на сегменты.
"""

from docfill.formatting import EmphasisSegment, has_emphasis, split_emphasis


class TestSplitEmphasis:

    def test_plain_text(self):
        assert not has_emphasis("plain text")
        assert split_emphasis("plain text") == [EmphasisSegment("plain text")]

    def test_bold_and_italic(self):
        segments = split_emphasis("a **b** and *c*")

        assert segments == [
            EmphasisSegment("a "),
            EmphasisSegment("b", bold=True),
            EmphasisSegment(" and "),
            EmphasisSegment("c", italic=True),
        ]

    def test_underscore_variants(self):
        segments = split_emphasis("__bold__ _it_")
        assert segments[0] == EmphasisSegment("bold", bold=True)
        assert segments[-1] == EmphasisSegment("it", italic=True)

    def test_bold_italic(self):
        assert split_emphasis("***both***") == [EmphasisSegment("both", bold=True, italic=True)]

    def test_strikethrough(self):
        assert split_emphasis("~~old~~ new") == [
            EmphasisSegment("old", strike=True),
            EmphasisSegment(" new"),
        ]

    def test_segment_flags(self):
        assert EmphasisSegment("x").is_plain
        assert not EmphasisSegment("x", bold=True).is_plain

    def test_unbalanced_markers_stay_plain(self):
        assert not has_emphasis("2 * 3 = 6")
        assert split_emphasis("a ** b") == [EmphasisSegment("a ** b")]
