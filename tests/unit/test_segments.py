"""Tests for route segment classification."""

import pytest

from vista.rsc.segments import SegmentKind, classify_segment


class TestClassifySegment:
    """Test directory name classification."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("about", ("about", SegmentKind.STATIC)),
            ("[slug]", ("slug", SegmentKind.DYNAMIC)),
            ("[...path]", ("path", SegmentKind.CATCH_ALL)),
            ("(marketing)", ("", SegmentKind.GROUP)),
        ],
    )
    def test_classify(self, name, expected):
        """Test each segment kind."""
        assert classify_segment(name) == expected

    def test_catch_all_before_dynamic(self):
        """Test that [...x] is not treated as a dynamic segment named '...x'."""
        label, kind = classify_segment("[...slug]")
        assert kind == SegmentKind.CATCH_ALL
        assert label == "slug"

    def test_unbalanced_brackets_static(self):
        """Test that partial bracket or paren names stay static."""
        assert classify_segment("[slug")[1] == SegmentKind.STATIC
        assert classify_segment("slug]")[1] == SegmentKind.STATIC
        assert classify_segment("(group")[1] == SegmentKind.STATIC

    def test_kind_values(self):
        """Test serialized kind names."""
        assert [k.value for k in SegmentKind] == ["static", "dynamic", "catch-all", "group"]
