"""Tests for the inline editor formatting actions."""

import pytest

from job_tailor.wizard.editor import (
    Selection,
    apply_format,
    bold,
    bullet,
    find_selection,
    italic,
)

TEXT = "Jane Doe\nPython engineer\nRedis caching\nDocker"


class TestBoldItalic:
    def test_bold_wraps_selection(self):
        result = bold("Python engineer", Selection(0, 6))
        assert result.text == "**Python** engineer"
        assert result.selection == Selection(0, 10)

    def test_italic_wraps_selection(self):
        result = italic("Python engineer", Selection(7, 15))
        assert result.text == "Python *engineer*"
        assert result.selection == Selection(7, 17)

    def test_selection_covers_replacement(self):
        result = bold(TEXT, Selection(9, 15))
        start, end = result.selection.start, result.selection.end
        assert result.text[start:end] == "**Python**"

    def test_empty_selection_inserts_markers(self):
        result = bold("abc", Selection(1, 1))
        assert result.text == "a****bc"
        assert result.selection == Selection(1, 5)


class TestBullet:
    def test_prefixes_each_line(self):
        sel = find_selection(TEXT, "Python engineer\nRedis caching")
        result = bullet(TEXT, sel)
        assert result.text == "Jane Doe\n- Python engineer\n- Redis caching\nDocker"
        assert result.text[result.selection.start:result.selection.end] == (
            "- Python engineer\n- Redis caching"
        )

    def test_skips_already_prefixed_lines(self):
        text = "- Python\nRedis"
        result = bullet(text, Selection(0, len(text)))
        assert result.text == "- Python\n- Redis"

    def test_idempotent(self):
        once = bullet(TEXT, Selection(0, len(TEXT)))
        twice = bullet(once.text, once.selection)
        assert twice.text == once.text
        assert twice.selection == once.selection


class TestApplyFormat:
    def test_dispatch(self):
        assert apply_format("italic", "ab", Selection(0, 2)).text == "*ab*"

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown format"):
            apply_format("underline", "ab", Selection(0, 2))

    def test_selection_clamped_to_text(self):
        result = bold("abc", Selection(1, 99))
        assert result.text == "a**bc**"


class TestSelection:
    def test_invalid_range(self):
        with pytest.raises(ValueError):
            Selection(5, 2)

    def test_find_selection(self):
        assert find_selection(TEXT, "Redis") == Selection(25, 30)

    def test_find_selection_missing(self):
        assert find_selection(TEXT, "Kotlin") is None
        assert find_selection(TEXT, "") is None
