"""Unit tests for content_converter.postprocess module."""

from confluence_md.content_converter.postprocess import (
    clean_markdown,
    collapse_blank_lines,
    normalize_list_indentation,
    trim_trailing_whitespace,
)


class TestCollapseBlankLines:
    """Test cases for collapse_blank_lines function."""

    def test_runs_collapse_to_one_blank_line(self):
        """Three or more newlines become two."""
        assert collapse_blank_lines("a\n\n\n\n\nb") == "a\n\nb"

    def test_whitespace_only_lines_count_as_blank(self):
        """Lines holding only spaces or tabs are blank."""
        assert collapse_blank_lines("a\n  \n\t\n\nb") == "a\n\nb"

    def test_single_blank_line_kept(self):
        assert collapse_blank_lines("a\n\nb") == "a\n\nb"


class TestTrimTrailingWhitespace:
    """Test cases for trim_trailing_whitespace function."""

    def test_trailing_spaces_removed(self):
        """Spaces and tabs at line ends are removed."""
        assert trim_trailing_whitespace("a  \nb\t\n  c") == "a\nb\n  c"


class TestNormalizeListIndentation:
    """Test cases for normalize_list_indentation function."""

    def test_two_space_nesting_becomes_four(self):
        """Each nesting level is indented by four spaces."""
        text = "- a\n  - b\n    - c\n- d"

        assert normalize_list_indentation(text) == "- a\n    - b\n        - c\n- d"

    def test_continuation_lines_follow_their_item(self):
        """Continuation lines shift with their nested item."""
        text = "- a\n  - b\n    more"

        assert normalize_list_indentation(text) == "- a\n    - b\n      more"

    def test_ordered_continuation_untouched(self):
        """Top-level continuation lines keep their alignment."""
        text = "1. first\n   second"

        assert normalize_list_indentation(text) == text

    def test_fenced_code_outside_list_untouched(self):
        """List-like lines inside fenced code are not re-indented."""
        text = "```\n  - not a list\n```\n\n- a\n  - b"

        assert normalize_list_indentation(text) == "```\n  - not a list\n```\n\n- a\n    - b"

    def test_fenced_code_in_nested_item_moves_with_item(self):
        """Code fenced inside a nested item shifts with the item."""
        text = "- a\n  - b\n    ```\n    x\n    ```"

        assert normalize_list_indentation(text) == "- a\n    - b\n      ```\n      x\n      ```"

    def test_paragraph_ends_list(self):
        """An unindented line closes all open lists."""
        text = "- a\n  - b\ntext\n  - c"

        assert normalize_list_indentation(text) == "- a\n    - b\ntext\n- c"

    def test_idempotent(self):
        """Normalizing normalized text changes nothing."""
        text = "- a\n    - b\n        - c\n- d"

        assert normalize_list_indentation(text) == text


class TestCleanMarkdown:
    """Test cases for clean_markdown function."""

    def test_single_trailing_newline(self):
        """Output ends with exactly one newline."""
        assert clean_markdown("\n\n# T\n\nbody\n\n\n\n") == "# T\n\nbody\n"

    def test_empty_text(self):
        assert clean_markdown("   \n\n") == "\n"

    def test_passes_run_in_order(self):
        """Blank lines made of trailing whitespace are collapsed too."""
        assert clean_markdown("a   \n   \n   \n\nb") == "a\n\nb\n"
