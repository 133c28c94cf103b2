"""Unit tests for content_converter.toc module."""

from confluence_md.content_converter.context import HeadingEntry, TocRequest
from confluence_md.content_converter.markdown_converter import MarkdownConverter
from confluence_md.content_converter.toc import (
    render_inline_toc,
    resolve_table_of_contents,
    toc_placeholder,
)
from confluence_md.models import ConversionOptions

HEADINGS = [HeadingEntry(1, "A", "a"), HeadingEntry(2, "B", "b")]


class TestResolveTableOfContents:
    """Test cases for resolve_table_of_contents function."""

    def test_placeholder_on_its_own_line(self):
        text = f"{toc_placeholder(0)}\n"

        assert resolve_table_of_contents(text, HEADINGS, [TocRequest()]) == "- [A](#a)\n    - [B](#b)\n"

    def test_quote_prefix_repeated_on_every_line(self):
        """A toc inside a quote stays inside the quote."""
        text = f"> {toc_placeholder(0)}\n"

        assert resolve_table_of_contents(text, HEADINGS, [TocRequest()]) == "> - [A](#a)\n>     - [B](#b)\n"

    def test_list_item_continuation_indented(self):
        """Lines after the first are indented under the list marker."""
        text = f"- item\n- {toc_placeholder(0)}\n"

        result = resolve_table_of_contents(text, HEADINGS, [TocRequest()])

        assert result == "- item\n- - [A](#a)\n      - [B](#b)\n"

    def test_text_before_placeholder_starts_new_line(self):
        text = f"See: {toc_placeholder(0)}"

        assert resolve_table_of_contents(text, HEADINGS, [TocRequest()]) == "See:\n- [A](#a)\n    - [B](#b)"

    def test_unknown_request_leaves_prefix(self):
        text = f"> {toc_placeholder(3)}\n"

        assert resolve_table_of_contents(text, HEADINGS, []) == "> \n"

    def test_two_inline_placeholders_on_one_line(self):
        """Every placeholder of a line is resolved."""
        text = f"| {toc_placeholder(0)} | {toc_placeholder(1)} |"
        requests = [TocRequest(inline=True), TocRequest(min_level=2, inline=True)]

        result = resolve_table_of_contents(text, HEADINGS, requests)

        assert result == "| [A](#a)<br>[B](#b) | [B](#b) |"

    def test_inline_toc_escapes_pipes(self):
        headings = [HeadingEntry(1, "A|B", "ab")]

        assert render_inline_toc(headings, TocRequest(inline=True)) == "[A\\|B](#ab)"


class TestTableOfContentsInContainers:
    """Test cases for toc macros nested inside other blocks."""

    TOC = '<ac:structured-macro ac:name="toc"/>'

    def test_toc_inside_info_panel(self):
        """Every toc line is quoted with the panel."""
        xhtml = (
            '<ac:structured-macro ac:name="info"><ac:rich-text-body>'
            + self.TOC
            + "</ac:rich-text-body></ac:structured-macro>"
            "<h1>A</h1><h2>B</h2>"
        )

        result = MarkdownConverter().convert(xhtml)

        assert result.markdown == "> **Info:**\n> - [A](#a)\n>     - [B](#b)\n\n# A\n\n## B\n"

    def test_toc_inside_blockquote(self):
        xhtml = f"<blockquote>{self.TOC}</blockquote><h1>A</h1><h2>B</h2>"

        result = MarkdownConverter().convert(xhtml)

        assert result.markdown == "> - [A](#a)\n>     - [B](#b)\n\n# A\n\n## B\n"

    def test_toc_inside_table_cell(self):
        """A toc in a cell is computed and kept on one line."""
        options = ConversionOptions(compact_tables=True)
        xhtml = (
            "<table><tr><th>Contents</th></tr>"
            f"<tr><td>{self.TOC}</td></tr></table>"
            "<h1>A</h1><h2>B</h2>"
        )

        result = MarkdownConverter(options).convert(xhtml)

        assert result.markdown == "| Contents |\n| --- |\n| [A](#a)<br>[B](#b) |\n\n# A\n\n## B\n"
