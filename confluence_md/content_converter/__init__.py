"""Rendering of parsed storage documents to Markdown."""

from confluence_md.content_converter.markdown_converter import (
    MarkdownConverter,
    storage_to_markdown,
)

__all__ = ["MarkdownConverter", "storage_to_markdown"]
