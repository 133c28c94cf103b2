"""Confluence storage format to Markdown conversion engine."""

from confluence_md.content_converter.markdown_converter import (
    MarkdownConverter,
    storage_to_markdown,
)
from confluence_md.errors import (
    ConfluenceMarkdownError,
    ConversionError,
    StructuralError,
)
from confluence_md.models import (
    AssetDescriptor,
    ConversionOptions,
    ConvertedOutput,
    ReferenceKind,
    RelativePathPolicy,
)

__version__ = "0.3.0"

__all__ = [
    "AssetDescriptor",
    "ConfluenceMarkdownError",
    "ConversionError",
    "ConversionOptions",
    "ConvertedOutput",
    "MarkdownConverter",
    "ReferenceKind",
    "RelativePathPolicy",
    "StructuralError",
    "storage_to_markdown",
]
