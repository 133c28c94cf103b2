"""Storage format to Markdown conversion.

This module provides the MarkdownConverter class, the entry point of the
engine. A conversion runs in four stages:

1. Named entities are rewritten to numeric references
2. The fragment is wrapped in a root declaring its namespace prefixes
3. The document is parsed strictly; malformed input raises StructuralError
4. The tree is rendered by the node dispatcher and the result normalized
"""

import logging
from typing import Optional

from confluence_md.content_converter.context import ConversionContext
from confluence_md.content_converter.dispatcher import NodeDispatcher
from confluence_md.content_converter.postprocess import clean_markdown
from confluence_md.content_converter.toc import resolve_table_of_contents
from confluence_md.errors import ConversionError
from confluence_md.models.conversion_options import ConversionOptions
from confluence_md.models.converted_output import ConvertedOutput
from confluence_md.preprocess.entities import normalize_entities
from confluence_md.preprocess.namespaces import wrap_with_namespaces
from confluence_md.preprocess.parser import parse_storage

logger = logging.getLogger(__name__)


class MarkdownConverter:
    """Converts Confluence storage format documents to Markdown.

    The converter keeps no state between calls; one instance can convert
    any number of documents, from any number of threads.

    Example:
        >>> converter = MarkdownConverter(ConversionOptions(compact_tables=True))
        >>> result = converter.convert("<h1>Title</h1><p>Body</p>")
        >>> result.markdown
        '# Title\\n\\nBody\\n'
    """

    def __init__(
        self,
        options: Optional[ConversionOptions] = None,
        dispatcher: Optional[NodeDispatcher] = None,
    ):
        """Initialize converter.

        Args:
            options: Conversion options (defaults to ConversionOptions())
            dispatcher: Node dispatcher (defaults to the built-in handlers)
        """
        self.options = options or ConversionOptions()
        self.dispatcher = dispatcher or NodeDispatcher()

    def convert(self, payload: str) -> ConvertedOutput:
        """Convert one storage format document.

        Args:
            payload: Storage format XHTML fragment

        Returns:
            ConvertedOutput with the Markdown, assets and warnings

        Raises:
            ConversionError: If payload is not a string
            StructuralError: If payload is not well-formed
        """
        if not isinstance(payload, str):
            raise ConversionError(f"Expected storage payload as str, got {type(payload).__name__}")

        wrapped = wrap_with_namespaces(normalize_entities(payload))
        root = parse_storage(wrapped)

        context = ConversionContext(self.options, self.dispatcher)
        body = self.dispatcher.convert_children(root, context)
        body = resolve_table_of_contents(body, context.headings, context.toc_requests)
        markdown = clean_markdown(body)

        logger.debug(
            f"Converted document: {len(markdown)} characters, "
            f"{len(context.assets)} asset(s), {len(context.warnings)} warning(s)"
        )
        return ConvertedOutput(
            markdown=markdown,
            assets=context.assets.descriptors(),
            warnings=context.warnings,
        )

    def xhtml_to_markdown(self, xhtml: str) -> str:
        """Convert a storage document and return only its Markdown."""
        return self.convert(xhtml).markdown


def storage_to_markdown(payload: str, options: Optional[ConversionOptions] = None) -> ConvertedOutput:
    """Convert one storage format document with the given options."""
    return MarkdownConverter(options).convert(payload)
