"""Test fixtures for the conversion engine.

This module provides sample storage documents, their expected Markdown
and sample configuration files.
"""

from .sample_storage import (
    EXPECTED_MARKDOWN_SIMPLE,
    SAMPLE_CONFIG_YAML,
    SAMPLE_PAGE_SIMPLE,
    SAMPLE_PAGE_UNTERMINATED_TABLE,
    SAMPLE_PAGE_WITH_ENTITIES,
    SAMPLE_PAGE_WITH_MACROS,
)

__all__ = [
    "EXPECTED_MARKDOWN_SIMPLE",
    "SAMPLE_CONFIG_YAML",
    "SAMPLE_PAGE_SIMPLE",
    "SAMPLE_PAGE_UNTERMINATED_TABLE",
    "SAMPLE_PAGE_WITH_ENTITIES",
    "SAMPLE_PAGE_WITH_MACROS",
]
