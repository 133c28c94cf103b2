"""Filesafe filename conversion with case preservation.

This module converts Confluence page titles and asset references to file
names that are safe for all file systems while preserving the original case.
"""

import posixpath
import re
from urllib.parse import unquote, urlsplit

UNSAFE_CHARS = re.compile(r'[/\\?%*|"<>&]')
UNSAFE_ASSET_CHARS = re.compile(r'[/\\?%*|"<>&:#\s]+')


class FilesafeConverter:
    """Converts Confluence titles and references to filesafe file names.

    Conversion rules for page titles:
    - Spaces → hyphens (-)
    - Colons (:) → double hyphens (--)
    - Special characters (/, \\, ?, %, *, |, ", <, >, &) → hyphens (-)
    - Leading/trailing hyphens → trimmed
    - Three or more consecutive hyphens → collapsed to two
    - Case is preserved exactly as in original title

    Examples:
        - "Customer Feedback" → "Customer-Feedback.md"
        - "API Reference: Getting Started" → "API-Reference--Getting-Started.md"
        - "Q&A Session" → "Q-A-Session.md"
    """

    DEFAULT_ASSET_NAME = "asset"

    @staticmethod
    def title_to_filename(title: str, suffix: str = ".md") -> str:
        """Convert a Confluence page title to a filesafe filename.

        Args:
            title: The Confluence page title
            suffix: Extension appended to the result

        Returns:
            A filesafe filename ending with suffix

        Examples:
            >>> FilesafeConverter.title_to_filename("Customer Feedback")
            'Customer-Feedback.md'
            >>> FilesafeConverter.title_to_filename("API Reference: Getting Started")
            'API-Reference--Getting-Started.md'
        """
        filename = title.strip().replace(': ', '--')
        filename = filename.replace(':', '--')
        filename = filename.replace(' ', '-')
        filename = UNSAFE_CHARS.sub('-', filename)

        # Keep the double hyphen produced by colons
        filename = re.sub(r'-{3,}', '--', filename)
        filename = filename.strip('-')

        return f"{filename}{suffix}"

    @classmethod
    def asset_filename(cls, reference: str) -> str:
        """Derive a local file name from an attachment name or image URL.

        The last path segment of a URL is used; query strings and fragments
        are dropped and percent-escapes decoded.

        Args:
            reference: Attachment file name or URL

        Returns:
            A non-empty filesafe file name

        Examples:
            >>> FilesafeConverter.asset_filename("https://example.com/img/logo.png?v=2")
            'logo.png'
            >>> FilesafeConverter.asset_filename("Screen Shot 1.png")
            'Screen-Shot-1.png'
        """
        parts = urlsplit(reference.strip())
        if parts.scheme and parts.netloc:
            candidate = posixpath.basename(unquote(parts.path))
        else:
            candidate = posixpath.basename(reference.strip().replace("\\", "/"))

        filename = UNSAFE_ASSET_CHARS.sub('-', candidate)
        filename = re.sub(r'-{2,}', '-', filename)
        filename = filename.strip('-.')

        return filename or cls.DEFAULT_ASSET_NAME
