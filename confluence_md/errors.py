"""Typed exception hierarchy for the conversion engine.

All exceptions inherit from ConfluenceMarkdownError so callers can catch
every failure raised by the library with a single except clause.
"""

from typing import List, Optional, Sequence


class ConfluenceMarkdownError(Exception):
    """Base exception for all confluence_md errors."""
    pass


class ConversionError(ConfluenceMarkdownError):
    """Raised when a document cannot be converted."""
    pass


class StructuralError(ConversionError):
    """Raised when the storage payload is not well-formed.

    Nothing is rendered for a document that raises this error; partial
    Markdown is never returned.

    Attributes:
        reason: Parser message describing the defect
        line: 1-based line of the defect within the payload, if known
        column: 1-based column of the defect within the payload, if known
        path: Names of the elements that were open at the defect
    """

    def __init__(
        self,
        reason: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        path: Optional[Sequence[str]] = None,
    ):
        self.reason = reason
        self.line = line
        self.column = column
        self.path: List[str] = list(path or [])

        message = "Malformed storage document"
        if line is not None:
            message += f" at line {line}"
            if column is not None:
                message += f", column {column}"
        if self.path:
            message += f" (inside {' > '.join(self.path)})"
        super().__init__(f"{message}: {reason}")
