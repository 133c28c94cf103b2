"""Data models for CLI operations."""

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import List, Optional


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Every document was converted
    - GENERAL_ERROR (1): Usage or configuration error, or a document failed

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1


@dataclass
class DocumentResult:
    """Outcome of converting one input file.

    Attributes:
        source: Input storage file
        markdown_path: Written Markdown file (None on failure)
        asset_count: Number of assets referenced by the document
        warnings: Warnings reported by the converter
        error: Error message when conversion failed
    """
    source: Path
    markdown_path: Optional[Path] = None
    asset_count: int = 0
    warnings: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class ConversionSummary:
    """Summary of a batch conversion run."""
    results: List[DocumentResult] = field(default_factory=list)

    @property
    def converted_count(self) -> int:
        return sum(1 for result in self.results if result.succeeded)

    @property
    def failed_count(self) -> int:
        return sum(1 for result in self.results if not result.succeeded)

    @property
    def asset_count(self) -> int:
        return sum(result.asset_count for result in self.results)
