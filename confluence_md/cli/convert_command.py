"""Batch conversion command for the CLI.

This module provides the ConvertCommand class that converts a list of
storage files, writes the Markdown and asset manifests, and reports the
outcome. A failed document is reported and the run continues.
"""

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Iterable, Optional

import yaml

from confluence_md.cli.models import ConversionSummary, DocumentResult, ExitCode
from confluence_md.cli.output import OutputHandler
from confluence_md.config.errors import FilesystemError
from confluence_md.content_converter.markdown_converter import MarkdownConverter
from confluence_md.errors import ConversionError
from confluence_md.models.conversion_options import ConversionOptions
from confluence_md.models.converted_output import ConvertedOutput

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"
ASSET_MANIFEST_SUFFIX = ".assets.yaml"


class ConvertCommand:
    """Converts storage files to Markdown files.

    Attributes:
        converter: Converter used for every document
        output_dir: Directory receiving the Markdown files
        output: Terminal output handler
    """

    def __init__(
        self,
        options: Optional[ConversionOptions] = None,
        output_dir: Path = Path("."),
        output_handler: Optional[OutputHandler] = None,
    ):
        self.converter = MarkdownConverter(options)
        self.output_dir = Path(output_dir)
        self.output = output_handler or OutputHandler()

    def run(self, sources: Iterable[Path]) -> ExitCode:
        """Convert every source file.

        Args:
            sources: Storage files to convert

        Returns:
            ExitCode.SUCCESS if every document was converted,
            ExitCode.GENERAL_ERROR otherwise
        """
        summary = ConversionSummary()

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.output.error(str(FilesystemError(str(self.output_dir), 'create_directory', str(e))))
            return ExitCode.GENERAL_ERROR

        for source in sources:
            result = self.convert_file(Path(source))
            summary.results.append(result)

        self.output.print_summary(summary)
        return ExitCode.SUCCESS if summary.failed_count == 0 else ExitCode.GENERAL_ERROR

    def convert_file(self, source: Path) -> DocumentResult:
        """Convert one file, reporting instead of raising on failure."""
        result = DocumentResult(source=source)
        try:
            payload = self._read(source)
            converted = self.converter.convert(payload)
            result.markdown_path = self._write(source, converted)
        except (ConversionError, FilesystemError) as e:
            logger.info(f"Conversion of {source} failed: {e}")
            result.error = str(e)
            self.output.error(f"{source}: {e}")
            return result

        result.asset_count = len(converted.assets)
        result.warnings = list(converted.warnings)
        self.output.success(f"{source} → {result.markdown_path}")
        for warning in converted.warnings:
            self.output.info(f"  {warning}")
        return result

    @staticmethod
    def _read(source: Path) -> str:
        try:
            return source.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise FilesystemError(str(source), 'read', 'File not found')
        except (OSError, UnicodeDecodeError) as e:
            raise FilesystemError(str(source), 'read', str(e))

    def _write(self, source: Path, converted: ConvertedOutput) -> Path:
        markdown_path = self.output_dir / f"{source.stem}{MARKDOWN_SUFFIX}"
        manifest_path = self.output_dir / f"{source.stem}{ASSET_MANIFEST_SUFFIX}"

        try:
            markdown_path.write_text(converted.markdown, encoding="utf-8")
            if converted.assets:
                manifest = {'assets': [asdict(asset) for asset in converted.assets]}
                manifest_path.write_text(
                    yaml.safe_dump(manifest, default_flow_style=False, allow_unicode=True, sort_keys=False),
                    encoding="utf-8",
                )
        except OSError as e:
            raise FilesystemError(str(markdown_path), 'write', str(e))

        logger.debug(f"Wrote {markdown_path}")
        return markdown_path
