"""Main CLI entry point for the confluence-md command.

This module provides the Typer application that converts Confluence
storage format files to Markdown. Options live on the main command rather
than on subcommands.
"""

import logging
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from confluence_md import __version__
from confluence_md.cli.convert_command import ConvertCommand
from confluence_md.cli.models import ExitCode
from confluence_md.cli.output import OutputHandler
from confluence_md.config.config_loader import ConfigLoader
from confluence_md.config.errors import ConfigError, FilesystemError
from confluence_md.models.conversion_options import ConversionOptions

app = typer.Typer(
    name="confluence-md",
    help="Convert Confluence storage format (XHTML) files to Markdown.",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)

GETTING_STARTED_MESSAGE = """confluence-md page.xml                          # Convert to ./page.md
confluence-md *.xml --output-dir docs           # Convert many files
--config confluence-md.yaml                     # Load options from YAML
--compact-tables                                # Do not pad table columns
--preserve-anchors                              # Keep HTML anchors
--no-images                                     # Link images instead of embedding
--help                                          # Show all options"""


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'confluence_md' namespace logger to avoid affecting
    third-party libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("confluence_md")
    app_logger.setLevel(level)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"confluence-md_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _resolve_options(
    config: Optional[str],
    compact_tables: bool,
    preserve_anchors: bool,
    no_images: bool,
) -> ConversionOptions:
    """Load options from the config file and apply command-line overrides.

    Raises:
        ConfigError: If the configuration file is invalid
        FilesystemError: If the configuration file cannot be read
    """
    options = ConfigLoader.load(config) if config else ConversionOptions()

    overrides = {}
    if compact_tables:
        overrides['compact_tables'] = True
    if preserve_anchors:
        overrides['preserve_anchors'] = True
    if no_images:
        overrides['emit_images'] = False
    return replace(options, **overrides) if overrides else options


@app.command()
def main_command(
    files: Optional[List[Path]] = typer.Argument(
        None,
        help="Storage format files to convert",
        metavar="FILE...",
    ),
    output_dir: Path = typer.Option(
        Path("."),
        "--output-dir",
        "-o",
        help="Directory for the generated Markdown files",
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML configuration file",
        metavar="FILE",
    ),
    compact_tables: bool = typer.Option(
        False,
        "--compact-tables",
        help="Emit tables without column padding",
    ),
    preserve_anchors: bool = typer.Option(
        False,
        "--preserve-anchors",
        help="Emit HTML anchors for anchor macros and headings",
    ),
    no_images: bool = typer.Option(
        False,
        "--no-images",
        help="Render images as plain links instead of embeds",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Convert Confluence storage format files to Markdown.

    \b
    Each FILE is written to <output-dir>/<name>.md. Images and attachments
    referenced by a document are listed in <output-dir>/<name>.assets.yaml.
    A document that fails to convert is reported and skipped.
    """
    if version:
        typer.echo(f"confluence-md version {__version__}")
        raise typer.Exit()

    if not files:
        typer.echo(GETTING_STARTED_MESSAGE)
        raise typer.Exit()

    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        options = _resolve_options(config, compact_tables, preserve_anchors, no_images)
    except (ConfigError, FilesystemError) as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    command = ConvertCommand(options=options, output_dir=output_dir, output_handler=output)
    exit_code = command.run(files)
    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m confluence_md.cli.main
if __name__ == "__main__":
    main()
