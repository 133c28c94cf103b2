"""Unit tests for cli.convert_command module."""

from unittest.mock import Mock

import pytest
import yaml

from confluence_md.cli.convert_command import ConvertCommand
from confluence_md.cli.models import ExitCode
from confluence_md.models import ConversionOptions
from tests.fixtures.sample_storage import (
    EXPECTED_MARKDOWN_SIMPLE,
    SAMPLE_PAGE_SIMPLE,
    SAMPLE_PAGE_UNTERMINATED_TABLE,
)


@pytest.fixture
def output_handler():
    return Mock()


class TestConvertCommand:
    """Test cases for ConvertCommand class."""

    def test_converts_file_to_markdown(self, tmp_path, storage_file, output_handler):
        """A storage file is written as <stem>.md in the output directory."""
        source = storage_file("simple.xml", SAMPLE_PAGE_SIMPLE)
        output_dir = tmp_path / "out"

        command = ConvertCommand(output_dir=output_dir, output_handler=output_handler)
        exit_code = command.run([source])

        assert exit_code == ExitCode.SUCCESS
        assert (output_dir / "simple.md").read_text(encoding="utf-8") == EXPECTED_MARKDOWN_SIMPLE
        assert not (output_dir / "simple.assets.yaml").exists()
        output_handler.print_summary.assert_called_once()

    def test_writes_asset_manifest(self, tmp_path, storage_file, output_handler):
        """Referenced images are listed next to the Markdown file."""
        source = storage_file(
            "images.xml",
            '<p><ac:image><ri:attachment ri:filename="diagram.png"/></ac:image></p>',
        )

        ConvertCommand(output_dir=tmp_path, output_handler=output_handler).run([source])

        manifest = yaml.safe_load((tmp_path / "images.assets.yaml").read_text(encoding="utf-8"))
        assert manifest == {
            "assets": [
                {
                    "source_url": "diagram.png",
                    "suggested_local_name": "diagram.png",
                    "kind": "image",
                },
            ],
        }

    def test_failed_document_does_not_stop_batch(self, tmp_path, storage_file, output_handler):
        """A malformed document is reported and the others still convert."""
        broken = storage_file("broken.xml", SAMPLE_PAGE_UNTERMINATED_TABLE)
        good = storage_file("good.xml", "<p>fine</p>")
        output_dir = tmp_path / "out"

        exit_code = ConvertCommand(output_dir=output_dir, output_handler=output_handler).run([broken, good])

        assert exit_code == ExitCode.GENERAL_ERROR
        assert not (output_dir / "broken.md").exists()
        assert (output_dir / "good.md").read_text(encoding="utf-8") == "fine\n"

        summary = output_handler.print_summary.call_args.args[0]
        assert summary.converted_count == 1
        assert summary.failed_count == 1
        assert "table" in summary.results[0].error

    def test_missing_file_reported(self, tmp_path, output_handler):
        command = ConvertCommand(output_dir=tmp_path, output_handler=output_handler)

        result = command.convert_file(tmp_path / "missing.xml")

        assert not result.succeeded
        assert "File not found" in result.error
        output_handler.error.assert_called_once()

    def test_warnings_reported_as_info(self, tmp_path, storage_file, output_handler):
        """Converter warnings are shown at info level."""
        source = storage_file("macro.xml", '<ac:structured-macro ac:name="mystery"/>')

        result = ConvertCommand(output_dir=tmp_path, output_handler=output_handler).convert_file(source)

        assert result.warnings == ["Unsupported macro 'mystery' rendered as plain content"]
        output_handler.info.assert_called_once_with("  Unsupported macro 'mystery' rendered as plain content")

    def test_options_are_used(self, tmp_path, storage_file, output_handler):
        source = storage_file("table.xml", "<table><tr><th>a</th></tr><tr><td>bbbb</td></tr></table>")

        ConvertCommand(
            options=ConversionOptions(compact_tables=True),
            output_dir=tmp_path,
            output_handler=output_handler,
        ).run([source])

        assert (tmp_path / "table.md").read_text(encoding="utf-8") == "| a |\n| --- |\n| bbbb |\n"
