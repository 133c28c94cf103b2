"""Root pytest configuration for all tests."""

import logging

import pytest

# Per-node debug logging is noisy; tests that need it capture it with caplog.
logging.getLogger("confluence_md").setLevel(logging.INFO)


@pytest.fixture
def storage_file(tmp_path):
    """Factory writing a storage document to a temporary file."""
    def _write(name: str, content: str):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
