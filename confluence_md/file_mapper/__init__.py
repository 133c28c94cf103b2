"""Local file naming for pages and assets referenced by a document."""

from confluence_md.file_mapper.filesafe_converter import FilesafeConverter

__all__ = ["FilesafeConverter"]
