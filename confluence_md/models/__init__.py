"""Data models shared by the converter, configuration and CLI."""

from confluence_md.models.conversion_options import (
    ConversionOptions,
    LinkRewritePolicy,
    ReferenceKind,
    RelativePathPolicy,
)
from confluence_md.models.converted_output import AssetDescriptor, ConvertedOutput

__all__ = [
    "AssetDescriptor",
    "ConversionOptions",
    "ConvertedOutput",
    "LinkRewritePolicy",
    "ReferenceKind",
    "RelativePathPolicy",
]
