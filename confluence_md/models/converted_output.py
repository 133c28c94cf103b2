"""Result models returned by a conversion."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class AssetDescriptor:
    """An external resource referenced by a converted document.

    The converter never downloads anything; descriptors let the caller
    fetch and place the files.

    Attributes:
        source_url: Reference as written in the document (URL or attachment file name)
        suggested_local_name: File name unique within the document
        kind: "image" or "attachment"
    """

    source_url: str
    suggested_local_name: str
    kind: str


@dataclass(frozen=True)
class ConvertedOutput:
    """Markdown text plus the assets and warnings collected while rendering.

    Attributes:
        markdown: Normalized Markdown ending with exactly one newline
        assets: Referenced assets in first-reference order, deduplicated
        warnings: Messages about constructs rendered in degraded form
    """

    markdown: str
    assets: Tuple[AssetDescriptor, ...] = ()
    warnings: Tuple[str, ...] = ()
