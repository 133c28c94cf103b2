"""Collection of assets referenced by a document."""

import logging
import posixpath
from typing import Dict, Set, Tuple
from urllib.parse import urlsplit, urlunsplit

from confluence_md.file_mapper.filesafe_converter import FilesafeConverter
from confluence_md.models.conversion_options import ReferenceKind
from confluence_md.models.converted_output import AssetDescriptor

logger = logging.getLogger(__name__)


def normalize_reference(source: str) -> str:
    """Return the key used to detect duplicate references.

    URL scheme and host are lower-cased and fragments dropped; other
    references are only stripped.
    """
    stripped = source.strip()
    parts = urlsplit(stripped)
    if parts.scheme and parts.netloc:
        return urlunsplit((
            parts.scheme.lower(),
            parts.netloc.lower(),
            parts.path or "/",
            parts.query,
            "",
        ))
    return stripped


class AssetCollector:
    """Records referenced assets once each, in first-reference order.

    Suggested local names are unique within a document: a later asset whose
    name is already taken gets a numeric suffix.
    """

    def __init__(self):
        self._assets: Dict[str, AssetDescriptor] = {}
        self._local_names: Set[str] = set()

    def record(self, source: str, kind: ReferenceKind) -> AssetDescriptor:
        key = normalize_reference(source)
        existing = self._assets.get(key)
        if existing is not None:
            return existing

        descriptor = AssetDescriptor(
            source_url=source.strip(),
            suggested_local_name=self._unique_name(FilesafeConverter.asset_filename(source)),
            kind=kind.value,
        )
        self._assets[key] = descriptor
        logger.debug(f"Recorded {descriptor.kind} asset: {descriptor.source_url}")
        return descriptor

    def _unique_name(self, name: str) -> str:
        stem, extension = posixpath.splitext(name)
        candidate = name
        counter = 1
        while candidate in self._local_names:
            candidate = f"{stem}-{counter}{extension}"
            counter += 1
        self._local_names.add(candidate)
        return candidate

    def descriptors(self) -> Tuple[AssetDescriptor, ...]:
        return tuple(self._assets.values())

    def __len__(self) -> int:
        return len(self._assets)
