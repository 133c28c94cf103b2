"""Synthetic root wrapping with namespace declarations.

Storage payloads are fragments: they have no single root element and use
prefixes (ac:, ri:, ...) that are never declared. Every prefix found in the
payload is bound to a synthetic URI on a wrapper root so the fragment
parses as a namespace-well-formed document.
"""

import re
from typing import List

ROOT_TAG = "cdl-root"
SYNTHETIC_NAMESPACE_BASE = "https://confluence.example/"

_RESERVED_PREFIXES = frozenset({"xml", "xmlns"})
_XML_DECLARATION_RE = re.compile(r"^\s*<\?xml[^>]*\?>")
_TAG_PREFIX_RE = re.compile(r"</?([A-Za-z_][\w.-]*):[A-Za-z_]")
_ATTRIBUTE_PREFIX_RE = re.compile(r"\s([A-Za-z_][\w.-]*):[A-Za-z_][\w.-]*\s*=")


def declared_prefixes(text: str) -> List[str]:
    """Return the sorted namespace prefixes used by tags and attributes."""
    prefixes = set(_TAG_PREFIX_RE.findall(text))
    prefixes.update(_ATTRIBUTE_PREFIX_RE.findall(text))
    return sorted(prefixes - _RESERVED_PREFIXES)


def wrap_with_namespaces(text: str) -> str:
    """Wrap a storage fragment in a root element declaring its prefixes.

    A leading XML declaration is removed since it cannot appear inside the
    wrapper element.

    Args:
        text: Entity-normalized storage payload

    Returns:
        A single-rooted document

    Example:
        >>> wrap_with_namespaces('<ac:emoticon ac:name="smile"/>')
        '<cdl-root xmlns:ac="https://confluence.example/ac"><ac:emoticon ac:name="smile"/></cdl-root>'
    """
    body = _XML_DECLARATION_RE.sub("", text, count=1)
    declarations = "".join(
        f' xmlns:{prefix}="{SYNTHETIC_NAMESPACE_BASE}{prefix}"'
        for prefix in declared_prefixes(body)
    )
    return f"<{ROOT_TAG}{declarations}>{body}</{ROOT_TAG}>"
