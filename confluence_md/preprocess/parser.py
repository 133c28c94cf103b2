"""Strict parsing of wrapped storage documents.

The payload is first parsed strictly with lxml so that malformed input is
rejected with a position and the chain of open elements. The accepted
document is then loaded into a BeautifulSoup tree for rendering.
"""

import logging
import re
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Tag
from lxml import etree

from confluence_md.errors import StructuralError
from confluence_md.preprocess.namespaces import ROOT_TAG

logger = logging.getLogger(__name__)

_MARKUP_RE = re.compile(
    r"<!--.*?-->"
    r"|<!\[CDATA\[.*?\]\]>"
    r"|<\?.*?\?>"
    r"|<![^>]*>"
    r"|<(/?)([A-Za-z_][\w:.-]*)((?:[^>\"']|\"[^\"]*\"|'[^']*')*?)(/?)>",
    re.DOTALL,
)


def _strict_parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        huge_tree=True,
        recover=False,
    )


def open_element_path(document: str, end: Optional[int] = None) -> List[str]:
    """Return the names of elements still open at offset end.

    Scanning stops at the first closing tag that does not match the
    innermost open element, which is where a strict parser gives up.

    Args:
        document: Wrapped document text
        end: Offset to stop scanning at (defaults to the end of the text)

    Returns:
        Element names from outermost to innermost, without the wrapper root
    """
    stack: List[str] = []
    limit = len(document) if end is None else min(end, len(document))

    for match in _MARKUP_RE.finditer(document, 0, limit):
        closing, name, _, self_closing = match.groups()
        if name is None:
            continue
        if closing:
            if stack and stack[-1] == name:
                stack.pop()
                continue
            break
        if not self_closing:
            stack.append(name)

    if stack and stack[0] == ROOT_TAG:
        stack = stack[1:]
    return stack


def _offset_of(document: str, line: int, column: int) -> int:
    lines = document.splitlines(keepends=True)
    offset = sum(len(text) for text in lines[:max(line - 1, 0)])
    return offset + max(column - 1, 0)


def _error_position(error: etree.XMLSyntaxError) -> Tuple[Optional[int], Optional[int]]:
    position = getattr(error, "position", None)
    if position:
        return position[0], position[1]
    return error.lineno, error.offset


def _structural_error(document: str, error: etree.XMLSyntaxError) -> StructuralError:
    line, column = _error_position(error)
    reason = (getattr(error, "msg", None) or str(error)).strip()

    if line and column is not None:
        path = open_element_path(document, _offset_of(document, line, column))
    else:
        path = open_element_path(document)

    # Report positions relative to the payload, not the wrapper start tag
    if line == 1 and column is not None:
        head_length = document.index(">") + 1
        column = max(column - head_length, 1)

    return StructuralError(reason, line=line, column=column, path=path)


def parse_storage(document: str) -> Tag:
    """Parse a wrapped storage document.

    Args:
        document: Output of wrap_with_namespaces

    Returns:
        The wrapper root element of the parsed tree

    Raises:
        StructuralError: If the document is not well-formed
    """
    try:
        etree.fromstring(document.encode("utf-8"), parser=_strict_parser())
    except etree.XMLSyntaxError as e:
        error = _structural_error(document, e)
        logger.debug(f"Rejected storage document: {error}")
        raise error from e

    soup = BeautifulSoup(document, "xml")
    root = soup.find(ROOT_TAG)
    if root is None:
        raise StructuralError("document has no root element")
    return root
