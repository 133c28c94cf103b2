"""Table of contents resolution.

The toc macro is rendered in two phases: while the document is converted
it leaves a placeholder, and once every heading is known the placeholder
is replaced by a nested list of links to the heading anchors.

A placeholder inside a quote or list item is expanded with that line's
container prefix on every line. A placeholder inside a table cell is
expanded on a single line joined with <br>.
"""

import re
from typing import List, Sequence

from confluence_md.content_converter.context import HeadingEntry, TocRequest

TOC_INDENT = "    "
INLINE_SEPARATOR = "<br>"

_PLACEHOLDER_LINE_RE = re.compile("^([^\n\x00]*)\x00toc:(\\d+)\x00", re.MULTILINE)
# Quote markers and indentation, then an optional list marker
_CONTAINER_PREFIX_RE = re.compile(r"^((?:[ \t]*>)*[ \t]*)((?:[-*+]|\d+[.)])[ \t]+)?")


def toc_placeholder(index: int) -> str:
    return f"\x00toc:{index}\x00"


def _select(headings: Sequence[HeadingEntry], request: TocRequest) -> List[HeadingEntry]:
    return [
        heading for heading in headings
        if request.min_level <= heading.level <= request.max_level
    ]


def render_toc(headings: Sequence[HeadingEntry], request: TocRequest) -> str:
    """Render headings within the requested levels as a nested link list."""
    selected = _select(headings, request)
    if not selected:
        return ""

    base_level = min(heading.level for heading in selected)
    lines = [
        f"{TOC_INDENT * (heading.level - base_level)}- [{heading.text}](#{heading.slug})"
        for heading in selected
    ]
    return "\n".join(lines)


def render_inline_toc(headings: Sequence[HeadingEntry], request: TocRequest) -> str:
    """Render the table of contents as one table-safe line."""
    links = []
    for heading in _select(headings, request):
        label = heading.text.replace("|", "\\|")
        links.append(f"[{label}](#{heading.slug})")
    return INLINE_SEPARATOR.join(links)


def _continue_lines(prefix: str, toc: str) -> str:
    """Lay out a multi-line toc so that every line stays in prefix's container.

    Example:
        >>> _continue_lines("> ", "- [A](#a)\\n    - [B](#b)")
        '> - [A](#a)\\n>     - [B](#b)'
    """
    match = _CONTAINER_PREFIX_RE.match(prefix)
    container = match.group(1)
    marker = match.group(2) or ""
    continuation = container + " " * len(marker)
    lines = toc.split("\n")

    if prefix[match.end():].strip():
        # Text precedes the placeholder, so the list starts on its own line
        return prefix.rstrip() + "\n" + "\n".join(continuation + line for line in lines)
    return prefix + lines[0] + "".join(f"\n{continuation}{line}" for line in lines[1:])


def resolve_table_of_contents(
    text: str,
    headings: Sequence[HeadingEntry],
    requests: List[TocRequest],
) -> str:
    """Replace every placeholder in text by its rendered table of contents."""
    def replace(match):
        prefix = match.group(1)
        index = int(match.group(2))
        if index >= len(requests):
            return prefix
        request = requests[index]
        if request.inline:
            return prefix + render_inline_toc(headings, request)
        toc = render_toc(headings, request)
        return _continue_lines(prefix, toc) if toc else prefix

    # Each pass resolves the first placeholder of every line
    while True:
        resolved = _PLACEHOLDER_LINE_RE.sub(replace, text)
        if resolved == text:
            return resolved
        text = resolved
