"""Normalization passes applied to the rendered Markdown.

The passes run in a fixed order: blank line collapsing, trailing
whitespace trimming, list indentation normalization and finally the
single trailing newline.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

LIST_INDENT_UNIT = 4

_EXCESS_BLANK_LINES_RE = re.compile(r"\n(?:[ \t]*\n){2,}")
_LIST_ITEM_RE = re.compile(r"^( *)([-*+]|\d+[.)])( +|$)")
_FENCE_RE = re.compile(r"^\s*(`{3,}|~{3,})")


@dataclass
class _ListLevel:
    indent: int
    content: int
    new_indent: int
    new_content: int

    @property
    def shift(self) -> int:
        return self.new_content - self.content


def collapse_blank_lines(text: str) -> str:
    """Collapse runs of blank lines to a single blank line."""
    return _EXCESS_BLANK_LINES_RE.sub("\n\n", text)


def trim_trailing_whitespace(text: str) -> str:
    return "\n".join(line.rstrip() for line in text.split("\n"))


def _shift_line(line: str, shift: int) -> str:
    if shift > 0:
        return " " * shift + line
    if shift < 0:
        removable = len(line) - len(line.lstrip(" "))
        return line[min(-shift, removable):]
    return line


def _is_closing_fence(line: str, fence: str) -> bool:
    stripped = line.strip()
    return stripped.startswith(fence) and not stripped.strip(fence[0])


def normalize_list_indentation(text: str, unit: int = LIST_INDENT_UNIT) -> str:
    """Re-indent nested lists to a fixed number of spaces per level.

    Continuation lines of an item, fenced code included, move with their
    item. Fenced code outside lists is left as it is.
    """
    levels: List[_ListLevel] = []
    fence: Optional[str] = None
    lines = []

    for line in text.split("\n"):
        if fence is not None:
            lines.append(_shift_line(line, levels[-1].shift) if levels and line.strip() else line)
            if _is_closing_fence(line, fence):
                fence = None
            continue

        if not line.strip():
            lines.append(line)
            continue

        item = _LIST_ITEM_RE.match(line)
        if item:
            indent = len(item.group(1))
            while levels and indent < levels[-1].indent:
                levels.pop()
            if levels and indent == levels[-1].indent:
                levels.pop()

            new_indent = len(levels) * unit
            marker_width = len(item.group(2)) + max(len(item.group(3)), 1)
            levels.append(_ListLevel(indent, indent + marker_width, new_indent, new_indent + marker_width))
            lines.append(" " * new_indent + line[indent:])
            continue

        indent = len(line) - len(line.lstrip(" "))
        while levels and indent < levels[-1].content:
            levels.pop()
        if levels:
            line = _shift_line(line, levels[-1].shift)
        lines.append(line)

        fence_match = _FENCE_RE.match(line)
        if fence_match:
            fence = fence_match.group(1)

    return "\n".join(lines)


def ensure_trailing_newline(text: str) -> str:
    return text.strip() + "\n"


def clean_markdown(text: str) -> str:
    """Apply every normalization pass in order."""
    text = collapse_blank_lines(text)
    text = trim_trailing_whitespace(text)
    text = normalize_list_indentation(text)
    return ensure_trailing_newline(text)
