"""Small Markdown formatting primitives shared by the handlers."""

import re

LIST_MARKER_RE = re.compile(r"^([-*+]|\d+[.)])(\s|$)")
_BACKTICK_RUN_RE = re.compile(r"`+")

BLOCK_START_RE = re.compile(r"^(```|~~~|\||>|#{1,6}\s|[-*+]\s|\d+[.)]\s)")


def looks_like_list_marker(line: str) -> bool:
    return bool(LIST_MARKER_RE.match(line))


def wrap_inline(content: str, marker: str) -> str:
    """Surround content with an emphasis marker.

    Surrounding whitespace is moved outside the markers and
    whitespace-only content is returned unchanged.

    Example:
        >>> wrap_inline(" bold ", "**")
        ' **bold** '
    """
    stripped = content.strip()
    if not stripped:
        return content
    leading = content[:len(content) - len(content.lstrip())]
    trailing = content[len(content.rstrip()):]
    return f"{leading}{marker}{stripped}{marker}{trailing}"


def inline_code(text: str) -> str:
    """Render text as a code span, widening the delimiter around backticks."""
    text = text.replace("\n", " ")
    if not text.strip():
        return text
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(text)), default=0)
    fence = "`" * (longest + 1)
    padding = " " if longest else ""
    return f"{fence}{padding}{text}{padding}{fence}"


def fenced_block(code: str, language: str = "") -> str:
    """Render code as a fenced block ending with a newline."""
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(code)), default=0)
    fence = "`" * max(3, longest + 1)
    body = f"{code}\n" if code else ""
    return f"{fence}{language}\n{body}{fence}\n"


def quote_block(text: str) -> str:
    """Prefix every line with '> ', using a bare '>' for blank lines."""
    return "\n".join(f"> {line}" if line.strip() else ">" for line in text.split("\n"))


def format_link(text: str, target: str) -> str:
    label = text.strip() or target
    if " " in target:
        target = f"<{target}>"
    return f"[{label}]({target})"


def format_list_item(content: str, prefix: str) -> str:
    """Attach a list marker to rendered item content.

    Continuation lines are indented by the marker width so that nested
    blocks stay inside the item. An item starting with a nested list gets
    the marker on its own line.

    Example:
        >>> format_list_item("first\\nsecond", "1. ")
        '1. first\\n   second\\n'
    """
    indentation = " " * len(prefix)
    lines = []
    started = False

    for line in content.rstrip().split("\n"):
        if not started:
            if not line.strip():
                continue
            text = line.lstrip()
            if looks_like_list_marker(text):
                lines.append(prefix.rstrip())
                lines.append(indentation + text)
            else:
                lines.append(prefix + text)
            started = True
        elif not line.strip():
            lines.append("")
        else:
            lines.append(indentation + line)

    if not started:
        lines.append(prefix.rstrip())
    return "\n".join(lines) + "\n"
