"""Handlers for structural and inline HTML elements."""

import logging
import re

from confluence_md.content_converter.context import BULLET, ORDERED
from confluence_md.content_converter.emoticons import resolve_emoji
from confluence_md.content_converter.formatting import (
    fenced_block,
    format_list_item,
    inline_code,
    quote_block,
    wrap_inline,
)
from confluence_md.content_converter.nodes import (
    attribute,
    child_elements,
    element_text,
    qualified_name,
)
from confluence_md.content_converter.registry import element_handlers

logger = logging.getLogger(__name__)

_NEWLINES_RE = re.compile(r"\s*\n\s*")


def _block(content: str, ctx) -> str:
    """Wrap block content, or flatten it to a line inside table cells."""
    if not content:
        return ""
    if ctx.state.in_table_cell:
        return content + "\n"
    return f"\n{content}\n\n"


# ----- Headings and paragraphs -----

@element_handlers.register("h1", "h2", "h3", "h4", "h5", "h6")
def convert_heading(tag, ctx) -> str:
    level = int(qualified_name(tag)[1])
    text = _NEWLINES_RE.sub(" ", ctx.convert_children(tag)).strip()
    if not text:
        return ""
    if ctx.state.in_table_cell:
        return f"**{text}**\n"

    plain_text = " ".join(element_text(tag).split())
    slug = ctx.register_heading(level, plain_text)
    anchor = f'<a id="{slug}"></a>\n' if ctx.options.preserve_anchors else ""
    return f"\n{anchor}{'#' * level} {text}\n\n"


@element_handlers.register("p")
def convert_paragraph(tag, ctx) -> str:
    content = ctx.convert_children(tag).strip()
    if not content:
        return ""
    if ctx.state.in_table_cell:
        return content + "\n"
    return content + "\n\n"


@element_handlers.register("br")
def convert_line_break(tag, ctx) -> str:
    return "\n"


@element_handlers.register("hr")
def convert_rule(tag, ctx) -> str:
    if ctx.state.in_table_cell:
        return "\n"
    return "\n---\n\n"


@element_handlers.register("blockquote")
def convert_blockquote(tag, ctx) -> str:
    content = ctx.convert_children(tag).strip()
    if not content or ctx.state.in_table_cell:
        return _block(content, ctx)
    return f"\n{quote_block(content)}\n\n"


@element_handlers.register("pre")
def convert_preformatted(tag, ctx) -> str:
    with ctx.state.preformatted_scope():
        code = ctx.convert_children(tag).strip("\r\n")
    if not code.strip():
        return ""
    if ctx.state.in_table_cell:
        return "\n".join(inline_code(line) for line in code.split("\n") if line.strip()) + "\n"
    return f"\n{fenced_block(code)}\n"


@element_handlers.register("div", "section", "article")
def convert_division(tag, ctx) -> str:
    return _block(ctx.convert_children(tag).strip(), ctx)


# ----- Lists -----

def _list_start(tag) -> int:
    try:
        return int(attribute(tag, "start", "1"))
    except ValueError:
        return 1


@element_handlers.register("ul", "ol")
def convert_list(tag, ctx) -> str:
    kind = ORDERED if qualified_name(tag) == "ol" else BULLET
    items = []

    with ctx.state.list_scope(kind, _list_start(tag)) as frame:
        for child in child_elements(tag):
            if qualified_name(child) == "li":
                marker = frame.next_marker()
                items.append(format_list_item(ctx.convert_children(child), marker))
                continue
            # Lists nested directly in a list belong to the previous item
            content = ctx.convert(child).strip("\n")
            if not content.strip():
                continue
            if items:
                items[-1] += "".join(f"  {line}\n" if line.strip() else "\n" for line in content.split("\n"))
            else:
                items.append(content + "\n")

    body = "".join(items)
    if not body:
        return ""
    if ctx.state.in_table_cell:
        return body
    return f"\n{body}\n"


@element_handlers.register("li")
def convert_orphan_list_item(tag, ctx) -> str:
    return format_list_item(ctx.convert_children(tag), "- ")


# ----- Inline styles -----

def _styled(tag, ctx, marker: str) -> str:
    with ctx.state.style(marker) as already_active:
        content = ctx.convert_children(tag)
    if already_active or ctx.state.preformatted:
        return content
    return wrap_inline(content, marker)


@element_handlers.register("strong", "b")
def convert_strong(tag, ctx) -> str:
    return _styled(tag, ctx, "**")


@element_handlers.register("em", "i")
def convert_emphasis(tag, ctx) -> str:
    return _styled(tag, ctx, "_")


@element_handlers.register("s", "del", "strike")
def convert_strikethrough(tag, ctx) -> str:
    return _styled(tag, ctx, "~~")


@element_handlers.register("code", "tt")
def convert_inline_code(tag, ctx) -> str:
    text = element_text(tag)
    if ctx.state.preformatted:
        return text
    return inline_code(text)


@element_handlers.register("u", "sup", "sub", "small", "big", "font")
def convert_unstyled_inline(tag, ctx) -> str:
    return ctx.convert_children(tag)


@element_handlers.register("span")
def convert_span(tag, ctx) -> str:
    emoji_id = attribute(tag, "data-emoji-id")
    shortname = attribute(tag, "data-emoji-shortname")
    if emoji_id or shortname:
        text = element_text(tag).strip()
        return resolve_emoji(
            emoji_id=emoji_id,
            shortname=shortname,
            fallback=text or attribute(tag, "data-emoji-fallback"),
        )
    return ctx.convert_children(tag)


@element_handlers.register("time")
def convert_time(tag, ctx) -> str:
    text = ctx.convert_children(tag).strip()
    return text or attribute(tag, "datetime").strip()


# ----- Confluence structure without output of its own -----

@element_handlers.register(
    "ac:parameter",
    "ac:placeholder",
    "ac:adf-attribute",
    "ac:task-id",
    "ac:task-uuid",
    "ri:page",
    "ri:space",
    "ri:user",
    "ri:url",
    "ri:attachment",
    "colgroup",
    "col",
    "script",
    "style",
)
def convert_hidden(tag, ctx) -> str:
    return ""


@element_handlers.register("ac:plain-text-body")
def convert_plain_text_body(tag, ctx) -> str:
    return element_text(tag)
