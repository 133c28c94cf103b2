"""Fallback rendering for macros without a dedicated renderer."""

import logging

from confluence_md.content_converter.nodes import in_inline_context

logger = logging.getLogger(__name__)


def render_unknown_macro(call, ctx) -> str:
    """Keep the macro name, title and body of an unsupported macro.

    The body is rendered like regular content so nothing it contains is
    lost; a warning naming the macro is added to the conversion output.
    """
    name = call.name or "unnamed"
    ctx.warn(f"Unsupported macro '{name}' rendered as plain content")

    label = f"_[macro: {name}]_"
    heading = f"{label} {call.title}" if call.title else label
    body = call.render_body(ctx).strip()

    if ctx.state.in_table_cell:
        return f"{heading} {body}".rstrip() + "\n"
    if in_inline_context(call.element) and "\n" not in body:
        return f"{heading} {body}".rstrip()
    if not body:
        return f"\n{heading}\n\n"
    return f"\n{heading}\n\n{body}\n\n"
