"""Expand macro, rendered fully expanded."""

from confluence_md.content_converter.registry import macro_handlers

DEFAULT_EXPAND_TITLE = "Details"


@macro_handlers.register("expand")
def render_expand(call, ctx) -> str:
    title = call.title or DEFAULT_EXPAND_TITLE
    body = call.render_body(ctx).strip()

    if ctx.state.in_table_cell:
        return f"**{title}** {body}".rstrip() + "\n"
    if not body:
        return f"\n**{title}**\n\n"
    return f"\n**{title}**\n\n{body}\n\n"
