"""Excerpt macro."""

from confluence_md.content_converter.macros.admonitions import render_admonition_block
from confluence_md.content_converter.registry import macro_handlers

EXCERPT_LABEL = "Excerpt"


def _flag(value: str) -> bool:
    return value.strip().lower() == "true"


@macro_handlers.register("excerpt")
def render_excerpt(call, ctx) -> str:
    if "hidden" in call.parameters:
        hidden = call.parameters["hidden"]
        if not hidden.strip() or _flag(hidden):
            return ""

    body = call.render_body(ctx).strip()
    if _flag(call.parameter("nopanel")):
        if not body:
            return ""
        return body + ("\n" if ctx.state.in_table_cell else "\n\n")
    return render_admonition_block(EXCERPT_LABEL, "", body, ctx)
