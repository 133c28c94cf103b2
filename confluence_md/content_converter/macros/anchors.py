"""Anchor macro."""

from html import escape

from confluence_md.content_converter.registry import macro_handlers


@macro_handlers.register("anchor")
def render_anchor(call, ctx) -> str:
    if not ctx.options.preserve_anchors:
        return ""
    anchor_id = (call.parameter("") or call.parameter("anchor")).strip()
    if not anchor_id:
        return ""
    return f'<a id="{escape(anchor_id, quote=True)}"></a>'
