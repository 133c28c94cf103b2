"""Admonition macros: info, note, tip, warning and panel."""

import logging
from types import MappingProxyType

from confluence_md.content_converter.formatting import BLOCK_START_RE, quote_block
from confluence_md.content_converter.nodes import element_text, find_child, qualified_name
from confluence_md.content_converter.registry import element_handlers, macro_handlers

logger = logging.getLogger(__name__)

ADMONITION_LABELS = MappingProxyType({
    "info": "Info",
    "note": "Note",
    "tip": "Tip",
    "warning": "Warning",
})

PANEL_ICON_LABELS = MappingProxyType({
    "info": "Info",
    "information": "Info",
    "note": "Note",
    "tip": "Tip",
    "check_mark": "Tip",
    "white_check_mark": "Tip",
    "warning": "Warning",
    "error": "Error",
    "cross_mark": "Error",
    "x": "Error",
})

PANEL_COLOR_LABELS = MappingProxyType({
    "#deebff": "Info",
    "#eae6ff": "Note",
    "#e3fcef": "Tip",
    "#fffae6": "Warning",
    "#ffebe6": "Error",
})

DEFAULT_PANEL_LABEL = "Panel"


def render_admonition_block(label: str, title: str, body: str, ctx) -> str:
    """Render a labelled block quote.

    Without a title the first body line follows the label on the same line;
    with a title the body starts after a blank quoted line.
    """
    body = body.strip()
    heading = f"**{label}: {title}**" if title else f"**{label}:**"

    if ctx.state.in_table_cell:
        return f"{heading} {body}".rstrip() + "\n"
    if not body:
        return f"\n> {heading}\n\n"

    if title or BLOCK_START_RE.match(body):
        lines = [heading, "", body]
    else:
        first_line, _, rest = body.partition("\n")
        lines = [f"{heading} {first_line}"] + ([rest] if rest else [])
    quoted = quote_block("\n".join(lines))
    return f"\n{quoted}\n\n"


def panel_label(parameters) -> str:
    """Classify a panel by its icon, then by its colours."""
    for key in ("panelIcon", "icon"):
        icon = parameters.get(key, "").strip().strip(":").lower()
        if icon in PANEL_ICON_LABELS:
            return PANEL_ICON_LABELS[icon]
    for key in ("bgColor", "borderColor"):
        color = parameters.get(key, "").strip().lower()
        if color in PANEL_COLOR_LABELS:
            return PANEL_COLOR_LABELS[color]
    return DEFAULT_PANEL_LABEL


@macro_handlers.register(*ADMONITION_LABELS)
def render_admonition(call, ctx) -> str:
    return render_admonition_block(ADMONITION_LABELS[call.name], call.title, call.render_body(ctx), ctx)


@macro_handlers.register("panel")
def render_panel(call, ctx) -> str:
    label = panel_label(call.parameters)
    logger.debug(f"Panel rendered as '{label}' admonition")
    return render_admonition_block(label, call.title, call.render_body(ctx), ctx)


@element_handlers.register("ac:info", "ac:note", "ac:tip", "ac:warning")
def convert_legacy_admonition(tag, ctx) -> str:
    label = ADMONITION_LABELS[qualified_name(tag).split(":", 1)[1]]
    title_element = find_child(tag, "ac:parameter")
    title = element_text(title_element).strip() if title_element is not None else ""
    body = find_child(tag, "ac:rich-text-body")
    content = ctx.convert_children(body if body is not None else tag)
    return render_admonition_block(label, title, content, ctx)
