"""Macro renderers.

Importing this package registers every renderer. Structured macros are
resolved by their ac:name; names without a renderer fall back to
render_unknown_macro.
"""

import logging

from confluence_md.content_converter.macros import (  # noqa: F401
    adf,
    admonitions,
    anchors,
    basic,
    code,
    decisions,
    emoji_macros,
    excerpts,
    expand,
    jira,
    layout,
    tasks,
)
from confluence_md.content_converter.macros.base import MACRO_CONTAINER_TAGS, MacroCall
from confluence_md.content_converter.macros.default import render_unknown_macro
from confluence_md.content_converter.registry import macro_handlers

logger = logging.getLogger(__name__)


def render_macro(tag, ctx) -> str:
    """Render a macro container element with the renderer for its name."""
    call = MacroCall.from_element(tag)
    renderer = macro_handlers.get(call.name)
    if renderer is None:
        logger.debug(f"No renderer for macro '{call.name}'")
        renderer = render_unknown_macro
    return renderer(call, ctx)


__all__ = ["MACRO_CONTAINER_TAGS", "MacroCall", "render_macro", "render_unknown_macro"]
