"""Inline status lozenges and the table of contents macro."""

import logging

from confluence_md.content_converter.registry import macro_handlers
from confluence_md.content_converter.toc import toc_placeholder

logger = logging.getLogger(__name__)

TOC_MIN_LEVEL = 1
TOC_MAX_LEVEL = 6


@macro_handlers.register("status")
def render_status(call, ctx) -> str:
    label = call.title or call.parameter("colour").strip() or call.parameter("color").strip()
    return f"[{label}]" if label else ""


def _level(call, name: str, default: int) -> int:
    try:
        return int(call.parameter(name, str(default)))
    except ValueError:
        logger.debug(f"Ignoring invalid toc {name}: {call.parameter(name)!r}")
        return default


@macro_handlers.register("toc")
def render_table_of_contents(call, ctx) -> str:
    min_level = _level(call, "minLevel", TOC_MIN_LEVEL)
    max_level = _level(call, "maxLevel", TOC_MAX_LEVEL)
    if ctx.state.in_table_cell:
        index = ctx.request_toc(min_level, max_level, inline=True)
        return f"{toc_placeholder(index)}\n"
    index = ctx.request_toc(min_level, max_level)
    return f"\n{toc_placeholder(index)}\n\n"
