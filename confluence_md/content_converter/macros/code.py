"""Code block macros."""

import logging

from confluence_md.content_converter.formatting import fenced_block, inline_code
from confluence_md.content_converter.registry import macro_handlers

logger = logging.getLogger(__name__)


@macro_handlers.register("code", "code-block", "noformat")
def render_code_block(call, ctx) -> str:
    language = call.parameter("language").strip().lower()
    code = call.body_text().strip("\r\n")

    if ctx.state.in_table_cell:
        lines = (inline_code(line) for line in code.split("\n") if line.strip())
        return "\n".join(lines) + "\n"

    logger.debug(f"Code block with language '{language or 'none'}'")
    return f"\n{fenced_block(code, language)}\n"
