"""Dispatch of tree nodes to their handlers.

Resolution order for an element:
1. Macro containers (ac:structured-macro, ac:macro) go to the macro
   renderer registered for their ac:name.
2. Elements with a registered element handler go to that handler.
3. Anything else is rendered as the concatenation of its children.
"""

import logging
import re
from typing import Callable, List, Optional

from bs4 import NavigableString, Tag

from confluence_md.content_converter import elements, links, tables  # noqa: F401
from confluence_md.content_converter.macros import MACRO_CONTAINER_TAGS, render_macro
from confluence_md.content_converter.nodes import is_text, qualified_name
from confluence_md.content_converter.registry import HandlerRegistry, element_handlers

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


class NodeDispatcher:
    """Routes nodes to element handlers and macro renderers.

    The dispatcher holds no per-document state and may be shared between
    conversions, including concurrent ones.
    """

    def __init__(self, handlers: Optional[HandlerRegistry] = None):
        self.handlers = handlers or element_handlers

    def resolve(self, tag: Tag) -> Callable:
        name = qualified_name(tag)
        if name in MACRO_CONTAINER_TAGS:
            return render_macro
        handler = self.handlers.get(name)
        if handler is not None:
            return handler
        logger.debug(f"No handler for <{name}>, rendering its children")
        return self._render_children

    def convert(self, node, ctx) -> str:
        if isinstance(node, NavigableString):
            return self._convert_text(node, ctx) if is_text(node) else ""
        if not isinstance(node, Tag):
            return ""
        return self.resolve(node)(node, ctx)

    def convert_children(self, node: Tag, ctx) -> str:
        parts: List[str] = []
        preformatted = ctx.state.preformatted

        for child in node.children:
            piece = self.convert(child, ctx)
            if not piece:
                continue
            if not preformatted and isinstance(child, NavigableString) and parts and parts[-1].endswith("\n"):
                piece = piece.lstrip()
                if not piece:
                    continue
            parts.append(piece)

        return "".join(parts)

    def _render_children(self, tag: Tag, ctx) -> str:
        return self.convert_children(tag, ctx)

    @staticmethod
    def _convert_text(text: NavigableString, ctx) -> str:
        value = str(text)
        if ctx.state.preformatted:
            return value
        return _WHITESPACE_RE.sub(" ", value)
