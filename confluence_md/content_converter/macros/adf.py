"""Atlassian Document Format extensions embedded in storage format.

Decision lists are rendered from their ADF node. Every other extension
renders its fallback, or the node content when there is no fallback.
"""

from confluence_md.content_converter.macros.decisions import render_adf_decision_list
from confluence_md.content_converter.nodes import attribute, find_child
from confluence_md.content_converter.registry import element_handlers

DECISION_LIST_TYPE = "decision-list"


@element_handlers.register("ac:adf-extension")
def convert_adf_extension(tag, ctx) -> str:
    node = find_child(tag, "ac:adf-node")
    if node is not None and attribute(node, "type").strip().lower() == DECISION_LIST_TYPE:
        decisions = render_adf_decision_list(node, ctx)
        if decisions:
            return decisions

    for name in ("ac:adf-fallback", "ac:adf-node"):
        part = find_child(tag, name)
        if part is not None:
            return ctx.convert_children(part)
    return ctx.convert_children(tag)


@element_handlers.register("ac:adf-content")
def convert_adf_content(tag, ctx) -> str:
    return ctx.convert_children(tag)
