"""Task lists rendered as Markdown checklists."""

from confluence_md.content_converter.context import TASK
from confluence_md.content_converter.formatting import format_list_item
from confluence_md.content_converter.nodes import child_elements, element_text, find_child
from confluence_md.content_converter.registry import element_handlers

COMPLETE_STATUS = "complete"


def _render_task(task, ctx) -> str:
    status = element_text(find_child(task, "ac:task-status")).strip().lower()
    body = find_child(task, "ac:task-body")
    content = ctx.convert_children(body).strip() if body is not None else ""
    checkbox = "[x]" if status == COMPLETE_STATUS else "[ ]"
    return format_list_item(content, f"- {checkbox} ")


@element_handlers.register("ac:task-list")
def convert_task_list(tag, ctx) -> str:
    with ctx.state.list_scope(TASK):
        items = [_render_task(task, ctx) for task in child_elements(tag, "ac:task")]

    body = "".join(items)
    if not body or ctx.state.in_table_cell:
        return body
    return f"\n{body}\n"


@element_handlers.register("ac:task")
def convert_orphan_task(tag, ctx) -> str:
    return _render_task(tag, ctx)
