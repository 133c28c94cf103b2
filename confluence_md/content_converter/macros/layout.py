"""Page layouts, linearised in document order."""

from confluence_md.content_converter.nodes import child_elements, qualified_name
from confluence_md.content_converter.registry import element_handlers


@element_handlers.register("ac:layout", "ac:layout-section", "ac:layout-cell")
def convert_layout(tag, ctx) -> str:
    if qualified_name(tag) == "ac:layout-cell":
        content = ctx.convert_children(tag).strip()
    else:
        blocks = (ctx.convert(child).strip() for child in child_elements(tag))
        content = "\n\n".join(block for block in blocks if block)

    if not content:
        return ""
    if ctx.state.in_table_cell:
        return content + "\n"
    return f"\n{content}\n\n"
