"""Table rendering.

Tables are rendered in two passes. Every cell is first converted and
flattened to a single line, then the rows are padded to the widest row
and laid out as a pipe table whose first row is the header. Column widths
are measured in terminal cells, so wide characters count double.
"""

import logging
from typing import Iterator, List

from bs4 import Tag
from rich.cells import cell_len

from confluence_md.content_converter.nodes import attribute, child_elements, qualified_name
from confluence_md.content_converter.registry import element_handlers

logger = logging.getLogger(__name__)

CELL_TAGS = ("td", "th")
ROW_GROUP_TAGS = ("thead", "tbody", "tfoot")
NESTED_CELL_SEPARATOR = " / "


def flatten_cell(content: str) -> str:
    """Reduce converted cell content to a single table-safe line.

    Pipes are escaped and line breaks become <br>; blank lines disappear.

    Example:
        >>> flatten_cell("a | b\\n\\nc\\n")
        'a \\\\| b<br>c'
    """
    text = content.strip().replace("|", "\\|")
    lines = (line.strip() for line in text.split("\n"))
    return "<br>".join(line for line in lines if line)


class TableRenderer:
    """Lays out rows of flattened cells as a Markdown pipe table.

    Attributes:
        compact: Emit cells without padding and a fixed '---' separator
    """

    MIN_COLUMN_WIDTH = 3

    def __init__(self, compact: bool = False):
        self.compact = compact

    def render(self, rows: List[List[str]]) -> str:
        """Render rows; the first row becomes the header.

        Returns an empty string when there is nothing to render.
        """
        column_count = max((len(row) for row in rows), default=0)
        if column_count == 0:
            return ""

        padded = [row + [""] * (column_count - len(row)) for row in rows]
        widths = self.column_widths(padded)

        lines = [self._format_row(padded[0], widths), self._separator(widths)]
        lines.extend(self._format_row(row, widths) for row in padded[1:])
        return "\n".join(lines) + "\n"

    def column_widths(self, rows: List[List[str]]) -> List[int]:
        return [
            max(self.MIN_COLUMN_WIDTH, max(cell_len(row[index]) for row in rows))
            for index in range(len(rows[0]))
        ]

    def _format_row(self, row: List[str], widths: List[int]) -> str:
        if self.compact:
            cells = row
        else:
            cells = [cell + " " * (width - cell_len(cell)) for cell, width in zip(row, widths)]
        return "| " + " | ".join(cells) + " |"

    def _separator(self, widths: List[int]) -> str:
        if self.compact:
            dashes = ["-" * self.MIN_COLUMN_WIDTH for _ in widths]
        else:
            dashes = ["-" * width for width in widths]
        return "| " + " | ".join(dashes) + " |"


def _iter_rows(table: Tag) -> Iterator[Tag]:
    for child in child_elements(table):
        name = qualified_name(child)
        if name == "tr":
            yield child
        elif name in ROW_GROUP_TAGS:
            yield from child_elements(child, "tr")


def _colspan(cell: Tag) -> int:
    try:
        return max(int(attribute(cell, "colspan", "1")), 1)
    except ValueError:
        return 1


def collect_rows(table: Tag, ctx) -> List[List[str]]:
    """Convert every cell of table, expanding column spans into empty cells."""
    rows = []
    for row in _iter_rows(table):
        cells = []
        for cell in child_elements(row):
            if qualified_name(cell) not in CELL_TAGS:
                continue
            with ctx.state.table_cell():
                content = ctx.convert_children(cell)
            cells.append(flatten_cell(content))
            cells.extend([""] * (_colspan(cell) - 1))
        if cells:
            rows.append(cells)
    return rows


@element_handlers.register("table")
def convert_table(tag, ctx) -> str:
    nested = ctx.state.in_table_cell
    rows = collect_rows(tag, ctx)

    if nested:
        lines = (NESTED_CELL_SEPARATOR.join(cell for cell in row if cell) for row in rows)
        return "".join(f"{line}\n" for line in lines if line)

    rendered = TableRenderer(compact=ctx.options.compact_tables).render(rows)
    if not rendered:
        logger.debug("Skipping table without cells")
        return ""
    return f"\n{rendered}\n"
