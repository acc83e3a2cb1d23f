"""
Table extraction.
"""

from typing import Callable, List

from markdown_it.tree import SyntaxTreeNode

from md2slides.models import Table, TextNode
from md2slides.richtext import RichTextBuilder


def _cell_text(cell: SyntaxTreeNode, new_builder: Callable[[], RichTextBuilder]) -> TextNode:
    builder = new_builder()
    for child in cell.children:
        if child.type == "inline":
            builder.add_inline(child)
    return builder.build()


def _rows(section: SyntaxTreeNode) -> List[SyntaxTreeNode]:
    return [row for row in section.children if row.type == "tr"]


def extract_table(node: SyntaxTreeNode, new_builder: Callable[[], RichTextBuilder]) -> Table:
    """
    Convert a `table` node into a Table.

    The header row decides the column count; body rows with a different
    number of cells are kept as they are.

    Args:
        node: The table node
        new_builder: Returns a fresh RichTextBuilder for each cell

    Returns:
        Table with row/column counts and per-cell rich text
    """
    header: List[SyntaxTreeNode] = []
    body: List[SyntaxTreeNode] = []
    for section in node.children:
        if section.type == "thead":
            header.extend(_rows(section))
        elif section.type == "tbody":
            body.extend(_rows(section))

    rows = header[:1] + body
    columns = len(header[0].children) if header else 0

    cells = [
        [_cell_text(cell, new_builder) for cell in row.children]
        for row in rows
    ]

    return Table(rows=max(len(rows), 1), columns=columns, cells=cells)
