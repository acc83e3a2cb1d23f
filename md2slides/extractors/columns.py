"""
Column splitting.

A paragraph consisting only of `{.column}` starts a new column.
"""

import re
from typing import List, Sequence

from markdown_it.tree import SyntaxTreeNode


def is_column_marker(node: SyntaxTreeNode, column_class: str = "column") -> bool:
    if node.type != "paragraph":
        return False
    content = "".join(child.content for child in node.children if child.type == "inline")
    pattern = r"\{\s*\." + re.escape(column_class) + r"\s*\}"
    return re.fullmatch(pattern, content.strip()) is not None


def split_columns(
    nodes: Sequence[SyntaxTreeNode], column_class: str = "column"
) -> List[List[SyntaxTreeNode]]:
    """
    Split body nodes into columns.

    Only top-level marker paragraphs split; markers inside lists, quotes or
    tables stay ordinary text. N markers give N+1 columns, and a slide
    without body nodes has no columns at all.
    """
    if not nodes:
        return []

    columns: List[List[SyntaxTreeNode]] = [[]]
    for node in nodes:
        if is_column_marker(node, column_class):
            columns.append([])
        else:
            columns[-1].append(node)
    return columns
