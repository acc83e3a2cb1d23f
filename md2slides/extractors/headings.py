"""
Title and subtitle extraction.
"""

from typing import Callable, List, Optional, Sequence, Tuple

from markdown_it.tree import SyntaxTreeNode

from md2slides.models import TextNode
from md2slides.richtext import RichTextBuilder


def heading_level(node: SyntaxTreeNode) -> Optional[int]:
    """Level of a heading node (1 for h1), or None for other nodes."""
    if node.type != "heading":
        return None
    return int(node.tag[1:])


def heading_text(node: SyntaxTreeNode, new_builder: Callable[[], RichTextBuilder]) -> TextNode:
    builder = new_builder()
    for child in node.children:
        builder.add_inline(child)
    return builder.build()


def extract_headings(
    nodes: Sequence[SyntaxTreeNode],
    new_builder: Callable[[], RichTextBuilder],
    title_level: int = 1,
) -> Tuple[Optional[TextNode], Optional[TextNode], List[SyntaxTreeNode]]:
    """
    Take the title and subtitle from the start of a slide.

    The first node is the title if it is a heading of level `title_level`
    or higher. The next node is the subtitle if it is a deeper heading.

    Args:
        nodes: Block nodes of the slide
        new_builder: Returns a fresh RichTextBuilder
        title_level: Deepest heading level accepted as a title

    Returns:
        (title, subtitle, remaining nodes); missing headings are None
    """
    remaining = list(nodes)
    title = subtitle = None

    level = heading_level(remaining[0]) if remaining else None
    if level is None or level > title_level:
        return title, subtitle, remaining

    title = heading_text(remaining.pop(0), new_builder)

    sub_level = heading_level(remaining[0]) if remaining else None
    if sub_level is not None and sub_level > level:
        subtitle = heading_text(remaining.pop(0), new_builder)

    return title, subtitle, remaining
