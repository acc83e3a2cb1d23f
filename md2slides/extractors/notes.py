"""
Speaker notes extraction.

Speaker notes are written as an HTML comment block anywhere in a slide:

    <!-- Remember to mention **this** -->

The comment body is parsed as markdown of its own.
"""

import re
import textwrap
from typing import Callable, List, Optional, Sequence, Tuple

from markdown_it.tree import SyntaxTreeNode

from md2slides.models import TextNode

_COMMENT_RE = re.compile(r"<!--(.*?)(?:-->|$)", re.DOTALL)


def is_notes_block(node: SyntaxTreeNode) -> bool:
    return node.type == "html_block" and node.content.lstrip().startswith("<!--")


def comment_text(markup: str) -> str:
    """Inner markdown of an HTML comment, dedented and stripped."""
    match = _COMMENT_RE.search(markup)
    if not match:
        return ""
    return textwrap.dedent(match.group(1)).strip()


def extract_notes(
    nodes: Sequence[SyntaxTreeNode],
    render: Callable[[str], TextNode],
) -> Tuple[Optional[TextNode], List[SyntaxTreeNode]]:
    """
    Remove comment blocks from a slide and render the first as notes.

    Args:
        nodes: Block nodes of the slide
        render: Parses and flattens the comment's markdown

    Returns:
        (notes or None, remaining nodes)
    """
    notes = None
    remaining = []
    for node in nodes:
        if not is_notes_block(node):
            remaining.append(node)
        elif notes is None:
            notes = render(comment_text(node.content))
    return notes, remaining
