"""
Slide segmentation on thematic breaks.
"""

from typing import List, Sequence

from markdown_it.tree import SyntaxTreeNode


def split_slides(nodes: Sequence[SyntaxTreeNode]) -> List[List[SyntaxTreeNode]]:
    """
    Split top-level block nodes into one group per slide.

    Every thematic break (`---`) ends the current slide; the break itself
    belongs to neither side. A document with k breaks gives k+1 groups,
    including an empty group before a leading break.
    """
    slides: List[List[SyntaxTreeNode]] = [[]]
    for node in nodes:
        if node.type == "hr":
            slides.append([])
        else:
            slides[-1].append(node)
    return slides
