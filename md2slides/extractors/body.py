"""
Block-level flattening of a slide body.

Walks the block nodes of one column, feeding inline content to a
RichTextBuilder while recording tables and list item spans.
"""

from typing import Callable, List, Sequence

from markdown_it.tree import SyntaxTreeNode

from md2slides.extractors.lists import LIST_TYPES, ListItemSpan, build_list_markers
from md2slides.extractors.tables import extract_table
from md2slides.models import Table, TextNode, TextStyle
from md2slides.richtext import RichTextBuilder

HEADING_STYLE = TextStyle(bold=True)


class BodyBuilder:
    """
    Flattens a sequence of block nodes into one TextNode.

    Paragraphs, headings, code and HTML blocks end with a newline. Lists
    contribute their items' text; nested items are prefixed with
    `nested_list_indent` once per level. Tables contribute no text and are
    collected in `tables`.
    """

    def __init__(
        self,
        builder: RichTextBuilder,
        new_builder: Callable[[], RichTextBuilder],
        nested_list_indent: str = "\t",
    ):
        self.text = builder
        self.new_builder = new_builder
        self.nested_list_indent = nested_list_indent

        self.tables: List[Table] = []
        self.list_items: List[ListItemSpan] = []
        self._list_depth = 0
        self._position = 0

    def add_blocks(self, nodes: Sequence[SyntaxTreeNode]) -> None:
        for position, node in enumerate(nodes):
            # outermost lists are recorded under the top-level block holding them
            self._position = position
            self._visit(node)

    def build(self) -> TextNode:
        return self.text.build(build_list_markers(self.list_items))

    def _visit(self, node: SyntaxTreeNode) -> None:
        handler = getattr(self, f"_visit_{node.type}", None)
        if handler is not None:
            handler(node)
        else:
            for child in node.children:
                self._visit(child)

    # --- lists ---

    def _list(self, node: SyntaxTreeNode) -> None:
        list_type = LIST_TYPES[node.type]
        outermost = self._list_depth == 0
        self._list_depth += 1
        for item in node.children:
            start = self.text.cursor
            self._list_item(item)
            if outermost:
                self.list_items.append(
                    ListItemSpan(
                        start=start, end=self.text.cursor, type=list_type, block=self._position
                    )
                )
        self._list_depth -= 1

    def _list_item(self, node: SyntaxTreeNode) -> None:
        indent = self.nested_list_indent * (self._list_depth - 1)
        if indent:
            self.text.defer(indent)
        for child in node.children:
            self._visit(child)
        # drop indentation left by an empty item
        self.text.end_block()

    def _visit_bullet_list(self, node: SyntaxTreeNode) -> None:
        self._list(node)

    def _visit_ordered_list(self, node: SyntaxTreeNode) -> None:
        self._list(node)

    # --- text blocks ---

    def _visit_paragraph(self, node: SyntaxTreeNode) -> None:
        self.text.begin_block()
        for child in node.children:
            self.text.add_inline(child)
        self.text.end_block()

    def _visit_heading(self, node: SyntaxTreeNode) -> None:
        self.text.begin_block()
        for child in node.children:
            self.text.add_styled(HEADING_STYLE, child.children)
        self.text.end_block()

    def _visit_fence(self, node: SyntaxTreeNode) -> None:
        self._literal(node.content)

    def _visit_code_block(self, node: SyntaxTreeNode) -> None:
        self._literal(node.content)

    def _visit_html_block(self, node: SyntaxTreeNode) -> None:
        if node.content.lstrip().startswith("<!--"):
            return
        self._literal(node.content)

    def _literal(self, content: str) -> None:
        self.text.begin_block()
        self.text.append(content.rstrip("\n"))
        self.text.end_block()

    # --- non-text blocks ---

    def _visit_table(self, node: SyntaxTreeNode) -> None:
        self.tables.append(extract_table(node, self.new_builder))

    def _visit_hr(self, node: SyntaxTreeNode) -> None:
        pass
