"""
Main orchestration pipeline for md2slides.

Coordinates parsing, segmentation and per-slide extraction.
"""

from typing import Callable, List, Optional, Sequence

from markdown_it.tree import SyntaxTreeNode

from md2slides.config import ExtractionSettings
from md2slides.extractors import (
    BodyBuilder,
    MediaCollector,
    extract_headings,
    extract_notes,
    split_columns,
    split_slides,
)
from md2slides.models import Slide, TextNode
from md2slides.parser import MarkdownParser
from md2slides.richtext import RichTextBuilder


class SlideExtractionPipeline:
    """
    Markdown-to-slides pipeline.

    Pipeline stages:
    1. Parsing: markdown-it-py syntax tree
    2. Segmentation: one node group per slide, split on thematic breaks
    3. Per slide: speaker notes, title/subtitle, columns, then rich text
       flattening of each column (collecting media, tables and lists)

    The pipeline keeps no state between calls, so one instance can be
    shared.
    """

    def __init__(self, settings: Optional[ExtractionSettings] = None, debug: bool = False):
        """
        Initialize pipeline.

        Args:
            settings: Extraction settings (default: ExtractionSettings())
            debug: Print progress for each stage
        """
        self.settings = settings or ExtractionSettings()
        self.debug = debug
        self.parser = MarkdownParser(self.settings)

    def extract(self, markdown_text: str) -> List[Slide]:
        """
        Extract slides from a markdown document.

        Args:
            markdown_text: The whole document

        Returns:
            Slides in document order

        Raises:
            TypeError: If markdown_text is not a string
            MarkdownParseError: If the markdown cannot be tokenized
        """
        if not isinstance(markdown_text, str):
            raise TypeError(
                f"markdown_text must be str, not {type(markdown_text).__name__}"
            )

        root = self.parser.parse(markdown_text)
        groups = split_slides(root.children)
        self._log(f"[Segmenter] Found {len(groups)} slides")

        return [self._extract_slide(index, nodes) for index, nodes in enumerate(groups)]

    def _builder_factory(self, media: Optional[MediaCollector]) -> Callable[[], RichTextBuilder]:
        def new_builder() -> RichTextBuilder:
            return RichTextBuilder(media=media, emoji_shortcodes=self.settings.substitute_emoji)

        return new_builder

    def _render_notes(self, markdown_text: str) -> TextNode:
        """Parse and flatten speaker notes. Notes carry no media or lists."""
        new_builder = self._builder_factory(None)
        body = BodyBuilder(new_builder(), new_builder, self.settings.nested_list_indent)
        body.add_blocks(self.parser.parse(markdown_text).children)
        return body.text.build()

    def _extract_slide(self, index: int, nodes: Sequence[SyntaxTreeNode]) -> Slide:
        media = MediaCollector(background_class=self.settings.background_class)
        new_builder = self._builder_factory(media)

        notes, nodes = extract_notes(nodes, self._render_notes)
        title, subtitle, nodes = extract_headings(
            nodes, new_builder, title_level=self.settings.title_level
        )

        bodies: List[TextNode] = []
        tables = []
        for column in split_columns(nodes, self.settings.column_class):
            body = BodyBuilder(new_builder(), new_builder, self.settings.nested_list_indent)
            body.add_blocks(column)
            bodies.append(body.build())
            tables.extend(body.tables)

        slide = Slide(
            index=index,
            title=title,
            subtitle=subtitle,
            bodies=bodies,
            background_image=media.background_image,
            images=media.images,
            videos=media.videos,
            tables=tables,
            notes=notes,
        )

        self._log(
            f"[Slide {index + 1}] title={title.raw_text if title else None!r} "
            f"bodies={len(bodies)} tables={len(tables)} images={len(media.images)} "
            f"videos={len(media.videos)} notes={'yes' if notes else 'no'}"
        )
        return slide

    def _log(self, message: str) -> None:
        if self.debug:
            print(message)


def extract_slides(
    markdown_text: str, settings: Optional[ExtractionSettings] = None
) -> List[Slide]:
    """
    Convert a markdown document into slides.

    Args:
        markdown_text: The whole document
        settings: Optional extraction settings

    Returns:
        One Slide per thematic-break-delimited segment, in document order
    """
    return SlideExtractionPipeline(settings=settings).extract(markdown_text)
