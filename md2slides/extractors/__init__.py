"""
Extraction stages that turn a slide's markdown nodes into slide content.

- segmenter: split the document on thematic breaks
- notes: speaker notes from HTML comments
- headings: title and subtitle
- columns: {.column} breaks
- body: block-level flattening (with lists, tables and media)
"""

from md2slides.extractors.body import BodyBuilder
from md2slides.extractors.columns import split_columns
from md2slides.extractors.headings import extract_headings
from md2slides.extractors.lists import build_list_markers
from md2slides.extractors.media import MediaCollector
from md2slides.extractors.notes import extract_notes
from md2slides.extractors.segmenter import split_slides
from md2slides.extractors.tables import extract_table

__all__ = [
    "BodyBuilder",
    "MediaCollector",
    "build_list_markers",
    "extract_headings",
    "extract_notes",
    "extract_table",
    "split_columns",
    "split_slides",
]
