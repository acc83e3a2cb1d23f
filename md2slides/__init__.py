"""
md2slides: Convert a markdown document into structured presentation slides.

Splits the document into slides and extracts titles, body columns, lists,
tables, media and speaker notes, with offset-based style runs for all text.
"""

__version__ = "0.1.0"

from md2slides.config import ExtractionSettings
from md2slides.models import Slide, TextNode, TextRun, ListMarker, Table, Media
from md2slides.parser import MarkdownParseError
from md2slides.pipeline import SlideExtractionPipeline, extract_slides

__all__ = [
    "ExtractionSettings",
    "ListMarker",
    "MarkdownParseError",
    "Media",
    "Slide",
    "SlideExtractionPipeline",
    "Table",
    "TextNode",
    "TextRun",
    "extract_slides",
]
