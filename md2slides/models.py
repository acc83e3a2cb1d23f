"""
Core data models for md2slides.

Defines the slide schema produced by the extraction pipeline using Pydantic.
Every model serializes to the camelCase field names presentation APIs expect.
"""

from typing import List, Optional, Literal, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _SlideModel(BaseModel):
    """Immutable base with camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Export to dict for JSON serialization."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


BaselineOffset = Literal["SUBSCRIPT", "SUPERSCRIPT"]


class TextStyle(_SlideModel):
    """
    A set of character style attributes.

    Attributes left as None are unset, so a style can be layered over
    another one with `inherit`.
    """

    bold: Optional[bool] = None
    italic: Optional[bool] = None
    strikethrough: Optional[bool] = None
    baseline_offset: Optional[BaselineOffset] = None
    foreground_color: Optional[str] = None  # Hex color (e.g. "#FF0000")

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)

    def inherit(self, outer: "TextStyle") -> "TextStyle":
        """Fill unset attributes from an enclosing style. Own values win."""
        values = outer.model_dump(exclude_none=True)
        values.update(self.model_dump(exclude_none=True))
        return TextStyle(**values)


class TextRun(TextStyle):
    """A styled character range [start, end) in the owning text."""

    start: int = Field(ge=0)
    end: int = Field(gt=0)

    @model_validator(mode="after")
    def validate_range(self) -> "TextRun":
        if self.start >= self.end:
            raise ValueError("Invalid run: start < end required")
        return self

    @property
    def style(self) -> TextStyle:
        return TextStyle(
            **self.model_dump(exclude={"start", "end"}, exclude_none=True)
        )


class ListMarker(_SlideModel):
    """A contiguous block of same-type list items in a body."""

    start: int = Field(ge=0)
    end: int = Field(gt=0)
    type: Literal["ordered", "unordered"]


class TextNode(_SlideModel):
    """Flattened text with its style runs (and list markers for bodies)."""

    raw_text: str = ""
    text_runs: List[TextRun] = Field(default_factory=list)
    list_markers: List[ListMarker] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_offsets(self) -> "TextNode":
        length = len(self.raw_text)
        for span in [*self.text_runs, *self.list_markers]:
            if span.end > length:
                raise ValueError(
                    f"Offset {span.end} out of range for text of length {length}"
                )
        return self


class Media(_SlideModel):
    """An image (by url) or an embedded video (by provider and id)."""

    url: Optional[str] = None
    id: Optional[str] = None
    provider: Optional[str] = None

    @model_validator(mode="after")
    def validate_kind(self) -> "Media":
        is_image = self.url is not None
        is_video = self.id is not None and self.provider is not None
        if is_image == is_video:
            raise ValueError("Media needs either a url or a provider and id")
        return self

    @property
    def is_video(self) -> bool:
        return self.url is None


class Table(_SlideModel):
    """A table, sized by its header row. Cells hold rich text per cell."""

    rows: int = Field(ge=1)
    columns: int = Field(ge=0)
    cells: List[List[TextNode]] = Field(default_factory=list)


class Slide(_SlideModel):
    """A single slide extracted from one segment of the document."""

    index: int = Field(ge=0)
    title: Optional[TextNode] = None
    subtitle: Optional[TextNode] = None
    bodies: List[TextNode] = Field(default_factory=list)
    background_image: Optional[Media] = None
    images: List[Media] = Field(default_factory=list)
    videos: List[Media] = Field(default_factory=list)
    tables: List[Table] = Field(default_factory=list)
    notes: Optional[TextNode] = None
