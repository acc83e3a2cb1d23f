"""
List marker extraction.

Top-level list items are recorded while a body is flattened; contiguous
items of the same list type are then merged into one ListMarker.
"""

from typing import Iterable, List, Literal, NamedTuple

from md2slides.models import ListMarker

ListType = Literal["ordered", "unordered"]

LIST_TYPES = {
    "bullet_list": "unordered",
    "ordered_list": "ordered",
}


class ListItemSpan(NamedTuple):
    """Text span of one top-level list item.

    `block` is the position of the enclosing list block in the body's node
    stream; items of adjacent blocks are contiguous.
    """

    start: int
    end: int
    type: ListType
    block: int


def build_list_markers(items: Iterable[ListItemSpan]) -> List[ListMarker]:
    """
    Merge contiguous same-type list items into markers.

    Args:
        items: Item spans in document order

    Returns:
        ListMarkers ordered by start
    """
    markers: List[ListMarker] = []
    current = None  # (start, end, type, last_block)

    for item in items:
        if item.end <= item.start:
            continue

        if (
            current is not None
            and current[2] == item.type
            and item.block - current[3] <= 1
            and item.start == current[1]
        ):
            current = (current[0], item.end, item.type, item.block)
            continue

        if current is not None:
            markers.append(ListMarker(start=current[0], end=current[1], type=current[2]))
        current = (item.start, item.end, item.type, item.block)

    if current is not None:
        markers.append(ListMarker(start=current[0], end=current[1], type=current[2]))

    return markers
