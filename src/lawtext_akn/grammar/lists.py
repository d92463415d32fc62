"""Grouping of marker-led lines into block lists."""
from __future__ import annotations

from lawtext_akn.grammar.markers import Marker, MarkerClassifier, skip_whitespace
from lawtext_akn.grammar.tree import ParseNode


def leading_markers(
    classifier: MarkerClassifier,
    text: str,
    pos: int,
    *,
    allow_bare: bool = False,
) -> list[Marker]:
    """Collect the consecutive list markers that open a line.

    ``(b) (i) single`` yields two markers; body text stops the scan.

    Args:
        classifier: Marker classifier in use for the parse.
        text: Source text.
        pos: Offset of the first candidate marker.
        allow_bare: Accept an unparenthesised number as the first marker.

    Returns:
        Markers in source order, possibly empty.
    """
    markers: list[Marker] = []
    cursor = pos
    while True:
        marker = classifier.list_item(text, cursor, allow_bare=allow_bare and not markers)
        if marker is None:
            return markers
        markers.append(marker)
        cursor = skip_whitespace(text, marker.end)


def split_items(markers: list[Marker], statement: ParseNode | None, end: int) -> list[ParseNode]:
    """Turn the markers of one line into sibling list items.

    Every marker but the last yields an empty item; the statement following
    the last marker (if any) becomes that item's content.

    Args:
        markers: Non-empty list of markers from `leading_markers`.
        statement: Body text after the final marker, or None.
        end: Offset just past the line.

    Returns:
        Item parse nodes in source order.
    """
    items: list[ParseNode] = []
    for idx, marker in enumerate(markers):
        last = idx == len(markers) - 1
        num = ParseNode("num", marker.start, marker.end, value=marker.num)
        children = (num, statement) if last and statement is not None else (num,)
        item_end = end if last else marker.end
        items.append(ParseNode("item", marker.start, item_end, children, value=marker.raw))
    return items


__all__ = ["leading_markers", "split_items"]
