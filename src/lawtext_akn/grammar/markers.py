"""Lexical classification of line-leading structural markers.

Every matcher takes the source text and an offset pointing at the candidate
token (leading whitespace already skipped) and returns a `Marker` describing
the token, or None. Nothing is consumed: the grammar engine decides what to
do with a marker, so alternative productions can probe the same offset
without re-scanning.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

# A token must be followed by whitespace or the end of its line.
_TOKEN_END = r"(?=[ \t\n]|\Z)"
# Structural headers may also be followed directly by a heading separator.
_HEADER_END = r"(?=[ \t\n:.\-–—]|\Z)"
_STRUCTURAL_NUMBER = r"(\d+[A-Za-z]*|[IVXLCDM]+|[A-Z])"

WHITESPACE = re.compile(r"[ \t]*")
BLANK_LINE = re.compile(r"[ \t]*\n")
EOL = re.compile(r"[ \t]*(?:\n|\Z)")
HEADING_SEPARATOR = re.compile(r"[ \t]*([:.\-–—]*)[ \t]*")

CHAPTER = re.compile(r"(?i:chapter)[ \t]+" + _STRUCTURAL_NUMBER + _HEADER_END)
PART = re.compile(r"(?i:part)[ \t]+" + _STRUCTURAL_NUMBER + _HEADER_END)
SCHEDULE = re.compile(r"(?i:schedule)(?=[ \t\n:.\-–—\"]|\Z)")
SCHEDULE_NUMBER = re.compile(r"[ \t]+(?:\"([A-Za-z0-9]+)\"|(\d+[A-Za-z]*))" + _HEADER_END)
PREFACE = re.compile(r"(?i:preface)[ \t]*(?=\n|\Z)")
PREAMBLE = re.compile(r"(?i:preamble)[ \t]*(?=\n|\Z)")

SECTION_NUMBER = re.compile(r"(\d+[A-Za-z0-9]*)(\.?)" + _TOKEN_END)
NUMBERED_STATEMENT = re.compile(r"\((\d+[A-Za-z]*)\)" + _TOKEN_END)
DOTTED_STATEMENT = re.compile(r"(\d+\.\d+)\.?" + _TOKEN_END)

PAREN_ITEM = re.compile(r"\(([A-Za-z]{1,5})\)" + _TOKEN_END)
DOTTED_ITEM = re.compile(r"(\d+(?:\.\d+){2,})\.?" + _TOKEN_END)
BARE_ITEM = re.compile(r"(\d+)\.?" + _TOKEN_END)

TABLE_OPEN = re.compile(r"\{\|")
TABLE_ROW = re.compile(r"\|-")
TABLE_CLOSE = re.compile(r"\|\}")
TABLE_CELL = re.compile(r"\|(?![-}])")
REMARK = re.compile(r"\[\[([^\n]+?)\]\]")


class MarkerKind(Enum):
    """Kinds of line-leading markers."""

    CHAPTER = "chapter"
    PART = "part"
    SCHEDULE = "schedule"
    PREFACE = "preface"
    PREAMBLE = "preamble"
    SECTION = "section"
    NUMBERED_STATEMENT = "numbered_statement"
    LIST_ITEM = "list_item"
    TABLE_OPEN = "table_open"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    TABLE_CLOSE = "table_close"
    REMARK = "remark"


@dataclass(frozen=True)
class Marker:
    """A recognised marker token.

    Attributes:
        kind: Marker classification.
        start: Offset of the token.
        end: Offset just past the token.
        raw: Token text as authored, e.g. ``(a)`` or ``9.9.1``.
        num: Normalised number carried by the token, if any.
        bare: True for an unparenthesised single number used as a list marker.
    """

    kind: MarkerKind
    start: int
    end: int
    raw: str
    num: str | None = None
    bare: bool = False


def normalize_number(raw: str) -> str:
    """Strip display punctuation from a numbering token.

    Args:
        raw: Token such as ``(1)``, ``9.9.``, ``"2"`` or ``(a)``.

    Returns:
        Bare number with dotted-decimal structure kept, e.g. ``9.9``.
    """
    num = raw.strip().strip('"')
    if num.startswith("(") and num.endswith(")"):
        num = num[1:-1]
    return num.rstrip(".").strip()


def skip_whitespace(text: str, pos: int) -> int:
    """Return the offset of the first non-blank character on the line."""
    return WHITESPACE.match(text, pos).end()


def line_end(text: str, pos: int) -> int:
    """Return the offset of the newline ending the line at ``pos``."""
    idx = text.find("\n", pos)
    return len(text) if idx < 0 else idx


def at_line_start(text: str, pos: int) -> bool:
    """True when only whitespace precedes ``pos`` on its line."""
    start = text.rfind("\n", 0, pos) + 1
    return text[start:pos].strip(" \t") == ""


def is_blank_line(text: str, pos: int) -> bool:
    """True when the line starting at ``pos`` holds only whitespace."""
    return text[pos:line_end(text, pos)].strip() == ""


class MarkerClassifier:
    """Recognise structural markers without consuming input."""

    def __init__(self, section_number_after_title: bool = False) -> None:
        """Initialize classifier.

        Args:
            section_number_after_title: Section headers are written as a
                title line followed by a number line instead of ``N. title``.
        """
        self.section_number_after_title = section_number_after_title

    def chapter(self, text: str, pos: int) -> Marker | None:
        """Match ``Chapter <num>``."""
        return self._structural(CHAPTER, MarkerKind.CHAPTER, text, pos)

    def part(self, text: str, pos: int) -> Marker | None:
        """Match ``Part <num>``."""
        return self._structural(PART, MarkerKind.PART, text, pos)

    def schedule(self, text: str, pos: int) -> Marker | None:
        """Match a schedule header up to the start of its inline title.

        A header without a number only counts when its title is introduced
        by a separator, so prose such as "Schedule of fees" stays text.
        """
        m = SCHEDULE.match(text, pos)
        if m is None:
            return None
        end = m.end()
        num = None
        n = SCHEDULE_NUMBER.match(text, end)
        if n is not None:
            num = n.group(1) or n.group(2)
            end = n.end()
        sep = HEADING_SEPARATOR.match(text, end)
        title = text[sep.end():line_end(text, pos)].strip()
        if title and num is None and not sep.group(1):
            return None
        return Marker(MarkerKind.SCHEDULE, pos, sep.end(), text[pos:end], num)

    def preface(self, text: str, pos: int) -> Marker | None:
        """Match a line holding only the ``PREFACE`` keyword."""
        m = PREFACE.match(text, pos)
        return Marker(MarkerKind.PREFACE, pos, m.end(), m.group(0)) if m else None

    def preamble(self, text: str, pos: int) -> Marker | None:
        """Match a line holding only the ``PREAMBLE`` keyword."""
        m = PREAMBLE.match(text, pos)
        return Marker(MarkerKind.PREAMBLE, pos, m.end(), m.group(0)) if m else None

    def section_number(self, text: str, pos: int) -> Marker | None:
        """Match a section number token with an optional trailing period."""
        m = SECTION_NUMBER.match(text, pos)
        if m is None:
            return None
        return Marker(MarkerKind.SECTION, pos, m.end(), m.group(0), m.group(1))

    def section(self, text: str, pos: int) -> Marker | None:
        """Match a section header in the configured layout.

        For the number-after-title layout ``pos`` is the start of the title
        line and the returned marker spans up to the end of the number.
        """
        if not self.section_number_after_title:
            return self.section_number(text, pos)
        end = line_end(text, pos)
        if end >= len(text) or not text[pos:end].strip():
            return None
        number = self.section_number(text, skip_whitespace(text, end + 1))
        if number is None:
            return None
        return Marker(MarkerKind.SECTION, pos, number.end, number.raw, number.num)

    def numbered_statement(self, text: str, pos: int) -> Marker | None:
        """Match a subsection prefix: ``(1)``, ``(1a)`` or ``9.9``."""
        m = NUMBERED_STATEMENT.match(text, pos) or DOTTED_STATEMENT.match(text, pos)
        if m is None:
            return None
        return Marker(MarkerKind.NUMBERED_STATEMENT, pos, m.end(), m.group(0), m.group(1))

    def list_item(self, text: str, pos: int, *, allow_bare: bool = False) -> Marker | None:
        """Match a list item marker.

        Args:
            text: Source text.
            pos: Offset of the candidate token.
            allow_bare: Also accept an unparenthesised number, which is only
                a list marker when it leads its line.

        Returns:
            The matched marker or None.
        """
        m = PAREN_ITEM.match(text, pos) or DOTTED_ITEM.match(text, pos)
        bare = False
        if m is None and allow_bare:
            m = BARE_ITEM.match(text, pos)
            bare = m is not None
        if m is None:
            return None
        raw = m.group(0)
        return Marker(MarkerKind.LIST_ITEM, pos, m.end(), raw, normalize_number(raw), bare)

    def table(self, text: str, pos: int) -> Marker | None:
        """Match any wiki-table delimiter."""
        for pattern, kind in (
            (TABLE_OPEN, MarkerKind.TABLE_OPEN),
            (TABLE_CLOSE, MarkerKind.TABLE_CLOSE),
            (TABLE_ROW, MarkerKind.TABLE_ROW),
            (TABLE_CELL, MarkerKind.TABLE_CELL),
        ):
            m = pattern.match(text, pos)
            if m is not None:
                return Marker(kind, pos, m.end(), m.group(0))
        return None

    def classify(self, text: str, pos: int) -> Marker | None:
        """Classify the marker leading the line that contains ``pos``.

        Args:
            text: Source text.
            pos: Any offset on the line of interest.

        Returns:
            The leading marker, or None for a plain text line.
        """
        start = skip_whitespace(text, text.rfind("\n", 0, pos) + 1)
        for matcher in (
            self.preface,
            self.preamble,
            self.table,
            self.chapter,
            self.part,
            self.schedule,
        ):
            marker = matcher(text, start)
            if marker is not None:
                return marker
        section = self.section(text, start)
        if section is not None:
            return section
        marker = self.numbered_statement(text, start) or self.list_item(text, start, allow_bare=True)
        if marker is not None:
            return marker
        if text.startswith("[[", start) and REMARK.match(text, start):
            return Marker(MarkerKind.REMARK, start, start + 2, "[[")
        return None

    @staticmethod
    def _structural(pattern: re.Pattern[str], kind: MarkerKind, text: str, pos: int) -> Marker | None:
        m = pattern.match(text, pos)
        if m is None:
            return None
        return Marker(kind, pos, m.end(), m.group(0), m.group(1))


__all__ = [
    "BLANK_LINE",
    "EOL",
    "HEADING_SEPARATOR",
    "REMARK",
    "Marker",
    "MarkerClassifier",
    "MarkerKind",
    "at_line_start",
    "is_blank_line",
    "line_end",
    "normalize_number",
    "skip_whitespace",
]
