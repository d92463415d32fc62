"""Packrat grammar for plain-text legislation.

The grammar is a hand-written recursive-descent PEG: alternatives are tried
in order, repetitions are greedy, and every named rule is memoised on its
start offset so re-trying an alternative never re-scans the input. The
engine can be entered at any named rule, which is how fragments (a single
section, a table, a schedule) are parsed in isolation.
"""
from __future__ import annotations

import functools
import logging
from typing import Callable

from lawtext_akn.grammar.lists import leading_markers, split_items
from lawtext_akn.grammar.markers import (
    BLANK_LINE,
    EOL,
    HEADING_SEPARATOR,
    REMARK,
    Marker,
    MarkerClassifier,
    at_line_start,
    is_blank_line,
    line_end,
    skip_whitespace,
)
from lawtext_akn.grammar.tree import ParseError, ParseNode

logger = logging.getLogger(__name__)

RuleMethod = Callable[["Parser", int], "ParseNode | None"]


def rule(name: str) -> Callable[[RuleMethod], RuleMethod]:
    """Register a parser method as a memoised grammar rule.

    Args:
        name: Rule name reported in parse failures.

    Returns:
        Decorator wrapping the method with memoisation and failure tracking.
    """

    def decorate(method: RuleMethod) -> RuleMethod:
        @functools.wraps(method)
        def wrapper(self: "Parser", pos: int) -> ParseNode | None:
            key = (name, pos)
            if key in self._memo:
                return self._memo[key]
            result = method(self, pos)
            if result is None:
                self._expect(pos, name)
            self._memo[key] = result
            return result

        return wrapper

    return decorate


class Parser:
    """Single-use parser over one source text.

    A parser owns its memo table and failure diagnostics, so each call to
    `parse_text` starts from a clean state.
    """

    ENTRY_RULES = (
        "act",
        "preface",
        "preamble",
        "body",
        "chapter",
        "part",
        "section",
        "subsection",
        "general_content",
        "block_paragraphs",
        "blocklist",
        "table",
        "clauses",
        "schedule",
        "schedules",
        "schedules_container",
    )

    def __init__(self, text: str, classifier: MarkerClassifier) -> None:
        self.text = text
        self.classifier = classifier
        self._memo: dict[tuple[str, int], ParseNode | None] = {}
        self._furthest = 0
        self._expected: set[str] = set()
        self._predicates = 0

    def parse(self, root: str) -> ParseNode:
        """Match ``root`` against the whole text.

        Args:
            root: Name of the entry rule.

        Returns:
            Parse node produced by the entry rule.

        Raises:
            ValueError: If ``root`` is not an entry rule.
            ParseError: If the rule fails or leaves unconsumed content.
        """
        if root not in self.ENTRY_RULES:
            raise ValueError(f"Unknown grammar rule: {root}")
        start = self._blank_lines(0)
        node = getattr(self, root)(start)
        if node is not None:
            rest = self._blank_lines(node.end)
            if not self.text[rest:].strip():
                return node
            self._expect(skip_whitespace(self.text, rest), "end of input")
        raise ParseError(self.text, self._furthest, self._expected)

    # ------------------------------------------------------------------
    # Diagnostics and lookahead

    def _expect(self, pos: int, name: str) -> None:
        if self._predicates:
            return
        if pos > self._furthest:
            self._furthest = pos
            self._expected = {name}
        elif pos == self._furthest:
            self._expected.add(name)

    def _lookahead(self, probe: Callable[[int], object], pos: int) -> bool:
        """Run ``probe`` as a syntactic predicate without recording failures."""
        self._predicates += 1
        try:
            return bool(probe(pos))
        finally:
            self._predicates -= 1

    def _header_at(self, pos: int) -> bool:
        """True when a structural header opens the line at ``pos``."""
        if pos >= len(self.text) or not at_line_start(self.text, pos):
            return False
        start = skip_whitespace(self.text, pos)
        classifier = self.classifier
        return any(
            matcher(self.text, start) is not None
            for matcher in (classifier.chapter, classifier.part, classifier.schedule, classifier.section)
        )

    def _heading_line_at(self, pos: int) -> bool:
        """True when the line at ``pos`` may serve as a heading for the header above it.

        Header, numbered-statement, list and table lines are never headings.
        """
        if pos >= len(self.text) or is_blank_line(self.text, pos):
            return False
        if self._lookahead(self._header_at, pos):
            return False
        start = skip_whitespace(self.text, pos)
        classifier = self.classifier
        if classifier.numbered_statement(self.text, start) or classifier.list_item(
            self.text, start, allow_bare=True
        ):
            return False
        return classifier.table(self.text, start) is None

    # ------------------------------------------------------------------
    # Line helpers

    def _blank_lines(self, pos: int) -> int:
        while at_line_start(self.text, pos):
            m = BLANK_LINE.match(self.text, pos)
            if m is None:
                break
            pos = m.end()
        return pos

    def _next_line(self, pos: int) -> int:
        end = line_end(self.text, pos)
        return end + 1 if end < len(self.text) else end

    def _clauses(self, pos: int, end: int) -> tuple[ParseNode, ...]:
        """Split one line of text into text runs and editorial remarks."""
        children: list[ParseNode] = []
        cursor = pos
        for m in REMARK.finditer(self.text, pos, end):
            if m.start() > cursor:
                children.append(ParseNode("text", cursor, m.start(), value=self.text[cursor:m.start()]))
            children.append(ParseNode("remark", m.start(), m.end(), value=m.group(1)))
            cursor = m.end()
        if cursor < end:
            children.append(ParseNode("text", cursor, end, value=self.text[cursor:end]))
        return tuple(children)

    def _statement(self, pos: int) -> ParseNode:
        """Consume the rest of the line at ``pos`` as one statement."""
        start = skip_whitespace(self.text, pos)
        end = line_end(self.text, start)
        body_end = start + len(self.text[start:end].rstrip())
        return ParseNode("statement", start, self._next_line(start), self._clauses(start, body_end))

    def _heading(self, pos: int, end: int) -> ParseNode | None:
        title = self.text[pos:end].strip()
        return ParseNode("heading", pos, end, value=title) if title else None

    # ------------------------------------------------------------------
    # Document level

    @rule("act")
    def act(self, pos: int) -> ParseNode | None:
        children: list[ParseNode] = []
        preface = self.preface(pos)
        children.append(preface)
        cursor = preface.end
        preamble = self.preamble(cursor)
        if preamble is not None:
            children.append(preamble)
            cursor = preamble.end
        body = self.body(cursor)
        children.append(body)
        schedules = self.schedules_container(body.end)
        children.append(schedules)
        return ParseNode("act", pos, schedules.end, tuple(children))

    def _pre_body_statements(self, pos: int) -> tuple[list[ParseNode], int]:
        statements: list[ParseNode] = []
        cursor = self._blank_lines(pos)
        while cursor < len(self.text):
            start = skip_whitespace(self.text, cursor)
            if self.classifier.preamble(self.text, start) or self._lookahead(self._header_at, cursor):
                break
            statement = self._statement(cursor)
            statements.append(statement)
            cursor = self._blank_lines(statement.end)
        return statements, cursor

    @rule("preface")
    def preface(self, pos: int) -> ParseNode | None:
        cursor = self._blank_lines(pos)
        keyword = self.classifier.preface(self.text, skip_whitespace(self.text, cursor))
        if keyword is not None:
            cursor = self._next_line(keyword.end)
        statements, cursor = self._pre_body_statements(cursor)
        return ParseNode("preface", pos, cursor, tuple(statements))

    @rule("preamble")
    def preamble(self, pos: int) -> ParseNode | None:
        cursor = self._blank_lines(pos)
        keyword = self.classifier.preamble(self.text, skip_whitespace(self.text, cursor))
        if keyword is None:
            return None
        statements, cursor = self._pre_body_statements(self._next_line(keyword.end))
        return ParseNode("preamble", pos, cursor, tuple(statements))

    def _structure(self, pos: int, children: list[ParseNode], alternatives: tuple[RuleMethod, ...]) -> int:
        """Append general content then structural children; return the end offset."""
        cursor = self._blank_lines(pos)
        content = self.general_content(cursor)
        if content is not None:
            children.append(content)
            cursor = content.end
        while True:
            cursor = self._blank_lines(cursor)
            node = None
            for alternative in alternatives:
                node = alternative(self, cursor)
                if node is not None:
                    break
            if node is None:
                return cursor
            children.append(node)
            cursor = node.end

    @rule("body")
    def body(self, pos: int) -> ParseNode | None:
        children: list[ParseNode] = []
        end = self._structure(pos, children, (Parser.chapter, Parser.part, Parser.section))
        return ParseNode("body", pos, end, tuple(children))

    # ------------------------------------------------------------------
    # Chapters and parts

    def _structural_header(self, pos: int, marker: Marker | None) -> tuple[list[ParseNode], int] | None:
        """Parse ``<keyword> <num> [sep] [title]`` plus an optional heading line."""
        if marker is None or not at_line_start(self.text, marker.start):
            return None
        children = [ParseNode("num", marker.start, marker.end, value=marker.num)]
        sep = HEADING_SEPARATOR.match(self.text, marker.end)
        end = line_end(self.text, sep.end())
        cursor = self._next_line(sep.end())
        heading = self._heading(sep.end(), end)
        if heading is None and self._heading_line_at(cursor):
            start = skip_whitespace(self.text, cursor)
            heading = self._heading(start, line_end(self.text, start))
            cursor = self._next_line(start)
        if heading is not None:
            children.append(heading)
        return children, cursor

    @rule("chapter")
    def chapter(self, pos: int) -> ParseNode | None:
        start = skip_whitespace(self.text, pos)
        header = self._structural_header(pos, self.classifier.chapter(self.text, start))
        if header is None:
            return None
        children, cursor = header
        end = self._structure(cursor, children, (Parser.part, Parser.section))
        return ParseNode("chapter", pos, end, tuple(children))

    @rule("part")
    def part(self, pos: int) -> ParseNode | None:
        start = skip_whitespace(self.text, pos)
        header = self._structural_header(pos, self.classifier.part(self.text, start))
        if header is None:
            return None
        children, cursor = header
        end = self._structure(cursor, children, (Parser.section,))
        return ParseNode("part", pos, end, tuple(children))

    # ------------------------------------------------------------------
    # Sections and subsections

    def _section_title(self, pos: int) -> tuple[list[ParseNode], int] | None:
        """Parse a section header; return its leaves and where content starts.

        Content may start mid-line: ``10. (1) text`` continues straight into
        a subsection and, with the number after the title, any text after
        the number belongs to the section body.
        """
        if not at_line_start(self.text, pos):
            return None
        start = skip_whitespace(self.text, pos)
        marker = self.classifier.section(self.text, start)
        if marker is None:
            return None
        if self.classifier.section_number_after_title:
            number_line = line_end(self.text, start) + 1
            number_start = skip_whitespace(self.text, number_line)
            num = ParseNode("num", number_start, marker.end, value=marker.num)
            children = [num]
            heading = self._heading(start, line_end(self.text, start))
            if heading is not None:
                children.append(heading)
            content = marker.end
            if EOL.match(self.text, content):
                content = self._next_line(content)
            return children, content
        children = [ParseNode("num", marker.start, marker.end, value=marker.num)]
        after = skip_whitespace(self.text, marker.end)
        if self.classifier.numbered_statement(self.text, after) or self.classifier.list_item(self.text, after):
            return children, after
        heading = self._heading(after, line_end(self.text, after))
        if heading is not None:
            children.append(heading)
        return children, self._next_line(after)

    @rule("section")
    def section(self, pos: int) -> ParseNode | None:
        header = self._section_title(pos)
        if header is None:
            return None
        children, cursor = header
        while True:
            if at_line_start(self.text, cursor):
                cursor = self._blank_lines(cursor)
                if self._lookahead(self._header_at, cursor):
                    break
            node = self.subsection(cursor) or self.block_paragraphs(cursor)
            if node is None:
                break
            children.append(node)
            cursor = node.end
        return ParseNode("section", pos, cursor, tuple(children))

    @rule("subsection")
    def subsection(self, pos: int) -> ParseNode | None:
        start = skip_whitespace(self.text, pos)
        marker = self.classifier.numbered_statement(self.text, start)
        if marker is None:
            return None
        children = [ParseNode("num", marker.start, marker.end, value=marker.num)]
        after = skip_whitespace(self.text, marker.end)
        eol = EOL.match(self.text, after)
        if eol is not None:
            cursor = eol.end()
        else:
            lead = self.blocklist(after) or self._statement(after)
            children.append(lead)
            cursor = lead.end
        cursor = self._blocks(cursor, children, strict=True)
        return ParseNode("subsection", pos, cursor, tuple(children), value=marker.raw)

    # ------------------------------------------------------------------
    # Content blocks

    def _blocks(self, pos: int, children: list[ParseNode], *, strict: bool) -> int:
        """Append tables, block lists and statements; return the end offset."""
        cursor = pos
        while True:
            if at_line_start(self.text, cursor):
                cursor = self._blank_lines(cursor)
                if self._lookahead(self._header_at, cursor):
                    return cursor
            statement = self.naked_statement if strict else self.general_statement
            node = self.table(cursor) or self.blocklist(cursor) or statement(cursor)
            if node is None:
                return cursor
            children.append(node)
            cursor = node.end

    @rule("block_paragraphs")
    def block_paragraphs(self, pos: int) -> ParseNode | None:
        children: list[ParseNode] = []
        end = self._blocks(pos, children, strict=True)
        if not children:
            return None
        return ParseNode("paragraph", pos, end, tuple(children))

    @rule("general_content")
    def general_content(self, pos: int) -> ParseNode | None:
        children: list[ParseNode] = []
        end = self._blocks(pos, children, strict=False)
        if not children:
            return None
        return ParseNode("paragraph", pos, end, tuple(children))

    def _plain_line(self, pos: int, *, strict: bool) -> bool:
        start = skip_whitespace(self.text, pos)
        if start >= len(self.text) or EOL.match(self.text, start):
            return False
        if self._lookahead(self._header_at, pos):
            return False
        if strict and self.classifier.numbered_statement(self.text, start):
            return False
        if self.classifier.list_item(self.text, start, allow_bare=at_line_start(self.text, start)):
            return False
        marker = self.classifier.table(self.text, start)
        return marker is None or marker.raw != "{|"

    @rule("naked_statement")
    def naked_statement(self, pos: int) -> ParseNode | None:
        if not self._plain_line(pos, strict=True):
            return None
        return self._statement(pos)

    @rule("general_statement")
    def general_statement(self, pos: int) -> ParseNode | None:
        if not self._plain_line(pos, strict=False):
            return None
        return self._statement(pos)

    @rule("blocklist")
    def blocklist(self, pos: int) -> ParseNode | None:
        items: list[ParseNode] = []
        cursor = pos
        end = pos
        while cursor < len(self.text):
            if items:
                cursor = self._blank_lines(cursor)
            if self._lookahead(self._header_at, cursor):
                break
            start = skip_whitespace(self.text, cursor)
            markers = leading_markers(
                self.classifier, self.text, start, allow_bare=at_line_start(self.text, start)
            )
            if not markers:
                break
            body = skip_whitespace(self.text, markers[-1].end)
            statement = None if EOL.match(self.text, body) else self._statement(body)
            end = self._next_line(body)
            items.extend(split_items(markers, statement, end))
            cursor = end
        if not items:
            return None
        return ParseNode("blocklist", pos, end, tuple(items))

    @rule("table")
    def table(self, pos: int) -> ParseNode | None:
        start = skip_whitespace(self.text, pos)
        opener = self.classifier.table(self.text, start)
        if opener is None or opener.raw != "{|":
            return None
        rows: list[ParseNode] = []
        cells: list[ParseNode] = []
        row_start = cursor = self._next_line(start)
        while True:
            cursor = self._blank_lines(cursor)
            head = skip_whitespace(self.text, cursor)
            marker = self.classifier.table(self.text, head)
            if marker is None or marker.raw == "{|":
                for name in ("table_cell", "table_row", "table_close"):
                    self._expect(head, name)
                return None
            if marker.raw in ("|-", "|}"):
                if cells:
                    rows.append(ParseNode("table_row", row_start, cursor, tuple(cells)))
                cells = []
                row_start = cursor = self._next_line(head)
                if marker.raw == "|}":
                    return ParseNode("table", pos, cursor, tuple(rows))
                continue
            body = skip_whitespace(self.text, marker.end)
            next_line = self._next_line(head)
            if EOL.match(self.text, body):
                cell_children: tuple[ParseNode, ...] = ()
            else:
                cell_children = (self._statement(body),)
            cells.append(ParseNode("table_cell", head, next_line, cell_children))
            cursor = next_line

    @rule("clauses")
    def clauses(self, pos: int) -> ParseNode | None:
        start = skip_whitespace(self.text, pos)
        end = line_end(self.text, start)
        body_end = start + len(self.text[start:end].rstrip())
        if body_end == start:
            return None
        return ParseNode("clauses", start, body_end, self._clauses(start, body_end))

    # ------------------------------------------------------------------
    # Schedules

    @rule("schedule")
    def schedule(self, pos: int) -> ParseNode | None:
        if not at_line_start(self.text, pos):
            return None
        start = skip_whitespace(self.text, pos)
        marker = self.classifier.schedule(self.text, start)
        if marker is None:
            return None
        children: list[ParseNode] = []
        if marker.num is not None:
            children.append(ParseNode("num", start, marker.end, value=marker.num))
        end = line_end(self.text, marker.end)
        title = self.text[marker.end:end].strip()
        if title:
            children.append(ParseNode("title", marker.end, end, value=title))
        cursor = self._next_line(marker.end)
        if self._heading_line_at(cursor):
            line_start = skip_whitespace(self.text, cursor)
            heading = self._heading(line_start, line_end(self.text, line_start))
            if heading is not None:
                children.append(heading)
            cursor = self._next_line(line_start)
        end = self._structure(cursor, children, (Parser.chapter, Parser.part, Parser.section))
        return ParseNode("schedule", pos, end, tuple(children))

    def _schedule_run(self, pos: int) -> tuple[list[ParseNode], int]:
        schedules: list[ParseNode] = []
        cursor = pos
        while True:
            cursor = self._blank_lines(cursor)
            node = self.schedule(cursor)
            if node is None:
                return schedules, cursor
            schedules.append(node)
            cursor = node.end

    @rule("schedules")
    def schedules(self, pos: int) -> ParseNode | None:
        found, end = self._schedule_run(pos)
        if not found:
            return None
        return ParseNode("schedules", pos, end, tuple(found))

    @rule("schedules_container")
    def schedules_container(self, pos: int) -> ParseNode | None:
        found, end = self._schedule_run(pos)
        return ParseNode("schedules", pos, end, tuple(found))


def parse_text(text: str, root: str = "act", *, section_number_after_title: bool = False) -> ParseNode:
    """Parse legislation text starting from a named grammar rule.

    Args:
        text: Plain-text source with ``\\n`` line endings.
        root: Entry rule name, e.g. ``act``, ``section`` or ``table``.
        section_number_after_title: Section headers are written as a title
            line followed by a number line.

    Returns:
        Parse tree for the whole input.

    Raises:
        ParseError: If the input does not match ``root`` in full.
    """
    root = getattr(root, "rule_name", root)
    logger.debug("Parsing %d characters from rule '%s'", len(text), root)
    parser = Parser(text, MarkerClassifier(section_number_after_title))
    return parser.parse(root)


__all__ = ["Parser", "parse_text", "rule"]
