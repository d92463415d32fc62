"""Tests for the typed node model and the parse tree projection."""
from __future__ import annotations

import pytest

from lawtext_akn.grammar.engine import parse_text
from lawtext_akn.grammar.tree import ParseNode
from lawtext_akn.model.builder import build_tree
from lawtext_akn.model.nodes import (
    Act,
    BlockList,
    Chapter,
    Item,
    Paragraph,
    Remark,
    Schedule,
    Section,
    Statement,
    Subsection,
    Text,
)


def test_build_tree_projects_act() -> None:
    """An act exposes its preface, body and schedules as properties."""

    act = build_tree(parse_text("Intro\nChapter 1 Start\n1. Section\n(1) hello\nSchedule 1 - Forms\n"))

    assert isinstance(act, Act)
    assert [s.text for s in act.preface.children_of(Statement)] == ["Intro"]
    assert act.preamble is None
    (chapter,) = act.body.children_of(Chapter)
    assert chapter.num == "1"
    assert chapter.heading is not None and chapter.heading.title == "Start"
    (schedule,) = act.schedules
    assert isinstance(schedule, Schedule)
    assert schedule.num == "1"
    assert schedule.title == "Forms"


def test_headings_collapse_whitespace() -> None:
    """Runs of whitespace inside a heading become single spaces."""

    section = build_tree(parse_text("1.   Short    title\nbar\n", "section"))

    assert isinstance(section, Section)
    assert section.heading is not None
    assert section.heading.title == "Short title"


def test_subsection_keeps_marker_and_number() -> None:
    """The bare number drives ids; the marker is what gets displayed."""

    subsection = build_tree(parse_text("9.9. foo\n", "subsection"))

    assert isinstance(subsection, Subsection)
    assert subsection.num == "9.9"
    assert subsection.marker == "9.9"


def test_items_record_marker_and_parent_links() -> None:
    """Parent links allow walking from an item to the enclosing list."""

    paragraph = build_tree(parse_text("Intro\n(a) one\n(b) two\n", "general_content"))

    assert isinstance(paragraph, Paragraph)
    (block_list,) = paragraph.children_of(BlockList)
    first = block_list.children_of(Item)[0]
    assert (first.num, first.marker) == ("a", "(a)")
    assert first.parent is block_list
    assert list(first.ancestors()) == [block_list, paragraph]
    assert paragraph.parent is None


def test_statement_text_restores_remarks() -> None:
    """Statement text rebuilds the authored remark brackets."""

    statement = build_tree(parse_text("a [[note]] b", "clauses"))

    assert isinstance(statement, Statement)
    assert [type(c) for c in statement.children] == [Text, Remark, Text]
    assert statement.text == "a [[note]] b"


def test_empty_act_properties_have_defaults() -> None:
    """Missing parts of an act fall back to empty containers."""

    act = Act()

    assert act.preface.children == []
    assert act.body.children == []
    assert act.schedules == []


@pytest.mark.parametrize("kind", ["num", "heading", "title", "unknown"])
def test_build_tree_rejects_leaves(kind: str) -> None:
    """Leaf and unknown parse nodes have no typed counterpart."""

    with pytest.raises(ValueError):
        build_tree(ParseNode(kind, 0, 0, value="x"))
