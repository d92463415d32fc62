"""Projection of untyped parse trees onto typed structural nodes."""
from __future__ import annotations

from typing import Callable

from lawtext_akn.grammar.tree import ParseNode
from lawtext_akn.model.nodes import (
    Act,
    BlockList,
    Body,
    Chapter,
    Heading,
    Item,
    Node,
    Paragraph,
    Part,
    Preamble,
    Preface,
    Remark,
    Schedule,
    Schedules,
    Section,
    Statement,
    Subsection,
    Table,
    TableCell,
    TableRow,
    Text,
)

# Leaves carried by their parent as attributes rather than as children.
_LEAF_KINDS = frozenset({"num", "heading", "title"})


def _clean(text: str | None) -> str:
    """Collapse whitespace runs into single spaces.

    Args:
        text: Raw text, possibly None.

    Returns:
        Cleaned text, empty when nothing remains.
    """
    if not text:
        return ""
    return " ".join(text.split())


def _leaf(node: ParseNode, kind: str) -> str | None:
    found = node.find(kind)
    return found.value if found is not None else None


def _heading(node: ParseNode) -> Heading | None:
    title = _clean(_leaf(node, "heading"))
    return Heading(title=title) if title else None


def _adopt_children(parent: Node, node: ParseNode) -> Node:
    for child in node.children:
        if child.kind not in _LEAF_KINDS:
            parent.adopt(build_tree(child))
    return parent


def _container(cls: type[Node]) -> Callable[[ParseNode], Node]:
    def build(node: ParseNode) -> Node:
        return _adopt_children(cls(), node)

    return build


def _numbered(cls: type[Chapter] | type[Part] | type[Section]) -> Callable[[ParseNode], Node]:
    def build(node: ParseNode) -> Node:
        return _adopt_children(cls(num=_leaf(node, "num") or "", heading=_heading(node)), node)

    return build


def _build_subsection(node: ParseNode) -> Node:
    marker = (node.value or "").strip().rstrip(".")
    return _adopt_children(Subsection(num=_leaf(node, "num") or "", marker=marker), node)


def _build_item(node: ParseNode) -> Node:
    return _adopt_children(Item(num=_leaf(node, "num") or "", marker=(node.value or "").strip()), node)


def _build_schedule(node: ParseNode) -> Node:
    schedule = Schedule(
        num=_leaf(node, "num"),
        title=_clean(_leaf(node, "title")) or None,
        heading=_heading(node),
    )
    return _adopt_children(schedule, node)


_BUILDERS: dict[str, Callable[[ParseNode], Node]] = {
    "act": _container(Act),
    "preface": _container(Preface),
    "preamble": _container(Preamble),
    "body": _container(Body),
    "chapter": _numbered(Chapter),
    "part": _numbered(Part),
    "section": _numbered(Section),
    "subsection": _build_subsection,
    "paragraph": _container(Paragraph),
    "blocklist": _container(BlockList),
    "item": _build_item,
    "table": _container(Table),
    "table_row": _container(TableRow),
    "table_cell": _container(TableCell),
    "statement": _container(Statement),
    "clauses": _container(Statement),
    "text": lambda node: Text(value=node.value or ""),
    "remark": lambda node: Remark(value=node.value or ""),
    "schedule": _build_schedule,
    "schedules": _container(Schedules),
}


def build_tree(node: ParseNode) -> Node:
    """Convert a parse node and its descendants into typed nodes.

    Args:
        node: Parse node produced by the grammar engine.

    Returns:
        Typed node of the matching class with parent links set.

    Raises:
        ValueError: If ``node`` is a leaf or unknown kind.
    """
    builder = _BUILDERS.get(node.kind)
    if builder is None:
        raise ValueError(f"Cannot build a typed node from parse node kind '{node.kind}'")
    return builder(node)


__all__ = ["build_tree"]
