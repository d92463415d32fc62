"""Typed structural model built from parse trees."""

from lawtext_akn.model.builder import build_tree
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

__all__ = [
    "build_tree",
    "Act",
    "BlockList",
    "Body",
    "Chapter",
    "Heading",
    "Item",
    "Node",
    "Paragraph",
    "Part",
    "Preamble",
    "Preface",
    "Remark",
    "Schedule",
    "Schedules",
    "Section",
    "Statement",
    "Subsection",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
]
