"""Typed structural nodes for a parsed act."""
from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import ClassVar, Iterator, Optional, TypeVar

N = TypeVar("N", bound="Node")


@dataclass(eq=False)
class Node:
    """Base class for every structural node.

    Children are owned top-down. The parent link is a weak reference set by
    `adopt` and only answers ancestry queries; element id prefixes are
    carried down the traversal as an `IdScope` and never read from it.
    """

    kind: ClassVar[str] = "node"

    children: list["Node"] = field(default_factory=list)
    _parent: Optional[weakref.ReferenceType] = field(default=None, repr=False, compare=False)

    @property
    def parent(self) -> Optional["Node"]:
        """Containing node, or None for a root."""
        return self._parent() if self._parent is not None else None

    def adopt(self, child: N) -> N:
        """Append ``child`` and point its parent link here.

        Args:
            child: Node to attach.

        Returns:
            The attached child.
        """
        child._parent = weakref.ref(self)
        self.children.append(child)
        return child

    def ancestors(self) -> Iterator["Node"]:
        """Yield the parent chain from nearest to root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def children_of(self, cls: type[N]) -> list[N]:
        """Return direct children that are instances of ``cls``."""
        return [child for child in self.children if isinstance(child, cls)]


@dataclass(eq=False)
class Text(Node):
    """A run of plain text inside a statement."""

    kind: ClassVar[str] = "text"
    value: str = ""


@dataclass(eq=False)
class Remark(Node):
    """An inline editorial remark, stored without its ``[[`` ``]]`` delimiters."""

    kind: ClassVar[str] = "remark"
    value: str = ""


@dataclass(eq=False)
class Statement(Node):
    """One line of text rendered as a ``<p>``."""

    kind: ClassVar[str] = "statement"

    @property
    def text(self) -> str:
        """Statement text with remarks in their authored ``[[...]]`` form."""
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, Remark):
                parts.append(f"[[{child.value}]]")
            elif isinstance(child, Text):
                parts.append(child.value)
        return "".join(parts)


@dataclass(eq=False)
class Heading(Node):
    """Title of a structural element with whitespace collapsed."""

    kind: ClassVar[str] = "heading"
    title: str = ""


@dataclass(eq=False)
class Item(Node):
    """List entry; ``marker`` is the authored token, ``num`` its bare form."""

    kind: ClassVar[str] = "item"
    num: str = ""
    marker: str = ""


@dataclass(eq=False)
class BlockList(Node):
    kind: ClassVar[str] = "blocklist"


@dataclass(eq=False)
class TableCell(Node):
    kind: ClassVar[str] = "table_cell"


@dataclass(eq=False)
class TableRow(Node):
    kind: ClassVar[str] = "table_row"


@dataclass(eq=False)
class Table(Node):
    kind: ClassVar[str] = "table"


@dataclass(eq=False)
class Paragraph(Node):
    """Free-content container holding statements, block lists and tables."""

    kind: ClassVar[str] = "paragraph"


@dataclass(eq=False)
class Subsection(Node):
    """Numbered statement such as ``(1)`` or ``9.9`` with its content."""

    kind: ClassVar[str] = "subsection"
    num: str = ""
    marker: str = ""


@dataclass(eq=False)
class Section(Node):
    kind: ClassVar[str] = "section"
    num: str = ""
    heading: Optional[Heading] = None


@dataclass(eq=False)
class Part(Node):
    kind: ClassVar[str] = "part"
    num: str = ""
    heading: Optional[Heading] = None


@dataclass(eq=False)
class Chapter(Node):
    kind: ClassVar[str] = "chapter"
    num: str = ""
    heading: Optional[Heading] = None


@dataclass(eq=False)
class Preface(Node):
    kind: ClassVar[str] = "preface"


@dataclass(eq=False)
class Preamble(Node):
    kind: ClassVar[str] = "preamble"


@dataclass(eq=False)
class Body(Node):
    kind: ClassVar[str] = "body"


@dataclass(eq=False)
class Schedule(Node):
    """One schedule: optional number, inline title and heading line.

    Attributes:
        num: Schedule number without quotes, if given.
        title: Inline title following the header separator, if given.
        heading: Heading taken from the line after the header, if any.
    """

    kind: ClassVar[str] = "schedule"
    num: Optional[str] = None
    title: Optional[str] = None
    heading: Optional[Heading] = None


@dataclass(eq=False)
class Schedules(Node):
    kind: ClassVar[str] = "schedules"


@dataclass(eq=False)
class Act(Node):
    """Root of a parsed document."""

    kind: ClassVar[str] = "act"

    @property
    def preface(self) -> Preface:
        found = self.children_of(Preface)
        return found[0] if found else Preface()

    @property
    def preamble(self) -> Optional[Preamble]:
        found = self.children_of(Preamble)
        return found[0] if found else None

    @property
    def body(self) -> Body:
        found = self.children_of(Body)
        return found[0] if found else Body()

    @property
    def schedules(self) -> list[Schedule]:
        found = self.children_of(Schedules)
        return found[0].children_of(Schedule) if found else []


__all__ = [
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
