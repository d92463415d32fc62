"""Untyped parse tree produced by the grammar engine."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class ParseNode:
    """One matched grammar production.

    Attributes:
        kind: Production name (``section``, ``statement``, ``remark``...).
        start: Offset of the first matched character.
        end: Offset just past the last matched character.
        children: Child productions in source order.
        value: Leaf payload (raw number, heading line, text run) when the
            production carries one.
    """

    kind: str
    start: int
    end: int
    children: tuple["ParseNode", ...] = ()
    value: str | None = None

    def text(self, source: str) -> str:
        """Return the source text covered by this node."""
        return source[self.start:self.end]

    def find(self, kind: str) -> "ParseNode | None":
        """Return the first direct child of the given kind."""
        for child in self.children:
            if child.kind == kind:
                return child
        return None

    def find_all(self, kinds: str | Iterable[str]) -> list["ParseNode"]:
        """Return direct children whose kind is in ``kinds``."""
        wanted = {kinds} if isinstance(kinds, str) else set(kinds)
        return [child for child in self.children if child.kind in wanted]

    def walk(self) -> Iterator["ParseNode"]:
        """Yield this node and all descendants in preorder."""
        yield self
        for child in self.children:
            yield from child.walk()


class ParseError(ValueError):
    """Input did not match the requested grammar rule in full.

    Attributes:
        text: Source text that was parsed.
        position: Furthest offset any terminal reached before failing.
        expected: Rule names that were still expected at ``position``.
    """

    def __init__(self, text: str, position: int, expected: Iterable[str]) -> None:
        self.text = text
        self.position = position
        self.expected = tuple(sorted(set(expected)))
        super().__init__(self._message())

    @property
    def line(self) -> int:
        """1-based line number of ``position``."""
        return self.text.count("\n", 0, self.position) + 1

    @property
    def column(self) -> int:
        """1-based column number of ``position``."""
        return self.position - (self.text.rfind("\n", 0, self.position) + 1) + 1

    def _message(self) -> str:
        expected = ", ".join(self.expected) or "nothing"
        return f"Parse failed at line {self.line}, column {self.column}: expected {expected}"


__all__ = ["ParseNode", "ParseError"]
