"""Identifier construction for serialized elements.

Identifiers are built from an explicit `IdScope` handed down the traversal
instead of counters kept on the serializer, so any subtree can be rendered
on its own and produce the same ids it would inside a full document.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IdScope:
    """Identifier prefix in effect for one container.

    Attributes:
        prefix: Text prepended to local ids, ending in ``.`` when non-empty.
    """

    prefix: str = ""

    def local(self, name: str) -> str:
        """Return the id of a child called ``name`` in this scope."""
        return f"{self.prefix}{name}"

    @classmethod
    def within(cls, element_id: str) -> "IdScope":
        """Scope for the children of the element identified by ``element_id``."""
        return cls(f"{element_id}.")


def chapter_id(num: str) -> str:
    return f"chapter-{num}"


def part_id(num: str) -> str:
    return f"part-{num}"


def section_id(num: str) -> str:
    return f"section-{num}"


def subsection_id(scope: IdScope, num: str) -> str:
    return scope.local(num)


def paragraph_id(scope: IdScope, index: int) -> str:
    """Paragraph id; ``index`` counts paragraph containers of one parent only."""
    return scope.local(f"paragraph-{index}")


def block_list_id(scope: IdScope, sequence: int) -> str:
    """Block list id; ``sequence`` is the list's position among all content siblings."""
    return scope.local(f"list{sequence}")


def table_id(scope: IdScope, sequence: int) -> str:
    """Table id; ``sequence`` is shared with the other content siblings."""
    return scope.local(f"table{sequence}")


def item_id(list_id: str, num: str) -> str:
    return f"{list_id}.{num}"


def component_id(slug: str) -> str:
    return f"component-{slug}"


__all__ = [
    "IdScope",
    "block_list_id",
    "chapter_id",
    "component_id",
    "item_id",
    "paragraph_id",
    "part_id",
    "section_id",
    "subsection_id",
    "table_id",
]
