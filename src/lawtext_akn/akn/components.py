"""Splitting a parsed act into independently identified components."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from lawtext_akn.config.schema import DocumentMetadata
from lawtext_akn.model.nodes import Act, Heading, Node, Schedule

MAIN_SLUG = "main"
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Component:
    """A rendering unit: the main act or one schedule.

    Attributes:
        slug: Short name used in ids and FRBR URIs.
        alias: Display title for the work's FRBRalias.
        heading: Heading rendered inside the component body, if any.
        body: Typed node holding the component's content.
    """

    slug: str
    alias: str
    heading: Optional[Heading]
    body: Node


def schedule_slug(schedule: Schedule) -> str:
    """Return ``schedule<N>``, the squashed title, or ``schedule``."""
    if schedule.num:
        return f"schedule{schedule.num}"
    if schedule.title:
        return _WHITESPACE.sub("", schedule.title).lower()
    return "schedule"


def schedule_alias(schedule: Schedule) -> str:
    """Return the inline title, ``Schedule <N>`` or ``Schedule``."""
    if schedule.title:
        return schedule.title
    if schedule.num:
        return f"Schedule {schedule.num}"
    return "Schedule"


def schedule_component(schedule: Schedule) -> Component:
    """Build the component for one schedule.

    Args:
        schedule: Typed schedule node.

    Returns:
        Component whose heading never replaces the alias.
    """
    return Component(
        slug=schedule_slug(schedule),
        alias=schedule_alias(schedule),
        heading=schedule.heading,
        body=schedule,
    )


def main_component(act: Act, meta: DocumentMetadata) -> Component:
    return Component(slug=MAIN_SLUG, alias=meta.short_title, heading=None, body=act)


def split_components(act: Act, meta: DocumentMetadata) -> list[Component]:
    """Return the main component followed by one component per schedule.

    Args:
        act: Typed act.
        meta: Document metadata supplying the main alias.

    Returns:
        Components in document order.
    """
    return [main_component(act, meta)] + [schedule_component(s) for s in act.schedules]


__all__ = [
    "Component",
    "main_component",
    "schedule_alias",
    "schedule_component",
    "schedule_slug",
    "split_components",
]
