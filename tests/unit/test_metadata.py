"""Tests for FRBR metadata and schedule components."""
from __future__ import annotations

from datetime import date

import pytest
from lxml import etree
from pydantic import ValidationError

from lawtext_akn.akn.components import schedule_alias, schedule_slug, split_components
from lawtext_akn.akn.metadata import MetadataWriter, author_href, expression_uri, work_uri
from lawtext_akn.akn.serializer import AknSerializer, to_xml_string
from lawtext_akn.config.schema import DocumentMetadata, ReferencesConfig
from lawtext_akn.grammar.engine import parse_text
from lawtext_akn.model.builder import build_tree
from lawtext_akn.model.nodes import Schedule


def test_uris_default_to_placeholder_act() -> None:
    """Default metadata produces the placeholder work and expression URIs."""

    meta = DocumentMetadata()

    assert work_uri(meta) == "/za/act/1980/01"
    assert expression_uri(meta) == "/za/act/1980/01/eng@"
    assert author_href(ReferencesConfig(), meta) == "/ontology/organization/za/council"


def test_locality_joins_country_code() -> None:
    """A locality is appended to the country in the work URI."""

    meta = DocumentMetadata(country="za", locality="cpt", number=12, year=2009)

    assert work_uri(meta) == "/za-cpt/act/2009/12"


def test_country_must_not_be_empty() -> None:
    """Blank codes are rejected when the metadata is built."""

    with pytest.raises(ValidationError):
        DocumentMetadata(country="  ")


def test_identification_block() -> None:
    """Work and expression carry the enactment date; the manifestation the generation date."""

    serializer = AknSerializer(generated=date(2024, 1, 1))
    writer = MetadataWriter(serializer._el, serializer.metadata, serializer.references, serializer.generated)
    meta = etree.Element("meta")

    writer.identification(meta, "main", "Short Title")

    assert to_xml_string(meta) == (
        "<meta>\n"
        '  <identification source="#lawtext">\n'
        "    <FRBRWork>\n"
        '      <FRBRthis value="/za/act/1980/01/main"/>\n'
        '      <FRBRuri value="/za/act/1980/01"/>\n'
        '      <FRBRalias value="Short Title"/>\n'
        '      <FRBRdate date="1980-01-01" name="Generation"/>\n'
        '      <FRBRauthor href="#council"/>\n'
        '      <FRBRcountry value="za"/>\n'
        "    </FRBRWork>\n"
        "    <FRBRExpression>\n"
        '      <FRBRthis value="/za/act/1980/01/eng@/main"/>\n'
        '      <FRBRuri value="/za/act/1980/01/eng@"/>\n'
        '      <FRBRdate date="1980-01-01" name="Generation"/>\n'
        '      <FRBRauthor href="#council"/>\n'
        '      <FRBRlanguage language="eng"/>\n'
        "    </FRBRExpression>\n"
        "    <FRBRManifestation>\n"
        '      <FRBRthis value="/za/act/1980/01/eng@/main"/>\n'
        '      <FRBRuri value="/za/act/1980/01/eng@"/>\n'
        '      <FRBRdate date="2024-01-01" name="Generation"/>\n'
        '      <FRBRauthor href="#lawtext"/>\n'
        "    </FRBRManifestation>\n"
        "  </identification>\n"
        "</meta>"
    )


def test_references_block_uses_configured_organisations() -> None:
    """Tool and author references come from the references config."""

    references = ReferencesConfig(tool_id="slaw", tool_href="/ontology/organization/za/slaw", tool_show_as="Slaw")
    serializer = AknSerializer(references=references, generated=date(2024, 1, 1))
    meta = etree.Element("meta")

    serializer._meta.references_block(meta)

    assert to_xml_string(meta) == (
        "<meta>\n"
        '  <references source="#this">\n'
        '    <TLCOrganization id="slaw" href="/ontology/organization/za/slaw" showAs="Slaw"/>\n'
        '    <TLCOrganization id="council" href="/ontology/organization/za/council" showAs="Council"/>\n'
        "  </references>\n"
        "</meta>"
    )


@pytest.mark.parametrize(
    ("schedule", "slug", "alias"),
    [
        (Schedule(num="2", title="Oaths."), "schedule2", "Oaths."),
        (Schedule(num="2"), "schedule2", "Schedule 2"),
        (Schedule(title="First Schedule"), "firstschedule", "First Schedule"),
        (Schedule(), "schedule", "Schedule"),
    ],
)
def test_schedule_slug_and_alias(schedule: Schedule, slug: str, alias: str) -> None:
    """Slugs prefer the number; aliases prefer the inline title."""

    assert schedule_slug(schedule) == slug
    assert schedule_alias(schedule) == alias


def test_split_components_orders_main_first() -> None:
    """The main act component comes before one component per schedule."""

    act = build_tree(parse_text("1. Section\nbar\nSchedule 1. Oaths.\nSchedule 2. Fees.\n"))
    meta = DocumentMetadata(short_title="Test Act")

    components = split_components(act, meta)  # type: ignore[arg-type]

    assert [c.slug for c in components] == ["main", "schedule1", "schedule2"]
    assert components[0].alias == "Test Act"
