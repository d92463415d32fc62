"""Tests for Akoma-Ntoso serialization of typed nodes."""
from __future__ import annotations

from datetime import date

import pytest

from lawtext_akn.akn.serializer import AKN_NAMESPACE, AknSerializer, to_xml_string
from lawtext_akn.grammar.engine import parse_text
from lawtext_akn.model.builder import build_tree
from lawtext_akn.model.nodes import Schedules, Subsection, Text

GENERATED = date(2024, 1, 1)


def _render(text: str, rule: str, prefix: str = "", index: int = 0) -> str:
    node = build_tree(parse_text(text, rule))
    element = AknSerializer(generated=GENERATED).fragment(node, prefix, index)
    assert element is not None
    return to_xml_string(element)


def test_subsection_with_statement() -> None:
    """A subsection keeps its authored marker and wraps its body in content."""

    xml = _render("(2) foo bar\n", "subsection", "section-1.")

    assert xml == (
        '<subsection id="section-1.2">\n'
        "  <num>(2)</num>\n"
        "  <content>\n"
        "    <p>foo bar</p>\n"
        "  </content>\n"
        "</subsection>"
    )


def test_subsection_block_list_ids_use_sequence_position() -> None:
    """A list's id counts every content sibling before it, not only lists."""

    xml = _render("(1) a list\n(a) item 1\n(b) item 2\n", "subsection", "section-1.")

    assert xml == (
        '<subsection id="section-1.1">\n'
        "  <num>(1)</num>\n"
        "  <content>\n"
        "    <p>a list</p>\n"
        '    <blockList id="section-1.1.list1">\n'
        '      <item id="section-1.1.list1.a">\n'
        "        <num>(a)</num>\n"
        "        <p>item 1</p>\n"
        "      </item>\n"
        '      <item id="section-1.1.list1.b">\n'
        "        <num>(b)</num>\n"
        "        <p>item 2</p>\n"
        "      </item>\n"
        "    </blockList>\n"
        "  </content>\n"
        "</subsection>"
    )


def test_split_lists_get_distinct_ids() -> None:
    """Prose between two marker runs yields two lists numbered by position."""

    xml = _render("(1) a list\n(a) item 1\nsome text\n(c) item 3\n", "subsection")

    assert '<blockList id="1.list1">' in xml
    assert '<blockList id="1.list3">' in xml
    assert '<item id="1.list3.c">' in xml


def test_empty_item_for_stacked_markers() -> None:
    """Every marker but the last on a line renders as an item with only a num."""

    xml = _render("(b) (i) single\n", "blocklist", "1.", 2)

    assert xml == (
        '<blockList id="1.list2">\n'
        '  <item id="1.list2.b">\n'
        "    <num>(b)</num>\n"
        "  </item>\n"
        '  <item id="1.list2.i">\n'
        "    <num>(i)</num>\n"
        "    <p>single</p>\n"
        "  </item>\n"
        "</blockList>"
    )


def test_statement_with_inline_remarks() -> None:
    """Remarks are wrapped in brackets and keep the surrounding text as tails."""

    xml = _render("simple [[remark]] text", "clauses")

    assert xml == '<p>simple <remark status="editorial">[remark]</remark> text</p>'


def test_remark_only_statement_is_indented() -> None:
    """A paragraph made of a remark alone is laid out as an element-only block."""

    xml = _render("(1) [[Repealed by Act 1 of 2000]]\n", "subsection")

    assert xml == (
        '<subsection id="1">\n'
        "  <num>(1)</num>\n"
        "  <content>\n"
        "    <p>\n"
        '      <remark status="editorial">[Repealed by Act 1 of 2000]</remark>\n'
        "    </p>\n"
        "  </content>\n"
        "</subsection>"
    )


def test_section_with_heading_and_subsection() -> None:
    """Sections display their number with a trailing dot."""

    xml = _render("1. Section\n(1) hello\n", "section")

    assert xml == (
        '<section id="section-1">\n'
        "  <num>1.</num>\n"
        "  <heading>Section</heading>\n"
        '  <subsection id="section-1.1">\n'
        "    <num>(1)</num>\n"
        "    <content>\n"
        "      <p>hello</p>\n"
        "    </content>\n"
        "  </subsection>\n"
        "</section>"
    )


def test_section_without_heading_emits_empty_heading() -> None:
    """A section always has a heading element, empty when no title was given."""

    xml = _render("10. (1) Transporters.\n(2) Stuff.\n", "section")

    assert xml.startswith('<section id="section-10">\n  <num>10.</num>\n  <heading/>\n')
    assert '<subsection id="section-10.1">' in xml
    assert '<subsection id="section-10.2">' in xml


def test_body_paragraphs_before_sections() -> None:
    """Leading prose in a body becomes a numbered paragraph."""

    xml = _render("Some intro\n1. Section\nfoo\n", "body")

    assert xml == (
        "<body>\n"
        '  <paragraph id="paragraph-0">\n'
        "    <content>\n"
        "      <p>Some intro</p>\n"
        "    </content>\n"
        "  </paragraph>\n"
        '  <section id="section-1">\n'
        "    <num>1.</num>\n"
        "    <heading>Section</heading>\n"
        '    <paragraph id="section-1.paragraph-0">\n'
        "      <content>\n"
        "        <p>foo</p>\n"
        "      </content>\n"
        "    </paragraph>\n"
        "  </section>\n"
        "</body>"
    )


def test_chapter_and_part_ids_and_headings() -> None:
    """Chapter and part numbers are shown without punctuation."""

    chapter = _render("Chapter 2 - The Heading\n1. Section\nfoo\n", "chapter")
    part = _render("Part II\nForms\n\nSome text before the sections.\n", "part")

    assert chapter.startswith('<chapter id="chapter-2">\n  <num>2</num>\n  <heading>The Heading</heading>\n')
    assert part == (
        '<part id="part-II">\n'
        "  <num>II</num>\n"
        "  <heading>Forms</heading>\n"
        '  <paragraph id="part-II.paragraph-0">\n'
        "    <content>\n"
        "      <p>Some text before the sections.</p>\n"
        "    </content>\n"
        "  </paragraph>\n"
        "</part>"
    )


def test_chapter_without_heading_has_no_heading_element() -> None:
    """Only sections emit an empty heading."""

    xml = _render("Chapter 2:\n\n1. Section\nHello there\n", "chapter")

    assert "<heading/>" not in xml
    assert xml.startswith('<chapter id="chapter-2">\n  <num>2</num>\n  <section id="section-1">')


def test_multi_cell_table_is_written_compactly() -> None:
    """Rows and cells are separated by newlines rather than indentation."""

    xml = _render("{|\n| r1c1\n| r1c2\n|-\n| r2c1\n|}\n", "table", "section-10.paragraph-0.", 1)

    assert xml == (
        '<table id="section-10.paragraph-0.table1">'
        "<tr><td><p>r1c1</p></td>\n<td><p>r1c2</p></td></tr>\n"
        "<tr><td><p>r2c1</p></td></tr>"
        "</table>"
    )


def test_single_cell_table_is_indented() -> None:
    """With one row and one cell there are no separators to keep inline."""

    xml = _render("{|\n| only\n|}\n", "table", "chapter-2.paragraph-0.")

    assert xml == (
        '<table id="chapter-2.paragraph-0.table0">\n'
        "  <tr>\n"
        "    <td>\n"
        "      <p>only</p>\n"
        "    </td>\n"
        "  </tr>\n"
        "</table>"
    )


def test_schedule_component_structure() -> None:
    """A schedule renders as a component whose article carries the heading."""

    node = build_tree(parse_text("Schedule 1 - First Schedule\nSchedule Heading\n\nSome text\n", "schedule"))
    element = AknSerializer(generated=GENERATED).fragment(node)

    assert element.tag == "component"
    assert element.get("id") == "component-schedule1"
    doc = element.find("doc")
    assert doc.get("name") == "schedule1"
    assert doc.find("meta/identification/FRBRWork/FRBRalias").get("value") == "First Schedule"
    assert doc.find("meta/references") is None
    article = doc.find("mainBody/article")
    assert article.get("id") == "schedule1"
    assert article.findtext("heading") == "Schedule Heading"
    assert article.find("paragraph").get("id") == "schedule1.paragraph-0"
    assert article.findtext("paragraph/content/p") == "Some text"


def test_multiple_schedules_are_wrapped_in_components() -> None:
    """More than one schedule is grouped under a components element."""

    text = "Schedule 1. Oaths.\nSchedule 2. Fees.\n"
    node = build_tree(parse_text(text, "schedules"))
    element = AknSerializer(generated=GENERATED).fragment(node)

    assert element.tag == "components"
    assert [c.get("id") for c in element] == ["component-schedule1", "component-schedule2"]


def test_schedules_container_components_share_generation_date() -> None:
    """Each schedule gets its own identification, all dated by one serializer."""

    text = 'Schedule "2"\nA Title\n1. Foo\nSchedule 3\nAnother Title\nBaz\n'
    node = build_tree(parse_text(text, "schedules_container"))
    element = AknSerializer(generated=GENERATED).fragment(node)

    assert element.tag == "components"
    assert [c.find("doc").get("name") for c in element] == ["schedule2", "schedule3"]
    identifications = [c.find("doc/meta/identification") for c in element]
    assert all(ident is not None for ident in identifications)
    dates = [ident.find("FRBRManifestation/FRBRdate").get("date") for ident in identifications]
    assert dates == [GENERATED.isoformat(), GENERATED.isoformat()]
    headings = [c.findtext("doc/mainBody/article/heading") for c in element]
    assert headings == ["A Title", "Another Title"]
    assert element[0].find("doc/mainBody/article/section").get("id") == "section-1"


def test_empty_schedules_render_nothing() -> None:
    """An empty schedules container has no element."""

    assert AknSerializer(generated=GENERATED).fragment(Schedules()) is None


def test_act_omits_empty_preface() -> None:
    """The preface element only appears when it has statements."""

    serializer = AknSerializer(generated=GENERATED)
    with_preface = serializer.act(build_tree(parse_text("foo\n1. Section\nbar\n")))  # type: ignore[arg-type]
    without = serializer.act(build_tree(parse_text("1. Section\nbar\n")))  # type: ignore[arg-type]

    assert [child.tag for child in with_preface] == ["meta", "preface", "body"]
    assert [child.tag for child in without] == ["meta", "body"]
    assert with_preface.get("contains") == "originalVersion"


def test_act_meta_has_identification_and_references() -> None:
    """The main component declares both organisations it refers to."""

    act = AknSerializer(generated=GENERATED).act(build_tree(parse_text("1. Section\nbar\n")))  # type: ignore[arg-type]
    meta = act.find("meta")

    assert meta.find("identification").get("source") == "#lawtext"
    assert meta.find("identification/FRBRWork/FRBRthis").get("value") == "/za/act/1980/01/main"
    assert meta.find("identification/FRBRManifestation/FRBRdate").get("date") == "2024-01-01"
    refs = meta.find("references")
    assert [org.get("id") for org in refs] == ["lawtext", "council"]
    assert refs[1].get("href") == "/ontology/organization/za/council"


def test_document_is_namespaced_and_carries_schedules() -> None:
    """A namespaced document declares the namespace once on its root."""

    text = "1. Section\nbar\nSchedule 1 - Forms\nform text\n"
    act = build_tree(parse_text(text))
    root = AknSerializer(generated=GENERATED, namespace=AKN_NAMESPACE).document(act)  # type: ignore[arg-type]

    xml = to_xml_string(root)
    assert xml.startswith(f'<akomaNtoso xmlns="{AKN_NAMESPACE}">\n  <act contains="originalVersion">')
    assert xml.count("xmlns=") == 1
    assert [child.tag for child in root] == [f"{{{AKN_NAMESPACE}}}act", f"{{{AKN_NAMESPACE}}}component"]


def test_text_run_cannot_be_rendered_alone() -> None:
    """Bare text runs only exist inside statements."""

    with pytest.raises(TypeError):
        AknSerializer(generated=GENERATED).fragment(Text(value="loose"))


def test_rendering_is_deterministic() -> None:
    """Rendering the same input twice produces identical XML."""

    text = "Chapter 1 Intro\n1. Section\n(1) hello\n(a) one\n{|\n| x\n| y\n|}\n"

    assert _render(text, "chapter") == _render(text, "chapter")


def test_fragment_ids_come_from_prefix_not_parent() -> None:
    """A nested node rendered on its own takes the caller's prefix."""

    section = build_tree(parse_text("1. Section\n(1) hello\n", "section"))
    (subsection,) = section.children_of(Subsection)
    serializer = AknSerializer(generated=GENERATED)

    assert subsection.parent is section
    assert serializer.fragment(subsection).get("id") == "1"
    assert serializer.fragment(subsection, "section-1.").get("id") == "section-1.1"
