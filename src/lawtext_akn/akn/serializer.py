"""Serialization of typed nodes into Akoma-Ntoso XML with lxml.

Pretty printing is delegated to libxml2: elements holding text are written
inline, elements holding only elements are indented by two spaces, and
empty elements self-close. Tables rely on this by putting a newline tail on
every row and cell but the last, which keeps multi-cell tables compact.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from lxml import etree

from lawtext_akn.akn.components import Component, main_component, schedule_component
from lawtext_akn.akn.ids import (
    IdScope,
    block_list_id,
    chapter_id,
    component_id,
    item_id,
    paragraph_id,
    part_id,
    section_id,
    subsection_id,
    table_id,
)
from lawtext_akn.akn.metadata import MetadataWriter
from lawtext_akn.config.schema import DocumentMetadata, ReferencesConfig
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

logger = logging.getLogger(__name__)

AKN_NAMESPACE = "http://www.akomantoso.org/2.0"


def to_xml_string(element: etree._Element) -> str:
    """Render an element as indented XML text without a declaration.

    Args:
        element: Root of the subtree to render.

    Returns:
        XML text with no trailing newline.
    """
    return etree.tostring(element, pretty_print=True, encoding="unicode", with_tail=False).rstrip("\n")


class AknSerializer:
    """Build Akoma-Ntoso element trees from typed nodes.

    The instance is read-only after construction; the generation date is
    fixed here so every component of a document shares it.
    """

    def __init__(
        self,
        metadata: Optional[DocumentMetadata] = None,
        references: Optional[ReferencesConfig] = None,
        generated: Optional[date] = None,
        namespace: Optional[str] = None,
    ) -> None:
        """Initialize serializer.

        Args:
            metadata: Document metadata; defaults apply when None.
            references: Reference organisations; defaults apply when None.
            generated: Manifestation date; today when None.
            namespace: XML namespace for every element, or None for bare tags.
        """
        self.metadata = metadata or DocumentMetadata()
        self.references = references or ReferencesConfig()
        self.generated = generated or date.today()
        self.namespace = namespace
        self._meta = MetadataWriter(self._el, self.metadata, self.references, self.generated)

    def _el(self, tag: str, parent=None, text=None, **attribs) -> etree._Element:
        """Create an element, as a child of ``parent`` when given."""
        name = f"{{{self.namespace}}}{tag}" if self.namespace else tag
        if parent is not None:
            el = etree.SubElement(parent, name)
        else:
            el = etree.Element(name, nsmap={None: self.namespace} if self.namespace else None)
        for key, value in attribs.items():
            el.set(key, value)
        if text:
            el.text = text
        return el

    # ------------------------------------------------------------------
    # Public entry points

    def document(self, act: Act) -> etree._Element:
        """Render the act followed by its schedule components."""
        root = self._el("akomaNtoso")
        self._act(act, root)
        self.schedules(act.schedules, root)
        logger.debug("Serialized act with %d schedule(s)", len(act.schedules))
        return root

    def act(self, act: Act) -> etree._Element:
        """Render ``<act>`` with its meta block, preface, preamble and body."""
        return self._act(act, None)

    def schedules(self, schedules: Sequence[Schedule], parent=None) -> Optional[etree._Element]:
        """Render schedules as components.

        Args:
            schedules: Typed schedules in document order.
            parent: Element to attach to, if any.

        Returns:
            None for no schedules, a bare ``<component>`` for one, otherwise
            a ``<components>`` element wrapping them all.
        """
        if not schedules:
            return None
        if len(schedules) == 1:
            return self.component(schedule_component(schedules[0]), parent)
        wrapper = self._el("components", parent)
        for schedule in schedules:
            self.component(schedule_component(schedule), wrapper)
        return wrapper

    def component(self, component: Component, parent=None) -> etree._Element:
        """Render one schedule component with its own identification block."""
        comp = self._el("component", parent, id=component_id(component.slug))
        doc = self._el("doc", comp, name=component.slug)
        meta = self._el("meta", doc)
        self._meta.identification(meta, component.slug, component.alias)
        main_body = self._el("mainBody", doc)
        article = self._el("article", main_body, id=component.slug)
        if component.heading is not None:
            self._heading(component.heading, article)
        self._structure_children(component.body, article, IdScope.within(component.slug))
        return comp

    def fragment(self, node: Node, prefix: str = "", index: int = 0) -> Optional[etree._Element]:
        """Render any typed node on its own.

        Args:
            node: Node to render.
            prefix: Id prefix of the enclosing container, e.g. ``section-1.``.
            index: Position of ``node`` among its siblings, used by
                paragraphs, lists and tables.

        Returns:
            Rendered element; None for an empty schedules container.

        Raises:
            TypeError: If ``node`` is a bare text run.
        """
        scope = IdScope(prefix)
        if isinstance(node, Act):
            return self._act(node, None)
        if isinstance(node, Schedules):
            return self.schedules(node.children_of(Schedule))
        if isinstance(node, Schedule):
            return self.component(schedule_component(node))
        if isinstance(node, Body):
            return self._body(node, None)
        if isinstance(node, (Preface, Preamble)):
            return self._pre_body(node, None)
        if isinstance(node, Item):
            return self._item(node, None, scope.local(node.num))
        if isinstance(node, Heading):
            return self._heading(node, None)
        if isinstance(node, Remark):
            return self._remark(node, None)
        if isinstance(node, Text):
            raise TypeError("Text runs are rendered as part of their statement")
        return self._render(node, None, scope, index)

    # ------------------------------------------------------------------
    # Document parts

    def _act(self, act: Act, parent) -> etree._Element:
        act_el = self._el("act", parent, contains="originalVersion")
        meta = self._el("meta", act_el)
        main = main_component(act, self.metadata)
        self._meta.identification(meta, main.slug, main.alias)
        self._meta.references_block(meta)
        if act.preface.children:
            self._pre_body(act.preface, act_el)
        if act.preamble is not None:
            self._pre_body(act.preamble, act_el)
        self._body(act.body, act_el)
        return act_el

    def _pre_body(self, node: Preface | Preamble, parent) -> etree._Element:
        el = self._el(node.kind, parent)
        for statement in node.children_of(Statement):
            self._statement(statement, el)
        return el

    def _body(self, body: Body, parent) -> etree._Element:
        el = self._el("body", parent)
        self._structure_children(body, el, IdScope())
        return el

    def _structure_children(self, node: Node, parent, scope: IdScope) -> None:
        """Render structural children; paragraphs are counted per parent."""
        paragraphs = 0
        for child in node.children:
            if isinstance(child, Paragraph):
                self._paragraph(child, parent, scope, paragraphs)
                paragraphs += 1
            else:
                self._render(child, parent, scope, 0)

    def _render(self, node: Node, parent, scope: IdScope, index: int) -> etree._Element:
        if isinstance(node, Chapter):
            return self._numbered(node, parent, chapter_id(node.num), node.num)
        if isinstance(node, Part):
            return self._numbered(node, parent, part_id(node.num), node.num)
        if isinstance(node, Section):
            return self._numbered(node, parent, section_id(node.num), f"{node.num}.", always_heading=True)
        if isinstance(node, Subsection):
            return self._subsection(node, parent, scope)
        if isinstance(node, Paragraph):
            return self._paragraph(node, parent, scope, index)
        if isinstance(node, BlockList):
            return self._block_list(node, parent, scope, index)
        if isinstance(node, Table):
            return self._table(node, parent, scope, index)
        if isinstance(node, Statement):
            return self._statement(node, parent)
        raise TypeError(f"Cannot render {type(node).__name__} here")

    # ------------------------------------------------------------------
    # Structural elements

    def _numbered(
        self,
        node: Chapter | Part | Section,
        parent,
        element_id: str,
        display: str,
        *,
        always_heading: bool = False,
    ) -> etree._Element:
        el = self._el(node.kind, parent, id=element_id)
        self._el("num", el, text=display)
        if node.heading is not None:
            self._heading(node.heading, el)
        elif always_heading:
            self._el("heading", el)
        self._structure_children(node, el, IdScope.within(element_id))
        return el

    def _heading(self, heading: Heading, parent) -> etree._Element:
        return self._el("heading", parent, text=heading.title)

    def _subsection(self, node: Subsection, parent, scope: IdScope) -> etree._Element:
        element_id = subsection_id(scope, node.num)
        el = self._el("subsection", parent, id=element_id)
        self._el("num", el, text=node.marker)
        content = self._el("content", el)
        self._content(node.children, content, IdScope.within(element_id))
        return el

    def _paragraph(self, node: Paragraph, parent, scope: IdScope, index: int) -> etree._Element:
        element_id = paragraph_id(scope, index)
        el = self._el("paragraph", parent, id=element_id)
        content = self._el("content", el)
        self._content(node.children, content, IdScope.within(element_id))
        return el

    def _content(self, children: Sequence[Node], parent, scope: IdScope) -> None:
        """Render a content sequence; each child's position is its sequence index."""
        for sequence, child in enumerate(children):
            self._render(child, parent, scope, sequence)

    # ------------------------------------------------------------------
    # Blocks

    def _block_list(self, node: BlockList, parent, scope: IdScope, sequence: int) -> etree._Element:
        list_id = block_list_id(scope, sequence)
        el = self._el("blockList", parent, id=list_id)
        for item in node.children_of(Item):
            self._item(item, el, item_id(list_id, item.num))
        return el

    def _item(self, node: Item, parent, element_id: str) -> etree._Element:
        el = self._el("item", parent, id=element_id)
        self._el("num", el, text=node.marker)
        for statement in node.children_of(Statement):
            self._statement(statement, el)
        return el

    def _table(self, node: Table, parent, scope: IdScope, sequence: int) -> etree._Element:
        el = self._el("table", parent, id=table_id(scope, sequence))
        rows = node.children_of(TableRow)
        for row_index, row in enumerate(rows):
            tr = self._el("tr", el)
            cells = row.children_of(TableCell)
            for cell_index, cell in enumerate(cells):
                td = self._el("td", tr)
                for statement in cell.children_of(Statement):
                    self._statement(statement, td)
                if cell_index < len(cells) - 1:
                    td.tail = "\n"
            if row_index < len(rows) - 1:
                tr.tail = "\n"
        return el

    def _statement(self, node: Statement, parent) -> etree._Element:
        p = self._el("p", parent)
        last: Optional[etree._Element] = None
        for child in node.children:
            if isinstance(child, Remark):
                last = self._remark(child, p)
            elif isinstance(child, Text):
                if last is None:
                    p.text = (p.text or "") + child.value
                else:
                    last.tail = (last.tail or "") + child.value
        return p

    def _remark(self, node: Remark, parent) -> etree._Element:
        return self._el("remark", parent, text=f"[{node.value}]", status="editorial")


__all__ = ["AKN_NAMESPACE", "AknSerializer", "to_xml_string"]
