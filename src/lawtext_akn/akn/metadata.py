"""FRBR identification and references blocks."""
from __future__ import annotations

from datetime import date

from lawtext_akn.config.schema import DocumentMetadata, ReferencesConfig

GENERATION = "Generation"


def work_uri(meta: DocumentMetadata) -> str:
    """Return the work URI, e.g. ``/za/act/1980/01``.

    Args:
        meta: Document metadata.

    Returns:
        Work-level URI without language or component name.
    """
    region = f"{meta.country}-{meta.locality}" if meta.locality else meta.country
    return f"/{region}/act/{meta.year}/{meta.number}"


def expression_uri(meta: DocumentMetadata) -> str:
    """Return the expression URI, e.g. ``/za/act/1980/01/eng@``."""
    return f"{work_uri(meta)}/{meta.language}@"


def author_href(references: ReferencesConfig, meta: DocumentMetadata) -> str:
    """Ontology reference for the enacting body."""
    return f"/ontology/organization/{meta.country}/{references.author_id}"


class MetadataWriter:
    """Append ``<identification>`` and ``<references>`` blocks to a meta element.

    The writer holds the generation date so every component rendered from
    one document carries the same manifestation date.
    """

    def __init__(self, el, meta: DocumentMetadata, references: ReferencesConfig, generated: date) -> None:
        self._el = el
        self.meta = meta
        self.references = references
        self.generated = generated

    def identification(self, parent, name: str, alias: str):
        """Append the work/expression/manifestation triple.

        Args:
            parent: ``<meta>`` element.
            name: Component name: ``main`` or a schedule slug.
            alias: Display title of the component.

        Returns:
            The ``<identification>`` element.
        """
        el = self._el
        tool = f"#{self.references.tool_id}"
        author = f"#{self.references.author_id}"
        enacted = self.meta.enactment_date.isoformat()
        work = work_uri(self.meta)
        expression = expression_uri(self.meta)

        ident = el("identification", parent, source=tool)

        frbr_work = el("FRBRWork", ident)
        el("FRBRthis", frbr_work, value=f"{work}/{name}")
        el("FRBRuri", frbr_work, value=work)
        el("FRBRalias", frbr_work, value=alias)
        el("FRBRdate", frbr_work, date=enacted, name=GENERATION)
        el("FRBRauthor", frbr_work, href=author)
        el("FRBRcountry", frbr_work, value=self.meta.country)

        frbr_expr = el("FRBRExpression", ident)
        el("FRBRthis", frbr_expr, value=f"{expression}/{name}")
        el("FRBRuri", frbr_expr, value=expression)
        el("FRBRdate", frbr_expr, date=enacted, name=GENERATION)
        el("FRBRauthor", frbr_expr, href=author)
        el("FRBRlanguage", frbr_expr, language=self.meta.language)

        frbr_manif = el("FRBRManifestation", ident)
        el("FRBRthis", frbr_manif, value=f"{expression}/{name}")
        el("FRBRuri", frbr_manif, value=expression)
        el("FRBRdate", frbr_manif, date=self.generated.isoformat(), name=GENERATION)
        el("FRBRauthor", frbr_manif, href=tool)
        return ident

    def references_block(self, parent):
        """Append the ``<references>`` block declaring the tool and the enacting body."""
        el = self._el
        refs = el("references", parent, source="#this")
        el(
            "TLCOrganization",
            refs,
            id=self.references.tool_id,
            href=self.references.tool_href,
            showAs=self.references.tool_show_as,
        )
        el(
            "TLCOrganization",
            refs,
            id=self.references.author_id,
            href=author_href(self.references, self.meta),
            showAs=self.references.author_show_as,
        )
        return refs


__all__ = ["MetadataWriter", "author_href", "expression_uri", "work_uri"]
