"""Text to Akoma-Ntoso conversion pipeline."""
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from lawtext_akn.akn.serializer import AKN_NAMESPACE, AknSerializer, to_xml_string
from lawtext_akn.config.constants import GrammarRule
from lawtext_akn.config.schema import AppConfig
from lawtext_akn.data.text_loader import load_text
from lawtext_akn.grammar.engine import parse_text
from lawtext_akn.grammar.tree import ParseNode
from lawtext_akn.model.builder import build_tree

logger = logging.getLogger(__name__)


def parse_document(text: str, cfg: AppConfig, root: Optional[GrammarRule] = None) -> ParseNode:
    """Parse text with the configured grammar options.

    Args:
        text: Source text.
        cfg: Application config.
        root: Entry rule; ``cfg.parser.root`` when None.

    Returns:
        Parse tree for the whole input.

    Raises:
        ParseError: If the input does not match the rule in full.
    """
    rule = root or cfg.parser.root
    return parse_text(
        text,
        rule.rule_name,
        section_number_after_title=cfg.parser.section_number_after_title,
    )


def convert_text(
    text: str,
    cfg: Optional[AppConfig] = None,
    *,
    root: Optional[GrammarRule] = None,
    generated: Optional[date] = None,
    prefix: str = "",
    index: int = 0,
) -> str:
    """Convert plain text into XML.

    A whole act is wrapped in a namespaced ``<akomaNtoso>`` root together
    with its schedule components; any other rule yields a bare fragment.

    Args:
        text: Source text.
        cfg: Application config; defaults apply when None.
        root: Entry rule; ``cfg.parser.root`` when None.
        generated: Manifestation date; today when None.
        prefix: Id prefix for fragments.
        index: Sibling position for paragraph, list and table fragments.

    Returns:
        Indented XML text, empty for a rule that produced nothing to render.

    Raises:
        ParseError: If the input does not match the rule in full.
    """
    cfg = cfg or AppConfig()
    rule = root or cfg.parser.root
    tree = parse_document(text, cfg, rule)
    node = build_tree(tree)
    if rule is GrammarRule.ACT:
        serializer = AknSerializer(cfg.metadata, cfg.references, generated, namespace=AKN_NAMESPACE)
        element = serializer.document(node)  # type: ignore[arg-type]
    else:
        serializer = AknSerializer(cfg.metadata, cfg.references, generated)
        element = serializer.fragment(node, prefix, index)
    if element is None:
        logger.info("Rule '%s' produced no elements", rule.rule_name)
        return ""
    xml = to_xml_string(element)
    logger.info("Converted %d characters from rule '%s' into %d characters of XML", len(text), rule.rule_name, len(xml))
    return xml


def convert_file(path: Path, cfg: Optional[AppConfig] = None, output: Optional[Path] = None) -> str:
    """Convert a text file, optionally writing the XML next to it.

    Args:
        path: Source text file.
        cfg: Application config; defaults apply when None.
        output: Destination file; nothing is written when None.

    Returns:
        The XML text.
    """
    cfg = cfg or AppConfig()
    logger.info("Converting %s", path)
    xml = convert_text(load_text(path), cfg)
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(xml + "\n", encoding="utf-8")
        logger.info("Wrote %s", output)
    return xml


__all__ = ["convert_file", "convert_text", "parse_document"]
