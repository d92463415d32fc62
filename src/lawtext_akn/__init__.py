"""Plain-text legislation to Akoma-Ntoso XML converter."""

from lawtext_akn.akn.serializer import AknSerializer, to_xml_string
from lawtext_akn.convert.pipeline import convert_file, convert_text
from lawtext_akn.grammar.engine import parse_text
from lawtext_akn.grammar.tree import ParseError, ParseNode
from lawtext_akn.model.builder import build_tree

__all__ = [
    "AknSerializer",
    "ParseError",
    "ParseNode",
    "build_tree",
    "convert_file",
    "convert_text",
    "parse_text",
    "to_xml_string",
]
