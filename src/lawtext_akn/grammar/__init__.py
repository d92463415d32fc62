"""Grammar layer: marker classification, parsing and list grouping."""
from lawtext_akn.grammar.engine import Parser, parse_text
from lawtext_akn.grammar.markers import Marker, MarkerClassifier, MarkerKind
from lawtext_akn.grammar.tree import ParseError, ParseNode

__all__ = [
    "Marker",
    "MarkerClassifier",
    "MarkerKind",
    "ParseError",
    "ParseNode",
    "Parser",
    "parse_text",
]
