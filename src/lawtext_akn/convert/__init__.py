"""Conversion pipeline."""

from lawtext_akn.convert.pipeline import convert_file, convert_text, parse_document

__all__ = ["convert_file", "convert_text", "parse_document"]
