"""Tests for reading source text."""
from __future__ import annotations

from pathlib import Path

from lawtext_akn.data.text_loader import load_text, normalize_newlines


def test_normalize_newlines() -> None:
    """Windows and old Mac line endings become plain newlines."""

    assert normalize_newlines("a\r\nb\rc\n") == "a\nb\nc\n"


def test_load_text_drops_byte_order_mark(tmp_path: Path) -> None:
    """A UTF-8 BOM written by some editors is not part of the text."""

    path = tmp_path / "act.txt"
    path.write_bytes("\ufeff1. Section\r\nbar\r\n".encode("utf-8"))

    assert load_text(path) == "1. Section\nbar\n"
