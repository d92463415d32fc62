"""Data loaders for lawtext-akn."""

from lawtext_akn.data.text_loader import load_text, normalize_newlines

__all__ = ["load_text", "normalize_newlines"]
