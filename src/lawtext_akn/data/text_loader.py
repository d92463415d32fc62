"""Loading plain-text legislation from disk."""
from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def normalize_newlines(text: str) -> str:
    """Convert ``\\r\\n`` and bare ``\\r`` line endings to ``\\n``.

    Args:
        text: Raw text.

    Returns:
        Text with Unix line endings.
    """
    return text.replace("\r\n", "\n").replace("\r", "\n")


def load_text(path: Path) -> str:
    """Read a UTF-8 text file, dropping any byte-order mark.

    Args:
        path: Path to the source file.

    Returns:
        File content with normalised line endings.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """
    text = path.read_text(encoding="utf-8-sig")
    logger.debug("Loaded %d characters from %s", len(text), path)
    return normalize_newlines(text)


__all__ = ["load_text", "normalize_newlines"]
