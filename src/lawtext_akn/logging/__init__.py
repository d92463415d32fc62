"""Logging helpers for lawtext-akn."""

from lawtext_akn.logging.formatters import default_formatter
from lawtext_akn.logging.setup import configure_logging

__all__ = ["configure_logging", "default_formatter"]
