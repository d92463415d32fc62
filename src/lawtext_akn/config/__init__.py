"""Configuration utilities for lawtext-akn."""

from lawtext_akn.config.constants import GrammarRule, LogLevel
from lawtext_akn.config.loader import load_config
from lawtext_akn.config.schema import AppConfig, DocumentMetadata, ReferencesConfig

__all__ = [
    "load_config",
    "AppConfig",
    "DocumentMetadata",
    "GrammarRule",
    "LogLevel",
    "ReferencesConfig",
]
