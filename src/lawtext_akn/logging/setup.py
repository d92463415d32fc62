"""Logging setup utilities."""
from __future__ import annotations

import logging

from lawtext_akn.config.schema import LoggingConfig
from lawtext_akn.logging.formatters import default_formatter


def configure_logging(cfg: LoggingConfig) -> None:
    """Configure root logger.

    A stream handler is always installed; a file handler is added when
    ``cfg.file`` is set. Existing root handlers are replaced.

    Args:
        cfg: Logging configuration.
    """
    fmt = default_formatter()
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(fmt)
    handlers: list[logging.Handler] = [stream_handler]

    if cfg.file is not None:
        cfg.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(cfg.file, encoding="utf-8")
        file_handler.setFormatter(fmt)
        handlers.append(file_handler)

    root = logging.getLogger()
    root.setLevel(cfg.level.value.value)  # ConfigOption.value -> str
    root.handlers = handlers


__all__ = ["configure_logging"]
