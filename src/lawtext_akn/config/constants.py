"""Constant enumerations for configuration options."""
from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class ConfigOption(NamedTuple):
    """Metadata for a configuration option."""

    value: str
    description: str
    default: bool = False


class GrammarRule(Enum):
    """Grammar rules the parser can be entered at."""

    ACT = ConfigOption("act", "Whole document: preface, preamble, body and schedules", True)
    PREFACE = ConfigOption("preface", "Text before the preamble or body")
    PREAMBLE = ConfigOption("preamble", "Text after a PREAMBLE line")
    BODY = ConfigOption("body", "General content followed by chapters, parts and sections")
    CHAPTER = ConfigOption("chapter", "One chapter with its parts and sections")
    PART = ConfigOption("part", "One part with its sections")
    SECTION = ConfigOption("section", "One section with its subsections")
    SUBSECTION = ConfigOption("subsection", "One numbered statement with its blocks")
    GENERAL_CONTENT = ConfigOption("general_content", "Free content that may hold numbered lines")
    BLOCK_PARAGRAPHS = ConfigOption("block_paragraphs", "Free content up to a numbered statement")
    BLOCKLIST = ConfigOption("blocklist", "A run of list items")
    TABLE = ConfigOption("table", "A wiki-style table")
    CLAUSES = ConfigOption("clauses", "One line of text with inline remarks")
    SCHEDULE = ConfigOption("schedule", "One schedule")
    SCHEDULES = ConfigOption("schedules", "One or more schedules")
    SCHEDULES_CONTAINER = ConfigOption("schedules_container", "Zero or more schedules")

    @property
    def rule_name(self) -> str:
        """Name of the grammar rule as the parser knows it."""
        return self.value.value


class LogLevel(Enum):
    """Logging level options."""

    DEBUG = ConfigOption("DEBUG", "Verbose debug logging")
    INFO = ConfigOption("INFO", "Standard info logging", True)
    WARNING = ConfigOption("WARNING", "Warnings only")
    ERROR = ConfigOption("ERROR", "Errors only")


ALL_CONFIG_ENUMS = {
    "parser.root": GrammarRule,
    "logging.level": LogLevel,
}

__all__ = [
    "ConfigOption",
    "GrammarRule",
    "LogLevel",
    "ALL_CONFIG_ENUMS",
]
