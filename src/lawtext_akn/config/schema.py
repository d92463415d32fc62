"""Configuration schema definitions using Pydantic."""
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lawtext_akn.config.constants import GrammarRule, LogLevel


def _coerce_config_enum(enum_cls: type, value: object):
    """Coerce string or enum value to the given ConfigOption Enum."""

    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        for member in enum_cls:  # type: ignore[attr-defined]
            # member.value is ConfigOption; member.value.value is the string in config
            if getattr(member.value, "value", None) == value or member.name == value.upper():
                return member
    raise ValueError(f"Invalid value {value!r} for enum {enum_cls.__name__}")


class ParserConfig(BaseModel):
    """Grammar options."""

    section_number_after_title: bool = Field(
        False, description="Section headers put the title line before the number line"
    )
    root: GrammarRule = Field(GrammarRule.ACT, description="Grammar rule to parse input from")

    @field_validator("root", mode="before")
    @classmethod
    def _coerce_root(cls, v: object) -> GrammarRule:
        return _coerce_config_enum(GrammarRule, v)


class DocumentMetadata(BaseModel):
    """Bibliographic facts shared by the act and all of its schedules."""

    model_config = ConfigDict(frozen=True)

    country: str = Field("za", description="Country code used in FRBR URIs")
    locality: Optional[str] = Field(None, description="Locality code appended to the country")
    number: str = Field("01", description="Act number")
    year: str = Field("1980", description="Act year")
    enactment_date: date = Field(date(1980, 1, 1), description="Date the act was enacted")
    short_title: str = Field("Short Title", description="Display title of the main act")
    language: str = Field("eng", description="Three-letter expression language code")

    @field_validator("number", "year", mode="before")
    @classmethod
    def _coerce_str(cls, v: object) -> str:
        if isinstance(v, int):
            return str(v)
        return v  # type: ignore[return-value]

    @field_validator("country", "language")
    @classmethod
    def _require_code(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("country and language codes must not be empty")
        return v.strip()


class ReferencesConfig(BaseModel):
    """Organisations declared in the act's references block."""

    model_config = ConfigDict(frozen=True)

    tool_id: str = Field("lawtext", description="Identifier of the converting tool")
    tool_href: str = Field("/ontology/organization/lawtext", description="Ontology reference for the tool")
    tool_show_as: str = Field("LawText", description="Display name of the tool")
    author_id: str = Field("council", description="Identifier of the enacting body")
    author_show_as: str = Field("Council", description="Display name of the enacting body")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Logging level")
    file: Optional[Path] = Field(None, description="Optional log file path")

    @field_validator("level", mode="before")
    @classmethod
    def _coerce_log_level(cls, v: object) -> LogLevel:
        return _coerce_config_enum(LogLevel, v)


class AppConfig(BaseModel):
    """Full application configuration."""

    parser: ParserConfig = Field(default_factory=ParserConfig)
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    references: ReferencesConfig = Field(default_factory=ReferencesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


__all__ = [
    "AppConfig",
    "DocumentMetadata",
    "LoggingConfig",
    "ParserConfig",
    "ReferencesConfig",
]
