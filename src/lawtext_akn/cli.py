"""Command line interface for lawtext-akn."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import dotenv
import logging

from lawtext_akn.config.constants import GrammarRule
from lawtext_akn.config.loader import load_config
from lawtext_akn.config.schema import AppConfig
from lawtext_akn.convert.pipeline import convert_text, parse_document
from lawtext_akn.data.text_loader import load_text
from lawtext_akn.grammar.tree import ParseError
from lawtext_akn.logging import configure_logging

app = typer.Typer(help="Convert plain-text legislation into Akoma-Ntoso XML")

# Ensure .env is loaded with highest priority
dotenv.load_dotenv(override=True)


def _load(config: Optional[Path], section_number_after_title: Optional[bool]) -> AppConfig:
    cfg = load_config(config)
    if section_number_after_title is not None:
        parser = cfg.parser.model_copy(update={"section_number_after_title": section_number_after_title})
        cfg = cfg.model_copy(update={"parser": parser})
    configure_logging(cfg.logging)
    return cfg


def _rule(root: Optional[str]) -> Optional[GrammarRule]:
    if root is None:
        return None
    for member in GrammarRule:
        if member.rule_name == root:
            return member
    raise typer.BadParameter(f"Unknown grammar rule: {root}", param_hint="--root")


def _report(path: Path, exc: ParseError) -> None:
    typer.echo(f"{path}: {exc}", err=True)


@app.command()
def convert(
    input: Path = typer.Argument(..., help="Plain-text source file."),
    config: Optional[Path] = typer.Option(None, help="Path to YAML config."),
    root: Optional[str] = typer.Option(None, help="Grammar rule to parse from (default: act)."),
    output: Optional[Path] = typer.Option(None, help="Write XML here instead of stdout."),
    section_number_after_title: Optional[bool] = typer.Option(
        None,
        "--section-number-after-title/--section-number-before-title",
        help="Override the section header layout from the config.",
    ),
) -> None:
    """Convert a text file into Akoma-Ntoso XML.

    Args:
        input: Source text file.
        config: Path to configuration YAML file.
        root: Optional grammar rule override.
        output: Optional destination file.
        section_number_after_title: Optional section layout override.
    """
    cfg = _load(config, section_number_after_title)
    logger = logging.getLogger(__name__)
    logger.info("Starting convert")
    try:
        xml = convert_text(load_text(input), cfg, root=_rule(root))
    except ParseError as exc:
        _report(input, exc)
        raise typer.Exit(code=1)
    if output is None:
        typer.echo(xml)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(xml + "\n", encoding="utf-8")
    typer.echo(f"Wrote {output}")


@app.command()
def check(
    input: Path = typer.Argument(..., help="Plain-text source file."),
    config: Optional[Path] = typer.Option(None, help="Path to YAML config."),
    root: Optional[str] = typer.Option(None, help="Grammar rule to parse from (default: act)."),
) -> None:
    """Check that a text file parses without converting it.

    Args:
        input: Source text file.
        config: Path to configuration YAML file.
        root: Optional grammar rule override.
    """
    cfg = _load(config, None)
    try:
        tree = parse_document(load_text(input), cfg, _rule(root))
    except ParseError as exc:
        _report(input, exc)
        raise typer.Exit(code=1)
    sections = sum(1 for node in tree.walk() if node.kind == "section")
    typer.echo(f"OK: {input} ({sections} sections)")


def main() -> None:
    """Entrypoint for console_scripts."""
    app()


if __name__ == "__main__":
    main()
