"""
Parses a Gherkin feature file and prints its feature, background and scenarios.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from .config import ConfigError, apply_overrides, build_config
from .filesystem import (
    check_feature_file,
    get_max_file_size,
    get_max_line_length,
    resolve_feature_path,
)
from .models import Document
from .parser import ParseFileError, parse_file

__all__ = ["cli"]

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )


def render_summary(document: Document) -> str:
    """Render one line per scenario, preceded by the feature name.

    Examples:
        render_summary(parse_feature(text))
        # Feature: Login
        # line 4: Scenario: Success [@smoke] (2 lines)
    """
    lines = [f"Feature: {document.feature}"]
    if document.background:
        lines.append(f"Background: ({len(document.background)} lines)")
    for scenario in document.scenarios:
        keyword = "Scenario Outline" if scenario.outline else "Scenario"
        tags = " ".join(f"@{tag}" for tag in scenario.tags)
        entry = f"line {scenario.line}: {keyword}: {scenario.name}"
        if tags:
            entry += f" [{tags}]"
        entry += f" ({len(scenario.contents)} lines)"
        lines.append(entry)
    return "\n".join(lines)


@click.command()
@click.version_option()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "summary"]),
    default="json",
    show_default=True,
    help="Output format",
)
@click.option("--tag", "tags", multiple=True, help="Only show scenarios carrying this tag")
@click.option(
    "--keep-blank-lines/--drop-blank-lines",
    default=None,
    help="Store blank lines found in background and scenario bodies",
)
@click.option(
    "--keep-quote-delimiters/--drop-quote-delimiters",
    default=None,
    help="Store the lines opening and closing verbatim blocks",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    output_format: str = "json",
    tags: tuple[str, ...] = (),
    keep_blank_lines: bool | None = None,
    keep_quote_delimiters: bool | None = None,
    verbose: bool = False,
):
    """
    Entry point for parsing a feature file.

    Args:
        filepath: Path to the feature file to parse.
        output_format: `json` for the full document, `summary` for one line
            per scenario.
        tags: Tags used to filter the printed scenarios.
        keep_blank_lines: Override for `ShallotConfig.keep_blank_lines`.
        keep_quote_delimiters: Override for `ShallotConfig.keep_quote_delimiters`.
        verbose: Enable debug logging.

    Raises:
        click.BadParameter: If the path is rejected or the configuration is
            invalid.
        click.ClickException: If the file is too large, unreadable, or not a
            well-formed feature file.

    Examples:
        shallot features/login.feature --format summary --tag smoke
    """
    configure_logging(verbose)

    base_dir = Path.cwd().resolve()
    try:
        filepath = resolve_feature_path(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            filepath.parent,
            keep_blank_lines=keep_blank_lines,
            keep_quote_delimiters=keep_quote_delimiters,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
        max_line_length = get_max_line_length(default=config.max_line_length)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        check_feature_file(filepath, max_file_size)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        document = parse_file(filepath, apply_overrides(config, max_line_length=max_line_length))
    except (ParseFileError, ConfigError) as error:
        raise click.ClickException(str(error)) from error

    if tags:
        scenarios = document.scenarios_tagged(*tags)
        logger.debug("%d of %d scenarios match %s", len(scenarios), len(document.scenarios), tags)
        document = Document(
            feature=document.feature,
            background=document.background,
            scenarios=scenarios,
        )

    if output_format == "summary":
        click.echo(render_summary(document))
    else:
        click.echo(json.dumps(document.to_dict(), indent=2))


if __name__ == "__main__":
    cli()
