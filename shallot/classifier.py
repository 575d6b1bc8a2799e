"""Stateless line classification for Gherkin feature files.

Every helper strips surrounding whitespace before matching, and keyword
matching is case-insensitive.
"""

from __future__ import annotations

from .constants import (
    BACKGROUND_KEYWORD,
    COMMENT_PREFIX,
    FEATURE_PATTERN,
    QUOTE_DELIMITERS,
    SCENARIO_PATTERN,
    TAG_PREFIX,
)
from .models import ParsedScenarioStart


def strip_line_ending(line: str) -> str:
    """Remove a single trailing newline, leaving all other whitespace intact.

    Examples:
        strip_line_ending("\\t\\tGiven a step\\n")  # "\\t\\tGiven a step"
        strip_line_ending("text\\r\\n")  # "text\\r"
    """
    if line.endswith("\n"):
        return line[:-1]
    return line


def is_quote_delimiter(line: str) -> bool:
    """Check whether a line opens or closes a verbatim block.

    Args:
        line: Line to inspect.

    Returns:
        bool: True when the stripped line is exactly ``'''`` or ``\"\"\"``.
    """
    return line.strip() in QUOTE_DELIMITERS


def is_blank(line: str) -> bool:
    """Check whether a line holds nothing but whitespace."""
    return not line.strip()


def is_blank_or_comment(line: str) -> bool:
    """Check whether a line is empty or a ``#`` comment.

    Args:
        line: Line to inspect.

    Returns:
        bool: True when the stripped line is empty or starts with ``#``.
    """
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_PREFIX)


def parse_tag_line(line: str) -> list[str] | None:
    """Extract tags from a line made up solely of ``@``-prefixed tokens.

    Tags are lowercased and returned without the ``@``, in first-seen order
    and without duplicates. A line with no tokens at all is not a tag line.

    Args:
        line: Line to inspect.

    Returns:
        list[str] | None: The tags, or None when the line is not a tag line.

    Examples:
        parse_tag_line("  @Smoke @wip @smoke")  # ["smoke", "wip"]
        parse_tag_line("@smoke Given a step")  # None
        parse_tag_line("")  # None
    """
    tokens = line.split()
    if not tokens:
        return None
    if not all(token.startswith(TAG_PREFIX) for token in tokens):
        return None
    return list(dict.fromkeys(token[1:].lower() for token in tokens))


def parse_feature_start(line: str) -> str | None:
    """Extract the feature name from a ``Feature:`` line.

    Args:
        line: Line to inspect.

    Returns:
        str | None: The stripped name (possibly empty), or None when the line
            does not start a feature.

    Examples:
        parse_feature_start("FEATURE: Login ")  # "Login"
    """
    feature_match = FEATURE_PATTERN.match(line.strip())
    if not feature_match:
        return None
    return feature_match.group("name").strip()


def is_background_start(line: str) -> bool:
    """Check whether a line is a ``Background:`` header in any letter case."""
    return line.strip().lower() == BACKGROUND_KEYWORD


def parse_scenario_start(line: str) -> ParsedScenarioStart | None:
    """Extract the header of a scenario or scenario outline.

    Args:
        line: Line to inspect.

    Returns:
        ParsedScenarioStart | None: Name and outline flag, or None when the line
            is not a scenario header.

    Examples:
        parse_scenario_start("\\tScenario Outline: Eating")  # ("Eating", True)
        parse_scenario_start("scenario:  Logging in")  # ("Logging in", False)
    """
    scenario_match = SCENARIO_PATTERN.match(line.strip())
    if not scenario_match:
        return None
    return ParsedScenarioStart(
        name=scenario_match.group("name").strip(),
        outline=scenario_match.group("outline") is not None,
    )
