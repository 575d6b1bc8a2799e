"""Incremental parsing of Gherkin feature files."""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path

from .classifier import (
    is_background_start,
    is_blank,
    is_blank_or_comment,
    is_quote_delimiter,
    parse_feature_start,
    parse_scenario_start,
    parse_tag_line,
    strip_line_ending,
)
from .config import ConfigError, ShallotConfig, validate_config
from .exceptions import (
    IncompleteDocumentError,
    LineTooLongError,
    ParseError,
    ParserFinalizedError,
    TagPlacementError,
    UnexpectedLineError,
)
from .filesystem import safe_read
from .models import Document, ParsedScenarioStart, ParserMode, Scenario

logger = logging.getLogger(__name__)


def _content_length(line: str) -> int:
    line_len = len(line)
    if line.endswith("\n"):
        line_len -= 1
        if line_len > 0 and line[line_len - 1] == "\r":
            line_len -= 1
    return line_len


class FeatureParser:
    """Line-at-a-time parser for a single feature file.

    Feed lines in file order with `feed`, then call `finalize` once to obtain
    the `Document`. An instance holds the state of one parse session and must
    not be shared between concurrent callers.

    Args:
        config: Parsing options; defaults to a new `ShallotConfig`.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        parser = FeatureParser()
        for line in handle:
            parser.feed(line)
        document = parser.finalize()
    """

    def __init__(self, config: ShallotConfig | None = None):
        self.config = config or ShallotConfig()
        validate_config(self.config)

        self._mode = ParserMode.OPENING
        self._file_tags: list[str] = []
        self._pending_tags: list[str] = []
        self._quote_marker: str | None = None
        self._current_scenario: Scenario | None = None
        self._current_contents: list[str] = []
        self._line_number = 0
        self._finalized = False

        self._feature: str | None = None
        self._background: list[str] = []
        self._scenarios: list[Scenario] = []

    @property
    def mode(self) -> ParserMode:
        return self._mode

    @property
    def line_number(self) -> int:
        return self._line_number

    @property
    def feature(self) -> str | None:
        return self._feature

    @property
    def background(self) -> list[str]:
        return list(self._background)

    @property
    def scenarios(self) -> list[Scenario]:
        """Scenarios completed so far; the one being read is not included."""
        return list(self._scenarios)

    @property
    def file_tags(self) -> list[str]:
        return list(self._file_tags)

    @property
    def pending_tags(self) -> list[str]:
        return list(self._pending_tags)

    @property
    def quote_marker(self) -> str | None:
        return self._quote_marker

    @property
    def current_scenario(self) -> Scenario | None:
        """Snapshot of the scenario being read, including its lines so far."""
        if self._current_scenario is None:
            return None
        return replace(self._current_scenario, contents=self._current_contents)

    @property
    def in_verbatim_block(self) -> bool:
        return self._quote_marker is not None

    def feed(self, line: str) -> None:
        """Consume the next line of the feature file.

        Verbatim blocks, comments and blank lines are handled here; everything
        else is routed to the handler for the current mode.

        Args:
            line: The next line, with or without its trailing newline.

        Raises:
            UnexpectedLineError: If non-tag content precedes ``Feature:``.
            TagPlacementError: If tags directly precede ``Background:``.
            LineTooLongError: If the line exceeds ``config.max_line_length``.
            ParserFinalizedError: If `finalize` has already succeeded.
        """
        if self._finalized:
            raise ParserFinalizedError()

        self._line_number += 1
        if _content_length(line) > self.config.max_line_length:
            raise LineTooLongError(self._line_number, self.config.max_line_length)

        stripped = line.strip()
        if self._quote_marker is None and is_quote_delimiter(line):
            self._quote_marker = stripped
            logger.debug("line %d: verbatim block opened with %s", self._line_number, stripped)
            if self._drops_quote_delimiter():
                return
        elif self._quote_marker is not None and stripped == self._quote_marker:
            self._quote_marker = None
            logger.debug("line %d: verbatim block closed", self._line_number)
            if self._drops_quote_delimiter():
                return
        elif self._quote_marker is None and is_blank_or_comment(line):
            if not self._keeps_blank_line(line):
                return

        self._dispatch(line)

    def finalize(self) -> Document:
        """Signal end of input and build the document.

        Returns:
            Document: The parsed feature, background and scenarios.

        Raises:
            IncompleteDocumentError: If no scenario has been started.
            ParserFinalizedError: If called more than once.
        """
        if self._finalized:
            raise ParserFinalizedError()

        if self._mode is not ParserMode.SCENARIO:
            raise IncompleteDocumentError(self._mode, self._line_number)

        self._close_scenario()
        if self._pending_tags:
            logger.debug("discarding trailing tags with no scenario: %s", self._pending_tags)
        self._finalized = True

        return Document(
            feature=self._feature,
            background=list(self._background),
            scenarios=list(self._scenarios),
        )

    def _drops_quote_delimiter(self) -> bool:
        # Before the feature line a delimiter is never dropped, so it is rejected
        return not self.config.keep_quote_delimiters and self._mode is not ParserMode.OPENING

    def _keeps_blank_line(self, line: str) -> bool:
        return (
            self.config.keep_blank_lines
            and is_blank(line)
            and self._mode in (ParserMode.BACKGROUND, ParserMode.SCENARIO)
        )

    def _dispatch(self, line: str) -> None:
        if self._mode is ParserMode.OPENING:
            self._parse_opening(line)
        elif self._mode is ParserMode.FEATURE:
            self._parse_feature(line)
        elif self._mode is ParserMode.BACKGROUND:
            self._parse_background(line)
        elif self._mode is ParserMode.SCENARIO:
            self._parse_scenario(line)
        else:
            raise AssertionError(f"unhandled parser mode: {self._mode}")

    def _parse_opening(self, line: str) -> None:
        tags = parse_tag_line(line)
        if tags is not None:
            self._file_tags.extend(tags)
            return

        feature = parse_feature_start(line)
        if feature is not None:
            self._feature = feature
            self._enter(ParserMode.FEATURE)
            return

        raise UnexpectedLineError(self._line_number, strip_line_ending(line))

    def _parse_feature(self, line: str) -> None:
        # Verbatim text in the feature description is prose like any other
        if self.in_verbatim_block:
            return

        if is_background_start(line):
            if self._pending_tags:
                raise TagPlacementError(self._line_number, self._pending_tags)
            self._enter(ParserMode.BACKGROUND)
            return

        scenario = parse_scenario_start(line)
        if scenario is not None:
            self._start_scenario(scenario)
            return

        tags = parse_tag_line(line)
        if tags is not None:
            self._pending_tags.extend(tags)

    def _parse_background(self, line: str) -> None:
        if not self._parse_scenario_boundary(line):
            self._background.append(strip_line_ending(line))

    def _parse_scenario(self, line: str) -> None:
        if not self._parse_scenario_boundary(line):
            self._current_contents.append(strip_line_ending(line))

    def _parse_scenario_boundary(self, line: str) -> bool:
        """Handle tag and scenario header lines found in a body.

        Returns:
            bool: True when the line was consumed as tags or a header; False
                when it belongs to the body being accumulated.
        """
        if self.in_verbatim_block:
            return False

        tags = parse_tag_line(line)
        if tags is not None:
            self._pending_tags.extend(tags)
            return True

        scenario = parse_scenario_start(line)
        if scenario is not None:
            self._start_scenario(scenario)
            return True

        return False

    def _start_scenario(self, parsed: ParsedScenarioStart) -> None:
        self._close_scenario()

        self._current_scenario = Scenario(
            name=parsed.name,
            outline=parsed.outline,
            tags=list(dict.fromkeys(self._file_tags + self._pending_tags)),
            line=self._line_number,
        )
        self._current_contents = []
        self._pending_tags = []
        self._enter(ParserMode.SCENARIO)

    def _close_scenario(self) -> None:
        if self._current_scenario is None:
            return
        scenario = replace(self._current_scenario, contents=self._current_contents)
        self._current_scenario = None
        self._current_contents = []
        self._scenarios.append(scenario)
        logger.debug(
            "scenario %r from line %d closed with %d lines",
            scenario.name,
            scenario.line,
            len(scenario.contents),
        )

    def _enter(self, mode: ParserMode) -> None:
        if mode is not self._mode:
            logger.debug("line %d: %s -> %s", self._line_number, self._mode.value, mode.value)
        self._mode = mode


def parse_lines(lines: Iterable[str], config: ShallotConfig | None = None) -> Document:
    """Parse a complete feature file from any source of lines.

    Args:
        lines: Lines in file order, e.g. an open file handle.
        config: Parsing options; defaults to a new `ShallotConfig`.

    Returns:
        Document: The parsed feature.

    Raises:
        ParseError: Any error raised by `FeatureParser`, unchanged.
        ConfigError: If the configuration fails validation.

    Examples:
        with open("login.feature", encoding="utf-8") as handle:
            document = parse_lines(handle)
    """
    parser = FeatureParser(config)
    for line in lines:
        parser.feed(line)
    return parser.finalize()


def parse_feature(content: str, config: ShallotConfig | None = None) -> Document:
    """Parse feature file content held in memory.

    Lines are split the same way `parse_file` reads them: on ``\\n``, ``\\r\\n``
    or ``\\r`` only.

    Examples:
        parse_feature("Feature: Login\\nScenario: Success\\n  Given a user\\n")
    """
    return parse_lines(io.StringIO(content, newline=None), config)


class ParseFileError(Exception):
    """Raised when parsing a feature file fails."""


def parse_file(filepath: Path, config: ShallotConfig | None = None) -> Document:
    """Parse a feature file from disk, streaming it line by line.

    Args:
        filepath: Path to the feature file to parse.
        config: Parsing options; defaults to a new `ShallotConfig`.

    Returns:
        Document: The parsed feature.

    Raises:
        ParseFileError: If configuration is invalid, the content is malformed,
            or the file cannot be read or decoded. The message is prefixed with
            the file path.

    Examples:
        document = parse_file(Path("features/login.feature"))
    """
    config = config or ShallotConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ParseFileError(str(error)) from error

    logger.debug("parsing %s", filepath)
    try:
        with safe_read(filepath) as file:
            document = parse_lines(file, config)
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ParseFileError(error_message) from error
    except IOError as error:
        raise ParseFileError(str(error)) from error
    except ParseError as error:
        error_message = f"{filepath}: {error}"
        raise ParseFileError(error_message) from error

    logger.debug("parsed %s: %d scenarios", filepath, len(document.scenarios))
    return document
