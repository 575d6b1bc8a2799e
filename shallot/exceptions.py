"""Package-specific exception types."""

from __future__ import annotations

from .models import ParserMode


class ParseError(ValueError):
    """Base class for parsing-related errors.

    Every error raised while feeding a feature file is fatal to the parse
    session; the parser never resynchronizes after one.
    """


class UnexpectedLineError(ParseError):
    """Raised when content other than tags appears before ``Feature:``.

    Args:
        line_number: One-based index of the offending line.
        line: The offending line as it was fed.
    """

    def __init__(self, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(f"line {line_number}: unexpected content before feature declaration")


class TagPlacementError(ParseError):
    """Raised when tags directly precede a ``Background:`` line.

    Args:
        line_number: One-based index of the ``Background:`` line.
        tags: Tags that were pending when the background started.
    """

    def __init__(self, line_number: int, tags: list[str]):
        self.line_number = line_number
        self.tags = list(tags)
        rendered = " ".join(f"@{tag}" for tag in self.tags)
        super().__init__(f"line {line_number}: tags before background ({rendered})")


class IncompleteDocumentError(ParseError):
    """Raised when input ends before any scenario was started.

    Only the scenario mode has a meaningful end of input; the opening,
    feature and background modes still expect a scenario to follow.

    Args:
        mode: Parser mode active at end of input.
        line_number: Number of lines fed before end of input.
    """

    def __init__(self, mode: ParserMode, line_number: int = 0):
        self.mode = mode
        self.line_number = line_number
        super().__init__(
            f"line {line_number}: unexpected end of input in {mode.value} mode "
            "(no scenario was started)"
        )


class LineTooLongError(ParseError):
    """Raised when a line exceeds the configured maximum length.

    Args:
        line_number: One-based index of the offending line.
        max_line_length: Maximum allowed line length in characters.
    """

    def __init__(self, line_number: int, max_line_length: int):
        self.line_number = line_number
        self.max_line_length = max_line_length
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"line {self.line_number}: exceeds maximum allowed length "
            f"of {self.max_line_length} characters"
        )


class ParserFinalizedError(ParseError):
    """Raised when a parser is used again after producing its document."""

    def __init__(self):
        super().__init__("parser already finalized; create a new parser for each document")
