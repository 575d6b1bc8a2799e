"""
shallot: an incremental parser for Gherkin feature files.

Parses just enough Gherkin to give you the feature name, the background
steps, and each scenario (outline) with its tags and raw step lines.

CLI Usage:
    shallot features/login.feature

Library Usage:
    from shallot import FeatureParser, parse_feature

    document = parse_feature(Path("login.feature").read_text())

    parser = FeatureParser()
    for line in stream:
        parser.feed(line)
    document = parser.finalize()
"""

from .classifier import (
    is_background_start,
    is_blank_or_comment,
    is_quote_delimiter,
    parse_feature_start,
    parse_scenario_start,
    parse_tag_line,
)
from .config import ConfigError, ShallotConfig
from .exceptions import (
    IncompleteDocumentError,
    LineTooLongError,
    ParseError,
    ParserFinalizedError,
    TagPlacementError,
    UnexpectedLineError,
)
from .models import Document, ParsedScenarioStart, ParserMode, Scenario
from .parser import FeatureParser, ParseFileError, parse_feature, parse_file, parse_lines

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "FeatureParser",
    "parse_feature",
    "parse_file",
    "parse_lines",
    # Line classification
    "is_background_start",
    "is_blank_or_comment",
    "is_quote_delimiter",
    "parse_feature_start",
    "parse_scenario_start",
    "parse_tag_line",
    # Data models
    "Document",
    "ParsedScenarioStart",
    "ParserMode",
    "Scenario",
    "ShallotConfig",
    # Exceptions
    "ConfigError",
    "IncompleteDocumentError",
    "LineTooLongError",
    "ParseError",
    "ParseFileError",
    "ParserFinalizedError",
    "TagPlacementError",
    "UnexpectedLineError",
    # Version
    "__version__",
]
