"""Constants used across the shallot package."""

from __future__ import annotations

import re

# Gherkin keyword patterns, matched against the stripped line
FEATURE_PATTERN = re.compile(r"^feature:(?P<name>.*)$", re.IGNORECASE)
SCENARIO_PATTERN = re.compile(r"^scenario(?P<outline> outline)?:(?P<name>.*)$", re.IGNORECASE)
BACKGROUND_KEYWORD = "background:"

TAG_PREFIX = "@"
COMMENT_PREFIX = "#"

# Verbatim block delimiters
SINGLE_QUOTE_DELIMITER = "'''"
DOUBLE_QUOTE_DELIMITER = '"""'
QUOTE_DELIMITERS = (SINGLE_QUOTE_DELIMITER, DOUBLE_QUOTE_DELIMITER)

# Limits
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_LINE_LENGTH = 10_000

FEATURE_EXTENSIONS = (".feature", ".story", ".txt")
