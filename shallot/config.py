"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_LINE_LENGTH


@dataclass
class ShallotConfig:
    """Configuration for parsing feature files.

    Attributes:
        keep_blank_lines: Store blank lines found in background and scenario
            bodies as empty strings instead of discarding them.
        keep_quote_delimiters: Store the ``'''``/``\"\"\"`` lines that open and
            close verbatim blocks in the surrounding body.
        max_line_length: Maximum line length allowed during parsing.
        max_file_size: Maximum file size in bytes that will be processed.

    Examples:
        ShallotConfig(keep_blank_lines=False, max_line_length=200)
    """

    # Body content
    keep_blank_lines: bool = True
    keep_quote_delimiters: bool = True

    # Limits
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_line_length` must be a positive integer")
    """


def load_config(search_path: Path) -> ShallotConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.shallot]`` table from `pyproject.toml` and the ``[shallot]`` or
    ``[tool.shallot]`` table from `.shallot.toml` when present. Returns default
    values when no configuration is found. TOML files that cannot be read or
    decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ShallotConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("features"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "shallot")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".shallot.toml",
            table_paths=[("shallot",), ("tool", "shallot")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ShallotConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> ShallotConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ShallotConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # Accepts `keep-blank-lines` as well as `keep_blank_lines`
    normalized = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return ShallotConfig(**normalized)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: ShallotConfig) -> None:
    """Validate a `ShallotConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If flags are not booleans or numeric limits are not
            positive integers.

    Examples:
        validate_config(ShallotConfig(max_line_length=120))
    """
    for key in ("keep_blank_lines", "keep_quote_delimiters"):
        if not isinstance(getattr(config, key), bool):
            raise ConfigError(f"`{key}` must be a boolean")

    limits = {
        "max_line_length": config.max_line_length,
        "max_file_size": config.max_file_size,
    }
    _ensure_integers(limits)
    _ensure_positive(limits)


def apply_overrides(config: ShallotConfig, **overrides: object) -> ShallotConfig:
    """Apply override values to a `ShallotConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ShallotConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ShallotConfig`.

    Examples:
        updated = apply_overrides(config, keep_blank_lines=False)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ShallotConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ShallotConfig: Validated configuration ready for parsing.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), keep_quote_delimiters=False)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
