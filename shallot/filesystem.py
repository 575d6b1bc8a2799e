"""Locating, checking and opening feature files on disk."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_LINE_LENGTH, FEATURE_EXTENSIONS

MAX_FILE_SIZE_ENV_VAR = "SHALLOT_MAX_FILE_SIZE"
MAX_LINE_LENGTH_ENV_VAR = "SHALLOT_MAX_LINE_LENGTH"


def _limit_from_env(name: str, default: int, unit: str) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default

    try:
        limit = int(raw)
    except ValueError as error:
        raise ValueError(f"{name} must be a whole number of {unit}, got {raw!r}") from error

    if limit <= 0:
        raise ValueError(f"{name} must allow at least one {unit[:-1]}, got {limit}")

    return limit


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Largest feature file, in bytes, that shallot agrees to parse.

    ``SHALLOT_MAX_FILE_SIZE`` wins over `default` when it is set.

    Raises:
        ValueError: If the variable is set to anything but a positive integer.
    """
    return _limit_from_env(MAX_FILE_SIZE_ENV_VAR, default, "bytes")


def get_max_line_length(default: int = DEFAULT_MAX_LINE_LENGTH) -> int:
    return _limit_from_env(MAX_LINE_LENGTH_ENV_VAR, default, "characters")


def _passes_through_symlink(path: Path) -> bool:
    for part in (path, *path.parents):
        try:
            if part.is_symlink():
                return True
        except OSError:
            continue
    return False


def resolve_feature_path(raw_path: str, project_dir: Path) -> Path:
    """Turn a command-line argument into the absolute path of a feature file.

    The file must exist inside `project_dir`, be reached without symlinks and
    carry one of the extensions in ``FEATURE_EXTENSIONS``.

    Args:
        raw_path: Path as typed by the user; ``~`` is expanded.
        project_dir: Resolved directory the feature file must live under.

    Returns:
        Path: The resolved feature file path.

    Raises:
        ValueError: With a message naming the first check the path failed.

    Examples:
        resolve_feature_path("features/login.feature", Path.cwd().resolve())
    """
    path = Path(raw_path).expanduser()

    if _passes_through_symlink(path):
        raise ValueError(f"Refusing to follow a symlink to a feature file: {path}")

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"No feature file at {path}") from error
    except OSError as error:
        raise ValueError(f"Cannot resolve feature path {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"Feature path {resolved} is not a regular file")

    if not resolved.is_relative_to(project_dir):
        error_message = f"Feature file {resolved} lies outside the project directory {project_dir}"
        raise ValueError(error_message)

    if resolved.suffix.lower() not in FEATURE_EXTENSIONS:
        expected = ", ".join(FEATURE_EXTENSIONS)
        raise ValueError(f"{resolved.name} has no feature file extension (expected {expected})")

    return resolved


def check_feature_file(filepath: Path, max_size: int) -> int:
    """Stat a feature file without following symlinks and enforce `max_size`.

    Returns:
        int: Size of the file in bytes.

    Raises:
        IOError: If the file cannot be stat'ed, is not a regular file, or is
            larger than `max_size` bytes.
    """
    try:
        info = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise IOError(f"Cannot read feature file {filepath}: {error}") from error

    if stat.S_ISLNK(info.st_mode):
        raise IOError(f"Refusing to follow a symlink to a feature file: {filepath}")
    if not stat.S_ISREG(info.st_mode):
        raise IOError(f"Feature path {filepath} is not a regular file")
    if info.st_size > max_size:
        error_message = f"Feature file {filepath} is {info.st_size} bytes, "
        error_message += f"over the {max_size} byte limit"
        raise IOError(error_message)

    return info.st_size


def safe_read(filepath: Path) -> TextIO:
    """Open a feature file as UTF-8 text with universal newlines.

    Raises:
        IOError: If the file is missing, unreadable or a directory.

    Examples:
        with safe_read(Path("features/login.feature")) as handle:
            document = parse_lines(handle)
    """
    try:
        return open(filepath, "r", encoding="UTF-8")
    except (FileNotFoundError, PermissionError, IsADirectoryError, NotADirectoryError) as error:
        raise IOError(f"Cannot read feature file {filepath}: {error}") from error
