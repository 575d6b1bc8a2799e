from __future__ import annotations

import io
import textwrap
from pathlib import Path

import pytest

from shallot.config import ShallotConfig
from shallot.exceptions import IncompleteDocumentError, TagPlacementError, UnexpectedLineError
from shallot.models import Scenario
from shallot.parser import ParseFileError, parse_feature, parse_file, parse_lines


def _write_feature(tmp_path: Path, content: str, name: str = "sample.feature") -> Path:
    target = tmp_path / name
    target.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return target


def test_canonical_feature_parses_to_expected_document(canonical_lines):
    document = parse_lines(canonical_lines)

    assert document.feature == "The name of the feature"
    assert document.background == [
        "\t\tEach step in the background",
        "\t\tBut without any additional parsing",
        "\t\tOr validation",
        "",
    ]
    assert document.scenarios == [
        Scenario(
            name="And each scenario",
            outline=False,
            tags=["shallot", "regression", "bug"],
            contents=[
                "\t\tWith tags, including those inherited",
                "\t\tFrom the feature level tags",
                "",
            ],
            line=11,
        ),
        Scenario(
            name="As well as scenario outlines",
            outline=True,
            tags=["shallot", "feature"],
            contents=[
                "\t\tWith support for the following",
                '\t\t\t"""',
                "\t\t\tlong-quoted",
                "\t\t\tsections",
                '\t\t\t"""',
                "\t\tWhile no extra <kind> for examples",
            ],
            line=16,
        ),
    ]


def test_canonical_feature_without_line_endings(canonical_lines):
    document = parse_lines(line.rstrip("\n") for line in canonical_lines)

    assert document == parse_lines(canonical_lines)


def test_parse_feature_handles_whole_text(canonical_lines):
    document = parse_feature("".join(canonical_lines))

    assert document.to_dict()["scenarios"][1]["tags"] == ["shallot", "feature"]


def test_parse_feature_splits_only_on_line_breaks():
    document = parse_feature("Feature: F\nScenario: S\n  Given a\x0cb c\nScenario: T\n")

    assert [(s.name, s.line, s.contents) for s in document.scenarios] == [
        ("S", 2, ["  Given a\x0cb c"]),
        ("T", 4, []),
    ]


def test_parse_feature_normalizes_crlf():
    document = parse_feature("Feature: F\r\nScenario: S\r\n  Given a step\r\n")

    assert document.scenarios[0].contents == ["  Given a step"]


def test_parse_lines_accepts_file_like_objects(canonical_lines):
    document = parse_lines(io.StringIO("".join(canonical_lines)))

    assert [scenario.name for scenario in document.scenarios] == [
        "And each scenario",
        "As well as scenario outlines",
    ]


def test_examples_table_stays_in_outline_contents():
    content = textwrap.dedent(
        """\
        Feature: Cucumbers
          Scenario Outline: Eating
            Given there are <start> cucumbers

            Examples:
              | start |
              | 12    |
        """
    )

    document = parse_feature(content)

    assert document.scenarios[0].contents == [
        "    Given there are <start> cucumbers",
        "",
        "    Examples:",
        "      | start |",
        "      | 12    |",
    ]


def test_parse_feature_respects_config():
    content = 'Feature: F\nScenario: S\n  """\n  text\n  """\n\n'

    document = parse_feature(
        content, ShallotConfig(keep_blank_lines=False, keep_quote_delimiters=False)
    )

    assert document.scenarios[0].contents == ["  text"]


@pytest.mark.parametrize(
    "content, error",
    [
        ("Scenario: X\n", UnexpectedLineError),
        ("Feature: F\n@tag\nBackground:\n", TagPlacementError),
        ("", IncompleteDocumentError),
        ("@tag\nFeature: F\nBackground:\n  Given a step\n", IncompleteDocumentError),
    ],
)
def test_errors_propagate_unchanged(content, error):
    with pytest.raises(error):
        parse_feature(content)


def test_parse_file_reads_feature(tmp_path: Path):
    target = _write_feature(
        tmp_path,
        """
        @smoke
        Feature: Login
          Scenario: Success
            Given a registered user
        """,
    )

    document = parse_file(target)

    assert document.feature == "Login"
    assert document.scenarios[0].tags == ["smoke"]
    assert document.scenarios[0].contents == ["    Given a registered user"]


def test_parse_file_normalizes_crlf(tmp_path: Path):
    target = tmp_path / "windows.feature"
    target.write_bytes(b"Feature: F\r\nScenario: S\r\n  step\r\n")

    document = parse_file(target)

    assert document.scenarios[0].contents == ["  step"]


def test_parse_file_prefixes_errors_with_path(tmp_path: Path):
    target = _write_feature(
        tmp_path,
        """
        # header comment
        As a user
        """,
    )

    with pytest.raises(ParseFileError) as excinfo:
        parse_file(target)

    message = str(excinfo.value)
    assert str(target) in message
    assert "line 2: unexpected content before feature declaration" in message
    assert isinstance(excinfo.value.__cause__, UnexpectedLineError)


def test_parse_file_reports_incomplete_document(tmp_path: Path):
    target = _write_feature(tmp_path, "Feature: Empty\n")

    with pytest.raises(ParseFileError, match="feature mode"):
        parse_file(target)


def test_parse_file_rejects_invalid_config(tmp_path: Path):
    target = _write_feature(tmp_path, "Feature: F\nScenario: S\n")

    with pytest.raises(ParseFileError, match="max_line_length"):
        parse_file(target, ShallotConfig(max_line_length=-1))


def test_parse_file_missing_file(tmp_path: Path):
    with pytest.raises(ParseFileError, match="Cannot read feature file"):
        parse_file(tmp_path / "missing.feature")


def test_parse_file_invalid_utf8(tmp_path: Path):
    target = tmp_path / "binary.feature"
    target.write_bytes(b"Feature: \xff\xfe\n")

    with pytest.raises(ParseFileError, match="Invalid UTF-8"):
        parse_file(target)
