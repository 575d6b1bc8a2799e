import pytest
from click.testing import CliRunner

CANONICAL_LINES = [
    "@shallot\n",
    "Feature: The name of the feature\n",
    "\tThis gets completely ignored.\n",
    "\n",
    "\tBackground:\n",
    "\t\tEach step in the background\n",
    "\t\tBut without any additional parsing\n",
    "\t\tOr validation\n",
    "\n",
    "\t@regression @bug\n",
    "\tScenario: And each scenario\n",
    "\t\tWith tags, including those inherited\n",
    "\t\tFrom the feature level tags\n",
    "\n",
    "\t@feature\n",
    "\tScenario Outline: As well as scenario outlines\n",
    "\t\tWith support for the following\n",
    '\t\t\t"""\n',
    "\t\t\tlong-quoted\n",
    "\t\t\tsections\n",
    '\t\t\t"""\n',
    "\t\tWhile no extra <kind> for examples\n",
]


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def canonical_lines() -> list[str]:
    """The reference feature file, one line per entry with newlines kept."""
    return list(CANONICAL_LINES)
