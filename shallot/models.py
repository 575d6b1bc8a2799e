"""Data models for shallot."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


class ParserMode(Enum):
    """Modes the feature parser moves through while scanning a file.

    Attributes:
        OPENING: Before the ``Feature:`` line; only tags are accepted.
        FEATURE: After ``Feature:``; free-form prose is ignored.
        BACKGROUND: After ``Background:``; lines become background steps.
        SCENARIO: After a scenario header; lines become scenario contents.
    """

    OPENING = "opening"
    FEATURE = "feature"
    BACKGROUND = "background"
    SCENARIO = "scenario"


class FrozenList(list):
    """A list that rejects mutation, used for the fields of finished models.

    Compares equal to plain lists with the same items and is hashable.

    Examples:
        FrozenList(["a", "b"]) == ["a", "b"]  # True
        FrozenList(["a"]).append("b")  # TypeError
    """

    def _reject(self, *args, **kwargs):
        raise TypeError(f"{type(self).__name__} does not support item assignment or mutation")

    append = extend = insert = remove = pop = clear = sort = reverse = _reject
    __setitem__ = __delitem__ = __iadd__ = __imul__ = _reject

    def __hash__(self):
        return hash(tuple(self))

    def __reduce__(self):
        return (type(self), (list(self),))

    def __repr__(self):
        return list.__repr__(self)


class ParsedScenarioStart(NamedTuple):
    """Payload of a ``Scenario:`` or ``Scenario Outline:`` header line."""

    name: str
    outline: bool


@dataclass(frozen=True)
class Scenario:
    """A scenario or scenario outline and its raw step lines.

    Attributes:
        name: Title given on the header line.
        outline: True for ``Scenario Outline:``, False for ``Scenario:``.
        tags: Feature-level tags followed by the scenario's own tags, without
            duplicates and in first-seen order.
        contents: Body lines with a single trailing newline removed.
        line: One-based line number of the header line.
    """

    name: str
    outline: bool
    tags: list[str] = field(default_factory=FrozenList)
    contents: list[str] = field(default_factory=FrozenList)
    line: int = 0

    def __post_init__(self):
        object.__setattr__(self, "tags", FrozenList(self.tags))
        object.__setattr__(self, "contents", FrozenList(self.contents))

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "outline": self.outline,
            "tags": list(self.tags),
            "contents": list(self.contents),
            "line": self.line,
        }


@dataclass(frozen=True)
class Document:
    """Structured result of parsing a feature file.

    Attributes:
        feature: Name given on the ``Feature:`` line.
        background: Background step lines, in file order.
        scenarios: Scenarios and scenario outlines, in file order.
    """

    feature: str | None
    background: list[str]
    scenarios: list[Scenario]

    def __post_init__(self):
        object.__setattr__(self, "background", FrozenList(self.background))
        object.__setattr__(self, "scenarios", FrozenList(self.scenarios))

    def scenarios_tagged(self, *tags: str) -> list[Scenario]:
        """Select scenarios carrying any of the given tags.

        Args:
            tags: Tags to match, with or without a leading ``@``; matching is
                case-insensitive.

        Returns:
            list[Scenario]: Matching scenarios in file order.

        Examples:
            document.scenarios_tagged("@smoke", "regression")
        """
        wanted = {tag.lstrip("@").lower() for tag in tags}
        return [scenario for scenario in self.scenarios if wanted.intersection(scenario.tags)]

    def to_dict(self) -> dict[str, object]:
        return {
            "feature": self.feature,
            "background": list(self.background),
            "scenarios": [scenario.to_dict() for scenario in self.scenarios],
        }
