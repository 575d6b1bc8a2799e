import dataclasses

import pytest

from shallot.models import Document, FrozenList, ParserMode, Scenario


def test_parser_mode_members():
    assert list(ParserMode) == [
        ParserMode.OPENING,
        ParserMode.FEATURE,
        ParserMode.BACKGROUND,
        ParserMode.SCENARIO,
    ]


def test_scenario_defaults():
    scenario = Scenario(name="S", outline=False)

    assert scenario.tags == []
    assert scenario.contents == []
    assert scenario.line == 0


def test_document_is_frozen():
    document = Document(feature="F", background=[], scenarios=[])

    with pytest.raises(dataclasses.FrozenInstanceError):
        document.feature = "G"


def test_document_to_dict():
    document = Document(
        feature="F",
        background=["  Given a step"],
        scenarios=[Scenario("S", True, ["smoke"], ["  When"], 3)],
    )

    assert document.to_dict() == {
        "feature": "F",
        "background": ["  Given a step"],
        "scenarios": [
            {"name": "S", "outline": True, "tags": ["smoke"], "contents": ["  When"], "line": 3}
        ],
    }


def test_scenarios_tagged_matches_any_tag():
    first = Scenario("A", False, ["smoke", "login"])
    second = Scenario("B", False, ["slow"])
    third = Scenario("C", False, [])
    document = Document(feature="F", background=[], scenarios=[first, second, third])

    assert document.scenarios_tagged("@SMOKE") == [first]
    assert document.scenarios_tagged("slow", "login") == [first, second]
    assert document.scenarios_tagged("missing") == []


def test_frozen_list_rejects_mutation():
    items = FrozenList(["a", "b"])

    for mutate in (
        lambda: items.append("c"),
        lambda: items.extend(["c"]),
        lambda: items.pop(),
        lambda: items.sort(),
        lambda: items.__setitem__(0, "z"),
        lambda: items.__delitem__(0),
    ):
        with pytest.raises(TypeError):
            mutate()

    assert items == ["a", "b"]
    assert repr(items) == "['a', 'b']"


def test_frozen_list_augmented_assignment_rejected():
    items = FrozenList(["a"])

    with pytest.raises(TypeError):
        items += ["b"]


def test_scenario_is_frozen_and_hashable():
    scenario = Scenario("S", False, ["smoke"], ["  Given a step"], 2)

    with pytest.raises(dataclasses.FrozenInstanceError):
        scenario.name = "T"
    assert isinstance(scenario.contents, FrozenList)
    assert hash(scenario) == hash(Scenario("S", False, ["smoke"], ["  Given a step"], 2))


def test_document_copies_lists_passed_in():
    background = ["  Given a step"]
    document = Document(feature="F", background=background, scenarios=[])

    background.append("  And another")

    assert document.background == ["  Given a step"]
    assert {document: "ok"}[Document("F", ["  Given a step"], [])] == "ok"
