"""Tests for lineages, sublineages, traits and languages."""

from casper.components import parse_stature
from casper.core.models import ErrorKind
from casper.resolution import resolve_entities


def _records(*extra: dict) -> list[dict]:
    return [
        {
            "id": "language.common",
            "name": "Common",
            "description": "Spoken everywhere.",
            "language": {"speakers": ["humans"]},
        },
        {
            "id": "language.elvish",
            "name": "Elvish",
            "description": "Fluid.",
            "language": {"script": "language.common", "exotic": True},
        },
        {
            "id": "trait.darkvision",
            "name": "Darkvision",
            "description": "See in the dark.",
            "trait": {"type": "minor"},
        },
        {
            "id": "lineage.elf",
            "name": "Elf",
            "description": "Long-lived.",
            "lineage": {
                "stature": {"height": "5-6", "weight": "100-150"},
                "size": "medium",
                "languages": ["language.common"],
                "traits": ["trait.darkvision"],
            },
        },
        {
            "id": "lineage.elf.high",
            "name": "High Elf",
            "description": "Scholarly.",
            "sublineage": {"of": "lineage.elf", "languages": ["language.elvish"], "size": "tall"},
        },
        *extra,
    ]


def test_parse_stature():
    stature = parse_stature({"height": "4-5", "weight": 120})
    assert stature.height == [4, 5]
    assert stature.weight == [120]


def test_language_script():
    result = resolve_entities(_records())

    elvish = result.manifest["language.elvish"].to_dict()
    assert elvish["language"]["script"]["id"] == "language.common"
    assert elvish["language"]["exotic"] is True
    assert elvish["type"] == "language"


def test_lineage():
    result = resolve_entities(_records())
    assert result.ok

    elf = result.manifest["lineage.elf"].to_dict()
    lineage = elf["lineage"]
    assert lineage["stature"] == {"height": [5, 6], "weight": [100, 150]}
    assert [s["id"] for s in lineage["languages"]] == ["language.common"]
    assert [s["id"] for s in lineage["traits"]] == ["trait.darkvision"]
    assert lineage["size"] == "medium"
    assert [s["id"] for s in lineage["subs"]] == ["lineage.elf.high"]
    assert elf["type"] == "lineage"


def test_sublineage_delta_and_full():
    result = resolve_entities(_records())

    high = result.manifest["lineage.elf.high"].to_dict()
    sub = high["sublineage"]
    assert sub["of"]["id"] == "lineage.elf"
    assert sub["delta"]["size"] == "tall"
    assert [s["id"] for s in sub["delta"]["languages"]] == ["language.elvish"]
    assert [s["id"] for s in sub["full"]["languages"]] == ["language.common", "language.elvish"]
    assert sub["full"]["size"] == "tall"
    assert sub["full"]["stature"] == {"height": [5, 6], "weight": [100, 150]}
    assert "subs" not in sub["full"]
    assert high["type"] == "sublineage"


def test_undefined_trait():
    bad = {
        "id": "lineage.orc",
        "name": "Orc",
        "description": "Strong.",
        "lineage": {"traits": ["trait.rage"]},
    }
    result = resolve_entities(_records(bad))

    (issue,) = result.errors.get("lineage.orc")
    assert issue.kind == ErrorKind.UNDEFINED_REFERENCE
    assert issue.message == 'lineage.orc contains an undefined Trait reference: "trait.rage"'


def test_sublineage_of_unknown_lineage():
    bad = {"id": "lineage.x.y", "name": "Y", "description": "y", "sublineage": {"of": "lineage.x"}}
    result = resolve_entities(_records(bad))
    assert result.errors.get("lineage.x.y")[0].kind == ErrorKind.UNDEFINED_REFERENCE


def test_failed_base_lineage_takes_sublineages_with_it():
    records = _records()
    records[3]["lineage"]["stature"] = {"height": "tall", "weight": "1"}
    result = resolve_entities(records)

    assert "lineage.elf" not in result.manifest
    assert "lineage.elf.high" not in result.manifest
    assert result.errors.get("lineage.elf.high")[0].kind == ErrorKind.UNDEFINED_REFERENCE


def test_failed_sublineage_withdrawn_from_subs():
    records = _records(
        {
            "id": "lineage.elf.wood",
            "name": "Wood Elf",
            "description": "Swift.",
            "sublineage": {"of": "lineage.elf"},
            "req": {"wis": 30},
        }
    )
    result = resolve_entities(records)

    subs = result.manifest["lineage.elf"]["lineage"].subs
    assert [s.id for s in subs] == ["lineage.elf.high"]
