"""Tests for the Casper catalog facade."""

import pytest

from casper import Casper, resolve_entities
from casper.catalog import manifest_hash

RECORDS = [
    {"id": "property.heavy", "name": "Heavy", "property": {"description": "Heavy."}},
    {"id": "weapon.club", "name": "Club", "item": {}, "properties": [{"ref": "heavy"}]},
]


def test_hash_ignores_key_order():
    assert manifest_hash({"a": {"x": 1, "y": 2}}) == manifest_hash({"a": {"y": 2, "x": 1}})
    assert manifest_hash({"a": {}}) != manifest_hash({"b": {}})


def test_from_result():
    catalog = Casper.from_result(resolve_entities(RECORDS))

    assert len(catalog) == 2
    assert "weapon.club" in catalog
    assert catalog.get("weapon.club")["properties"][0]["id"] == "property.heavy"
    assert catalog.get("weapon.nope") is None
    assert not catalog.errors


def test_same_data_same_hash():
    first = Casper.from_result(resolve_entities(RECORDS))
    second = Casper.from_result(resolve_entities(RECORDS))
    assert first.hash == second.hash


def test_json_round_trip():
    catalog = Casper.from_result(resolve_entities(RECORDS))
    loaded = Casper.from_json(catalog.to_json())

    assert loaded.manifest == catalog.manifest
    assert loaded.hash == catalog.hash


def test_from_json_keeps_given_hash():
    loaded = Casper.from_json('{"manifest": {}, "hash": "abc"}')
    assert loaded.hash == "abc"


@pytest.mark.parametrize(
    "payload,message",
    [
        ('{"hash": "abc"}', "did not include a manifest"),
        ('{"manifest": {}}', "did not include a version hash"),
        ("[1, 2]", "did not include a manifest"),
        ("{", "Invalid catalog JSON"),
    ],
)
def test_from_json_invalid(payload, message):
    with pytest.raises(ValueError, match=message):
        Casper.from_json(payload)


def test_parse(tmp_path):
    (tmp_path / "data.yaml").write_text("- id: rule.x\n  name: X\n  description: Hi.\n")
    catalog = Casper.parse(tmp_path)
    assert catalog.get("rule.x")["description"]["raw"] == "Hi."
