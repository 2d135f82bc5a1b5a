from __future__ import annotations

import dataclasses

import pytest

from lib_food_data.domain.migration import CHANGE_KINDS, Migration


def test_mapping_view_omits_empty_change_kinds() -> None:
    record = Migration("12", add=("fruits/apple",), move=(("veg/tomato", "fruits/tomato"),))
    assert list(record) == ["timestamp", "add", "move"]
    assert len(record) == 3
    assert record["add"] == ["fruits/apple"]
    assert "update" not in record
    with pytest.raises(KeyError):
        record["delete"]


def test_attributes_are_always_present() -> None:
    record = Migration("12")
    assert (record.add, record.update, record.delete, record.move) == ((), (), (), ())
    assert dict(record) == {"timestamp": "12"}


def test_record_equals_plain_dict() -> None:
    record = Migration("1", add=("x",), update=("y",), delete=("z",), move=(("p", "q"),))
    assert record == {"timestamp": "1", "add": ["x"], "update": ["y"], "delete": ["z"], "move": [("p", "q")]}
    assert record.as_dict() == dict(record)


def test_mapping_view_returns_fresh_lists() -> None:
    record = Migration("1", add=("x",))
    record["add"].append("y")
    assert record.add == ("x",)


def test_record_is_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        Migration("1").timestamp = "2"  # type: ignore[misc]


def test_as_int_and_change_kinds() -> None:
    assert Migration("-4").as_int() == -4
    assert CHANGE_KINDS == ("add", "update", "delete", "move")
