from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from lib_food_data.domain.layout import DEFAULT_LAYOUT, DataLayout


def test_default_layout_matches_data_set_conventions() -> None:
    assert DEFAULT_LAYOUT.ingredients == "ingredients"
    assert DEFAULT_LAYOUT.migrations == "__migrations__"
    assert DEFAULT_LAYOUT.extension == ".toml"
    assert DEFAULT_LAYOUT.migration_extension == ".yml"
    assert DEFAULT_LAYOUT.info_stem == "info"


def test_category_root_with_and_without_group(tmp_path: Path) -> None:
    assert DEFAULT_LAYOUT.category_root(tmp_path, "cuisines") == tmp_path / "cuisines"
    assert DEFAULT_LAYOUT.category_root(tmp_path, "cuisines", "asian") == tmp_path / "cuisines" / "asian"


def test_migration_root_uses_configured_directory(tmp_path: Path) -> None:
    layout = DataLayout(migrations="_log")
    assert layout.migration_root(tmp_path, "diets") == tmp_path / "diets" / "_log"


def test_layout_is_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_LAYOUT.extension = ".json"  # type: ignore[misc]
