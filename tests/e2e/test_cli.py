"""End-to-end CLI coverage for the commands exposed by lib_food_data."""

from __future__ import annotations

import json
from pathlib import Path

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from lib_food_data import cli
from tests.support import DataSandbox, create_data_sandbox


@pytest.fixture()
def sandbox(tmp_path: Path) -> DataSandbox:
    sandbox = create_data_sandbox(tmp_path)
    sandbox.leaf("ingredients/meat.toml", term="meat")
    sandbox.leaf("ingredients/meat/beef.toml", term="beef")
    sandbox.leaf("ingredients/meat/beef/brisket.toml", term="brisket")
    sandbox.leaf("diets/vegan.toml", term="vegan")
    sandbox.migration("ingredients", 2, ("A", "meat"))
    sandbox.migration("ingredients", 10, ("M", "meat/beef meat/cattle"))
    return sandbox


def _runner() -> CliRunner:
    return CliRunner()


def test_cli_tree_outputs_json(sandbox: DataSandbox) -> None:
    result = _runner().invoke(cli.cli, ["tree", "--data", str(sandbox.root), "--indent", "0"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["meat"]["beef"]["__info__"]["term"] == "beef"


def test_cli_tree_flat_category(sandbox: DataSandbox) -> None:
    result = _runner().invoke(cli.cli, ["tree", "--data", str(sandbox.root), "--category", "diets"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"vegan": {"term": "vegan"}}


def test_cli_tree_rejects_group_for_flat_category(sandbox: DataSandbox) -> None:
    result = _runner().invoke(cli.cli, ["tree", "--data", str(sandbox.root), "--category", "diets", "--group", "x"])
    assert result.exit_code != 0


def test_cli_data_root_from_environment(sandbox: DataSandbox) -> None:
    result = _runner().invoke(cli.cli, ["tree", "--group", "meat"], env={cli.DATA_ENVVAR: str(sandbox.root)})
    assert result.exit_code == 0
    assert json.loads(result.output)["beef"]["brisket"]["__info__"] == {"term": "brisket"}


def test_cli_walk_prints_ancestors(sandbox: DataSandbox) -> None:
    result = _runner().invoke(cli.cli, ["walk", "--data", str(sandbox.root)])
    assert result.exit_code == 0
    lines = [json.loads(line) for line in result.output.splitlines()]
    assert [line["info"]["term"] for line in lines] == ["meat", "beef", "brisket"]
    assert lines[2]["ancestors"] == ["beef", "meat"]


def test_cli_migrations_since(sandbox: DataSandbox) -> None:
    result = _runner().invoke(
        cli.cli, ["migrations", "--data", str(sandbox.root), "--category", "ingredients", "--since", "2"]
    )
    assert result.exit_code == 0
    assert json.loads(result.output) == [{"timestamp": "10", "move": [["meat/beef", "meat/cattle"]]}]


def test_cli_info_handles_missing_metadata(monkeypatch) -> None:
    def _raise_pkg_not_found(*_args, **_kwargs):
        raise cli.metadata.PackageNotFoundError()

    monkeypatch.setattr(cli.metadata, "metadata", _raise_pkg_not_found)
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "metadata unavailable" in result.output


def test_cli_surfaces_parse_errors(sandbox: DataSandbox) -> None:
    sandbox.write("ingredients/meat/pork.toml", "term = ")
    result = _runner().invoke(cli.cli, ["tree", "--data", str(sandbox.root)])
    assert result.exit_code != 0
    assert result.exception is not None


def test_cli_main_restores_traceback_flag(sandbox: DataSandbox) -> None:
    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    exit_code = cli.main(["--traceback", "tree", "--data", str(sandbox.root)], restore_traceback=True)
    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback
