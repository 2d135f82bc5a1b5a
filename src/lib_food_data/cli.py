"""CLI adapter for ``lib_food_data`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators inspect a food data root (aggregated trees, ancestor context of
every leaf, pending migrations) without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_tree` – prints a category as one JSON tree.
* :func:`cli_walk` – prints one JSON line per leaf with its ancestor names.
* :func:`cli_migrations` – prints the migrations after a checkpoint.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It calls the composition root only and
is the single place that reads the environment (``LIB_FOOD_DATA_ROOT``).
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from . import core
from .domain.layout import DEFAULT_LAYOUT

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

DATA_ENVVAR: Final[str] = "LIB_FOOD_DATA_ROOT"
FLAT_CATEGORIES: Final[tuple[str, ...]] = ("diets", "allergens")
NESTED_CATEGORIES: Final[tuple[str, ...]] = ("ingredients", "cuisines")
CATEGORY_CHOICES: Final[tuple[str, ...]] = FLAT_CATEGORIES + NESTED_CATEGORIES

_data_option = click.option(
    "--data",
    "data",
    type=click.Path(path_type=Path, file_okay=False, dir_okay=True),
    envvar=DATA_ENVVAR,
    required=True,
    help=f"Root of the food data set (defaults to ${DATA_ENVVAR})",
)
_indent_option = click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_food_data")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Food data tree and migration reader",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_food_data",
    message="lib_food_data version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_food_data")
    except metadata.PackageNotFoundError:
        click.echo("lib_food_data (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_food_data')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("tree", context_settings=CLICK_CONTEXT_SETTINGS)
@_data_option
@click.option(
    "--category",
    type=click.Choice(CATEGORY_CHOICES, case_sensitive=False),
    default="ingredients",
    show_default=True,
    help="Category to aggregate",
)
@click.option("--group", default="", help="Restrict nested categories to this sub-directory")
@_indent_option
def cli_tree(data: Path, category: str, group: str, indent: Optional[int]) -> None:
    """Print *category* as one JSON tree keyed by path segment."""

    category = category.lower()
    if category in FLAT_CATEGORIES:
        if group:
            raise click.BadParameter(f"{category} has no groups", param_hint="--group")
        tree = core.diets(data=data) if category == "diets" else core.allergens(data=data)
    elif category == "ingredients":
        tree = core.ingredients(group, data=data)
    else:
        tree = core.cuisines(group, data=data)
    click.echo(tree.to_json(indent=indent))


@cli.command("walk", context_settings=CLICK_CONTEXT_SETTINGS)
@_data_option
@click.option(
    "--category",
    type=click.Choice(CATEGORY_CHOICES, case_sensitive=False),
    default="ingredients",
    show_default=True,
    help="Category to walk",
)
@click.option("--group", default="", help="Restrict the walk to this sub-directory")
def cli_walk(data: Path, category: str, group: str) -> None:
    """Print one JSON line per leaf with the names of its ancestors (closest first)."""

    root = DEFAULT_LAYOUT.category_root(data, category.lower(), group)
    core.fold(root, None, _echo_leaf)


@cli.command("migrations", context_settings=CLICK_CONTEXT_SETTINGS)
@_data_option
@click.option(
    "--category",
    type=click.Choice(CATEGORY_CHOICES, case_sensitive=False),
    required=True,
    help="Category whose migration log is read",
)
@click.option(
    "--since",
    type=int,
    default=-1,
    show_default=True,
    help="Checkpoint timestamp; only later migrations are printed",
)
@_indent_option
def cli_migrations(data: Path, category: str, since: int, indent: Optional[int]) -> None:
    """Print the migrations of *category* after ``--since`` as a JSON list."""

    records = core.migrations(category.lower(), since, data=data)
    click.echo(json.dumps([record.as_dict() for record in records], indent=indent, separators=(",", ":")))


def _echo_leaf(info: Any, ancestors: list[tuple[str, Any]], acc: None) -> None:
    """Fold step for :func:`cli_walk` writing one JSON line per visited leaf."""

    payload = {"ancestors": [name for name, _ in ancestors], "info": info}
    click.echo(json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str))
    return acc


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_food_data",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
