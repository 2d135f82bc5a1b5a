"""Migration log materialisation.

Purpose
-------
Read a category's ``__migrations__`` directory, where every file is named after
the integer timestamp at which it was written, and turn each file into a
normalised :class:`~lib_food_data.domain.migration.Migration`.

Contents
--------
* :data:`DIRECTIVES` – directive keys and the change kind each one feeds.
* :func:`load_migrations` / :func:`reduce_migrations` – services.
* :func:`parse_timestamp` / :func:`parse_migration` – per-file helpers.

System Role
-----------
Driven by :mod:`lib_food_data.core`. Files are visited in ascending numeric
timestamp order after the caller's checkpoint; a missing log directory is an
empty log.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, NoReturn, TypeVar

from ..domain.errors import MalformedDirectiveError, MissingCategoryError, NonNumericTimestampError
from ..domain.migration import CHANGE_KINDS, Migration
from ..observability import log_debug, log_error, log_info, make_event
from .ports import PathEnumerator, SequenceLoader

Acc = TypeVar("Acc")
MigrationVisitor = Callable[[Migration, Acc], Acc]

DIRECTIVES: dict[str, str] = {"A": "add", "U": "update", "D": "delete", "M": "move"}

_TIMESTAMP = re.compile(r"-?[0-9]+")


def load_migrations(
    root: str | Path,
    since: int = -1,
    *,
    enumerator: PathEnumerator,
    loader: SequenceLoader,
    extension: str = ".yml",
    category: str | None = None,
) -> list[Migration]:
    """Return the migrations in *root* newer than *since*, oldest first."""

    return reduce_migrations(
        root,
        [],
        _append,
        since,
        enumerator=enumerator,
        loader=loader,
        extension=extension,
        category=category,
    )


def reduce_migrations(
    root: str | Path,
    acc: Acc,
    fun: MigrationVisitor[Acc],
    since: int = -1,
    *,
    enumerator: PathEnumerator,
    loader: SequenceLoader,
    extension: str = ".yml",
    category: str | None = None,
) -> Acc:
    """Fold ``fun(record, acc)`` over the migrations newer than *since*.

    Files are parsed one at a time as the fold advances; no intermediate list
    of records is built.

    Raises
    ------
    NonNumericTimestampError
        When any file in the log is not named after an integer.
    ParseError / MalformedDirectiveError
        When a selected file cannot be normalised.
    """

    try:
        selected = _select(root, since, enumerator=enumerator, extension=extension)
    except MissingCategoryError as exc:
        log_debug("migrations_missing", **make_event(category, exc.path))
        return acc
    for _, stem, path in selected:
        acc = fun(parse_migration(stem, path, loader=loader), acc)
    log_info("migrations_loaded", **make_event(category, str(root), {"count": len(selected), "since": since}))
    return acc


def parse_timestamp(stem: str, *, path: str) -> int:
    """Return the integer timestamp encoded in a migration file *stem*.

    Examples
    --------
    >>> parse_timestamp("1500000000", path="x")
    1500000000
    >>> parse_timestamp("v2", path="x")
    Traceback (most recent call last):
    ...
    lib_food_data.domain.errors.NonNumericTimestampError: Migration file x is not named after an integer timestamp
    """

    if not _TIMESTAMP.fullmatch(stem):
        raise NonNumericTimestampError(f"Migration file {path} is not named after an integer timestamp", path=path)
    return int(stem)


def parse_migration(stem: str, path: str, *, loader: SequenceLoader) -> Migration:
    """Normalise the entries of the migration file at *path* into one record."""

    changes: dict[str, list[Any]] = {kind: [] for kind in CHANGE_KINDS}
    for position, entry in enumerate(loader.load_sequence(path)):
        kind, value = _directive(entry, path=path, position=position)
        changes[kind].append(value)
    log_debug("migration_loaded", path=path, timestamp=stem)
    return Migration(
        timestamp=stem,
        add=tuple(changes["add"]),
        update=tuple(changes["update"]),
        delete=tuple(changes["delete"]),
        move=tuple(changes["move"]),
    )


def _select(root: str | Path, since: int, *, enumerator: PathEnumerator, extension: str) -> list[tuple[int, str, str]]:
    """Return ``(timestamp, stem, path)`` for files after *since*, oldest first."""

    base = Path(root)
    if not enumerator.is_dir(base):
        raise MissingCategoryError(f"Migration log not found: {base}", path=str(base))
    selected: list[tuple[int, str, str]] = []
    for path in enumerator.glob(base, f"*{extension}"):
        stem = Path(path).name[: -len(extension)]
        timestamp = parse_timestamp(stem, path=path)
        if timestamp > since:
            selected.append((timestamp, stem, path))
    selected.sort()
    return selected


def _directive(entry: Any, *, path: str, position: int) -> tuple[str, Any]:
    """Map one ``{key: value}`` entry to ``(change_kind, value)``."""

    if not isinstance(entry, Mapping) or len(entry) != 1:
        _malformed(f"Entry {position} in {path} is not a single-key directive", path)
    ((key, value),) = entry.items()
    kind = DIRECTIVES.get(key) if isinstance(key, str) else None
    if kind is None:
        _malformed(f"Entry {position} in {path} has unknown directive {key!r}", path)
    if not isinstance(value, str):
        _malformed(f"Entry {position} in {path} must reference a string, got {value!r}", path)
    if kind != "move":
        return kind, value
    parts = value.split(" ")
    if len(parts) != 2 or not all(parts):
        _malformed(f"Entry {position} in {path} must move '<from> <to>', got {value!r}", path)
    return kind, (parts[0], parts[1])


def _malformed(message: str, path: str) -> NoReturn:
    log_error("migration_invalid", path=path, error=message)
    raise MalformedDirectiveError(message, path=path)


def _append(record: Migration, acc: list[Migration]) -> list[Migration]:
    acc.append(record)
    return acc
