"""Normalised migration records.

Purpose
-------
Represent one timestamped change-set from a category's migration log. Records
are produced by :mod:`lib_food_data.application.migrations` and never mutated
afterwards.

Contents
--------
* :data:`CHANGE_KINDS` – the four change-kind field names in canonical order.
* :class:`Migration` – immutable record, readable as attributes or as a
  ``Mapping`` that omits empty change kinds.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterator

CHANGE_KINDS: tuple[str, ...] = ("add", "update", "delete", "move")


@dataclass(frozen=True, slots=True, eq=False)
class Migration(Mapping[str, Any]):
    """One change-set read from ``<category>/__migrations__/<timestamp>.yml``.

    Why
    ----
    Consumers replay migrations to update references they hold; they need the
    entries grouped by kind while keeping the order they were written in.

    What
    ----
    Attributes are tuples and always present (empty when no entry of that kind
    occurred). The ``Mapping`` view exposes ``timestamp`` plus only the
    non-empty change kinds, each as a fresh ``list``.

    Examples
    --------
    >>> record = Migration("10", add=("fruits/apple",), move=(("a", "b"),))
    >>> dict(record)
    {'timestamp': '10', 'add': ['fruits/apple'], 'move': [('a', 'b')]}
    >>> "delete" in record, record.delete
    (False, ())
    >>> record.as_int()
    10
    """

    timestamp: str
    add: tuple[str, ...] = ()
    update: tuple[str, ...] = ()
    delete: tuple[str, ...] = ()
    move: tuple[tuple[str, str], ...] = ()

    def __getitem__(self, key: str) -> Any:
        if key == "timestamp":
            return self.timestamp
        if key in CHANGE_KINDS:
            entries = getattr(self, key)
            if entries:
                return list(entries)
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        yield "timestamp"
        for kind in CHANGE_KINDS:
            if getattr(self, kind):
                yield kind

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"Migration({dict(self)!r})"

    def as_int(self) -> int:
        """Return the timestamp as an integer for checkpoint comparisons."""

        return int(self.timestamp)

    def as_dict(self) -> dict[str, Any]:
        """Return the mapping view as a plain ``dict``."""

        return dict(self)
