"""Immutable tree value object returned by the aggregation entry points.

Purpose
-------
Wrap the nested mapping built by :mod:`lib_food_data.application.tree` in a
read-only ``Mapping`` so consumers can navigate it without being able to
mutate the result of a scan.

Contents
--------
* :data:`INFO_KEY` – reserved key holding a node's own parsed record.
* :class:`DataTree` – ``Mapping`` implementation with dotted-path helpers.
* :func:`_freeze` / :func:`_thaw` – recursive helpers converting between
  ``dict`` and ``mappingproxy`` trees.
* :data:`EMPTY_TREE` – canonical empty tree.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Sequence

INFO_KEY = "__info__"
"""Reserved key under which a node's own parsed file content is attached."""


@dataclass(frozen=True, slots=True, eq=False)
class DataTree(Mapping[str, Any]):
    """Read-only view over an aggregated data tree.

    Why
    ----
    A tree is built once per call and then owned by the caller; exposing it
    through ``mappingproxy`` views keeps that guarantee without copying on
    every lookup.

    What
    ----
    Iterates over the keys of the root node (child names plus
    :data:`INFO_KEY` when the root itself has a record). Equality follows the
    ``Mapping`` protocol, so a tree compares equal to a plain ``dict`` with the
    same content.

    Examples
    --------
    >>> tree = DataTree({"meat": {"__info__": {"kind": "group"}, "beef": {"__info__": {"kind": "leaf"}}}})
    >>> tree.get("meat.beef")["__info__"]["kind"]
    'leaf'
    >>> tree.subtree("meat").info
    {'kind': 'group'}
    >>> sorted(tree.subtree("meat").children())
    ['beef']
    """

    _data: Mapping[str, Any]

    def __post_init__(self) -> None:
        object.__setattr__(self, "_data", _freeze(self._data))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"DataTree({self.as_dict()!r})"

    @property
    def info(self) -> Any | None:
        """Return the root node's own record, or ``None`` when it has none."""

        info = self._data.get(INFO_KEY)
        return _thaw(info) if isinstance(info, Mapping) else info

    def children(self) -> list[str]:
        """Return the names of the child nodes, excluding :data:`INFO_KEY`."""

        return [key for key in self._data if key != INFO_KEY]

    def get(self, key: str | Sequence[str], default: Any = None) -> Any:  # type: ignore[override]
        """Resolve *key* as a node path, returning *default* when missing.

        A string naming a root key is returned as is; any other string is split
        on dots. Names that contain a dot themselves (``st.johns.toml``) are
        reached by passing the segments as a tuple.

        Examples
        --------
        >>> DataTree({"a": {"b": {"__info__": 1}}}).get("a.b.__info__")
        1
        >>> DataTree({"herbs": {"st.johns": {"__info__": 2}}}).get(("herbs", "st.johns", "__info__"))
        2
        >>> DataTree({}).get("a.b", "missing")
        'missing'
        """

        if isinstance(key, str):
            if key in self._data:
                return self._data[key]
            key = key.split(".")
        current: Any = self._data
        for part in key:
            if not isinstance(current, Mapping) or part not in current:
                return default
            current = current[part]
        return current

    def subtree(self, key: str | Sequence[str]) -> DataTree:
        """Return the node at path *key* (as for :meth:`get`) as a :class:`DataTree`.

        Raises
        ------
        KeyError
            When *key* does not name a node.
        """

        node = self.get(key)
        if not isinstance(node, Mapping):
            raise KeyError(key)
        return DataTree(node)

    def as_dict(self) -> dict[str, Any]:
        """Return a deep, mutable ``dict`` copy of the tree."""

        return _thaw(self._data)

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialise the tree to JSON; values JSON cannot encode use ``str``."""

        return json.dumps(self.as_dict(), indent=indent, separators=(",", ":"), ensure_ascii=False, default=str)


def _freeze(value: Any) -> Any:
    """Return *value* with every nested mapping wrapped in ``MappingProxyType``."""

    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    return value


def _thaw(value: Any) -> Any:
    """Clone a frozen tree back into plain ``dict``/``list`` containers."""

    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_thaw(item) for item in value]
    return value


EMPTY_TREE = DataTree({})
"""Shared empty tree; safe to reuse because :class:`DataTree` is immutable."""
