"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the tree and migration services rely on, so
they can be driven by the filesystem adapters in production and by in-memory
fakes in tests.

Contents
--------
* :class:`FileLoader` – parses one data file into a mapping.
* :class:`SequenceLoader` – parses one migration log into a list of entries.
* :class:`PathEnumerator` – lists files matching a glob pattern.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class FileLoader(Protocol):
    """Parse a structured data file into a mapping.

    Must be deterministic for a given file and raise
    :class:`~lib_food_data.domain.errors.ParseError` on malformed content.
    """

    def load(self, path: str) -> Mapping[str, Any]:
        """Read *path* and return its mapping representation."""


@runtime_checkable
class SequenceLoader(Protocol):
    """Parse a migration log into its ordered list of entries."""

    def load_sequence(self, path: str) -> list[Any]:
        """Read *path* and return the entries in file order."""


@runtime_checkable
class PathEnumerator(Protocol):
    """Discover files below a root directory.

    Implementations return every match exactly once and make no ordering
    promise; a missing root yields an empty set.
    """

    def glob(self, root: str | Path, pattern: str) -> set[str]:
        """Return the paths under *root* matching *pattern*."""

    def is_dir(self, root: str | Path) -> bool:
        """Return ``True`` when *root* is an existing directory."""
