"""On-disk layout conventions for a food data root.

Purpose
-------
Replace implicit path defaults with one explicit, immutable value that every
entry point receives. Callers who keep their data in differently named
directories construct their own :class:`DataLayout`.

Contents
--------
* :class:`DataLayout` – directory and file naming conventions.
* :data:`DEFAULT_LAYOUT` – conventions used by the public data set.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class DataLayout:
    """Directory names and file extensions used below a data root.

    Attributes
    ----------
    diets / allergens:
        Flat categories; one leaf file per entry.
    ingredients / cuisines:
        Nested categories; directory trees of leaf files.
    migrations:
        Per-category sub-directory holding the timestamped change log.
    extension:
        Suffix of leaf files, including the dot.
    migration_extension:
        Suffix of migration log files, including the dot.
    info_stem:
        Stem of a file that carries its enclosing directory's own record
        (``meat/info.toml`` describes ``meat``). ``None`` disables the
        convention so only sibling files (``meat.toml``) describe directories.

    Examples
    --------
    >>> DEFAULT_LAYOUT.category_root("/data", "ingredients", "fruits").as_posix()
    '/data/ingredients/fruits'
    >>> DEFAULT_LAYOUT.migration_root("/data", "cuisines").as_posix()
    '/data/cuisines/__migrations__'
    """

    diets: str = "diets"
    allergens: str = "allergens"
    ingredients: str = "ingredients"
    cuisines: str = "cuisines"
    migrations: str = "__migrations__"
    extension: str = ".toml"
    migration_extension: str = ".yml"
    info_stem: str | None = "info"

    def category_root(self, data: str | Path, category: str, group: str = "") -> Path:
        """Return the directory holding *category* (optionally narrowed to *group*)."""

        root = Path(data) / category
        return root / group if group else root

    def migration_root(self, data: str | Path, category: str) -> Path:
        """Return the change-log directory of *category*."""

        return Path(data) / category / self.migrations


DEFAULT_LAYOUT = DataLayout()
