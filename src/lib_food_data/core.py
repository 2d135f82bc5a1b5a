"""Composition root for ``lib_food_data``.

Purpose
-------
Provide the public entry points that wire the filesystem adapters into the
tree and migration services. Every entry point receives the data root
explicitly; directory naming conventions come from a
:class:`~lib_food_data.domain.layout.DataLayout`.

Contents
--------
* :data:`_FILE_LOADERS` – mapping of file suffixes to loader instances.
* :func:`aggregate` / :func:`fold` – generic tree entry points.
* :func:`diets` / :func:`allergens` – flat categories.
* :func:`ingredients` / :func:`reduce_ingredients` and :func:`cuisines` /
  :func:`reduce_cuisines` – nested categories.
* :func:`migrations` / :func:`reduce_migrations` – change logs.

System Role
-----------
This module connects adapters with the application services and converts
their results into domain value objects. It is the canonical location for
registering new file formats.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, TypeVar

from .adapters.file_loaders.structured import JSONFileLoader, TOMLFileLoader, YAMLFileLoader
from .adapters.path_enumerators.default import DefaultPathEnumerator
from .application import migrations as _migrations
from .application import tree as _tree
from .application.ports import FileLoader
from .domain.layout import DEFAULT_LAYOUT, DataLayout
from .domain.migration import Migration
from .domain.tree import EMPTY_TREE, DataTree

Acc = TypeVar("Acc")

# Supported structured file loaders keyed by suffix; ``DataLayout.extension``
# selects one of them.
_FILE_LOADERS: dict[str, FileLoader] = {
    ".toml": TOMLFileLoader(),
    ".json": JSONFileLoader(),
    ".yaml": YAMLFileLoader(),
    ".yml": YAMLFileLoader(),
}
_MIGRATION_LOADER = YAMLFileLoader()
_ENUMERATOR = DefaultPathEnumerator()


def aggregate(root: str | Path, *, layout: DataLayout = DEFAULT_LAYOUT) -> DataTree:
    """Return every leaf file below *root* as one immutable tree.

    Directory and file-stem names become nested keys and each file's record
    is attached under :data:`~lib_food_data.domain.tree.INFO_KEY`. A missing
    root yields an empty tree.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> root = Path(tmp.name)
    >>> (root / "meat").mkdir()
    >>> _ = (root / "meat.toml").write_text('type = "group"', encoding="utf-8")
    >>> _ = (root / "meat" / "beef.toml").write_text('type = "leaf"', encoding="utf-8")
    >>> tree = aggregate(root)
    >>> tree.get("meat.__info__")["type"], tree.get("meat.beef.__info__")["type"]
    ('group', 'leaf')
    >>> tmp.cleanup()
    """

    data = _tree.load_tree(
        root,
        enumerator=_ENUMERATOR,
        loader=_loader_for(layout.extension),
        extension=layout.extension,
        info_stem=layout.info_stem,
        ignore=(layout.migrations,),
    )
    return DataTree(data) if data else EMPTY_TREE


def fold(
    root: str | Path,
    acc: Acc,
    fun: Callable[[Any, list[tuple[str, Any]], Acc], Acc],
    *,
    layout: DataLayout = DEFAULT_LAYOUT,
) -> Acc:
    """Fold ``fun(info, ancestors, acc)`` over the leaf files below *root*.

    Files are visited in pre-order; ``ancestors`` lists the ``(name, info)``
    pairs of the enclosing nodes already visited, closest first.
    """

    return _tree.reduce_tree(
        root,
        acc,
        fun,
        enumerator=_ENUMERATOR,
        loader=_loader_for(layout.extension),
        extension=layout.extension,
        info_stem=layout.info_stem,
        ignore=(layout.migrations,),
    )


def diets(*, data: str | Path, layout: DataLayout = DEFAULT_LAYOUT) -> DataTree:
    """Load the diet records, keyed by diet name."""

    return _flat(layout.category_root(data, layout.diets), layout)


def allergens(*, data: str | Path, layout: DataLayout = DEFAULT_LAYOUT) -> DataTree:
    """Load the allergen records, keyed by allergen name."""

    return _flat(layout.category_root(data, layout.allergens), layout)


def ingredients(group: str = "", *, data: str | Path, layout: DataLayout = DEFAULT_LAYOUT) -> DataTree:
    """Load the ingredient tree, optionally only the sub-tree named *group*."""

    return aggregate(layout.category_root(data, layout.ingredients, group), layout=layout)


def reduce_ingredients(
    acc: Acc,
    fun: Callable[[Any, list[tuple[str, Any]], Acc], Acc],
    group: str = "",
    *,
    data: str | Path,
    layout: DataLayout = DEFAULT_LAYOUT,
) -> Acc:
    """Fold *fun* over the ingredient files with their ancestor context."""

    return fold(layout.category_root(data, layout.ingredients, group), acc, fun, layout=layout)


def cuisines(group: str = "", *, data: str | Path, layout: DataLayout = DEFAULT_LAYOUT) -> DataTree:
    """Load the cuisine tree, optionally only the sub-tree named *group*."""

    return aggregate(layout.category_root(data, layout.cuisines, group), layout=layout)


def reduce_cuisines(
    acc: Acc,
    fun: Callable[[Any, list[tuple[str, Any]], Acc], Acc],
    group: str = "",
    *,
    data: str | Path,
    layout: DataLayout = DEFAULT_LAYOUT,
) -> Acc:
    """Fold *fun* over the cuisine files with their ancestor context."""

    return fold(layout.category_root(data, layout.cuisines, group), acc, fun, layout=layout)


def migrations(
    category: str,
    since: int = -1,
    *,
    data: str | Path,
    layout: DataLayout = DEFAULT_LAYOUT,
) -> list[Migration]:
    """Return the migrations of *category* newer than *since*, oldest first.

    A category without a migration directory has no migrations.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> log = Path(tmp.name) / "ingredients" / "__migrations__"
    >>> log.mkdir(parents=True)
    >>> _ = (log / "10.yml").write_text('- A: "fruits/apple"', encoding="utf-8")
    >>> _ = (log / "9.yml").write_text('- M: "veg/tomato fruits/tomato"', encoding="utf-8")
    >>> [record.timestamp for record in migrations("ingredients", data=tmp.name)]
    ['9', '10']
    >>> migrations("ingredients", 9, data=tmp.name)[0].add
    ('fruits/apple',)
    >>> migrations("cuisines", data=tmp.name)
    []
    >>> tmp.cleanup()
    """

    return _migrations.load_migrations(
        layout.migration_root(data, category),
        since,
        enumerator=_ENUMERATOR,
        loader=_MIGRATION_LOADER,
        extension=layout.migration_extension,
        category=category,
    )


def reduce_migrations(
    category: str,
    acc: Acc,
    fun: Callable[[Migration, Acc], Acc],
    since: int = -1,
    *,
    data: str | Path,
    layout: DataLayout = DEFAULT_LAYOUT,
) -> Acc:
    """Fold ``fun(record, acc)`` over the migrations of *category* after *since*."""

    return _migrations.reduce_migrations(
        layout.migration_root(data, category),
        acc,
        fun,
        since,
        enumerator=_ENUMERATOR,
        loader=_MIGRATION_LOADER,
        extension=layout.migration_extension,
        category=category,
    )


def _flat(root: Path, layout: DataLayout) -> DataTree:
    data = _tree.load_flat(root, enumerator=_ENUMERATOR, loader=_loader_for(layout.extension), extension=layout.extension)
    return DataTree(data) if data else EMPTY_TREE


def _loader_for(extension: str) -> FileLoader:
    """Return the loader registered for *extension*.

    Examples
    --------
    >>> type(_loader_for(".TOML")).__name__
    'TOMLFileLoader'
    >>> _loader_for(".ini")
    Traceback (most recent call last):
    ...
    ValueError: No loader registered for '.ini' files
    """

    try:
        return _FILE_LOADERS[extension.lower()]
    except KeyError as exc:
        raise ValueError(f"No loader registered for '{extension}' files") from exc


__all__ = [
    "aggregate",
    "fold",
    "diets",
    "allergens",
    "ingredients",
    "reduce_ingredients",
    "cuisines",
    "reduce_cuisines",
    "migrations",
    "reduce_migrations",
]
