"""Directory-tree aggregation and ancestor-aware folding.

Purpose
-------
Turn a directory of leaf files into either one nested tree
(:func:`load_tree`) or a single ordered pass in which every file sees the
records of its already-visited ancestors (:func:`reduce_tree`). Flat
categories are read with :func:`load_flat`.

Contents
--------
* :class:`TreeEntry` – a file together with its node path.
* :func:`collect_entries` – enumerates and sorts the files below a root.
* :func:`load_tree` / :func:`reduce_tree` / :func:`load_flat` – services.
* :func:`remove_stale_nodes` – prunes the ancestor stack between files.

System Role
-----------
Driven by :mod:`lib_food_data.core` with the default filesystem adapters;
tests inject in-memory loaders and enumerators through the ports.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Collection, Sequence, TypeVar

from ..domain.errors import DuplicateEntryError
from ..observability import log_debug, log_info
from .merge import merge_entries
from .ports import FileLoader, PathEnumerator

Acc = TypeVar("Acc")
Ancestors = list[tuple[str, Any]]
TreeVisitor = Callable[[Any, Ancestors, Acc], Acc]


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """A leaf file and the tree node it describes.

    Attributes
    ----------
    path:
        Path of the file as returned by the enumerator.
    relative:
        POSIX path relative to the scanned root; used as a tie-breaker.
    segments:
        Node path: directory names plus the file stem, or only the directory
        names for an info-stem file.
    name:
        Name the file is known by in an ancestor context.
    """

    path: str
    relative: str
    segments: tuple[str, ...]
    name: str


def collect_entries(
    root: str | Path,
    *,
    enumerator: PathEnumerator,
    extension: str = ".toml",
    info_stem: str | None = "info",
    ignore: Collection[str] = (),
) -> list[TreeEntry]:
    """Return the files below *root* in pre-order traversal order.

    Why
    ----
    Enumerators make no ordering promise. Sorting by node path segment-wise
    places every node before its descendants, and a directory's own record
    before its children, whatever the file names look like as strings.

    Raises
    ------
    DuplicateEntryError
        When two files describe the same node (``a.toml`` and ``a/info.toml``).
    """

    base = Path(root)
    entries: list[TreeEntry] = []
    for path in enumerator.glob(base, f"**/*{extension}"):
        relative = Path(path).relative_to(base)
        directories = relative.parts[:-1]
        if any(part in ignore for part in directories):
            continue
        stem = relative.name[: -len(extension)]
        if info_stem is not None and stem == info_stem:
            segments = tuple(directories)
            name = directories[-1] if directories else base.name
        else:
            segments = (*directories, stem)
            name = stem
        entries.append(TreeEntry(path=path, relative=relative.as_posix(), segments=segments, name=name))
    entries.sort(key=lambda entry: (entry.segments, entry.relative))
    for previous, entry in zip(entries, entries[1:]):
        if previous.segments == entry.segments:
            node = ".".join(entry.segments) or "."
            raise DuplicateEntryError(
                f"Both {previous.path} and {entry.path} describe node '{node}'",
                path=entry.path,
            )
    return entries


def load_tree(
    root: str | Path,
    *,
    enumerator: PathEnumerator,
    loader: FileLoader,
    extension: str = ".toml",
    info_stem: str | None = "info",
    ignore: Collection[str] = (),
) -> dict[str, Any]:
    """Aggregate every leaf file below *root* into one nested mapping.

    Each file's record lands under :data:`~lib_food_data.domain.tree.INFO_KEY`
    at its node path. A missing root produces ``{}``; a malformed file aborts
    the whole call.

    Raises
    ------
    ParseError
        When a leaf file cannot be parsed.
    DuplicateEntryError
        When two files describe the same node.
    """

    entries = collect_entries(root, enumerator=enumerator, extension=extension, info_stem=info_stem, ignore=ignore)
    if not entries:
        log_debug("tree_root_missing" if not enumerator.is_dir(root) else "tree_empty", path=str(root))
        return {}
    tree, _ = merge_entries((entry.segments, loader.load(entry.path), entry.path) for entry in entries)
    log_info("tree_loaded", path=str(root), files=len(entries))
    return tree


def reduce_tree(
    root: str | Path,
    acc: Acc,
    fun: TreeVisitor[Acc],
    *,
    enumerator: PathEnumerator,
    loader: FileLoader,
    extension: str = ".toml",
    info_stem: str | None = "info",
    ignore: Collection[str] = (),
) -> Acc:
    """Fold *fun* over the leaf files below *root* in pre-order.

    ``fun(info, ancestors, acc)`` receives the file's record, the
    ``(name, record)`` pairs of its ancestors that were visited before it
    (closest first), and the accumulator; it returns the new accumulator.
    Every file is parsed exactly once.

    Examples
    --------
    >>> class Files:
    ...     def glob(self, root, pattern):
    ...         return {"d/a.toml", "d/a/b.toml", "d/c.toml"}
    >>> class Loader:
    ...     def load(self, path):
    ...         return path
    >>> visit = lambda info, ancestors, acc: acc + [(info, [name for name, _ in ancestors])]
    >>> reduce_tree("d", [], visit, enumerator=Files(), loader=Loader())
    [('d/a.toml', []), ('d/a/b.toml', ['a']), ('d/c.toml', [])]
    """

    entries = collect_entries(root, enumerator=enumerator, extension=extension, info_stem=info_stem, ignore=ignore)
    stack: list[tuple[TreeEntry, Any]] = []
    for entry in entries:
        stack = remove_stale_nodes(stack, entry)
        info = loader.load(entry.path)
        acc = fun(info, _context(stack), acc)
        stack = [(entry, info), *stack]
    log_info("tree_folded", path=str(root), files=len(entries))
    return acc


def load_flat(
    root: str | Path,
    *,
    enumerator: PathEnumerator,
    loader: FileLoader,
    extension: str = ".toml",
) -> dict[str, Any]:
    """Return ``{stem: record}`` for the leaf files directly inside *root*."""

    base = Path(root)
    result: dict[str, Any] = {}
    for path in sorted(enumerator.glob(base, f"*{extension}")):
        result[Path(path).name[: -len(extension)]] = loader.load(path)
    log_info("flat_loaded", path=str(base), files=len(result))
    return result


def remove_stale_nodes(stack: Sequence[tuple[TreeEntry, Any]], entry: TreeEntry) -> list[tuple[TreeEntry, Any]]:
    """Keep the entries of *stack* whose node is an ancestor of *entry*.

    The stack is ordered closest first. Files are visited in pre-order, so a
    node that is not an ancestor of *entry* belongs to a finished branch and
    can never become an ancestor again.

    Examples
    --------
    >>> def node(*segments):
    ...     return TreeEntry(path="", relative="", segments=segments, name=segments[-1])
    >>> stack = [(node("a", "b", "c"), 3), (node("a", "b"), 2), (node("a"), 1)]
    >>> [name for name, _ in _context(remove_stale_nodes(stack, node("a", "x")))]
    ['a']
    >>> [name for name, _ in _context(remove_stale_nodes(stack, node("a", "b", "d")))]
    ['b', 'a']
    """

    depth = len(entry.segments)
    return [
        (node, info)
        for node, info in stack
        if len(node.segments) < depth and entry.segments[: len(node.segments)] == node.segments
    ]


def _context(stack: Sequence[tuple[TreeEntry, Any]]) -> Ancestors:
    return [(node.name, info) for node, info in stack]
