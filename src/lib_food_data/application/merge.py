"""Application-layer merge policy for data trees.

Purpose
-------
Combine the single-file chains produced for each leaf into one nested tree
while remembering which file supplied each node's record. Free of I/O so it
can be exercised directly with in-memory mappings.

Contents
    - ``nest``: builds the singleton chain for one file.
    - ``merge_entries``: public entry point folding many chains into a tree.
    - ``merge_nodes``: recursive key-wise merge of one chain into a tree.
    - ``_set_info``: attaches a record, refusing to overwrite another file's.

System Role
-----------
Called by :func:`lib_food_data.application.tree.load_tree`; the resulting
``dict`` is wrapped in :class:`lib_food_data.domain.tree.DataTree` by the
composition root.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Sequence

from ..domain.errors import DuplicateEntryError
from ..domain.tree import INFO_KEY


def nest(segments: Sequence[str], info: Any) -> dict[str, Any]:
    """Return a chain of single-key mappings ending in ``{INFO_KEY: info}``.

    Examples
    --------
    >>> nest(["meat", "beef"], {"kind": "leaf"})
    {'meat': {'beef': {'__info__': {'kind': 'leaf'}}}}
    >>> nest([], 1)
    {'__info__': 1}
    """

    node: dict[str, Any] = {INFO_KEY: info}
    for name in reversed(segments):
        node = {name: node}
    return node


def merge_entries(
    entries: Iterable[tuple[Sequence[str], Any, str]],
) -> tuple[dict[str, Any], dict[str, str]]:
    """Merge ``(segments, info, source_path)`` entries into one tree.

    Why
    ----
    The merge is key-wise and never touches records, so the resulting tree is
    independent of the order in which files were enumerated.

    Returns
    -------
    tuple[dict[str, Any], dict[str, str]]
        ``(tree, sources)`` where ``sources`` maps dotted node paths to the file
        that supplied the node's record.

    Examples
    --------
    >>> tree, sources = merge_entries([
    ...     (["meat"], {"kind": "group"}, "meat.toml"),
    ...     (["meat", "beef"], {"kind": "leaf"}, "meat/beef.toml"),
    ... ])
    >>> sorted(tree["meat"])
    ['__info__', 'beef']
    >>> sources["meat.beef"]
    'meat/beef.toml'
    """

    tree: dict[str, Any] = {}
    sources: dict[str, str] = {}
    for segments, info, source in entries:
        merge_nodes(tree, nest(segments, info), sources=sources, source=source)
    return tree, sources


def merge_nodes(
    target: dict[str, Any],
    incoming: Mapping[str, Any],
    *,
    sources: dict[str, str],
    source: str,
    segments: Sequence[str] = (),
) -> None:
    """Recursively merge the node ``incoming`` into ``target`` in place."""

    for key, value in incoming.items():
        if key == INFO_KEY:
            _set_info(target, value, sources=sources, source=source, dotted=".".join(segments))
            continue
        container = target.get(key)
        if not isinstance(container, dict):
            container = {}
            target[key] = container
        merge_nodes(container, value, sources=sources, source=source, segments=[*segments, key])


def _set_info(target: dict[str, Any], info: Any, *, sources: dict[str, str], source: str, dotted: str) -> None:
    """Attach *info* to *target* unless another file already described the node."""

    if INFO_KEY in target:
        previous = sources.get(dotted)
        raise DuplicateEntryError(
            f"Both {previous} and {source} describe node '{dotted or '.'}'",
            path=source,
        )
    target[INFO_KEY] = info
    sources[dotted] = source
