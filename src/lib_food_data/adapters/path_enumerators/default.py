"""Filesystem enumeration of data files.

Purpose
-------
Implement the :class:`lib_food_data.application.ports.PathEnumerator`
protocol on top of :meth:`pathlib.Path.glob`. The adapter is the only
component that touches directory listings; ordering is left to the
application services.

Contents
--------
* :class:`DefaultPathEnumerator` – glob-based enumerator.
"""

from __future__ import annotations

from pathlib import Path

from ...observability import log_debug


class DefaultPathEnumerator:
    """Return the regular files below a root matching a glob pattern.

    Why
    ----
    Hidden entries (names starting with ``.``) are editor and VCS artefacts,
    never data; they are skipped at any depth.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> root = Path(tmp.name)
    >>> (root / "fruits").mkdir()
    >>> _ = (root / "fruits" / "apple.toml").write_text("", encoding="utf-8")
    >>> _ = (root / ".hidden.toml").write_text("", encoding="utf-8")
    >>> sorted(Path(p).name for p in DefaultPathEnumerator().glob(root, "**/*.toml"))
    ['apple.toml']
    >>> DefaultPathEnumerator().glob(root / "missing", "*.toml")
    set()
    >>> tmp.cleanup()
    """

    def glob(self, root: str | Path, pattern: str) -> set[str]:
        """Return every file under *root* matching *pattern* exactly once.

        Parameters
        ----------
        root:
            Directory to search. A missing directory yields an empty set.
        pattern:
            Single-level (``*.toml``) or recursive (``**/*.toml``) pattern.
        """

        base = Path(root)
        if not self.is_dir(base):
            return set()
        matches = {
            str(candidate)
            for candidate in base.glob(pattern)
            if candidate.is_file() and not _is_hidden(candidate.relative_to(base))
        }
        log_debug("path_candidates", path=str(base), pattern=pattern, count=len(matches))
        return matches

    def is_dir(self, root: str | Path) -> bool:
        return Path(root).is_dir()


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(".") for part in relative.parts)
