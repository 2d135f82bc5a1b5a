"""Shared test fixtures for building food data roots.

``DataSandbox`` writes leaf files and migration logs below a temporary
directory; ``MemoryFiles`` is an in-memory stand-in for both the path
enumerator and the file loader ports so the application services can be
exercised without touching the filesystem.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path
from typing import Any, Mapping

from lib_food_data.domain.errors import ParseError


@dataclass
class DataSandbox:
    """A temporary data root with helpers to populate it."""

    root: Path

    def write(self, relative: str, content: str = "") -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def leaf(self, relative: str, **fields: Any) -> Path:
        """Write a TOML leaf file containing *fields* as top-level keys."""

        return self.write(relative, _toml(fields))

    def migration(self, category: str, timestamp: int | str, *entries: tuple[str, str]) -> Path:
        """Write ``<category>/__migrations__/<timestamp>.yml`` from ``(key, value)`` entries."""

        body = "".join(f'- {key}: "{value}"\n' for key, value in entries)
        return self.write(f"{category}/__migrations__/{timestamp}.yml", body)


def create_data_sandbox(tmp_path: Path) -> DataSandbox:
    root = tmp_path / "Food-Data"
    root.mkdir()
    return DataSandbox(root=root)


@dataclass
class MemoryFiles:
    """In-memory enumerator and loader keyed by POSIX paths relative to *root*.

    Values that are exceptions are raised by :meth:`load`, which makes parse
    failures easy to simulate. ``loads`` counts how often each path was read.
    A directory exists when at least one stored file lies below it.
    """

    root: Path
    files: Mapping[str, Any]
    order: list[str] | None = None
    loads: Counter = field(default_factory=Counter)

    def glob(self, root: str | Path, pattern: str) -> list[str]:
        base = Path(root)
        recursive = pattern.startswith("**/")
        suffix_pattern = pattern[3:] if recursive else pattern
        matches = []
        for relative in self.order if self.order is not None else self.files:
            candidate = self.root / relative
            try:
                inner = candidate.relative_to(base)
            except ValueError:
                continue
            if not recursive and len(inner.parts) != 1:
                continue
            if fnmatch(inner.name, suffix_pattern):
                matches.append(str(candidate))
        return matches

    def load(self, path: str) -> Any:
        self.loads[path] += 1
        value = self.files[Path(path).relative_to(self.root).as_posix()]
        if isinstance(value, Exception):
            raise value
        return value

    load_sequence = load

    def is_dir(self, root: str | Path) -> bool:
        base = Path(root)
        return any(base in (self.root / relative).parents for relative in self.files)

    def path(self, relative: str) -> str:
        return str(self.root / relative)


def broken(relative: str) -> ParseError:
    return ParseError(f"Invalid TOML in {relative}", path=relative)


def _toml(fields: Mapping[str, Any]) -> str:
    lines = []
    for key, value in fields.items():
        if isinstance(value, bool):
            lines.append(f"{key} = {'true' if value else 'false'}")
        elif isinstance(value, (int, float)):
            lines.append(f"{key} = {value}")
        elif isinstance(value, (list, tuple)):
            items = ", ".join(f'"{item}"' for item in value)
            lines.append(f"{key} = [{items}]")
        else:
            lines.append(f'{key} = "{value}"')
    return "\n".join(lines) + "\n"


__all__ = ["DataSandbox", "MemoryFiles", "broken", "create_data_sandbox"]
