"""Structured data file loaders.

Purpose
-------
Convert on-disk data files into Python values the tree and migration services
understand. Adapters are small wrappers around ``tomllib``/``json``/
``yaml.safe_load`` so error handling and observability live in one place.

Contents
--------
* :class:`BaseFileLoader` – shared helpers for reading files and validating
  parser output.
* :class:`TOMLFileLoader` – loader for the canonical leaf format.
* :class:`JSONFileLoader` – minimal JSON loader.
* :class:`YAMLFileLoader` – YAML loader, also used for migration logs.

System Role
-----------
Selected by suffix in :mod:`lib_food_data.core` and handed to the application
services, which treat the returned mappings as opaque records.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

import yaml

from ...domain.errors import NotFound, ParseError
from ...observability import log_debug, log_error


class BaseFileLoader:
    """Common utilities shared by the structured file loaders."""

    format = "raw"

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing.

        Side Effects
        ------------
        Emits ``data_file_read`` debug events.
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Data file not found: {path}", path=path)
        payload = file_path.read_bytes()
        log_debug("data_file_read", path=path, size=len(payload))
        return payload

    def _invalid(self, path: str, exc: Exception) -> ParseError:
        """Log a parse failure and return the :class:`ParseError` to raise."""

        log_error("data_file_invalid", path=path, format=self.format, error=str(exc))
        return ParseError(f"Invalid {self.format.upper()} in {path}: {exc}", path=path)

    @staticmethod
    def _ensure_mapping(data: object, *, path: str) -> Mapping[str, Any]:
        """Ensure *data* behaves like a mapping, otherwise raise ``ParseError``.

        Examples
        --------
        >>> BaseFileLoader._ensure_mapping({"key": 1}, path="demo")
        {'key': 1}
        >>> BaseFileLoader._ensure_mapping(42, path="demo")
        Traceback (most recent call last):
        ...
        lib_food_data.domain.errors.ParseError: File demo did not produce a mapping
        """

        if not isinstance(data, Mapping):
            raise ParseError(f"File {path} did not produce a mapping", path=path)
        return data


class TOMLFileLoader(BaseFileLoader):
    """Load TOML documents using the standard library parser."""

    format = "toml"

    def load(self, path: str) -> Mapping[str, Any]:
        """Return the mapping stored in the TOML file at *path*.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile('w', suffix='.toml', delete=False, encoding='utf-8')
        >>> _ = tmp.write('[translation.en]\\nterm = "apple"')
        >>> tmp.close()
        >>> TOMLFileLoader().load(tmp.name)["translation"]["en"]["term"]
        'apple'
        >>> Path(tmp.name).unlink()
        """

        try:
            data = tomllib.loads(self._read(path).decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise self._invalid(path, exc) from exc
        result = self._ensure_mapping(data, path=path)
        log_debug("data_file_loaded", path=path, format=self.format)
        return result


class JSONFileLoader(BaseFileLoader):
    """Load JSON documents."""

    format = "json"

    def load(self, path: str) -> Mapping[str, Any]:
        """Return the mapping stored in the JSON file at *path*."""

        try:
            data = json.loads(self._read(path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise self._invalid(path, exc) from exc
        result = self._ensure_mapping(data, path=path)
        log_debug("data_file_loaded", path=path, format=self.format)
        return result


class YAMLFileLoader(BaseFileLoader):
    """Load YAML documents with ``yaml.safe_load``.

    An empty document loads as ``{}`` through :meth:`load` and as ``[]``
    through :meth:`load_sequence`.
    """

    format = "yaml"

    def load(self, path: str) -> Mapping[str, Any]:
        """Return the mapping stored in the YAML file at *path*."""

        data = self._parse(path)
        result = self._ensure_mapping({} if data is None else data, path=path)
        log_debug("data_file_loaded", path=path, format=self.format)
        return result

    def load_sequence(self, path: str) -> list[Any]:
        """Return the list stored in the YAML file at *path*.

        Why
        ----
        Migration logs are ordered lists of single-key entries; a mapping would
        lose both order and repeated keys.
        """

        data = self._parse(path)
        if data is None:
            data = []
        if not isinstance(data, list):
            raise ParseError(f"File {path} did not produce a sequence", path=path)
        log_debug("data_file_loaded", path=path, format=self.format, entries=len(data))
        return data

    def _parse(self, path: str) -> Any:
        try:
            return yaml.safe_load(self._read(path))
        except yaml.YAMLError as exc:
            raise self._invalid(path, exc) from exc
