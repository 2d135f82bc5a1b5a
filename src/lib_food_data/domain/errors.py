"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by adapters, the application layer,
and consuming applications. The hierarchy lives in the domain layer so outer
layers may depend on it without the reverse being true.

Contents
--------
* :class:`FoodDataError` – umbrella base class carrying the offending path.
* :class:`ParseError` – malformed leaf or migration files.
* :class:`NotFound` / :class:`MissingCategoryError` – absent resources.
* :class:`MalformedDirectiveError` – migration entries that do not normalise.
* :class:`NonNumericTimestampError` – migration files without an integer stem.
* :class:`DuplicateEntryError` – two files claiming the same tree node.

System Role
-----------
Every public entry point aborts with one of these types; callers catch
:class:`FoodDataError` to handle all library failures uniformly. Only
:class:`MissingCategoryError` is treated as non-fatal (zero migrations).
"""

from __future__ import annotations


class FoodDataError(Exception):
    """Base type for all exceptions emitted by ``lib_food_data``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling, while still identifying the file that caused the failure.

    Attributes
    ----------
    path:
        Filesystem path of the offending file or directory, ``None`` when the
        failure is not tied to a single location.

    Examples
    --------
    >>> err = FoodDataError("boom", path="/data/a.toml")
    >>> err.path, str(err)
    ('/data/a.toml', 'boom')
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ParseError(FoodDataError):
    """Raised when a data file cannot be parsed into structured data.

    Typical Sources
    ---------------
    Structured file loaders (:mod:`tomllib`, :mod:`json`, :mod:`yaml`) and the
    migration reader when a log file is not a sequence.
    """


class NotFound(FoodDataError):
    """Represents a missing resource (file or directory)."""


class MissingCategoryError(NotFound):
    """The ``__migrations__`` directory of a category does not exist.

    The migration entry points treat this as an empty log rather than a
    failure.
    """


class MalformedDirectiveError(FoodDataError):
    """A migration entry is not one of the ``A``/``U``/``D``/``M`` directives."""


class NonNumericTimestampError(FoodDataError):
    """A migration file stem is not a base-10 integer timestamp."""


class DuplicateEntryError(FoodDataError):
    """Two data files resolve to the same tree node.

    Raised instead of letting one file silently replace the other, e.g. when
    both ``meat.toml`` and ``meat/info.toml`` exist.
    """
