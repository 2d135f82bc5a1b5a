"""Public package surface for ``lib_food_data``.

Re-exports the composition-root entry points, the domain value objects, the
error taxonomy, and the logging hooks so consumers only ever import from the
package root.
"""

from __future__ import annotations

from .core import (
    aggregate,
    allergens,
    cuisines,
    diets,
    fold,
    ingredients,
    migrations,
    reduce_cuisines,
    reduce_ingredients,
    reduce_migrations,
)
from .domain.errors import (
    DuplicateEntryError,
    FoodDataError,
    MalformedDirectiveError,
    MissingCategoryError,
    NonNumericTimestampError,
    NotFound,
    ParseError,
)
from .domain.layout import DEFAULT_LAYOUT, DataLayout
from .domain.migration import Migration
from .domain.tree import INFO_KEY, DataTree
from .observability import bind_trace_id, get_logger

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
    "DataTree",
    "INFO_KEY",
    "Migration",
    "DataLayout",
    "DEFAULT_LAYOUT",
    "FoodDataError",
    "ParseError",
    "NotFound",
    "MissingCategoryError",
    "MalformedDirectiveError",
    "NonNumericTimestampError",
    "DuplicateEntryError",
    "bind_trace_id",
    "get_logger",
]
