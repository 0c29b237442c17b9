"""Listing query engine for the user directory."""

from userdirectory.engine.sorting import SortSpec, parse_sort_spec, sort_users, SORTABLE_FIELDS
from userdirectory.engine.pagination import paginate, normalize_page, normalize_per_page, DEFAULT_PER_PAGE

__all__ = [
    "SortSpec",
    "parse_sort_spec",
    "sort_users",
    "SORTABLE_FIELDS",
    "paginate",
    "normalize_page",
    "normalize_per_page",
    "DEFAULT_PER_PAGE",
]
