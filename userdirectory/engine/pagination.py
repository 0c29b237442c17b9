"""Page arithmetic for listings."""

import math
from typing import List, Sequence, TypeVar

from userdirectory.models.paging import PagedResult

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10


def normalize_page(page: int) -> int:
    """Clamp page to at least 1."""
    return max(DEFAULT_PAGE, page)


def normalize_per_page(per_page: int) -> int:
    """Replace a non-positive page size with the default."""
    return DEFAULT_PER_PAGE if per_page <= 0 else per_page


def paginate(items: Sequence[T], page: int, per_page: int) -> PagedResult[T]:
    """Slice an already ordered sequence and compute navigation metadata.

    Args:
        items: Full ordered sequence
        page: 1-based page number (clamped)
        per_page: Page size (non-positive means default)

    Returns:
        PagedResult for the requested page; pages past the end are empty
    """
    page = normalize_page(page)
    per_page = normalize_per_page(per_page)

    total_items = len(items)
    total_pages = math.ceil(total_items / per_page)
    offset = (page - 1) * per_page
    page_items: List[T] = list(items[offset:offset + per_page])

    return PagedResult(
        data=page_items,
        first_page=1,
        prev_page=page - 1 if page > 1 else None,
        next_page=page + 1 if page < total_pages else None,
        last_page=total_pages,
        total_pages=total_pages,
        total_items=total_items,
    )
