"""Sort-key parsing and ordering for user listings.

Sort keys come straight from the query string, so they are resolved against
a fixed allow-list of fields rather than used to build a query expression.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from userdirectory.errors import ValidationError
from userdirectory.models.user import User

DESCENDING_PREFIX = "-"

# Sort key -> value extractor
SORTABLE_FIELDS: Dict[str, Callable[[User], Any]] = {
    "name": lambda user: user.name,
    "email": lambda user: user.email,
    "age": lambda user: user.age,
    "id": lambda user: user.id,
}


@dataclass(frozen=True)
class SortSpec:
    """Resolved sort field and direction."""
    field: str
    descending: bool = False


def parse_sort_spec(sort: str) -> SortSpec:
    """Parse a sort key such as ``name`` or ``-age``.

    Raises:
        ValidationError: If the key is empty or names an unsupported field
    """
    raw = (sort or "").strip()
    descending = raw.startswith(DESCENDING_PREFIX)
    field = raw[len(DESCENDING_PREFIX):] if descending else raw
    if not field:
        raise ValidationError("Sort field must not be empty.")
    if field not in SORTABLE_FIELDS:
        allowed = ", ".join(sorted(SORTABLE_FIELDS))
        raise ValidationError(f"Unsupported sort field '{field}'. Allowed: {allowed}.")
    return SortSpec(field=field, descending=descending)


def sort_users(users: List[User], spec: SortSpec) -> List[User]:
    """Order users by the requested field and direction.

    Ties are broken by id ascending regardless of direction, so the same
    input always yields the same order.
    """
    key = SORTABLE_FIELDS[spec.field]
    # Two stable passes: id ascending first, then the requested field.
    by_id = sorted(users, key=lambda user: user.id)
    return sorted(by_id, key=key, reverse=spec.descending)
