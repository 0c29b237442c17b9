"""User directory service: CRUD and paginated listing over a UserStore."""

import logging
import uuid
from typing import Optional

from userdirectory.auth.passwords import CredentialHasher
from userdirectory.database.user_repository import UserStore
from userdirectory.engine.pagination import DEFAULT_PER_PAGE, paginate
from userdirectory.engine.sorting import parse_sort_spec, sort_users
from userdirectory.errors import DuplicateEmail, NotFound, Outcome, ValidationError
from userdirectory.models.paging import PagedResult
from userdirectory.models.user import User, UserProfile

logger = logging.getLogger(__name__)

DEFAULT_SORT = "name"


def parse_user_id(user_id: str) -> Optional[str]:
    """Return the canonical form of a UUID string, or None if malformed."""
    try:
        return str(uuid.UUID(str(user_id)))
    except (ValueError, TypeError, AttributeError):
        return None


class UsersService:
    """Create, update, delete, fetch and list users.

    Each method is one unit of work against the store. Expected business
    results (duplicate email, missing user, bad sort key) come back as
    Outcome failures; StoreError propagates.
    """

    def __init__(self, store: UserStore, hasher: CredentialHasher):
        self.store = store
        self.hasher = hasher

    def create(self, name: str, email: str, age: int, password: str) -> Outcome[User]:
        """Create a new user with a fresh id and a hashed password."""
        if self.store.find_by_email(email) is not None:
            return Outcome.failure(DuplicateEmail())

        user = User(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            age=age,
            password_hash=self.hasher.hash(password),
        )
        try:
            created = self.store.insert(user)
        except DuplicateEmail as e:
            # Lost a race with a concurrent create; the store's constraint caught it.
            return Outcome.failure(e)
        logger.info(f"Created user {created.id}")
        return Outcome.success(created)

    def update(self, user_id: str, name: str, email: str, age: int, password: str) -> Outcome[User]:
        """Overwrite all fields of a user and re-hash the password.

        There is no partial update: the password is always required and
        always re-hashed, even if unchanged.
        """
        canonical_id = parse_user_id(user_id)
        if canonical_id is None:
            return Outcome.failure(NotFound())

        existing = self.store.find_by_id(canonical_id)
        if existing is None:
            return Outcome.failure(NotFound())

        owner = self.store.find_by_email(email)
        if owner is not None and owner.id != canonical_id:
            return Outcome.failure(DuplicateEmail())

        updated_user = User(
            id=canonical_id,
            name=name,
            email=email,
            age=age,
            password_hash=self.hasher.hash(password),
        )
        try:
            updated = self.store.update_by_id(updated_user)
        except DuplicateEmail as e:
            return Outcome.failure(e)
        if updated is None:
            # Deleted between the lookup and the write.
            return Outcome.failure(NotFound())
        logger.info(f"Updated user {canonical_id}")
        return Outcome.success(updated)

    def delete(self, user_id: str) -> bool:
        """Delete a user. False for malformed or unknown ids."""
        canonical_id = parse_user_id(user_id)
        if canonical_id is None:
            return False
        deleted = self.store.delete_by_id(canonical_id)
        if deleted:
            logger.info(f"Deleted user {canonical_id}")
        return deleted

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        canonical_id = parse_user_id(user_id)
        if canonical_id is None:
            return None
        user = self.store.find_by_id(canonical_id)
        return user.to_profile() if user else None

    def get_by_email(self, email: str) -> Optional[UserProfile]:
        user = self.store.find_by_email(email)
        return user.to_profile() if user else None

    def list(self, page: int = 1, per_page: int = DEFAULT_PER_PAGE, sort: str = DEFAULT_SORT) -> Outcome[PagedResult[UserProfile]]:
        """List users ordered by `sort` (``-`` prefix for descending), one page at a time.

        Args:
            page: 1-based page number; values below 1 are clamped to 1
            per_page: Page size; non-positive values fall back to 10
            sort: One of name, email, age, id, optionally prefixed with ``-``

        Returns:
            Outcome with the page of profiles, or a ValidationError for an
            unsupported sort key
        """
        try:
            spec = parse_sort_spec(sort)
        except ValidationError as e:
            return Outcome.failure(e)

        ordered = sort_users(self.store.list_all(), spec)
        result = paginate(ordered, page, per_page)
        result.data = [user.to_profile() for user in result.data]
        return Outcome.success(result)
