"""In-memory UserStore, for single-process setups and tests."""

import logging
import threading
from typing import Dict, List, Optional

from userdirectory.errors import DuplicateEmail
from userdirectory.models.user import User

logger = logging.getLogger(__name__)


class InMemoryUserStore:
    """Dict-backed user store.

    All reads and writes go through one lock, so the email uniqueness check
    and the write that follows it happen atomically.
    """

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()

    def _email_owner(self, email: str) -> Optional[str]:
        for user_id, user in self._users.items():
            if user.email == email:
                return user_id
        return None

    def insert(self, user: User) -> User:
        with self._lock:
            if self._email_owner(user.email) is not None:
                raise DuplicateEmail()
            self._users[user.id] = user.model_copy()
            logger.debug(f"Created user {user.id}")
            return user.model_copy()

    def update_by_id(self, user: User) -> Optional[User]:
        with self._lock:
            if user.id not in self._users:
                return None
            owner = self._email_owner(user.email)
            if owner is not None and owner != user.id:
                raise DuplicateEmail()
            self._users[user.id] = user.model_copy()
            logger.debug(f"Updated user {user.id}")
            return user.model_copy()

    def delete_by_id(self, user_id: str) -> bool:
        with self._lock:
            removed = self._users.pop(user_id, None)
        if removed is not None:
            logger.debug(f"Deleted user {user_id}")
        return removed is not None

    def find_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            owner = self._email_owner(email)
            return self._users[owner].model_copy() if owner is not None else None

    def list_all(self) -> List[User]:
        with self._lock:
            return [user.model_copy() for user in self._users.values()]
