"""Repository for User database operations."""

import logging
from contextlib import contextmanager
from typing import List, Optional, Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from userdirectory.errors import DuplicateEmail, StoreError
from userdirectory.models.user import User
from userdirectory.database.models import UserDB

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    """Storage operations the directory and auth services rely on.

    Implementations enforce email uniqueness themselves and raise
    DuplicateEmail when a write would break it; other failures surface as
    StoreError.
    """

    def insert(self, user: User) -> User: ...

    def update_by_id(self, user: User) -> Optional[User]: ...

    def delete_by_id(self, user_id: str) -> bool: ...

    def find_by_id(self, user_id: str) -> Optional[User]: ...

    def find_by_email(self, email: str) -> Optional[User]: ...

    def list_all(self) -> List[User]: ...


def _is_email_conflict(error: IntegrityError) -> bool:
    return "email" in str(error.orig).lower()


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, action: str, subject: str):
        """Roll back and raise StoreError if a query fails."""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action} user {subject}: {type(e).__name__}: {str(e)}")
            raise StoreError(f"Failed to {action} user") from e

    def _commit(self, action: str, user_id: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if _is_email_conflict(e):
                logger.debug(f"Email conflict while trying to {action} user {user_id}")
                raise DuplicateEmail() from e
            logger.error(f"Failed to {action} user {user_id}: {type(e).__name__}: {str(e)}")
            raise StoreError(f"Failed to {action} user") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action} user {user_id}: {type(e).__name__}: {str(e)}")
            raise StoreError(f"Failed to {action} user") from e

    def insert(self, user: User) -> User:
        """Insert a new user.

        Raises:
            DuplicateEmail: If the email is already taken
            StoreError: On any other database failure
        """
        user_db = UserDB.from_pydantic(user)
        self.db.add(user_db)
        self._commit("create", user.id)
        self.db.refresh(user_db)
        logger.debug(f"Created user {user.id}")
        return user_db.to_pydantic()

    def update_by_id(self, user: User) -> Optional[User]:
        """Overwrite name, email, age and password hash of an existing user.

        Returns:
            Updated user, or None if no user has that id
        """
        with self._guard("update", user.id):
            user_db = self.db.query(UserDB).filter(UserDB.id == user.id).first()
        if not user_db:
            return None

        user_db.name = user.name
        user_db.email = user.email
        user_db.age = user.age
        user_db.password_hash = user.password_hash
        self._commit("update", user.id)
        self.db.refresh(user_db)
        logger.debug(f"Updated user {user.id}")
        return user_db.to_pydantic()

    def delete_by_id(self, user_id: str) -> bool:
        """Delete a user. Returns False if no user has that id."""
        with self._guard("delete", user_id):
            user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        if not user_db:
            return False

        self.db.delete(user_db)
        self._commit("delete", user_id)
        logger.debug(f"Deleted user {user_id}")
        return True

    def find_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        with self._guard("find", user_id):
            user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        return user_db.to_pydantic() if user_db else None

    def find_by_email(self, email: str) -> Optional[User]:
        """Get user by exact email."""
        with self._guard("find", email):
            user_db = self.db.query(UserDB).filter(UserDB.email == email).first()
        return user_db.to_pydantic() if user_db else None

    def list_all(self) -> List[User]:
        """Get every user, unordered."""
        with self._guard("list", "records"):
            users_db = self.db.query(UserDB).all()
        return [user_db.to_pydantic() for user_db in users_db]
