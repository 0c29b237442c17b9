"""Data models for the user directory."""

from userdirectory.models.user import User, UserProfile, CreateUserRequest, UpdateUserRequest
from userdirectory.models.paging import PagedResult

__all__ = [
    "User",
    "UserProfile",
    "CreateUserRequest",
    "UpdateUserRequest",
    "PagedResult",
]
