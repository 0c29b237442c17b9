"""Application services for the user directory."""

from userdirectory.services.auth_service import AuthService, LoginResult
from userdirectory.services.users_service import UsersService

__all__ = [
    "AuthService",
    "LoginResult",
    "UsersService",
]
