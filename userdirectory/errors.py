"""Error taxonomy and operation outcomes for the user directory.

Expected business results (bad credentials, duplicate email, missing user,
unsupported sort key) are returned to callers as ``Outcome`` values carrying a
``DomainError``. Only infrastructure problems (``StoreError``) and startup
misconfiguration (``ConfigurationError``) are raised.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class DomainError(Exception):
    """Base class for expected, caller-correctable failures."""

    message = "Domain error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        return str(self)


class AuthenticationFailure(DomainError):
    """Unknown email or wrong password. The two cases are never distinguished."""

    message = "Invalid email or password."


class DuplicateEmail(DomainError):
    """Another user already owns the requested email."""

    message = "Email already exists."


class NotFound(DomainError):
    """No user for the given id (including malformed ids)."""

    message = "Not Found"


class ValidationError(DomainError):
    """Malformed caller input, e.g. an unsupported sort field."""

    message = "Invalid request."


class ConfigurationError(Exception):
    """Required configuration is missing. Fatal at startup."""


class StoreError(Exception):
    """Generic persistence failure (connectivity, unexpected constraint)."""


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a value or a domain error."""

    value: Optional[T] = None
    error: Optional[DomainError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DomainError) -> "Outcome[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value, raising the carried error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value
