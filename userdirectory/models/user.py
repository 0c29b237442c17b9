"""User data models for the user directory."""

from pydantic import BaseModel, Field


class User(BaseModel):
    """Stored user entity, including the password hash."""

    id: str = Field(..., description="Unique user identifier (UUID v4)")
    name: str = Field(..., description="User display name")
    email: str = Field(..., description="User email address (unique)")
    age: int = Field(..., description="User age")
    password_hash: str = Field(..., description="bcrypt hash of the user's password")

    def to_profile(self) -> "UserProfile":
        """Public projection of the user (no password hash)."""
        return UserProfile(id=self.id, name=self.name, email=self.email, age=self.age)


class UserProfile(BaseModel):
    """Public-facing user shape returned by every read operation."""

    id: str = Field(..., description="Unique user identifier (UUID v4)")
    name: str = Field(..., description="User display name")
    email: str = Field(..., description="User email address")
    age: int = Field(..., description="User age")


class CreateUserRequest(BaseModel):
    """Request body for creating a user."""
    name: str
    email: str
    age: int
    password: str


class UpdateUserRequest(BaseModel):
    """Request body for updating a user.

    All fields are required: an update always overwrites name, email, age and
    password.
    """
    name: str
    email: str
    age: int
    password: str
