"""Request/response models for authentication endpoints."""

from pydantic import BaseModel, Field

from userdirectory.models.user import UserProfile


class LoginRequest(BaseModel):
    """Request model for email/password login."""
    email: str = Field(..., description="Registered email address")
    password: str = Field(..., description="Account password")


class AuthResponse(BaseModel):
    """Response model for authentication."""
    access_token: str
    token_type: str = "bearer"
    user: UserProfile
