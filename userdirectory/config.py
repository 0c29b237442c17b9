"""Configuration for the user directory.

Values come from the environment (optionally via a ``.env`` file). They are
read once, when the application is built, and handed to the services as
explicit settings objects.
"""

import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from userdirectory.errors import ConfigurationError

load_dotenv()

DEFAULT_TOKEN_LIFETIME_DAYS = 3
DEFAULT_BCRYPT_ROUNDS = 12
DEFAULT_CORS_ORIGINS = "http://localhost:3000"

_REQUIRED_JWT_VARS = {
    "signing_key": "JWT_KEY",
    "issuer": "JWT_ISSUER",
    "audience": "JWT_AUDIENCE",
}


class JwtSettings(BaseModel):
    """Signing configuration for issued bearer tokens."""

    signing_key: str = Field(..., description="HMAC secret used to sign tokens")
    issuer: str = Field(..., description="Value of the iss claim")
    audience: str = Field(..., description="Value of the aud claim")
    algorithm: str = Field("HS256", description="JWT signing algorithm")
    lifetime_days: int = Field(DEFAULT_TOKEN_LIFETIME_DAYS, description="Token lifetime in days")

    def validate_required(self) -> "JwtSettings":
        """Raise ConfigurationError if any required value is empty."""
        missing = [
            env_name
            for field_name, env_name in _REQUIRED_JWT_VARS.items()
            if not (getattr(self, field_name) or "").strip()
        ]
        if missing:
            raise ConfigurationError(f"JWT configuration is missing: {', '.join(missing)}")
        return self

    @classmethod
    def from_env(cls) -> "JwtSettings":
        """Build settings from JWT_KEY / JWT_ISSUER / JWT_AUDIENCE.

        Raises:
            ConfigurationError: If any of the three variables is unset or empty
        """
        settings = cls(
            signing_key=os.getenv("JWT_KEY", ""),
            issuer=os.getenv("JWT_ISSUER", ""),
            audience=os.getenv("JWT_AUDIENCE", ""),
            algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            lifetime_days=int(os.getenv("JWT_LIFETIME_DAYS", str(DEFAULT_TOKEN_LIFETIME_DAYS))),
        )
        return settings.validate_required()


def get_bcrypt_rounds() -> int:
    return int(os.getenv("BCRYPT_ROUNDS", str(DEFAULT_BCRYPT_ROUNDS)))


def get_cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
