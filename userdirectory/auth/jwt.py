"""JWT token generation and validation for the user directory."""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt

from userdirectory.config import JwtSettings

logger = logging.getLogger(__name__)


class TokenIssuer:
    """Builds and checks signed bearer tokens.

    Stateless apart from its settings; never touches storage.
    """

    def __init__(self, settings: JwtSettings):
        # Fail at construction, not on the first login.
        self.settings = settings.validate_required()

    @property
    def default_lifetime(self) -> timedelta:
        return timedelta(days=self.settings.lifetime_days)

    def issue(self, subject: str, expires_in: Optional[timedelta] = None) -> str:
        """Create a signed access token.

        Args:
            subject: Value of the sub claim (the user's email)
            expires_in: Token lifetime, defaults to the configured lifetime

        Returns:
            Encoded JWT token string
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": subject,
            "jti": str(uuid.uuid4()),  # Unique per token
            "iss": self.settings.issuer,
            "aud": self.settings.audience,
            "iat": now,
            "exp": now + (expires_in if expires_in is not None else self.default_lifetime),
        }
        return jwt.encode(payload, self.settings.signing_key, algorithm=self.settings.algorithm)

    def decode(self, token: str) -> Optional[Dict]:
        """Decode and validate a token (signature, issuer, audience, expiry).

        Returns:
            Decoded payload, or None if the token is invalid or expired
        """
        try:
            return jwt.decode(
                token,
                self.settings.signing_key,
                algorithms=[self.settings.algorithm],
                audience=self.settings.audience,
                issuer=self.settings.issuer,
                options={"require": ["sub", "exp", "jti"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return None
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected invalid token: {type(e).__name__}")
            return None

    def get_subject(self, token: str) -> Optional[str]:
        """Extract the subject (email) from a valid token."""
        payload = self.decode(token)
        if payload:
            return payload.get("sub")
        return None
