"""Password hashing for stored user credentials (bcrypt)."""

import logging

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of the input; recent releases raise
# instead of silently truncating, so truncate explicitly on both paths.
BCRYPT_MAX_PASSWORD_BYTES = 72


class MalformedHashError(ValueError):
    """Stored hash is not a bcrypt hash."""


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


class CredentialHasher:
    """One-way salted password hashing with a configurable work factor."""

    def __init__(self, rounds: int = 12):
        if rounds < 4 or rounds > 31:
            raise ValueError(f"bcrypt rounds must be between 4 and 31, got {rounds}")
        self.rounds = rounds
        # Fixed hash for dummy_verify so unknown-user logins cost the same as real ones.
        self._dummy_hash = bcrypt.hashpw(b"dummy-password", bcrypt.gensalt(rounds=rounds))

    def hash(self, plaintext: str) -> str:
        """Hash a password with a fresh random salt.

        Args:
            plaintext: Password to hash

        Returns:
            bcrypt hash string (salt and cost embedded)
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(plaintext), salt).decode("utf-8")

    def verify(self, plaintext: str, hash_value: str) -> bool:
        """Check a password against a stored hash.

        Returns False on mismatch.

        Raises:
            MalformedHashError: If hash_value is not a bcrypt hash
        """
        try:
            return bcrypt.checkpw(_encode(plaintext), hash_value.encode("utf-8"))
        except ValueError as e:
            logger.error(f"Stored password hash is malformed: {type(e).__name__}")
            raise MalformedHashError("Stored password hash is malformed") from e

    def dummy_verify(self, plaintext: str) -> bool:
        """Run a verify against a fixed hash and discard the result."""
        bcrypt.checkpw(_encode(plaintext), self._dummy_hash)
        return False
