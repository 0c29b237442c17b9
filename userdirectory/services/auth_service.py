"""Authentication service: email/password login issuing bearer tokens."""

import logging

from pydantic import BaseModel

from userdirectory.auth.jwt import TokenIssuer
from userdirectory.auth.passwords import CredentialHasher
from userdirectory.database.user_repository import UserStore
from userdirectory.errors import AuthenticationFailure, Outcome
from userdirectory.models.user import UserProfile

logger = logging.getLogger(__name__)


class LoginResult(BaseModel):
    """Successful login: the access token and the logged-in user's profile."""
    access_token: str
    user: UserProfile


class AuthService:
    """Verifies credentials against the store and issues tokens."""

    def __init__(self, store: UserStore, hasher: CredentialHasher, issuer: TokenIssuer):
        self.store = store
        self.hasher = hasher
        self.issuer = issuer

    def login(self, email: str, password: str) -> Outcome[LoginResult]:
        """Authenticate by email and password.

        Unknown email and wrong password produce the same AuthenticationFailure.
        For unknown emails a dummy hash check still runs so both paths take
        comparable time.
        """
        user = self.store.find_by_email(email)
        if user is None:
            self.hasher.dummy_verify(password)
            logger.info("Login rejected")
            return Outcome.failure(AuthenticationFailure())

        if not self.hasher.verify(password, user.password_hash):
            logger.info("Login rejected")
            return Outcome.failure(AuthenticationFailure())

        token = self.issuer.issue(user.email)
        logger.info(f"Issued access token for user {user.id}")
        return Outcome.success(LoginResult(access_token=token, user=user.to_profile()))
