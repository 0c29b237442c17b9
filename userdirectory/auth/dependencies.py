"""FastAPI dependencies for services and authentication."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from userdirectory.auth.jwt import TokenIssuer
from userdirectory.auth.passwords import CredentialHasher
from userdirectory.database.database import get_db
from userdirectory.database.user_repository import UserRepository, UserStore
from userdirectory.models.user import UserProfile
from userdirectory.services.auth_service import AuthService
from userdirectory.services.users_service import UsersService

# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_token_issuer(request: Request) -> TokenIssuer:
    """Token issuer built once at app creation."""
    return request.app.state.token_issuer


def get_hasher(request: Request) -> CredentialHasher:
    """Credential hasher built once at app creation."""
    return request.app.state.hasher


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    """Request-scoped user store over the request's database session."""
    return UserRepository(db)


def get_users_service(
    store: UserStore = Depends(get_user_store),
    hasher: CredentialHasher = Depends(get_hasher),
) -> UsersService:
    return UsersService(store, hasher)


def get_auth_service(
    store: UserStore = Depends(get_user_store),
    hasher: CredentialHasher = Depends(get_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(store, hasher, issuer)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    issuer: TokenIssuer = Depends(get_token_issuer),
    store: UserStore = Depends(get_user_store),
) -> UserProfile:
    """Get current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials
        issuer: Token issuer used to validate the token
        store: User store

    Returns:
        Profile of the user named by the token's subject

    Raises:
        HTTPException: If token is missing, invalid, or its user no longer exists
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    email = issuer.get_subject(credentials.credentials)
    if not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = store.find_by_email(email)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user.to_profile()
