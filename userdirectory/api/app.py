"""FastAPI web application for the user directory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from userdirectory.api.auth_models import AuthResponse, LoginRequest
from userdirectory.auth.dependencies import get_auth_service, get_current_user, get_users_service
from userdirectory.auth.jwt import TokenIssuer
from userdirectory.auth.passwords import CredentialHasher
from userdirectory.config import JwtSettings, get_bcrypt_rounds, get_cors_origins
from userdirectory.database.database import init_db
from userdirectory.engine.pagination import DEFAULT_PER_PAGE
from userdirectory.errors import (
    AuthenticationFailure,
    DomainError,
    DuplicateEmail,
    NotFound,
    StoreError,
    ValidationError,
)
from userdirectory.models.user import CreateUserRequest, UpdateUserRequest, UserProfile
from userdirectory.services.auth_service import AuthService
from userdirectory.services.users_service import DEFAULT_SORT, UsersService

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"

_ERROR_STATUS = {
    AuthenticationFailure: status.HTTP_401_UNAUTHORIZED,
    DuplicateEmail: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
}


def raise_for_domain_error(error: DomainError) -> None:
    """Translate a domain error into the matching HTTP error."""
    status_code = _ERROR_STATUS.get(type(error), status.HTTP_400_BAD_REQUEST)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    raise HTTPException(status_code=status_code, detail=error.detail, headers=headers)


auth_router = APIRouter(prefix="/api", tags=["auth"])
users_router = APIRouter(prefix="/api/users", tags=["users"], dependencies=[Depends(get_current_user)])
legacy_user_router = APIRouter(prefix="/api/user", tags=["users"], dependencies=[Depends(get_current_user)])


@auth_router.post("/login", response_model=AuthResponse)
def login(request: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    """Exchange email and password for a bearer token."""
    outcome = auth_service.login(request.email, request.password)
    if not outcome.ok:
        raise_for_domain_error(outcome.error)
    return AuthResponse(access_token=outcome.value.access_token, user=outcome.value.user)


@users_router.get("")
def list_users(
    page: int = Query(1, alias="_page"),
    per_page: int = Query(DEFAULT_PER_PAGE, alias="_per_page"),
    sort: str = Query(DEFAULT_SORT, alias="_sort"),
    email: Optional[str] = Query(None),
    users_service: UsersService = Depends(get_users_service),
):
    """Paginated, sorted user list; with `email`, the single matching user."""
    if email:
        profile = users_service.get_by_email(email)
        if profile is None:
            raise_for_domain_error(NotFound())
        return profile

    outcome = users_service.list(page, per_page, sort)
    if not outcome.ok:
        raise_for_domain_error(outcome.error)
    return outcome.value


@users_router.get("/{user_id}", response_model=UserProfile)
def get_user(user_id: str, users_service: UsersService = Depends(get_users_service)):
    """Get a user by ID."""
    profile = users_service.get_by_id(user_id)
    if profile is None:
        raise_for_domain_error(NotFound())
    return profile


@users_router.post("", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
def create_user(
    request: CreateUserRequest,
    response: Response,
    users_service: UsersService = Depends(get_users_service),
):
    """Create a new user."""
    outcome = users_service.create(request.name, request.email, request.age, request.password)
    if not outcome.ok:
        raise_for_domain_error(outcome.error)
    user = outcome.value
    response.headers["Location"] = f"/api/users/{user.id}"
    return user.to_profile()


@users_router.put("/{user_id}", response_model=UserProfile)
def update_user(
    user_id: str,
    request: UpdateUserRequest,
    users_service: UsersService = Depends(get_users_service),
):
    """Replace a user's name, email, age and password."""
    outcome = users_service.update(user_id, request.name, request.email, request.age, request.password)
    if not outcome.ok:
        raise_for_domain_error(outcome.error)
    return outcome.value.to_profile()


@users_router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str, users_service: UsersService = Depends(get_users_service)):
    """Delete a user by ID."""
    if not users_service.delete(user_id):
        raise_for_domain_error(NotFound())
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@legacy_user_router.get("/by-email", response_model=UserProfile)
def get_user_by_email(
    email: Optional[str] = Query(None),
    users_service: UsersService = Depends(get_users_service),
):
    """Get a user by email."""
    if not email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing email address")
    profile = users_service.get_by_email(email)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return profile


def create_app(
    jwt_settings: Optional[JwtSettings] = None,
    hasher: Optional[CredentialHasher] = None,
    init_database: bool = True,
) -> FastAPI:
    """Build the application.

    Token configuration is checked here, so a missing JWT_KEY, JWT_ISSUER or
    JWT_AUDIENCE stops startup with a ConfigurationError.
    """
    token_issuer = TokenIssuer(jwt_settings or JwtSettings.from_env())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_database:
            init_db()
        yield

    app = FastAPI(
        title="User Directory API",
        description="Authentication and user directory service",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.token_issuer = token_issuer
    app.state.hasher = hasher or CredentialHasher(rounds=get_bcrypt_rounds())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StoreError)
    async def store_error_handler(request, exc: StoreError):
        logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "Internal Server Error"})

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": API_VERSION}

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(legacy_user_router)
    return app
