"""Register/login endpoints and auth dependencies (get_current_user, require_role)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from casedesk.core.config import Settings
from casedesk.core.database import get_db
from casedesk.core.errors import ForbiddenError, UnauthenticatedError
from casedesk.core.security import InvalidTokenError, Role, TokenService
from casedesk.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
)
from casedesk.services import accounts

security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Dependency returning the settings the application was built with."""
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the caller's identity.

    The identity is also attached to request.state.user. Raises 401 if the
    header is missing or the token does not verify; the reason is not disclosed.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("No token provided")
    try:
        identity = tokens.verify(credentials.credentials)
    except InvalidTokenError as e:
        raise UnauthenticatedError(cause=e) from e
    user = CurrentUser(id=identity.user_id, role=identity.role)
    request.state.user = user
    return user


def require_role(role: Role) -> Callable[..., CurrentUser]:
    """Build a dependency that authenticates the caller, then requires the given role."""

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role != role:
            raise ForbiddenError()
        return current_user

    dependency.__name__ = f"require_{role.value}"
    return dependency


require_admin = require_role(Role.ADMIN)


def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    """Create a regular account from email, password and an optional display name."""
    accounts.register(
        db,
        email=body.email,
        password=body.password,
        name=body.name,
        rounds=settings.BCRYPT_ROUNDS,
    )
    return MessageResponse(message="Registered successfully")


def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT and the account role.
    Include the token in the Authorization header as: Bearer <token>
    """
    result = accounts.login(db, email=body.email, password=body.password, tokens=tokens)
    return LoginResponse(token=result.token, role=result.role)
