"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from casedesk.core.security import Role


class RegisterRequest(BaseModel):
    """Registration body. Presence of email and password is checked by the service."""

    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Login email (case-sensitive)")
    password: str | None = Field(default=None, description="Plain-text password")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, description="Login email")
    password: str | None = Field(default=None, description="Plain-text password")


class LoginResponse(BaseModel):
    """JWT returned after successful login, with the account role."""

    token: str = Field(..., description="JWT access token")
    role: Role = Field(..., description="Account role")


class CurrentUser(BaseModel):
    """Authenticated identity (id, role) taken from the bearer token."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: Role


class MessageResponse(BaseModel):
    """Generic acknowledgement; errors use the same shape."""

    message: str
