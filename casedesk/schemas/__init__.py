"""Pydantic request/response schemas."""

from casedesk.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
)
from casedesk.schemas.cases import CaseOut
from casedesk.schemas.health import HealthResponse

__all__ = [
    "CaseOut",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RegisterRequest",
]
