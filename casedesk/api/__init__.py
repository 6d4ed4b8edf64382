"""Route table: every (method, path) the service exposes, with its access level and handler."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response

from casedesk.api import admin, auth, cases, health


class Access(str, Enum):
    """Who may call a route."""

    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"


ACCESS_DEPENDENCIES: dict[Access, list[Any]] = {
    Access.PUBLIC: [],
    Access.AUTHENTICATED: [Depends(auth.get_current_user)],
    Access.ADMIN: [Depends(auth.require_admin)],
}


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    access: Access
    endpoint: Callable[..., Any]
    tags: list[str] = field(default_factory=list)
    response_class: type[Response] | None = None


ROUTES: list[Route] = [
    Route("POST", "/api/register", Access.PUBLIC, auth.register, ["auth"]),
    Route("POST", "/api/login", Access.PUBLIC, auth.login, ["auth"]),
    Route("GET", "/api/cases", Access.PUBLIC, cases.list_cases, ["cases"]),
    Route("POST", "/api/cases", Access.AUTHENTICATED, cases.add_case, ["cases"]),
    Route("DELETE", "/api/cases/{case_id}", Access.ADMIN, cases.delete_case, ["cases"]),
    Route("PUT", "/api/block/{user_id}", Access.ADMIN, admin.toggle_block, ["admin"]),
    Route(
        "GET",
        "/create-admin",
        Access.PUBLIC,
        admin.create_admin,
        ["admin"],
        response_class=PlainTextResponse,
    ),
    Route("GET", "/health", Access.PUBLIC, health.get_health, ["health"]),
]


def build_router(routes: list[Route] = ROUTES) -> APIRouter:
    """Mount the route table on a router, translating access levels into auth dependencies."""
    router = APIRouter()
    for route in routes:
        kwargs: dict[str, Any] = {}
        if route.response_class is not None:
            kwargs["response_class"] = route.response_class
        router.add_api_route(
            route.path,
            route.endpoint,
            methods=[route.method],
            dependencies=ACCESS_DEPENDENCIES[route.access],
            tags=route.tags,
            **kwargs,
        )
    return router
