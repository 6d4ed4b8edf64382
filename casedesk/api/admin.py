"""Administrative endpoints: block toggle (admin only) and the one-time admin bootstrap."""

from typing import Annotated

from fastapi import Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from casedesk.api.auth import get_app_settings
from casedesk.core.config import Settings
from casedesk.core.database import get_db
from casedesk.core.errors import NotFoundError
from casedesk.schemas.auth import MessageResponse
from casedesk.services import accounts


def toggle_block(
    user_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Flip a user's blocked flag; a blocked user can no longer log in."""
    accounts.toggle_block(db, user_id)
    return MessageResponse(message="User status updated")


def create_admin(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> PlainTextResponse:
    """
    Seed the bootstrap admin account. Intended for one-time operational use;
    disable with SEED_ADMIN_ROUTE_ENABLED=false once the admin exists.
    """
    if not settings.SEED_ADMIN_ROUTE_ENABLED:
        raise NotFoundError()
    if not accounts.seed_admin(db, settings):
        return PlainTextResponse("Admin already exists")
    return PlainTextResponse(f"Admin created → email: {settings.ADMIN_EMAIL}")
