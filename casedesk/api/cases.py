"""Case endpoints: list (public), add (authenticated), delete (admin)."""

from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from casedesk.api.auth import get_app_settings, get_current_user
from casedesk.core.config import Settings
from casedesk.core.database import get_db
from casedesk.core.errors import InvalidInputError
from casedesk.schemas.auth import CurrentUser, MessageResponse
from casedesk.schemas.cases import CaseOut
from casedesk.services import cases, uploads

CASE_FIELDS = ("title", "category", "description")


def _text(value: Any) -> str | None:
    if value is None or uploads.is_upload_file(value):
        return None
    return str(value)


async def _read_case_form(request: Request) -> tuple[dict[str, str | None], object | None]:
    """Read case fields (and the optional image part) from a multipart, urlencoded or JSON body."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "application/json":
        try:
            body = await request.json()
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors.
            raise InvalidInputError(f"Invalid JSON: {e!s}") from e
        if not isinstance(body, dict):
            raise InvalidInputError("JSON body must be an object.")
        return {k: _text(body.get(k)) for k in CASE_FIELDS}, None
    if content_type in ("multipart/form-data", "application/x-www-form-urlencoded"):
        form = await request.form()
        return {k: _text(form.get(k)) for k in CASE_FIELDS}, form.get("image")
    raise InvalidInputError(
        "Content-Type must be multipart/form-data, application/x-www-form-urlencoded or application/json."
    )


def list_cases(db: Annotated[Session, Depends(get_db)]) -> list[CaseOut]:
    """Return every case."""
    return [CaseOut.model_validate(c) for c in cases.list_all(db)]


async def add_case(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    """
    Create a case owned by the caller.

    Send `multipart/form-data` with title, category, description and an
    optional `image` file; a JSON object with the same text fields is also accepted.
    """
    fields, image = await _read_case_form(request)
    image_path = await uploads.save_upload(
        image,
        settings.UPLOAD_DIR,
        max_bytes=settings.MAX_UPLOAD_BYTES,
    )
    try:
        cases.create(
            db,
            owner_id=current_user.id,
            title=fields["title"],
            category=fields["category"],
            description=fields["description"],
            image_path=image_path,
        )
    except Exception:
        uploads.discard_upload(image_path, settings.UPLOAD_DIR)
        raise
    return MessageResponse(message="Case added successfully")


def delete_case(
    case_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete one case by id (admin only)."""
    cases.delete_by_id(db, case_id)
    return MessageResponse(message="Deleted successfully")
