"""Case repository: insert, list and delete case records."""

import logging

from sqlalchemy.orm import Session

from casedesk.core.database import store_errors
from casedesk.core.errors import NotFoundError
from casedesk.models import Case

logger = logging.getLogger(__name__)


def list_all(db: Session) -> list[Case]:
    """Every case, in store order. No filtering or pagination."""
    with store_errors(db):
        return db.query(Case).all()


def create(
    db: Session,
    owner_id: str,
    title: str | None,
    category: str | None,
    description: str | None,
    image_path: str = "",
) -> Case:
    case = Case(
        owner_id=owner_id,
        title=title or "",
        category=category or "",
        description=description or "",
        image_path=image_path or "",
    )
    with store_errors(db):
        db.add(case)
        db.commit()
        db.refresh(case)
    logger.info("Case id=%s created by user id=%s", case.id, owner_id)
    return case


def delete_by_id(db: Session, case_id: str) -> None:
    """Delete one case. Raises NotFoundError if no case has this id."""
    with store_errors(db):
        deleted = (
            db.query(Case)
            .filter(Case.id == case_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    if not deleted:
        raise NotFoundError("Case not found")
    logger.info("Case id=%s deleted", case_id)
