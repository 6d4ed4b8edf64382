"""SQLAlchemy ORM models."""

from casedesk.models.base import Base
from casedesk.models.case import Case
from casedesk.models.user import User

__all__ = ["Base", "Case", "User"]
