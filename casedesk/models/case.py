"""ORM model for case records."""

from sqlalchemy import Column, DateTime, String, Text, func

from casedesk.models.base import Base
from casedesk.models.user import new_id


class Case(Base):
    """
    A reported case.

    owner_id references the creating user but is not a foreign key: it is
    stamped at creation and never checked again.
    """

    __tablename__ = "cases"

    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(Text, nullable=False, default="")
    category = Column(Text, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    image_path = Column(String(2048), nullable=False, default="")
    owner_id = Column(String(32), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
