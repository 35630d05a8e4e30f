from datetime import datetime

from sqlalchemy import Column, DateTime, String

from stablepage.db.database import Base


class RecordRow(Base):
    """Default table for the SQL record source.

    ``id`` is a string so that the database orders identifiers the same way
    the in-process comparator does.
    """

    __tablename__ = "records"

    id = Column(String(64), primary_key=True)
    kind = Column(String(64), nullable=False, index=True)
    initials = Column(String(255), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
