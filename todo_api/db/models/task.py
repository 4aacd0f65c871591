from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String, Text

from todo_api.core.db import Base
from todo_api.db.models.user import new_id


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(Base):
    __tablename__ = "tasks"

    # Task ids are chosen by clients, so they are only unique per owner
    id = Column(String(64), primary_key=True, default=new_id)
    user_id = Column(String(36), primary_key=True, index=True)
    content = Column(Text, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)
