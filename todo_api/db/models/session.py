from sqlalchemy import Column, DateTime, String

from todo_api.core.db import Base


class UserSession(Base):
    __tablename__ = "sessions"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(36), index=True, nullable=False)
    expiry_time = Column(DateTime(timezone=True), nullable=False)
