from datetime import datetime
from typing import Optional

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.db.models.session import UserSession as SessionModel
from todo_api.domains.identity.entities import Session


class SessionRepository:
    """Access to the sessions table"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_id: str, user_id: str, expiry_time: datetime) -> None:
        await self.session.execute(
            insert(SessionModel).values(id=session_id, user_id=user_id, expiry_time=expiry_time)
        )

    async def get(self, session_id: str) -> Optional[Session]:
        result = await self.session.execute(
            select(SessionModel).where(SessionModel.id == session_id)
        )
        db_session = result.scalar_one_or_none()
        return self._to_domain(db_session) if db_session else None

    async def delete(self, session_id: str) -> int:
        result = await self.session.execute(
            delete(SessionModel).where(SessionModel.id == session_id)
        )
        return result.rowcount

    async def delete_for_user(self, user_id: str) -> int:
        result = await self.session.execute(
            delete(SessionModel).where(SessionModel.user_id == user_id)
        )
        return result.rowcount

    def _to_domain(self, db_session: SessionModel) -> Session:
        return Session(
            id=db_session.id,
            user_id=db_session.user_id,
            expiry_time=db_session.expiry_time,
        )
