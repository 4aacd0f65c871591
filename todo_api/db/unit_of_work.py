import logging
from types import TracebackType
from typing import Optional, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from todo_api.core.errors import ErrorCode, TodoError
from todo_api.db.repositories import SessionRepository, TaskRepository, UserRepository

logger = logging.getLogger(__name__)


class UnitOfWork:
    """One storage transaction shared by the user, session and task repositories.

    Leaving the block normally commits. Any exception rolls back everything
    executed inside the block. Storage errors are re-raised as an internal
    ``TodoError`` with the original exception chained.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> "UnitOfWork":
        self.session = self._session_factory()
        self.users = UserRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.tasks = TaskRepository(self.session)
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            if exc is None:
                await self.session.commit()
            else:
                await self.session.rollback()
        except SQLAlchemyError as tx_exc:
            raise TodoError(ErrorCode.INTERNAL, f"transaction failed: {tx_exc}") from tx_exc
        finally:
            await self.session.close()

        if isinstance(exc, SQLAlchemyError):
            logger.debug("Transaction rolled back: %s", exc)
            raise TodoError(ErrorCode.INTERNAL, str(exc)) from exc
