import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from todo_api.core.errors import ErrorCode, TodoError
from todo_api.core.security import PasswordHasher
from todo_api.core.validation import required, required_time
from todo_api.db.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class UserService:
    """Accounts and login sessions"""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        hasher: Optional[PasswordHasher] = None,
        enforce_session_expiry: bool = False,
    ):
        self._session_factory = session_factory
        self._hasher = hasher or PasswordHasher()
        self._enforce_session_expiry = enforce_session_expiry

    async def create_user(self, email: str, password: str) -> None:
        """Register a new account; the password is stored hashed"""
        email = required(email, ErrorCode.EMAIL_REQUIRED)
        # Passwords are validated trimmed but hashed as given
        required(password, ErrorCode.PASSWORD_REQUIRED)
        password_hash = self._hasher.hash(password)

        async with UnitOfWork(self._session_factory) as uow:
            user_id = await uow.users.create(email, password_hash)

        logger.info("Created user %s", user_id)

    async def lookup_user(self, email: str) -> Tuple[str, str]:
        """Return ``(user_id, password_hash)`` for the account registered with ``email``"""
        email = required(email, ErrorCode.EMAIL_REQUIRED)

        async with UnitOfWork(self._session_factory) as uow:
            user = await uow.users.get_by_email(email)

        if user is None:
            raise TodoError(ErrorCode.USER_NOT_FOUND)
        return user.id, user.password_hash

    async def create_session(self, session_id: str, user_id: str, expiry_time: datetime) -> None:
        session_id = required(session_id, ErrorCode.SESSION_REQUIRED)
        user_id = required(user_id, ErrorCode.USER_ID_REQUIRED)
        expiry_time = required_time(expiry_time, ErrorCode.EXPIRY_TIME_REQUIRED)

        async with UnitOfWork(self._session_factory) as uow:
            await uow.sessions.create(session_id, user_id, expiry_time)

    async def authenticate_session(self, session_id: str) -> str:
        """Resolve a session token to the id of the user that owns it.

        This is the only place a session token is trusted. An empty token
        fails with SESSION_REQUIRED, an unknown one with SESSION_NOT_FOUND.
        Expiry is only checked when ``enforce_session_expiry`` is set.
        """
        session_id = required(session_id, ErrorCode.SESSION_REQUIRED)

        async with UnitOfWork(self._session_factory) as uow:
            session = await uow.sessions.get(session_id)

        if session is None:
            raise TodoError(ErrorCode.SESSION_NOT_FOUND)
        if self._enforce_session_expiry and session.is_expired(datetime.now(timezone.utc)):
            raise TodoError(ErrorCode.SESSION_NOT_FOUND, "session expired")
        return session.user_id

    async def logout_session(self, session_id: str) -> None:
        """Delete a session; deleting an unknown session is not an error"""
        session_id = required(session_id, ErrorCode.SESSION_REQUIRED)

        async with UnitOfWork(self._session_factory) as uow:
            await uow.sessions.delete(session_id)

    async def delete_user(self, user_id: str) -> None:
        """Delete a user together with all of its sessions and tasks.

        The three deletes run in one transaction; if any of them fails none
        of them persist.
        """
        user_id = required(user_id, ErrorCode.USER_ID_REQUIRED)

        async with UnitOfWork(self._session_factory) as uow:
            await uow.users.delete(user_id)
            sessions = await uow.sessions.delete_for_user(user_id)
            tasks = await uow.tasks.delete_for_user(user_id)

        logger.info("Deleted user %s with %d sessions and %d tasks", user_id, sessions, tasks)
