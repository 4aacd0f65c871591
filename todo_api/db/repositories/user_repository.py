from typing import Optional

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.core.errors import ErrorCode, TodoError
from todo_api.db.models.user import User as UserModel, new_id
from todo_api.domains.identity.entities import User

# SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError, column: str) -> bool:
    """Whether ``exc`` is a unique-constraint failure on ``users.<column>``.

    PostgreSQL drivers expose the SQLSTATE and the constraint name
    (``users_email_key``); SQLite only reports it in the message.
    """
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    message = str(orig)
    if sqlstate == UNIQUE_VIOLATION:
        constraint = getattr(orig, "constraint_name", None)
        if constraint:
            return constraint == f"users_{column}_key"
        return f"users_{column}_key" in message or f"({column})" in message
    return f"UNIQUE constraint failed: users.{column}" in message


class UserRepository:
    """Access to the users table"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, email: str, password_hash: str) -> str:
        """Insert a user and return its id"""
        user_id = new_id()
        try:
            await self.session.execute(
                insert(UserModel).values(id=user_id, email=email, password_hash=password_hash)
            )
        except IntegrityError as exc:
            if is_unique_violation(exc, "email"):
                raise TodoError(ErrorCode.EMAIL_EXISTS) from exc
            raise
        return user_id

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def delete(self, user_id: str) -> int:
        result = await self.session.execute(delete(UserModel).where(UserModel.id == user_id))
        return result.rowcount

    def _to_domain(self, db_user: UserModel) -> User:
        return User(
            id=db_user.id,
            email=db_user.email,
            password_hash=db_user.password_hash,
        )
