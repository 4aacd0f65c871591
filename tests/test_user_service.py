# tests/test_user_service.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from todo_api.core.errors import ErrorCode, ErrorKind, TodoError
from todo_api.db.models import Task as TaskModel, User as UserModel, UserSession as SessionModel
from todo_api.db.repositories.task_repository import TaskRepository
from todo_api.domains.identity.services import UserService


async def count_rows(session_factory, model) -> int:
    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


def later(hours: int = 1) -> datetime:
    return datetime.now(timezone.utc) + timedelta(hours=hours)


@pytest.mark.asyncio
async def test_create_and_lookup_user(user_service: UserService, hasher) -> None:
    await user_service.create_user("  alice@x.com ", "pw123")

    user_id, password_hash = await user_service.lookup_user("alice@x.com")

    assert user_id
    assert password_hash != "pw123"
    assert hasher.verify("pw123", password_hash)
    assert not hasher.verify("wrong", password_hash)


@pytest.mark.asyncio
async def test_duplicate_email_is_a_conflict(user_service: UserService, session_factory) -> None:
    await user_service.create_user("alice@x.com", "pw123")

    with pytest.raises(TodoError) as info:
        await user_service.create_user("alice@x.com", "other")

    assert info.value.code is ErrorCode.EMAIL_EXISTS
    assert info.value.kind is ErrorKind.CONFLICT
    assert await count_rows(session_factory, UserModel) == 1


@pytest.mark.asyncio
async def test_lookup_unknown_email(user_service: UserService) -> None:
    with pytest.raises(TodoError) as info:
        await user_service.lookup_user("nobody@x.com")

    assert info.value.code is ErrorCode.USER_NOT_FOUND


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("email", "password", "code"),
    [
        ("", "pw123", ErrorCode.EMAIL_REQUIRED),
        ("   ", "pw123", ErrorCode.EMAIL_REQUIRED),
        ("alice@x.com", "", ErrorCode.PASSWORD_REQUIRED),
        ("alice@x.com", " \t", ErrorCode.PASSWORD_REQUIRED),
    ],
)
async def test_create_user_requires_fields(user_service, session_factory, email, password, code) -> None:
    with pytest.raises(TodoError) as info:
        await user_service.create_user(email, password)

    assert info.value.code is code
    assert await count_rows(session_factory, UserModel) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("session_id", "user_id", "expiry", "code"),
    [
        ("", "u1", later(), ErrorCode.SESSION_REQUIRED),
        ("s1", "  ", later(), ErrorCode.USER_ID_REQUIRED),
        ("s1", "u1", None, ErrorCode.EXPIRY_TIME_REQUIRED),
    ],
)
async def test_create_session_requires_fields(user_service, session_factory, session_id, user_id, expiry, code) -> None:
    with pytest.raises(TodoError) as info:
        await user_service.create_session(session_id, user_id, expiry)

    assert info.value.code is code
    assert await count_rows(session_factory, SessionModel) == 0


@pytest.mark.asyncio
async def test_session_resolves_to_owner(user_service: UserService) -> None:
    await user_service.create_user("alice@x.com", "pw123")
    user_id, _ = await user_service.lookup_user("alice@x.com")

    await user_service.create_session("s1", user_id, later())
    await user_service.create_session("s2", user_id, later())

    assert await user_service.authenticate_session("s1") == user_id
    assert await user_service.authenticate_session("s2") == user_id


@pytest.mark.asyncio
@pytest.mark.parametrize(("token", "code"), [("", ErrorCode.SESSION_REQUIRED), ("unknown", ErrorCode.SESSION_NOT_FOUND)])
async def test_unknown_or_empty_session_never_resolves(user_service: UserService, token, code) -> None:
    with pytest.raises(TodoError) as info:
        await user_service.authenticate_session(token)

    assert info.value.code is code


@pytest.mark.asyncio
async def test_expired_session_still_resolves_by_default(user_service: UserService) -> None:
    await user_service.create_session("old", "u1", later(hours=-1))

    assert await user_service.authenticate_session("old") == "u1"


@pytest.mark.asyncio
async def test_expired_session_rejected_when_enforced(session_factory, hasher) -> None:
    service = UserService(session_factory, hasher=hasher, enforce_session_expiry=True)
    await service.create_session("old", "u1", later(hours=-1))
    await service.create_session("fresh", "u1", later())

    with pytest.raises(TodoError) as info:
        await service.authenticate_session("old")

    assert info.value.code is ErrorCode.SESSION_NOT_FOUND
    assert await service.authenticate_session("fresh") == "u1"


@pytest.mark.asyncio
async def test_logout_is_idempotent(user_service: UserService) -> None:
    await user_service.create_session("s1", "u1", later())

    await user_service.logout_session("s1")
    await user_service.logout_session("s1")

    with pytest.raises(TodoError):
        await user_service.authenticate_session("s1")


@pytest.mark.asyncio
async def test_logout_requires_session(user_service: UserService) -> None:
    with pytest.raises(TodoError) as info:
        await user_service.logout_session("  ")

    assert info.value.code is ErrorCode.SESSION_REQUIRED


@pytest.mark.asyncio
async def test_delete_user_removes_sessions_and_tasks(user_service, task_service, session_factory) -> None:
    await user_service.create_user("alice@x.com", "pw123")
    await user_service.create_user("bob@x.com", "pw123")
    alice, _ = await user_service.lookup_user("alice@x.com")
    bob, _ = await user_service.lookup_user("bob@x.com")
    await user_service.create_session("alice-1", alice, later())
    await user_service.create_session("bob-1", bob, later())
    await task_service.create_task("", "alice task", alice)
    await task_service.create_task("", "bob task", bob)

    await user_service.delete_user(alice)

    with pytest.raises(TodoError):
        await user_service.lookup_user("alice@x.com")
    with pytest.raises(TodoError):
        await user_service.authenticate_session("alice-1")
    assert await task_service.list_tasks(alice) == []

    assert await user_service.authenticate_session("bob-1") == bob
    assert [t.content for t in await task_service.list_tasks(bob)] == ["bob task"]


@pytest.mark.asyncio
async def test_delete_user_rolls_back_when_task_delete_fails(
    user_service, task_service, session_factory, monkeypatch
) -> None:
    await user_service.create_user("alice@x.com", "pw123")
    alice, _ = await user_service.lookup_user("alice@x.com")
    await user_service.create_session("alice-1", alice, later())
    await task_service.create_task("", "buy milk", alice)

    async def broken_delete_for_user(self, user_id: str) -> int:
        raise OperationalError("DELETE FROM tasks WHERE user_id = ?", (user_id,), Exception("disk I/O error"))

    monkeypatch.setattr(TaskRepository, "delete_for_user", broken_delete_for_user)

    with pytest.raises(TodoError) as info:
        await user_service.delete_user(alice)

    assert info.value.kind is ErrorKind.INTERNAL
    assert isinstance(info.value.__cause__, OperationalError)

    # The user and session deletes issued earlier in the same call were undone
    assert (await user_service.lookup_user("alice@x.com"))[0] == alice
    assert await user_service.authenticate_session("alice-1") == alice
    assert await count_rows(session_factory, UserModel) == 1
    assert await count_rows(session_factory, SessionModel) == 1
    assert await count_rows(session_factory, TaskModel) == 1


@pytest.mark.asyncio
async def test_delete_user_requires_id(user_service: UserService) -> None:
    with pytest.raises(TodoError) as info:
        await user_service.delete_user("")

    assert info.value.code is ErrorCode.USER_ID_REQUIRED
