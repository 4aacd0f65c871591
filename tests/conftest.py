# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio
from passlib.context import CryptContext

from todo_api.core.config import Settings
from todo_api.core.db import create_engine, create_session_factory, init_models
from todo_api.core.security import PasswordHasher
from todo_api.domains.identity.services import UserService
from todo_api.domains.tasks.services import TaskService


def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'todo.sqlite3'}"


@pytest.fixture()
def hasher() -> PasswordHasher:
    """Real pbkdf2 hashing with few rounds to keep the suite fast."""
    return PasswordHasher(CryptContext(schemes=["pbkdf2_sha256"], pbkdf2_sha256__default_rounds=1000))


@pytest_asyncio.fixture()
async def engine(tmp_path: Path):
    engine = create_engine(database_url(tmp_path))
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture()
def user_service(session_factory, hasher: PasswordHasher) -> UserService:
    return UserService(session_factory, hasher=hasher)


@pytest.fixture()
def task_service(session_factory) -> TaskService:
    return TaskService(session_factory)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(database_url=database_url(tmp_path), log_level="WARNING")
