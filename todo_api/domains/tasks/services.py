from typing import List

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from todo_api.core.errors import ErrorCode
from todo_api.core.validation import required
from todo_api.db.unit_of_work import UnitOfWork
from todo_api.domains.tasks.entities import Task


class TaskService:
    """Task operations on behalf of one owning user.

    ``user_id`` always comes from the authorization gateway.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def list_tasks(self, user_id: str) -> List[Task]:
        """The user's tasks, oldest first"""
        user_id = required(user_id, ErrorCode.USER_ID_REQUIRED)

        async with UnitOfWork(self._session_factory) as uow:
            tasks = await uow.tasks.list_for_user(user_id)

        return sorted(tasks, key=lambda task: task.timestamp)

    async def create_task(self, task_id: str, content: str, user_id: str) -> str:
        """Create a task and return its id; a blank ``task_id`` gets a generated one"""
        content = required(content, ErrorCode.TASK_CONTENT_REQUIRED)
        user_id = required(user_id, ErrorCode.USER_ID_REQUIRED)
        task_id = (task_id or "").strip()

        async with UnitOfWork(self._session_factory) as uow:
            return await uow.tasks.create(task_id, user_id, content)

    async def edit_task(self, task_id: str, new_content: str, user_id: str) -> None:
        """Replace a task's content.

        An id that matches none of the user's tasks is a silent no-op.
        """
        task_id = required(task_id, ErrorCode.TASK_ID_REQUIRED)
        new_content = required(new_content, ErrorCode.TASK_CONTENT_REQUIRED)
        user_id = required(user_id, ErrorCode.USER_ID_REQUIRED)

        async with UnitOfWork(self._session_factory) as uow:
            await uow.tasks.update_content(task_id, user_id, new_content)

    async def edit_task_status(self, task_id: str, completed: bool, user_id: str) -> None:
        task_id = required(task_id, ErrorCode.TASK_ID_REQUIRED)
        user_id = required(user_id, ErrorCode.USER_ID_REQUIRED)

        async with UnitOfWork(self._session_factory) as uow:
            await uow.tasks.update_status(task_id, user_id, completed)

    async def toggle_all(self, completed: bool, user_id: str) -> int:
        """Set ``completed`` on every task of the user; returns the number of rows touched"""
        user_id = required(user_id, ErrorCode.USER_ID_REQUIRED)

        async with UnitOfWork(self._session_factory) as uow:
            return await uow.tasks.update_status_for_user(user_id, completed)

    async def delete_task(self, task_id: str, user_id: str) -> None:
        """Delete a task; a missing task is not an error"""
        task_id = required(task_id, ErrorCode.TASK_ID_REQUIRED)
        user_id = required(user_id, ErrorCode.USER_ID_REQUIRED)

        async with UnitOfWork(self._session_factory) as uow:
            await uow.tasks.delete(task_id, user_id)

    async def clear_completed(self, user_id: str) -> int:
        """Delete the user's completed tasks; returns the number deleted"""
        user_id = required(user_id, ErrorCode.USER_ID_REQUIRED)

        async with UnitOfWork(self._session_factory) as uow:
            return await uow.tasks.delete_completed(user_id)
