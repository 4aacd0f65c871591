from typing import List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.core.errors import ErrorCode, TodoError
from todo_api.db.models.task import Task as TaskModel
from todo_api.db.models.user import new_id
from todo_api.domains.tasks.entities import Task


class TaskRepository:
    """Access to the tasks table.

    Every statement is filtered by the owning user; callers pass the id the
    gateway resolved, never one taken from a request body.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_for_user(self, user_id: str) -> List[Task]:
        result = await self.session.execute(
            select(TaskModel).where(TaskModel.user_id == user_id)
        )
        return [self._to_domain(task) for task in result.scalars().all()]

    async def create(self, task_id: str, user_id: str, content: str) -> str:
        """Insert a task and return its id; ids only clash within one owner"""
        task_id = task_id or new_id()
        try:
            await self.session.execute(
                insert(TaskModel).values(id=task_id, user_id=user_id, content=content)
            )
        except IntegrityError as exc:
            raise TodoError(ErrorCode.TASK_EXISTS, f"task {task_id} exists for user {user_id}") from exc
        return task_id

    async def update_content(self, task_id: str, user_id: str, content: str) -> int:
        stmt = (
            update(TaskModel)
            .where(TaskModel.id == task_id, TaskModel.user_id == user_id)
            .values(content=content)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def update_status(self, task_id: str, user_id: str, completed: bool) -> int:
        stmt = (
            update(TaskModel)
            .where(TaskModel.id == task_id, TaskModel.user_id == user_id)
            .values(completed=completed)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def update_status_for_user(self, user_id: str, completed: bool) -> int:
        stmt = update(TaskModel).where(TaskModel.user_id == user_id).values(completed=completed)
        result = await self.session.execute(stmt)
        return result.rowcount

    async def delete(self, task_id: str, user_id: str) -> int:
        result = await self.session.execute(
            delete(TaskModel).where(TaskModel.id == task_id, TaskModel.user_id == user_id)
        )
        return result.rowcount

    async def delete_completed(self, user_id: str) -> int:
        result = await self.session.execute(
            delete(TaskModel).where(TaskModel.user_id == user_id, TaskModel.completed == True)  # noqa: E712
        )
        return result.rowcount

    async def delete_for_user(self, user_id: str) -> int:
        result = await self.session.execute(
            delete(TaskModel).where(TaskModel.user_id == user_id)
        )
        return result.rowcount

    def _to_domain(self, db_task: TaskModel) -> Task:
        return Task(
            id=db_task.id,
            owner_id=db_task.user_id,
            content=db_task.content,
            completed=db_task.completed,
            timestamp=db_task.timestamp,
        )
