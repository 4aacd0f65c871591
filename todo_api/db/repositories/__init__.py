from todo_api.db.repositories.user_repository import UserRepository
from todo_api.db.repositories.session_repository import SessionRepository
from todo_api.db.repositories.task_repository import TaskRepository

__all__ = [
    "UserRepository",
    "SessionRepository",
    "TaskRepository",
]
