from todo_api.db.models.user import User
from todo_api.db.models.session import UserSession
from todo_api.db.models.task import Task

__all__ = [
    "User",
    "UserSession",
    "Task",
]
