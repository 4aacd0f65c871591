from todo_api.domains.tasks.entities import Task
from todo_api.domains.tasks.schemas import (
    TaskCreate, TaskEdit, TaskStatusUpdate, ToggleAll,
    TaskResponse, TaskListResponse
)

__all__ = [
    "Task",
    "TaskCreate", "TaskEdit", "TaskStatusUpdate", "ToggleAll",
    "TaskResponse", "TaskListResponse",
]
