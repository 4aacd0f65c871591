from todo_api.api.http.health import router as health_router
from todo_api.api.http.users import router as users_router
from todo_api.api.http.tasks import router as tasks_router

__all__ = [
    "health_router",
    "users_router",
    "tasks_router",
]
