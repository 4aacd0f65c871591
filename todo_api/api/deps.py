from fastapi import Request

from todo_api.core.config import Settings
from todo_api.core.security import PasswordHasher
from todo_api.domains.identity.services import UserService
from todo_api.domains.tasks.services import TaskService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher
