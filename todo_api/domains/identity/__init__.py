from todo_api.domains.identity.entities import User, Session
from todo_api.domains.identity.schemas import UserCreate, UserLogin

__all__ = [
    "User", "Session",
    "UserCreate", "UserLogin",
]
