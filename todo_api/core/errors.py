import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    """Externally visible failure categories"""
    INVALID_INPUT = "invalid_input"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class ErrorCode(enum.Enum):
    """Stable failure codes: each one has a kind and a public message."""

    # General
    INTERNAL = (ErrorKind.INTERNAL, "internal error")
    UNAUTHORIZED = (ErrorKind.UNAUTHORIZED, "user is not authorized")
    INVALID_JSON = (ErrorKind.INVALID_INPUT, "invalid json")

    # Tasks
    TASK_ID_REQUIRED = (ErrorKind.INVALID_INPUT, "task id required")
    TASK_CONTENT_REQUIRED = (ErrorKind.INVALID_INPUT, "task content required")
    TASK_EXISTS = (ErrorKind.CONFLICT, "task already exists")

    # Users and sessions
    EMAIL_REQUIRED = (ErrorKind.INVALID_INPUT, "email required")
    PASSWORD_REQUIRED = (ErrorKind.INVALID_INPUT, "password required")
    SESSION_REQUIRED = (ErrorKind.INVALID_INPUT, "session required")
    EXPIRY_TIME_REQUIRED = (ErrorKind.INVALID_INPUT, "expiry time required")
    USER_ID_REQUIRED = (ErrorKind.INVALID_INPUT, "user id required")
    USER_NOT_FOUND = (ErrorKind.NOT_FOUND, "user not found")
    SESSION_NOT_FOUND = (ErrorKind.NOT_FOUND, "session not found")
    EMAIL_EXISTS = (ErrorKind.CONFLICT, "email already exists")
    INVALID_CREDENTIALS = (ErrorKind.UNAUTHORIZED, "incorrect email or password")

    def __init__(self, kind: ErrorKind, message: str):
        self.kind = kind
        self.message = message


class TodoError(Exception):
    """Domain failure raised by services and mapped to a response at the edge.

    ``detail`` is for logs only. It may contain storage internals and is never
    sent to the client.
    """

    def __init__(self, code: ErrorCode, detail: Optional[str] = None):
        super().__init__(detail or code.message)
        self.code = code
        self.detail = detail or code.message

    @property
    def kind(self) -> ErrorKind:
        return self.code.kind

    @property
    def message(self) -> str:
        return self.code.message

    def __repr__(self) -> str:
        return f"TodoError(code={self.code.name}, detail={self.detail!r})"
