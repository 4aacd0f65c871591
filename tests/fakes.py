# tests/fakes.py

from __future__ import annotations

from todo_api.core.errors import ErrorCode, TodoError


class FakeUserService:
    """
    Session lookup backed by a dict.

    Records every token it is asked about so tests can assert that the
    gateway never reached storage.
    """

    def __init__(self, sessions: dict[str, str] | None = None, fail_with: ErrorCode | None = None) -> None:
        self.sessions = dict(sessions or {})
        self.fail_with = fail_with
        self.calls: list[str] = []

    async def authenticate_session(self, session_id: str) -> str:
        self.calls.append(session_id)
        if self.fail_with is not None:
            raise TodoError(self.fail_with, "storage is down")
        if not session_id.strip():
            raise TodoError(ErrorCode.SESSION_REQUIRED)
        try:
            return self.sessions[session_id]
        except KeyError:
            raise TodoError(ErrorCode.SESSION_NOT_FOUND) from None
