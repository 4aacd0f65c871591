import logging
from typing import FrozenSet, Optional

from fastapi import Request

from todo_api.core.errors import ErrorCode, ErrorKind, TodoError
from todo_api.domains.identity.services import UserService

logger = logging.getLogger(__name__)

# Route names that may be called without a session
PUBLIC_OPERATIONS: FrozenSet[str] = frozenset({"create_account", "login", "health"})


class AuthorizationGateway:
    """Decides, per operation, whether a session is needed and whose it is"""

    def __init__(
        self,
        user_service: UserService,
        cookie_name: str = "session",
        public_operations: FrozenSet[str] = PUBLIC_OPERATIONS,
    ):
        self._user_service = user_service
        self._cookie_name = cookie_name
        self._public_operations = public_operations

    def is_public(self, operation: str) -> bool:
        return operation in self._public_operations

    async def authenticate(self, session_token: Optional[str]) -> str:
        """Resolve a session token to a user id or fail with UNAUTHORIZED"""
        if not session_token:
            raise TodoError(ErrorCode.UNAUTHORIZED, "no session cookie")
        try:
            return await self._user_service.authenticate_session(session_token)
        except TodoError as e:
            if e.kind is ErrorKind.INTERNAL:
                raise
            raise TodoError(ErrorCode.UNAUTHORIZED, e.detail) from e

    async def authorize(self, operation: str, session_token: Optional[str]) -> Optional[str]:
        """Return the caller's user id, or ``None`` for public operations"""
        if self.is_public(operation):
            return None
        return await self.authenticate(session_token)

    async def check_request(self, request: Request) -> Optional[str]:
        """Authorize the routed operation of ``request`` and attach the caller to it"""
        route = request.scope.get("route")
        operation = getattr(route, "name", "")
        user_id = await self.authorize(operation, request.cookies.get(self._cookie_name))
        request.state.user_id = user_id
        return user_id

    async def __call__(self, request: Request) -> None:
        """App-wide dependency: runs before every routed operation"""
        await self.check_request(request)


def current_user_id(request: Request) -> str:
    """The user id the gateway attached to this request"""
    user_id = getattr(request.state, "user_id", None)
    if user_id is None:
        raise TodoError(ErrorCode.UNAUTHORIZED, "operation reached without a resolved user")
    return user_id
