import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, Request, Response

from todo_api.api.deps import get_hasher, get_settings, get_user_service
from todo_api.api.schemas import InfoResponse
from todo_api.core.auth import current_user_id
from todo_api.core.config import Settings
from todo_api.core.errors import ErrorCode, TodoError
from todo_api.core.security import PasswordHasher, new_session_id, session_expiry
from todo_api.core.validation import required
from todo_api.domains.identity.schemas import UserCreate, UserLogin
from todo_api.domains.identity.services import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


def _clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
    )


@router.post("/create", response_model=InfoResponse, name="create_account")
async def create_account(
    data: UserCreate,
    user_service: UserService = Depends(get_user_service),
):
    """Register a new account"""
    await user_service.create_user(data.email, data.password)
    return InfoResponse(info=f"User has been created with email: {data.email.strip()}")


@router.post("/login", response_model=InfoResponse, name="login")
async def login(
    data: UserLogin,
    response: Response,
    user_service: UserService = Depends(get_user_service),
    hasher: PasswordHasher = Depends(get_hasher),
    settings: Settings = Depends(get_settings),
):
    """Check credentials, open a session and hand its token back as a cookie"""
    email = required(data.email, ErrorCode.EMAIL_REQUIRED)
    required(data.password, ErrorCode.PASSWORD_REQUIRED)
    try:
        user_id, password_hash = await user_service.lookup_user(email)
    except TodoError as e:
        if e.code is ErrorCode.USER_NOT_FOUND:
            raise TodoError(ErrorCode.INVALID_CREDENTIALS, "unknown email") from e
        raise

    if not hasher.verify(data.password, password_hash):
        raise TodoError(ErrorCode.INVALID_CREDENTIALS, f"wrong password for user {user_id}")

    ttl = timedelta(hours=settings.session_ttl_hours)
    session_id = new_session_id()
    await user_service.create_session(session_id, user_id, session_expiry(ttl))

    response.set_cookie(
        settings.session_cookie_name,
        session_id,
        max_age=int(ttl.total_seconds()),
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
    )
    logger.info("User %s logged in", user_id)
    return InfoResponse(info="Login successful")


@router.delete("/logout", response_model=InfoResponse, name="logout")
async def logout(
    request: Request,
    response: Response,
    user_service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
):
    """End the current session"""
    await user_service.logout_session(request.cookies.get(settings.session_cookie_name))
    _clear_session_cookie(response, settings)
    return InfoResponse(info="Successfully logged out")


@router.delete("/delete", response_model=InfoResponse, name="delete_account")
async def delete_account(
    response: Response,
    user_id: str = Depends(current_user_id),
    user_service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
):
    """Delete the caller's account, sessions and tasks"""
    await user_service.delete_user(user_id)
    _clear_session_cookie(response, settings)
    return InfoResponse(info="User deleted successfully")
