import logging
from typing import Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from todo_api.api.schemas import ErrorResponse
from todo_api.core.errors import ErrorCode, ErrorKind, TodoError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def describe_error(error: TodoError) -> Tuple[int, str]:
    """Status code and client-facing message for a domain failure.

    The message is always the code's public text, so internal details
    carried in ``error.detail`` never reach the client.
    """
    return STATUS_BY_KIND[error.kind], error.message


def error_response(error: TodoError) -> JSONResponse:
    code, message = describe_error(error)
    if error.kind is ErrorKind.INTERNAL:
        logger.error("http error: %s (code=%d)", error.detail, code, exc_info=error)
    else:
        logger.info("http error: %s (code=%d)", error.detail, code)
    return JSONResponse(status_code=code, content=ErrorResponse(err=message).model_dump())


async def todo_error_handler(request: Request, exc: TodoError) -> JSONResponse:
    return error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Bodies are parsed before app dependencies run; auth failures win over bad input
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is not None:
        try:
            await gateway.check_request(request)
        except TodoError as e:
            return error_response(e)
    return error_response(TodoError(ErrorCode.INVALID_JSON, str(exc.errors())))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TodoError, todo_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
