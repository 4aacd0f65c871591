from datetime import datetime
from typing import Any, Optional

from todo_api.core.errors import ErrorCode, TodoError


def required(value: Any, code: ErrorCode) -> str:
    """Return ``value`` stripped of surrounding whitespace, or raise ``code``.

    ``None`` and whitespace-only strings are both treated as missing.
    """
    if value is None:
        raise TodoError(code)
    text = str(value).strip()
    if not text:
        raise TodoError(code)
    return text


def required_time(value: Optional[datetime], code: ErrorCode) -> datetime:
    if value is None:
        raise TodoError(code)
    return value
