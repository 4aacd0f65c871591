import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from passlib.context import CryptContext

# Password hashing context
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class PasswordHasher:
    """One-way password hashing with a compare operation"""

    def __init__(self, context: CryptContext = pwd_context):
        self._context = context

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, plain_password: str, password_hash: str) -> bool:
        """Check a password against a stored hash; malformed hashes never match"""
        try:
            return self._context.verify(plain_password, password_hash)
        except (ValueError, TypeError):
            return False


def new_session_id() -> str:
    """Random opaque session token"""
    return str(uuid.uuid4())


def session_expiry(ttl: timedelta, now: Optional[datetime] = None) -> datetime:
    """Expiry time for a session created at ``now``"""
    now = now or datetime.now(timezone.utc)
    return now + ttl
