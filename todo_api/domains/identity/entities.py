from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class User:
    """Account owning tasks and sessions"""
    id: str
    email: str
    password_hash: str


@dataclass(frozen=True)
class Session:
    """Server-issued login session"""
    id: str
    user_id: str
    expiry_time: datetime

    def is_expired(self, now: datetime) -> bool:
        expiry = self.expiry_time
        # SQLite hands back naive datetimes even for timezone-aware columns
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        return expiry <= now
