from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Task:
    id: str
    owner_id: str
    content: str
    completed: bool
    timestamp: datetime
