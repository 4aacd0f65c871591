from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

# Missing strings stay None so the services report which field is required


class TaskCreate(BaseModel):
    id: Optional[str] = None
    content: Optional[str] = None


class TaskEdit(BaseModel):
    id: Optional[str] = None
    content: Optional[str] = None


class TaskStatusUpdate(BaseModel):
    id: Optional[str] = None
    val: bool = False


class ToggleAll(BaseModel):
    val: bool = False


class TaskResponse(BaseModel):
    id: str
    content: str
    completed: bool
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskListResponse(BaseModel):
    tasks: List[TaskResponse]
