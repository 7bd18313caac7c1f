from datetime import date, datetime
from pydantic import BaseModel, ConfigDict
from typing import Any, List, Optional


class TaskFields(BaseModel):
    """Task fields as sent by the client, for create and partial update.

    Values are deliberately untyped here: the task service checks types and
    rules only after it has confirmed the task belongs to the caller, so a
    foreign or missing task is always a 404 whatever the payload says.
    Unknown keys (including any attempt to set an owner) are dropped.
    """

    model_config = ConfigDict(extra="ignore")

    title: Any = None
    description: Any = None
    completed: Any = None
    due_date: Any = None
    priority: Any = None


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    completed: bool
    due_date: Optional[date] = None
    priority: str
    created_at: datetime
    updated_at: datetime


class TaskResponse(BaseModel):
    task: TaskOut


class TaskMessageResponse(BaseModel):
    message: str
    task: TaskOut


class TaskListResponse(BaseModel):
    tasks: List[TaskOut]
    count: int


class MessageResponse(BaseModel):
    message: str
