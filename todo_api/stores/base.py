"""Storage interfaces the services depend on.

The services only need attribute access on the records they get back, so
the SQLAlchemy rows satisfy these directly and tests can substitute plain
in-memory objects.
"""

from datetime import date, datetime
from typing import List, Optional, Protocol


class UserRecord(Protocol):
    id: int
    email: str
    password_hash: str
    created_at: datetime


class TaskRecord(Protocol):
    id: int
    title: str
    description: Optional[str]
    completed: bool
    due_date: Optional[date]
    priority: str
    user_id: int
    created_at: datetime
    updated_at: datetime


class UserStore(Protocol):
    def get_by_email(self, email: str) -> Optional[UserRecord]: ...

    def get_by_id(self, user_id: int) -> Optional[UserRecord]: ...

    def add(self, email: str, password_hash: str) -> UserRecord:
        """Persist a new user. Raises ConflictError if the email is taken."""
        ...


class TaskStore(Protocol):
    def list_for_owner(self, owner_id: int) -> List[TaskRecord]:
        """Tasks owned by ``owner_id``, newest first."""
        ...

    def get_for_owner(self, task_id: int, owner_id: int) -> Optional[TaskRecord]: ...

    def add(self, owner_id: int, fields: dict) -> TaskRecord: ...

    def update(self, task: TaskRecord, fields: dict) -> TaskRecord: ...

    def delete(self, task: TaskRecord) -> None: ...
