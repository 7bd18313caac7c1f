from datetime import datetime, UTC
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from todo_api.errors import ConflictError
from todo_api.models.task import Task
from todo_api.models.user import User


class SqlUserStore:
    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str):
        return self.db.query(User).filter(User.email == email).first()

    def get_by_id(self, user_id: int):
        return self.db.get(User, user_id)

    def add(self, email: str, password_hash: str):
        user = User(email=email, password_hash=password_hash)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # another request registered the same email between our check and insert
            self.db.rollback()
            raise ConflictError("User with this email already exists")
        self.db.refresh(user)
        return user


class SqlTaskStore:
    def __init__(self, db: Session):
        self.db = db

    def list_for_owner(self, owner_id: int):
        return (
            self.db.query(Task)
            .filter(Task.user_id == owner_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
            .all()
        )

    def get_for_owner(self, task_id: int, owner_id: int):
        return self.db.query(Task).filter(Task.id == task_id, Task.user_id == owner_id).first()

    def add(self, owner_id: int, fields: dict):
        task = Task(user_id=owner_id, **fields)
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task

    def update(self, task: Task, fields: dict):
        for name, value in fields.items():
            setattr(task, name, value)
        # stamp explicitly: onupdate does not fire when the new values equal the old ones
        task.updated_at = datetime.now(UTC)
        self.db.commit()
        self.db.refresh(task)
        return task

    def delete(self, task: Task) -> None:
        self.db.delete(task)
        self.db.commit()
