from todo_api.models.user import User
from todo_api.models.task import Task

__all__ = ["User", "Task"]
