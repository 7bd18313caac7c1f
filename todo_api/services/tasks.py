import logging

from todo_api.errors import NotFoundError
from todo_api.services.auth import Identity
from todo_api.stores.base import TaskRecord, TaskStore
from todo_api.validation import parse_task_id, validate_new_task, validate_task_changes

logger = logging.getLogger(__name__)


class TaskService:
    """CRUD over one user's tasks.

    Every lookup is filtered by the identity the service was built with, so a
    task owned by someone else behaves exactly like one that does not exist.
    """

    def __init__(self, tasks: TaskStore, identity: Identity):
        self.tasks = tasks
        self.identity = identity

    @property
    def owner_id(self) -> int:
        return self.identity.user_id

    def _get_owned(self, task_id) -> TaskRecord:
        task = self.tasks.get_for_owner(parse_task_id(task_id), self.owner_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    def list(self):
        return self.tasks.list_for_owner(self.owner_id)

    def get(self, task_id) -> TaskRecord:
        return self._get_owned(task_id)

    def create(self, fields: dict) -> TaskRecord:
        values = validate_new_task(fields)
        task = self.tasks.add(self.owner_id, values)
        logger.info("user id=%s created task id=%s", self.owner_id, task.id)
        return task

    def update(self, task_id, fields: dict) -> TaskRecord:
        # existence is checked before the payload, so a foreign id is always a 404
        task = self._get_owned(task_id)
        changes = validate_task_changes(fields)
        task = self.tasks.update(task, changes)
        logger.info("user id=%s updated task id=%s fields=%s", self.owner_id, task.id, sorted(changes))
        return task

    def delete(self, task_id) -> None:
        task = self._get_owned(task_id)
        self.tasks.delete(task)
        logger.info("user id=%s deleted task id=%s", self.owner_id, task_id)
