from fastapi import APIRouter, Depends

from todo_api.dependencies import get_task_service, read_task_fields, require_auth
from todo_api.schemas.task import (
    MessageResponse,
    TaskListResponse,
    TaskMessageResponse,
    TaskOut,
    TaskResponse,
)
from todo_api.services.tasks import TaskService

# require_auth is attached to the router so no task route can skip it
router = APIRouter(prefix="/tasks", tags=["tasks"], dependencies=[Depends(require_auth)])


@router.get("", response_model=TaskListResponse)
def list_tasks(service: TaskService = Depends(get_task_service)):
    tasks = [TaskOut.model_validate(t) for t in service.list()]
    return {"tasks": tasks, "count": len(tasks)}


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    return {"task": TaskOut.model_validate(service.get(task_id))}


# Bodies come through read_task_fields rather than a typed body parameter:
# FastAPI would otherwise parse and type-check them before the auth gate runs.
@router.post("", response_model=TaskMessageResponse, status_code=201)
def create_task(fields: dict = Depends(read_task_fields), service: TaskService = Depends(get_task_service)):
    task = service.create(fields)
    return {"message": "Task created successfully", "task": TaskOut.model_validate(task)}


@router.put("/{task_id}", response_model=TaskMessageResponse)
def update_task(task_id: str, fields: dict = Depends(read_task_fields), service: TaskService = Depends(get_task_service)):
    task = service.update(task_id, fields)
    return {"message": "Task updated successfully", "task": TaskOut.model_validate(task)}


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    service.delete(task_id)
    return {"message": "Task deleted successfully"}
