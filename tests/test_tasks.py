from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from todo_api.main import app
from todo_api.models.task import Task
from todo_api.services.tasks import TaskService
from todo_api.stores.sql import SqlTaskStore
from helpers import auth_headers


@pytest.fixture
def headers(client):
    return auth_headers(client, "saif@gmail.com")


@pytest.fixture
def other_headers(client):
    return auth_headers(client, "mohamed@gmail.com", "password456")


def _create(client, headers, **fields):
    r = client.post("/tasks", json=fields, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["task"]


def test_requires_authentication(client, monkeypatch):
    calls = []
    monkeypatch.setattr(TaskService, "list", lambda self: calls.append(1) or [])
    r = client.get("/tasks")
    assert r.status_code == 401
    assert r.json() == {"error": "Access denied. No token provided."}
    assert calls == []


def test_every_task_route_is_guarded(client):
    for method, path in (("get", "/tasks"), ("get", "/tasks/1"), ("post", "/tasks"), ("put", "/tasks/1"), ("delete", "/tasks/1")):
        r = client.request(method.upper(), path, json={"title": "x"})
        assert r.status_code == 401, (method, path)


def test_malformed_body_without_token_is_unauthenticated(client):
    for method, path in (("POST", "/tasks"), ("PUT", "/tasks/1")):
        r = client.request(method, path, content=b"{bad", headers={"Content-Type": "application/json"})
        assert r.status_code == 401, method
        assert r.json() == {"error": "Access denied. No token provided."}

    r = client.post("/tasks", content=b"{bad", headers={"Content-Type": "application/json", "Authorization": "Bearer garbage"})
    assert r.status_code == 401
    assert r.json()["error"] == "Invalid token"


def test_rejects_malformed_header_and_bad_tokens(client):
    r = client.get("/tasks", headers={"Authorization": "Basic abc"})
    assert r.json()["error"] == "Access denied. No token provided."
    r = client.get("/tasks", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401
    assert r.json()["error"] == "Invalid token"


def test_list_empty(client, headers):
    r = client.get("/tasks", headers=headers)
    assert r.status_code == 200
    assert r.json() == {"tasks": [], "count": 0}


def test_list_newest_first(client, headers):
    for title in ("one", "two", "three"):
        _create(client, headers, title=title)
    tasks = client.get("/tasks", headers=headers).json()["tasks"]
    assert len(tasks) == 3
    created = [datetime.fromisoformat(t["created_at"]) for t in tasks]
    assert created == sorted(created, reverse=True)


def test_create_minimal_uses_defaults(client, headers):
    task = _create(client, headers, title="Minimal Task")
    assert task["title"] == "Minimal Task"
    assert task["description"] is None
    assert task["completed"] is False
    assert task["priority"] == "medium"
    assert task["due_date"] is None
    assert task["created_at"] and task["updated_at"]
    assert "user_id" not in task


def test_create_full(client, headers):
    r = client.post(
        "/tasks",
        json={"title": "  New Task ", "description": "Desc", "completed": True, "due_date": "2024-12-31", "priority": "high"},
        headers=headers,
    )
    assert r.status_code == 201
    assert r.json()["message"] == "Task created successfully"
    task = r.json()["task"]
    assert task["title"] == "New Task"
    assert task["completed"] is True
    assert task["due_date"] == "2024-12-31"
    assert task["priority"] == "high"


@pytest.mark.parametrize(
    "body, error",
    [
        ({"description": "No title"}, "Title is required"),
        ({"title": "   "}, "Title is required"),
        ({"title": "x" * 256}, "Title must be less than 255 characters"),
        ({"title": "ok", "description": "d" * 1001}, "Description must be less than 1000 characters"),
        ({"title": "ok", "priority": "invalid"}, "Priority must be low, medium, or high"),
        ({"title": "ok", "due_date": "31/12/2024"}, "Due date must be a valid date (YYYY-MM-DD)"),
        ({"title": "ok", "completed": "yes"}, "Completed must be true or false"),
    ],
)
def test_create_validation(client, headers, body, error):
    r = client.post("/tasks", json=body, headers=headers)
    assert r.status_code == 400
    assert r.json()["error"] == error


def test_create_boundary_lengths_accepted(client, headers):
    task = _create(client, headers, title="x" * 255, description="d" * 1000)
    assert len(task["title"]) == 255


def test_create_rejects_non_json_body(client, headers):
    r = client.post("/tasks", content=b"not json", headers={**headers, "Content-Type": "application/json"})
    assert r.status_code == 400


def test_get_roundtrip(client, headers):
    created = _create(client, headers, title="T", priority="high", due_date="2024-12-31")
    r = client.get(f"/tasks/{created['id']}", headers=headers)
    assert r.status_code == 200
    task = r.json()["task"]
    assert (task["title"], task["priority"], task["due_date"]) == ("T", "high", "2024-12-31")


def test_get_invalid_id(client, headers):
    r = client.get("/tasks/abc", headers=headers)
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid task ID"


@pytest.mark.parametrize("task_id", ["99999999999999999999", str(2 ** 63), "0", "-1"])
def test_out_of_range_ids_are_invalid(client, headers, task_id):
    for method, body in (("GET", None), ("PUT", {"title": "x"}), ("DELETE", None)):
        r = client.request(method, f"/tasks/{task_id}", json=body, headers=headers)
        assert r.status_code == 400, method
        assert r.json()["error"] == "Invalid task ID"


def test_get_missing(client, headers):
    r = client.get("/tasks/99999", headers=headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Task not found"


def test_update_several_fields(client, headers):
    task = _create(client, headers, title="Original Task", description="Original Description")
    r = client.put(
        f"/tasks/{task['id']}",
        json={"title": "Updated Task", "description": "Updated Description", "completed": True},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["message"] == "Task updated successfully"
    updated = r.json()["task"]
    assert updated["title"] == "Updated Task"
    assert updated["completed"] is True


def test_update_only_completed(client, headers):
    task = _create(client, headers, title="Keep", description="Same", priority="low", due_date="2025-01-02")
    r = client.put(f"/tasks/{task['id']}", json={"completed": True}, headers=headers)
    assert r.status_code == 200
    updated = r.json()["task"]
    for field in ("title", "description", "priority", "due_date", "created_at"):
        assert updated[field] == task[field]
    assert updated["completed"] is True
    assert datetime.fromisoformat(updated["updated_at"]) >= datetime.fromisoformat(task["updated_at"])


def test_update_can_clear_optional_fields(client, headers):
    task = _create(client, headers, title="Dated", description="text", due_date="2025-01-02")
    r = client.put(f"/tasks/{task['id']}", json={"description": None, "due_date": None}, headers=headers)
    assert r.status_code == 200
    assert r.json()["task"]["description"] is None
    assert r.json()["task"]["due_date"] is None


def test_update_without_fields(client, headers):
    task = _create(client, headers, title="Keep")
    r = client.put(f"/tasks/{task['id']}", json={"unknown": 1}, headers=headers)
    assert r.status_code == 400
    assert r.json()["error"] == "No valid fields to update"


def test_update_invalid_fields(client, headers):
    task = _create(client, headers, title="Keep")
    assert client.put(f"/tasks/{task['id']}", json={"title": " "}, headers=headers).status_code == 400
    assert client.put(f"/tasks/{task['id']}", json={"priority": "urgent"}, headers=headers).status_code == 400
    assert client.put(f"/tasks/{task['id']}", json={"priority": None}, headers=headers).status_code == 400
    assert client.get(f"/tasks/{task['id']}", headers=headers).json()["task"]["title"] == "Keep"


def test_update_missing_checked_before_validation(client, headers, other_headers):
    theirs = _create(client, other_headers, title="Other Task")
    for body in ({"priority": "urgent"}, {"completed": "yes"}, {"title": 5}, {"description": ["x"]}):
        for path in ("/tasks/99999", f"/tasks/{theirs['id']}"):
            r = client.put(path, json=body, headers=headers)
            assert r.status_code == 404, (path, body)
            assert r.json()["error"] == "Task not found"
    assert client.get(f"/tasks/{theirs['id']}", headers=other_headers).json()["task"]["title"] == "Other Task"


def test_update_wrong_types_on_own_task(client, headers):
    task = _create(client, headers, title="Keep")
    r = client.put(f"/tasks/{task['id']}", json={"completed": "yes"}, headers=headers)
    assert r.status_code == 400
    assert r.json()["error"] == "Completed must be true or false"
    r = client.put(f"/tasks/{task['id']}", json={"title": 5}, headers=headers)
    assert r.status_code == 400
    assert r.json()["error"] == "Title is required"
    r = client.put(f"/tasks/{task['id']}", json=["completed"], headers=headers)
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid request body"


def test_delete_twice(client, headers, db):
    task = _create(client, headers, title="Task to Delete")
    r = client.delete(f"/tasks/{task['id']}", headers=headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Task deleted successfully"}
    assert db.get(Task, task["id"]) is None

    r = client.delete(f"/tasks/{task['id']}", headers=headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Task not found"


def test_other_users_tasks_are_invisible(client, headers, other_headers):
    theirs = _create(client, other_headers, title="Other Task")

    assert client.get("/tasks", headers=headers).json()["count"] == 0
    for method, body in (("GET", None), ("PUT", {"title": "Hijacked"}), ("DELETE", None)):
        r = client.request(method, f"/tasks/{theirs['id']}", json=body, headers=headers)
        assert r.status_code == 404, method
        assert r.json()["error"] == "Task not found"

    # untouched for the owner
    r = client.get(f"/tasks/{theirs['id']}", headers=other_headers)
    assert r.json()["task"]["title"] == "Other Task"


def test_owner_cannot_be_set_from_body(client, headers, other_headers):
    task = client.post("/tasks", json={"title": "Mine", "user_id": 12345}, headers=headers).json()["task"]
    assert client.get(f"/tasks/{task['id']}", headers=headers).status_code == 200
    assert client.get("/tasks", headers=other_headers).json()["count"] == 0


def test_unexpected_error_is_a_generic_500(headers, monkeypatch):
    def boom(self, owner_id):
        raise RuntimeError("database exploded at /var/lib/secret")

    monkeypatch.setattr(SqlTaskStore, "list_for_owner", boom)
    client = TestClient(app, raise_server_exceptions=False)
    r = client.get("/tasks", headers=headers)
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}
