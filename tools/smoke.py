import sys
import uuid
from pathlib import Path

# ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient
from todo_api.main import app

client = TestClient(app)
email = f"smoke_{uuid.uuid4().hex[:8]}@example.com"
password = "correct_horse_battery_staple"

r = client.post("/auth/register", json={"email": email, "password": password})
print("register", r.status_code)
r = client.post("/auth/login", json={"email": email, "password": password})
print("login", r.status_code)
headers = {"Authorization": f"Bearer {r.json()['accessToken']}"}

r = client.post("/tasks", json={"title": "smoke test", "priority": "high"}, headers=headers)
print("create", r.status_code)
task_id = r.json()["task"]["id"]
r = client.get("/tasks", headers=headers)
print("list", r.status_code, "count =", r.json()["count"])
r = client.delete(f"/tasks/{task_id}", headers=headers)
print("delete", r.status_code)
