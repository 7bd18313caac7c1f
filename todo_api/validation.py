"""Input validation shared by the auth and task services."""

import re
from datetime import date

from todo_api.errors import ValidationError
from todo_api.models.task import PRIORITIES

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TASK_ID_PATTERN = re.compile(r"^\d+$")
# ids are signed 64-bit integers in the store
MAX_TASK_ID = 2 ** 63 - 1

MIN_PASSWORD_LENGTH = 8
# bcrypt only looks at the first 72 bytes of the secret
MAX_PASSWORD_BYTES = 72
MAX_TITLE_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 1000

TASK_FIELDS = ("title", "description", "completed", "due_date", "priority")


def require_credentials(email, password):
    if not email or not password:
        raise ValidationError("Email and password are required")


def validate_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")


def parse_task_id(raw) -> int:
    """Return the integer id for a path value, or raise ValidationError.

    Only ids the store can hold (1 .. 2**63-1) are accepted.
    """
    if isinstance(raw, bool):
        raise ValidationError("Invalid task ID")
    if isinstance(raw, str):
        raw = raw.strip()
        if not TASK_ID_PATTERN.match(raw):
            raise ValidationError("Invalid task ID")
        raw = int(raw)
    if not isinstance(raw, int) or not 1 <= raw <= MAX_TASK_ID:
        raise ValidationError("Invalid task ID")
    return raw


def _clean_title(value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Title is required")
    value = value.strip()
    if len(value) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Title must be less than {MAX_TITLE_LENGTH} characters")
    return value


def _clean_description(value):
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Description must be text")
    if len(value) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(f"Description must be less than {MAX_DESCRIPTION_LENGTH} characters")
    return value.strip() or None


def _clean_completed(value) -> bool:
    if not isinstance(value, bool):
        raise ValidationError("Completed must be true or false")
    return value


def _clean_due_date(value):
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        if not DATE_PATTERN.match(value):
            raise ValueError(value)
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError("Due date must be a valid date (YYYY-MM-DD)")


def _clean_priority(value) -> str:
    if value not in PRIORITIES:
        raise ValidationError("Priority must be low, medium, or high")
    return value


_CLEANERS = {
    "title": _clean_title,
    "description": _clean_description,
    "completed": _clean_completed,
    "due_date": _clean_due_date,
    "priority": _clean_priority,
}


def validate_new_task(fields: dict) -> dict:
    """Validate create input, fill defaults and return the values to store."""
    values = {
        "title": fields.get("title"),
        "description": fields.get("description"),
        "completed": fields.get("completed"),
        "due_date": fields.get("due_date"),
        "priority": fields.get("priority"),
    }
    if values["completed"] is None:
        values["completed"] = False
    if values["priority"] is None:
        values["priority"] = "medium"
    return {name: _CLEANERS[name](values[name]) for name in TASK_FIELDS}


def validate_task_changes(fields: dict) -> dict:
    """Validate a partial update; only the keys present in ``fields`` are checked."""
    changes = {name: fields[name] for name in TASK_FIELDS if name in fields}
    if not changes:
        raise ValidationError("No valid fields to update")
    return {name: _CLEANERS[name](value) for name, value in changes.items()}
