from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from todo_api.database import get_db
from todo_api.errors import AuthenticationError, ValidationError
from todo_api.schemas.task import TaskFields
from todo_api.services.auth import AuthService, Identity
from todo_api.services.tasks import TaskService
from todo_api.stores.sql import SqlTaskStore, SqlUserStore

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header, else None."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX):].strip() or None


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(SqlUserStore(db))


def require_auth(
    request: Request,
    authorization: Optional[str] = Header(None),
    auth: AuthService = Depends(get_auth_service),
) -> Identity:
    """Gate for every task route: reject before any task code runs."""
    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthenticationError("Access denied. No token provided.")
    identity = auth.verify_token(token)
    request.state.user = identity
    return identity


def get_task_service(
    identity: Identity = Depends(require_auth),
    db: Session = Depends(get_db),
) -> TaskService:
    return TaskService(SqlTaskStore(db), identity)


async def read_task_fields(request: Request, identity: Identity = Depends(require_auth)) -> dict:
    """JSON body of a task write, read only after the caller is authenticated.

    Returns just the keys the client sent, so an update stays partial.
    """
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError("Invalid request body")
    if not isinstance(body, dict):
        raise ValidationError("Invalid request body")
    return TaskFields.model_validate(body).model_dump(exclude_unset=True)
