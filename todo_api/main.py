import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import inspect, text

from todo_api import config, models  # noqa: F401
from todo_api.database import Base, engine
from todo_api.errors import AppError, InternalError
from todo_api.logging_setup import setup_logging
from todo_api.routers import auth, tasks

setup_logging(config.LOG_LEVEL)
logger = logging.getLogger(__name__)

if config.JWT_SECRET == "fallback-secret-key":
    logger.warning("JWT_SECRET is not set; using the insecure development key")

Base.metadata.create_all(bind=engine)

# Columns added after the first release; older databases get them on startup
_TASK_COLUMNS = {
    "description": "TEXT",
    "completed": "BOOLEAN NOT NULL DEFAULT 0",
    "due_date": "DATE",
    "priority": "VARCHAR NOT NULL DEFAULT 'medium'",
    "updated_at": "DATETIME",
}


# Ensure new columns exist without Alembic (simple additive migrations)
def _ensure_schema():
    try:
        insp = inspect(engine)
        cols = {c["name"] for c in insp.get_columns("tasks")}
        missing = [name for name in _TASK_COLUMNS if name not in cols]
        if not missing:
            return
        with engine.begin() as conn:
            for name in missing:
                conn.execute(text(f"ALTER TABLE tasks ADD COLUMN {name} {_TASK_COLUMNS[name]}"))
                logger.info("added column tasks.%s", name)
    except Exception:
        # best-effort; a failed migration must not block startup
        logger.exception("schema bootstrap failed")


_ensure_schema()

app = FastAPI(title="Todo API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(tasks.router)


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies are client errors like any other validation failure: 400, not 422
    message = "Invalid request body"
    errors = exc.errors()
    if errors:
        loc = errors[0].get("loc", ())
        field = loc[1] if len(loc) > 1 and loc[0] == "body" else None
        if isinstance(field, str):
            message = f"Invalid value for {field}"
    return JSONResponse(status_code=400, content={"error": message})


# Generic error handler to return JSON errors for unexpected exceptions
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=InternalError.status_code, content={"error": InternalError.message})
