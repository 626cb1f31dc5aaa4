import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import StateUnavailableError, StoreError, TodoError, TodoNotFoundError
from .settings import get_settings
from .state import get_app_state
from .routers import app as app_router
from .routers import todos as todos_router

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "app", "description": "Host lifecycle: front-ready event and database readiness signal."},
    {"name": "todos", "description": "Create, list, update and delete Todo items."},
]

_settings = get_settings()

logging.getLogger("todo_store").setLevel(_settings.log_level)


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    await get_app_state().close()


app = FastAPI(
    title="Todo Store",
    description="Persistence and mutation layer for a single-entity todo list backed by SQLite.",
    version="0.1.0",
    openapi_tags=openapi_tags,
    lifespan=lifespan,
)

# Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
allow_all = (_settings.cors_allow_origins == ["*"]) or (len(_settings.cors_allow_origins) == 0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else _settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ERROR_STATUS = {
    StateUnavailableError: 503,
    TodoNotFoundError: 404,
    StoreError: 500,
}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    Response format:
        {
            "error": "ValidationError",
            "detail": [... pydantic/fastapi error details ...],
            "message": "Request validation failed"
        }
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": exc.errors(),
        },
    )


@app.exception_handler(TodoError)
async def todo_exception_handler(request: Request, exc: TodoError) -> JSONResponse:
    """
    Return repository failures as {"error", "message", "previous"} where previous
    is the record as stored before a failed update/delete, or null.
    """
    return JSONResponse(
        status_code=_ERROR_STATUS.get(type(exc), 500),
        content=exc.to_payload(),
    )


# PUBLIC_INTERFACE
@app.get("/", summary="Health Check", tags=["health"])
def health_check():
    """
    Health check endpoint.

    Returns:
        A JSON object with service health and database readiness:
        'ready', 'pending' (not reported yet) or 'error'.
    """
    last = get_app_state().dbstatus.last
    if last is None:
        database = "pending"
    else:
        database = "ready" if last.is_ready else "error"
    return {"message": "Healthy", "database": database}


# Include routers
app.include_router(app_router.router)
app.include_router(todos_router.router)
