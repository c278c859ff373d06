"""
Task Tracker Server — HTTP Routing and Validation
==================================================
FastAPI application that exposes a TaskStore over HTTP.

Launch:
    python -m tasktracker start             # Via CLI
    uvicorn tasktracker.server:app          # Directly

Endpoints:
    POST   /tasks          → Create a task            (200 JSON Task)
    GET    /tasks          → All tasks, keyed by id   (200 JSON object)
    GET    /tasks/{id}     → One task                 (200 / 404)
    PUT    /tasks/{id}     → Overwrite a task         (200 / 400 / 404)
    DELETE /tasks/{id}     → Remove a task            (204 / 404)
    any other verb         → 405

Routing is done by hand inside two catch-all routes. FastAPI's own body
validation is not used, and every error body is plain text.

Checks run in a fixed order: path id present, body decodable, required
fields present, task exists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasktracker import __version__
from tasktracker.errors import (
    TrackerError, PayloadDecodeError, PayloadValidationError,
    MethodNotAllowedError,
)
from tasktracker.store import TaskStore

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080

# Every verb is routed to the handlers so unsupported ones get our 405.
_ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# Priorities must fit a signed 64-bit integer.
Priority = Annotated[StrictInt, Field(ge=-2**63, le=2**63 - 1)]


# ─────────────────────────────────────────────────────────────
#  Configuration
# ─────────────────────────────────────────────────────────────

@dataclass
class ServerConfig:
    """Where and how loudly the server runs."""

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"


# ─────────────────────────────────────────────────────────────
#  Request Payload
# ─────────────────────────────────────────────────────────────

class TaskPayload(BaseModel):
    """Body of POST /tasks and PUT /tasks/{id}.

    Unknown fields are ignored and missing ones read as empty. A known
    field with the wrong JSON type makes the whole payload undecodable.
    The ``id`` field is accepted but never used; ids belong to the store.
    A literal ``null`` body decodes as an empty payload.
    """

    model_config = ConfigDict(extra="ignore")

    id: Optional[StrictStr] = None
    title: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    priority: Optional[Priority] = None

    @property
    def task_fields(self) -> tuple[str, str, int]:
        """(title, description, priority) with absent values zeroed."""
        return (self.title or "", self.description or "", self.priority or 0)


async def _decode_payload(request: Request) -> TaskPayload:
    body = await request.body()
    if body.strip() == b"null":
        return TaskPayload()
    try:
        return TaskPayload.model_validate_json(body)
    except ValidationError as e:
        logger.debug("Rejected payload on %s %s: %s",
                     request.method, request.url.path, e.errors())
        raise PayloadDecodeError() from e


def _task_response(task) -> JSONResponse:
    return JSONResponse(task.to_dict())


# ─────────────────────────────────────────────────────────────
#  App Factory
# ─────────────────────────────────────────────────────────────

def create_app(store: TaskStore | None = None) -> FastAPI:
    """Build the HTTP app around ``store`` (a fresh one if not given)."""
    app = FastAPI(title="Task Tracker", version=__version__)
    app.state.store = store if store is not None else TaskStore()

    @app.exception_handler(TrackerError)
    async def tracker_error(request: Request, exc: TrackerError):
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            # Verbs outside _ROUTED_METHODS never reach the route handlers.
            if request.url.path == "/tasks/":
                return await tracker_error(
                    request, PayloadValidationError("Task ID required"))
            return await tracker_error(request, MethodNotAllowedError())
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code,
                                 headers=getattr(exc, "headers", None))

    @app.api_route("/tasks", methods=_ROUTED_METHODS)
    async def tasks_collection(request: Request):
        """POST creates a task, GET lists them all."""
        tasks: TaskStore = request.app.state.store

        if request.method == "POST":
            payload = await _decode_payload(request)
            title, description, priority = payload.task_fields
            if not title or priority == 0:
                raise PayloadValidationError()
            return _task_response(tasks.create(title, description, priority))

        if request.method == "GET":
            return JSONResponse({task_id: task.to_dict()
                                 for task_id, task in tasks.list().items()})

        raise MethodNotAllowedError()

    @app.api_route("/tasks/{task_id:path}", methods=_ROUTED_METHODS)
    async def task_item(request: Request, task_id: str):
        """GET, PUT and DELETE on a single task."""
        tasks: TaskStore = request.app.state.store

        if not task_id:
            raise PayloadValidationError("Task ID required")

        if request.method == "GET":
            return _task_response(tasks.get(task_id))

        if request.method == "PUT":
            payload = await _decode_payload(request)
            return _task_response(tasks.update(task_id, *payload.task_fields))

        if request.method == "DELETE":
            tasks.delete(task_id)
            return Response(status_code=204)

        raise MethodNotAllowedError()

    return app


app = create_app()


# ─────────────────────────────────────────────────────────────
#  Startup
# ─────────────────────────────────────────────────────────────

def run_server(config: ServerConfig | None = None,
               store: TaskStore | None = None):
    """Serve the app with uvicorn until interrupted."""
    import uvicorn

    config = config or ServerConfig()
    logger.info("Starting server on %s:%d", config.host, config.port)

    # log_config=None keeps uvicorn on the handlers from setup_logging.
    uvicorn.run(
        create_app(store),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        log_config=None,
    )
