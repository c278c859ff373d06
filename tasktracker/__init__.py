"""
Task Tracker — In-Memory Task Service over HTTP
================================================

Architecture:
    Store   — TaskStore: id allocation and CRUD over an in-memory mapping
    Server  — FastAPI app: routing, payload validation, status codes
    CLI     — ``tasktracker start``: logging setup and uvicorn launch
"""

__version__ = "0.1.0"

from tasktracker.errors import (
    TrackerError, PayloadDecodeError, PayloadValidationError,
    TaskNotFoundError, MethodNotAllowedError,
)
from tasktracker.store import Task, TaskStore

__all__ = [
    "TrackerError", "PayloadDecodeError", "PayloadValidationError",
    "TaskNotFoundError", "MethodNotAllowedError",
    "Task", "TaskStore",
]
