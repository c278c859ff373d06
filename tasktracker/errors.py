"""
Tracker Errors — Request-Terminal Failure Kinds
================================================
Every failure the service reports maps to one exception class here.
Each class carries the HTTP status it is reported with and a default
plain-text message; the server turns any of them into a response.
"""

from __future__ import annotations


class TrackerError(Exception):
    """Base class for every error the service reports to a client."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class PayloadDecodeError(TrackerError):
    """Request body is not a decodable task payload."""

    status_code = 400
    default_message = "Invalid payload"


class PayloadValidationError(TrackerError):
    """Payload decoded, but a required field (or the path id) is missing."""

    status_code = 400
    default_message = "Missing required fields"


class TaskNotFoundError(TrackerError):
    """No task is stored under the requested id."""

    status_code = 404
    default_message = "Task not found"

    def __init__(self, task_id: str, message: str | None = None):
        self.task_id = task_id
        super().__init__(message)


class MethodNotAllowedError(TrackerError):
    """HTTP verb not supported on the requested path."""

    status_code = 405
    default_message = "Method not allowed"
