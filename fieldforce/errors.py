"""
Error taxonomy for the FieldForce API.
Every error carries an HTTP status, a machine-readable code and a human-readable message.
"""
from typing import Any, Dict, List, Optional


class FieldForceError(Exception):
    """Base class for all application errors"""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message, "error_code": self.error_code}
        if self.field:
            body["field"] = self.field
        return body


class ValidationError(FieldForceError):
    """Missing or unparseable input (dates, ids, required fields)"""

    status_code = 400
    error_code = "VALIDATION_ERROR"


class PreconditionError(FieldForceError):
    """Operation refused because a caller-asserted precondition is missing"""

    status_code = 400
    error_code = "PRECONDITION_FAILED"


class AuthenticationError(FieldForceError):
    status_code = 401
    error_code = "UNAUTHORIZED"


class NotFoundError(FieldForceError):
    status_code = 404
    error_code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} with identifier '{identifier}' not found")
        self.resource = resource


class ConflictError(FieldForceError):
    status_code = 409
    error_code = "RESOURCE_CONFLICT"


class StorageError(FieldForceError):
    """
    Underlying read/write failure.

    For multi-collection operations ``completed`` maps the collections that were
    written to their row counts and ``failed`` lists the ones that raised.
    """

    status_code = 500
    error_code = "STORAGE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        completed: Optional[Dict[str, int]] = None,
        failed: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.completed = completed or {}
        self.failed = failed or []

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.completed or self.failed:
            body["completed"] = self.completed
            body["failed"] = self.failed
        return body
