"""Exception hierarchy shared by the store, the HTTP layer and the client."""

from __future__ import annotations

from typing import Optional


class LabsiteError(Exception):
    """Base class for all errors raised by this package."""


class RecordNotFoundError(LabsiteError):
    """Raised when an operation targets an id that does not exist."""

    def __init__(self, entity: str, record_id: int):
        super().__init__(f"{entity} {record_id} not found")
        self.entity = entity
        self.record_id = record_id


class InvalidDocumentError(LabsiteError):
    """Raised when a JSON document store cannot be parsed."""


class ApiError(LabsiteError):
    """Raised by the HTTP client when the API answers with an error status."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(f"HTTP {status_code}: {message or 'request failed'}")
        self.status_code = status_code
        self.message = message
