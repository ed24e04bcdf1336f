"""
Exceptions raised by carlog.

Analyzers never raise for missing data; these cover the record-construction
boundary, store lookups and bulk import.
"""

from typing import Optional


class CarlogError(Exception):
    """Base exception for all carlog errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class RecordValidationError(CarlogError, ValueError):
    """A record field failed validation when the record was built."""

    def __init__(self, message: str, field: Optional[str] = None, value=None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class RecordNotFoundError(CarlogError, KeyError):
    """No record with the given identifier exists in the store."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"No {kind} with id '{record_id}'", {"id": record_id})
        self.kind = kind
        self.record_id = record_id

    def __str__(self):
        return self.message


class ImportFormatError(CarlogError):
    """An import document does not have the expected shape."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, {"path": path} if path else None)
        self.path = path
