"""
Error taxonomy for record operations.

Every error carries a client-facing message plus the HTTP status the API
layer should answer with. Storage failures keep the original driver exception
chained as ``__cause__`` for diagnostics.
"""
from typing import Dict, Optional


class RecordError(Exception):
    """Base class for record operation failures."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, object]:
        return {"success": False, "error": self.message}


class ValidationError(RecordError):
    """Missing or malformed input, out-of-range number, bad id format."""
    status_code = 400

    def __init__(self, message: str, fields: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.fields = fields or {}

    def to_dict(self) -> Dict[str, object]:
        payload = super().to_dict()
        payload["fields"] = self.fields
        return payload


class ConflictError(RecordError):
    """A unique key already belongs to another record."""
    status_code = 409

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> Dict[str, object]:
        payload = super().to_dict()
        payload["field"] = self.field
        return payload


class NotFoundError(RecordError):
    """The id does not resolve to a record."""
    status_code = 404


class StorageError(RecordError):
    """The database is unreachable or rejected the operation."""
    status_code = 500

    def to_dict(self) -> Dict[str, object]:
        payload = super().to_dict()
        if self.__cause__ is not None:
            payload["cause"] = str(self.__cause__)
        return payload
