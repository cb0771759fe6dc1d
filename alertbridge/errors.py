# alertbridge/errors.py
"""
Error types shared by the services and the HTTP layer.

Each error knows how to render itself as the JSON body that goes back to
the caller, so routes only have to pick the status code.
"""

from typing import Any, Dict, Optional


class ForbiddenError(Exception):
    """Credentials missing or wrong. Always answered with 401."""

    code = "rest_forbidden"

    def __init__(self, message: str, status: int = 401):
        super().__init__(message)
        self.message = message
        self.status = status

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "status": self.status}


class InvalidPayloadError(Exception):
    """Notification body is not a JSON object (strict mode only)."""

    code = "rest_invalid_json"
    status = 400

    def __init__(self, message: str = "Notification body is not valid JSON"):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "status": self.status}


class RecordCreationError(Exception):
    """
    A content host refused to create a record.

    `payload` is the host's own structured error ({"code", "message", "data"})
    and is returned to the caller unmodified.
    """

    def __init__(self, payload: Optional[Dict[str, Any]]):
        payload = payload if isinstance(payload, dict) else {"code": "unknown_error", "message": str(payload), "data": None}
        super().__init__(payload.get("message") or payload.get("code") or "record creation failed")
        self.payload = payload
