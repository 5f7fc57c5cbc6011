"""Exceptions raised by the event bus."""
from __future__ import annotations

from typing import Any, Dict, Optional


class EventBusError(Exception):
    """Structured exception with a stable code callers can branch on."""

    code = "event_bus_error"

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class InvalidEventTypeError(EventBusError, TypeError):
    """Raised when an event type cannot be used for the requested operation."""

    code = "invalid_event_type"


class UnknownKeyError(EventBusError, KeyError):
    """Raised when unregistering every listener of a key nobody registered."""

    code = "unknown_key"


__all__ = ["EventBusError", "InvalidEventTypeError", "UnknownKeyError"]
