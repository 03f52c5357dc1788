"""Gateway controller debug API exceptions."""

from __future__ import annotations


class ControllerError(Exception):
    """Base exception for controller debug API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.endpoint = endpoint

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        if self.endpoint:
            parts.append(f"[{self.endpoint}]")
        return " ".join(parts)


class ControllerConnectionError(ControllerError):
    """Raised when the controller cannot be reached (transport-level failure)."""

    def __init__(
        self,
        message: str = "Failed to connect to gateway controller",
        endpoint: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message=message, endpoint=endpoint)
        self.original_error = original_error


class ControllerApiError(ControllerError):
    """Raised when a debug endpoint answers with an HTTP error status."""
