"""Domain-level exceptions raised by gateway services."""

from __future__ import annotations


class GatewayServiceError(Exception):
    """A gateway operation failed; the underlying cause is chained."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ResourceConflictError(GatewayServiceError):
    """The target resource already exists or was modified concurrently."""

    def __init__(self, message: str = "Resource conflict") -> None:
        super().__init__(message)
