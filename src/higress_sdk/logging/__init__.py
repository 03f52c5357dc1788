"""Logging configuration for higress_sdk."""

from higress_sdk.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
