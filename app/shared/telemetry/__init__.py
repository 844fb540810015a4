"""Shared telemetry: logging setup and request-context log filter."""

from app.shared.telemetry.logging import (
    RequestContextFilter,
    get_logger,
    setup_logging,
)

__all__ = [
    "RequestContextFilter",
    "get_logger",
    "setup_logging",
]
