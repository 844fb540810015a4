"""Request context management using contextvars.

Async-safe storage for request-scoped data: the request id (set by
RequestIDMiddleware) and the authenticated account id (set by the auth
dependency). Read by the logging filter so every log line carries both.

Usage:
    set_request_id("3f2c...")
    set_current_account("acc_123")
    account_id = get_current_account_id()
"""

from contextvars import ContextVar

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_current_account_id: ContextVar[str | None] = ContextVar(
    "current_account_id", default=None
)


def set_request_id(request_id: str | None) -> None:
    """Set the request id for the current task."""
    _request_id.set(request_id)


def get_request_id() -> str | None:
    """Return the current request id, or None outside a request."""
    return _request_id.get()


def set_current_account(account_id: str | None) -> None:
    """Set the authenticated account id for the current task."""
    _current_account_id.set(account_id)


def get_current_account_id() -> str | None:
    """Return the authenticated account id, or None if not authenticated."""
    return _current_account_id.get()


def clear_context() -> None:
    """Clear request id and account."""
    _request_id.set(None)
    _current_account_id.set(None)
