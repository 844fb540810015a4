"""Shared utilities: request context, telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import (
    clear_context,
    get_current_account_id,
    get_request_id,
    set_current_account,
    set_request_id,
)
from app.shared.utils import epoch_millis, generate_cuid, utc_now

__all__ = [
    "clear_context",
    "epoch_millis",
    "generate_cuid",
    "get_current_account_id",
    "get_request_id",
    "set_current_account",
    "set_request_id",
    "utc_now",
]
