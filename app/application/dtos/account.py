"""DTOs for account use cases (no dependency on the store)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AccountResult:
    """Account read-model (persisted account or synthesized placeholder).

    is_pending is True for placeholder accounts created when a note is
    shared with an email that has no registered account yet.
    """

    id: str
    email: str
    display_name: str
    avatar_ref: str | None = None
    is_pending: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class AccountCreate:
    """Input for creating (or idempotently refreshing) an account."""

    id: str
    email: str
    display_name: str | None = None
    avatar_ref: str | None = None
    is_pending: bool = False


@dataclass(frozen=True)
class AccountProfilePatch:
    """Partial profile update; None leaves the field unchanged."""

    display_name: str | None = None
    avatar_ref: str | None = None


@dataclass(frozen=True)
class VerifiedIdentity:
    """Identity proven by a bearer credential (subject id plus token claims)."""

    subject_id: str
    email: str
    email_verified: bool = False
    name: str | None = None
    picture: str | None = None
