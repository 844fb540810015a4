"""DTOs for note permission rows (no dependency on the store)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import AccessLevel


@dataclass(frozen=True)
class PermissionResult:
    """One (note, account) grant. Owners never have a row; ownership lives on the note."""

    id: str
    note_id: str
    account_id: str
    level: AccessLevel
    granted_by: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    migrated_from: str | None = None
