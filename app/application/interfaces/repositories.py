"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.account import (
        AccountCreate,
        AccountProfilePatch,
        AccountResult,
    )
    from app.application.dtos.note import NoteCreate, NoteResult
    from app.application.dtos.permission import PermissionResult
    from app.application.dtos.version import VersionResult
    from app.domain.enums import AccessLevel


# Account repository interface
class IAccountRepository(Protocol):
    """Protocol for account storage (persisted and placeholder accounts)."""

    async def create(self, data: AccountCreate) -> AccountResult:
        """Create the account, or refresh display name/avatar if the id exists."""

    async def get_by_id(self, account_id: str) -> AccountResult | None:
        """Return the account; synthesize a placeholder for pending ids with no record."""

    async def get_persisted(self, account_id: str) -> AccountResult | None:
        """Return the stored account only (no placeholder synthesis)."""

    async def get_by_email(self, email: str) -> AccountResult | None:
        """Return the account with this email (case-insensitive)."""

    async def search(
        self, query: str, exclude_id: str | None, limit: int
    ) -> list[AccountResult]:
        """Prefix search over display name or email, deduplicated."""

    async def update_profile(
        self, account_id: str, patch: AccountProfilePatch
    ) -> AccountResult:
        """Apply a partial profile update; raise ResourceNotFoundException if absent."""


# Permission repository interface
class IPermissionRepository(Protocol):
    """Protocol for (note, account) permission rows."""

    async def get(self, note_id: str, account_id: str) -> PermissionResult | None:
        """Return the row for the pair, or None."""

    async def upsert(
        self,
        note_id: str,
        account_id: str,
        level: AccessLevel,
        granted_by: str,
    ) -> PermissionResult:
        """Create the row, or change only level and updated_at if it exists."""

    async def delete(self, note_id: str, account_id: str) -> None:
        """Delete the row; no-op when absent."""

    async def list_by_note(self, note_id: str) -> list[PermissionResult]:
        """Return all rows for a note."""

    async def list_by_account(self, account_id: str) -> list[PermissionResult]:
        """Return all rows granting the account access."""

    async def migrate(
        self, note_id: str, from_account_id: str, to_account_id: str
    ) -> PermissionResult | None:
        """Atomically move a row to another account; None when the source is absent."""

    async def delete_writes_for_note(self, note_id: str) -> list[dict[str, Any]]:
        """Return batch delete writes for every row of the note."""


# Note repository interface
class INoteRepository(Protocol):
    """Protocol for note storage."""

    async def create(self, owner_id: str, data: NoteCreate) -> NoteResult:
        """Persist a new note owned by owner_id."""

    async def get_by_id(self, note_id: str) -> NoteResult | None:
        """Return note by ID (archived notes included)."""

    async def update_fields(self, note_id: str, fields: dict[str, Any]) -> None:
        """Write the given fields plus updated_at."""

    async def list_owned(self, owner_id: str) -> list[NoteResult]:
        """Return non-archived notes owned by the account."""

    async def list_by_ids(self, note_ids: list[str]) -> list[NoteResult]:
        """Return non-archived notes among the ids (single bounded query)."""

    async def hard_delete(self, note_id: str, extra_writes: list[dict[str, Any]]) -> None:
        """Delete the note and apply extra_writes in one atomic batch."""


# Version repository interface
class IVersionRepository(Protocol):
    """Protocol for append-only note versions."""

    async def list_for_note(self, note_id: str) -> list[VersionResult]:
        """Return every version of the note, highest number first."""

    async def max_version_number(self, note_id: str) -> int:
        """Return the highest version number of the note, 0 when it has none."""

    async def add(
        self,
        note_id: str,
        author_id: str,
        title: str,
        body: str,
        version_number: int,
    ) -> VersionResult:
        """Persist one version."""

    async def get_by_number(
        self, note_id: str, version_number: int
    ) -> VersionResult | None:
        """Return the version with that exact number."""
