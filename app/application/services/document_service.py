"""Note (document) use cases: create, read with effective level, update, archive, delete, list."""

from __future__ import annotations

import logging

from app.application.dtos.note import (
    DEFAULT_TITLE,
    NEW_NOTE_ID,
    UNSET,
    NoteAccess,
    NoteCreate,
    NoteListing,
    NotePatch,
    NoteResult,
    SharedNote,
)
from app.application.interfaces.repositories import (
    IAccountRepository,
    INoteRepository,
    IPermissionRepository,
)
from app.application.services.access_service import NoteAccessResolver
from app.application.services.version_service import VersionService
from app.domain.enums import AccessLevel
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)

UNKNOWN_OWNER = "Unknown"


def _chunks(items: list[str], size: int) -> list[list[str]]:
    return [items[i:i + size] for i in range(0, len(items), size)]


class DocumentService:
    """Access-checked note operations."""

    def __init__(
        self,
        note_repo: INoteRepository,
        permission_repo: IPermissionRepository,
        account_repo: IAccountRepository,
        access: NoteAccessResolver,
        versions: VersionService,
        shared_chunk_size: int = 10,
    ) -> None:
        self._note_repo = note_repo
        self._permission_repo = permission_repo
        self._account_repo = account_repo
        self._access = access
        self._versions = versions
        self._chunk_size = shared_chunk_size

    async def create(self, owner_id: str, data: NoteCreate) -> NoteResult:
        """Create a note owned by owner_id."""
        if not owner_id:
            raise ValidationException("Owner id must not be empty", field="owner_id")
        note = await self._note_repo.create(owner_id, data)
        logger.info("Note %s created by %s", note.id, owner_id)
        return note

    async def get_effective(self, note_id: str, account_id: str) -> NoteAccess | None:
        """Return the note with the caller's level, or None without access."""
        return await self._access.get_effective(note_id, account_id)

    async def get(self, note_id: str, account_id: str) -> NoteAccess:
        """Return the note with the caller's level; not found without access."""
        access = await self._access.get_effective(note_id, account_id)
        if access is None:
            raise ResourceNotFoundException("note", note_id)
        return access

    async def update(self, note_id: str, account_id: str, patch: NotePatch) -> NoteResult:
        """Apply a partial update and record a version.

        The id "new" creates a note from the patch instead.

        Raises:
            ResourceNotFoundException: Note does not exist.
            AuthorizationException: Caller has read access or none.
        """
        if note_id == NEW_NOTE_ID:
            return await self.create(
                account_id,
                NoteCreate(
                    title=patch.title or None,
                    body=patch.body or None,
                ),
            )
        note = await self._note_repo.get_by_id(note_id)
        if note is None:
            raise ResourceNotFoundException("note", note_id)
        access = await self._access.get_effective(note_id, account_id)
        if access is None or not access.level.allows(AccessLevel.WRITE):
            raise AuthorizationException(resource="note", action="update")

        fields: dict = {}
        if patch.title is not UNSET:
            fields["title"] = patch.title or DEFAULT_TITLE
        if patch.body is not UNSET:
            fields["body"] = patch.body or ""
        await self._note_repo.update_fields(note_id, fields)

        updated = await self._note_repo.get_by_id(note_id)
        if updated is None:
            raise ResourceNotFoundException("note", note_id)
        await self._versions.append(note_id, account_id, updated.title, updated.body)
        logger.info("Note %s updated by %s (fields=%s)", note_id, account_id, sorted(fields))
        return updated

    async def _require_owner(self, note_id: str, account_id: str, action: str) -> NoteAccess:
        access = await self._access.get_effective(note_id, account_id)
        if access is None:
            raise ResourceNotFoundException("note", note_id)
        if access.note.owner_id != account_id:
            raise AuthorizationException(resource="note", action=action)
        return access

    async def archive(self, note_id: str, account_id: str) -> None:
        """Soft-delete: hide the note from listings (owner only)."""
        await self._require_owner(note_id, account_id, "archive")
        await self._note_repo.update_fields(note_id, {"archived": True})
        logger.info("Note %s archived by %s", note_id, account_id)

    async def hard_delete(self, note_id: str, account_id: str) -> None:
        """Delete the note and its permission rows atomically (owner only).

        Version rows are kept.
        """
        await self._require_owner(note_id, account_id, "delete")
        permission_deletes = await self._permission_repo.delete_writes_for_note(note_id)
        await self._note_repo.hard_delete(note_id, permission_deletes)
        logger.info(
            "Note %s permanently deleted by %s (%d permission rows)",
            note_id,
            account_id,
            len(permission_deletes),
        )

    async def list_for_account(self, account_id: str) -> NoteListing:
        """Return non-archived notes the account owns and those shared with it."""
        owned = await self._note_repo.list_owned(account_id)
        rows = await self._permission_repo.list_by_account(account_id)
        levels = {row.note_id: row.level for row in rows}
        # Owner access never comes from a row; drop stale rows on own notes.
        owned_ids = {n.id for n in owned}
        shared_ids = [note_id for note_id in levels if note_id not in owned_ids]

        shared_notes: list[NoteResult] = []
        for chunk in _chunks(shared_ids, self._chunk_size):
            shared_notes.extend(await self._note_repo.list_by_ids(chunk))

        owner_names: dict[str, str] = {}
        shared: list[SharedNote] = []
        for note in shared_notes:
            if note.owner_id == account_id:
                continue
            if note.owner_id not in owner_names:
                owner = await self._account_repo.get_persisted(note.owner_id)
                owner_names[note.owner_id] = owner.display_name if owner else UNKNOWN_OWNER
            shared.append(
                SharedNote(note=note, level=levels[note.id], owner_name=owner_names[note.owner_id])
            )
        return NoteListing(owned=owned, shared=shared)

    async def count_shared_with(self, account_id: str) -> int:
        """Return how many notes are shared with the account (permission rows)."""
        rows = await self._permission_repo.list_by_account(account_id)
        return len({row.note_id for row in rows})
