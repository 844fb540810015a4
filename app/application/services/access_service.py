"""Effective access resolution for notes.

Resolution order for (note, account):
owner -> ADMIN; permission row -> its level; a pending share left for the
account's email -> migrated level; otherwise no access. "No access" is
reported as not found so callers cannot probe for note ids.
"""

from __future__ import annotations

import logging

from app.application.dtos.note import NoteAccess
from app.application.interfaces.repositories import (
    IAccountRepository,
    INoteRepository,
    IPermissionRepository,
)
from app.application.services.identity_resolver import derive_placeholder_id
from app.domain.enums import AccessLevel
from app.domain.exceptions import (
    AuthorizationException,
    InvalidEmailException,
    ResourceNotFoundException,
)

logger = logging.getLogger(__name__)


class PendingShareResolver:
    """Moves grants made to a placeholder id onto the registered account."""

    def __init__(
        self,
        account_repo: IAccountRepository,
        permission_repo: IPermissionRepository,
    ) -> None:
        self._account_repo = account_repo
        self._permission_repo = permission_repo

    async def resolve(self, note_id: str, account_id: str) -> AccessLevel | None:
        """Migrate a pending grant for the account's email; return its level.

        Returns None when the account is unknown, still a placeholder, or
        has no pending grant on the note. Store errors are logged and
        treated as "no pending grant".
        """
        try:
            account = await self._account_repo.get_persisted(account_id)
            if account is None or account.is_pending:
                return None
            try:
                placeholder_id = derive_placeholder_id(account.email)
            except InvalidEmailException:
                return None
            if placeholder_id == account_id:
                return None
            row = await self._permission_repo.migrate(note_id, placeholder_id, account_id)
        except Exception:
            logger.exception(
                "Pending share resolution failed for note %s account %s", note_id, account_id
            )
            return None
        return row.level if row else None


class NoteAccessResolver:
    """Computes an account's effective level on a note."""

    def __init__(
        self,
        note_repo: INoteRepository,
        permission_repo: IPermissionRepository,
        pending: PendingShareResolver,
    ) -> None:
        self._note_repo = note_repo
        self._permission_repo = permission_repo
        self._pending = pending

    async def get_effective(self, note_id: str, account_id: str) -> NoteAccess | None:
        """Return the note with the account's level, or None without access."""
        note = await self._note_repo.get_by_id(note_id)
        if note is None:
            return None
        if note.owner_id == account_id:
            return NoteAccess(note=note, level=AccessLevel.ADMIN)
        row = await self._permission_repo.get(note_id, account_id)
        if row is not None:
            return NoteAccess(note=note, level=row.level)
        level = await self._pending.resolve(note_id, account_id)
        if level is not None:
            return NoteAccess(note=note, level=level)
        return None

    async def require(
        self,
        note_id: str,
        account_id: str,
        required: AccessLevel,
        action: str,
    ) -> NoteAccess:
        """Return access when it reaches `required`.

        Raises:
            ResourceNotFoundException: Note missing or no access at all.
            AuthorizationException: Access below `required`.
        """
        access = await self.get_effective(note_id, account_id)
        if access is None:
            raise ResourceNotFoundException("note", note_id)
        if not access.level.allows(required):
            raise AuthorizationException(resource="note", action=action)
        return access
