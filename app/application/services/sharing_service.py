"""Sharing use cases: share by email, revoke, pending-share migration, collaborators.

A share to an email without an account goes to a placeholder account
(see identity_resolver). The grant moves to the real account the first
time that account opens the note.
"""

from __future__ import annotations

import logging

from app.application.dtos.account import AccountCreate, AccountResult
from app.application.dtos.note import NEW_NOTE_ID
from app.application.dtos.permission import PermissionResult
from app.application.dtos.sharing import (
    Collaborator,
    CollaboratorListing,
    ShareResult,
)
from app.application.interfaces.repositories import (
    IAccountRepository,
    IPermissionRepository,
)
from app.application.interfaces.services import INotifier
from app.application.services.access_service import (
    NoteAccessResolver,
    PendingShareResolver,
)
from app.application.services.identity_resolver import (
    derive_placeholder_id,
    normalize_email,
)
from app.domain.enums import AccessLevel
from app.domain.exceptions import (
    OwnerProtectedException,
    ResourceNotFoundException,
    SelfShareException,
    ValidationException,
)

logger = logging.getLogger(__name__)

UNKNOWN_OWNER_NAME = "Unknown User"


class SharingService:
    """Grants and revokes note access and lists who can see a note."""

    def __init__(
        self,
        account_repo: IAccountRepository,
        permission_repo: IPermissionRepository,
        access: NoteAccessResolver,
        pending: PendingShareResolver,
        notifier: INotifier | None = None,
    ) -> None:
        self._account_repo = account_repo
        self._permission_repo = permission_repo
        self._access = access
        self._pending = pending
        self._notifier = notifier

    async def share(
        self,
        note_id: str,
        caller_id: str,
        recipient_email: str,
        level: AccessLevel | str,
    ) -> ShareResult:
        """Grant `level` on the note to the account behind recipient_email.

        Raises:
            ValidationException: Blank email or unknown level.
            InvalidEmailException: Email cannot become a placeholder id.
            ResourceNotFoundException: Note missing or caller has no access.
            AuthorizationException: Caller is below admin.
            SelfShareException: Recipient is the caller.
            OwnerProtectedException: Recipient is the note owner.
        """
        if not isinstance(recipient_email, str) or not recipient_email.strip():
            raise ValidationException("Recipient email is required", field="email")
        parsed = AccessLevel.parse(level)
        if parsed is None:
            raise ValidationException(
                f"Level must be one of {', '.join(AccessLevel.values())}", field="level"
            )
        access = await self._access.require(note_id, caller_id, AccessLevel.ADMIN, "share")

        recipient = await self._resolve_recipient(recipient_email)
        if recipient.id == caller_id:
            raise SelfShareException(note_id)
        if recipient.id == access.note.owner_id:
            raise OwnerProtectedException(note_id, "The owner already has full access")

        await self._permission_repo.upsert(note_id, recipient.id, parsed, caller_id)
        logger.info(
            "Note %s shared with %s (%s, pending=%s) by %s",
            note_id,
            recipient.id,
            parsed.value,
            recipient.is_pending,
            caller_id,
        )
        await self._notify_share(recipient, caller_id, access.note.title, note_id, parsed)
        return ShareResult(note_id=note_id, recipient=recipient, level=parsed)

    async def _resolve_recipient(self, email: str) -> AccountResult:
        found = await self._account_repo.get_by_email(email)
        if found is not None:
            return found
        placeholder_id = derive_placeholder_id(email)
        existing = await self._account_repo.get_persisted(placeholder_id)
        if existing is not None:
            return existing
        normalized = normalize_email(email)
        return await self._account_repo.create(
            AccountCreate(
                id=placeholder_id,
                email=normalized,
                display_name=normalized.split("@")[0],
                is_pending=True,
            )
        )

    async def _notify_share(
        self,
        recipient: AccountResult,
        caller_id: str,
        title: str,
        note_id: str,
        level: AccessLevel,
    ) -> None:
        if self._notifier is None:
            return
        try:
            sender = await self._account_repo.get_persisted(caller_id)
            sender_name = (sender.display_name or sender.email) if sender else "Someone"
            await self._notifier.notify_share(recipient.email, sender_name, title, note_id, level)
        except Exception:
            logger.exception("Share notification to %s failed", recipient.email)

    async def revoke(self, note_id: str, caller_id: str, target_account_id: str) -> None:
        """Remove the target's permission row (admin only; owner cannot be revoked).

        Raises:
            ResourceNotFoundException: Note missing or caller has no access.
            AuthorizationException: Caller is below admin.
            OwnerProtectedException: Target is the note owner.
        """
        access = await self._access.require(note_id, caller_id, AccessLevel.ADMIN, "revoke")
        if target_account_id == access.note.owner_id:
            raise OwnerProtectedException(note_id, "Cannot remove the owner's access")
        await self._permission_repo.delete(note_id, target_account_id)
        logger.info("Access to note %s revoked for %s by %s", note_id, target_account_id, caller_id)

    async def resolve_pending_shares(
        self, note_id: str, real_account_id: str
    ) -> AccessLevel | None:
        """Move a grant left for the account's email onto the account; return its level."""
        return await self._pending.resolve(note_id, real_account_id)

    async def list_collaborators(self, note_id: str, caller_id: str) -> CollaboratorListing:
        """Return the owner and every other permission holder.

        A note id of "new" lists the caller alone as owner. Entries whose
        account cannot be resolved are logged and skipped.
        """
        if note_id == NEW_NOTE_ID:
            caller = await self._account_repo.get_persisted(caller_id)
            if caller is None:
                raise ResourceNotFoundException("account", caller_id)
            return CollaboratorListing(owner=self._owner_entry(caller_id, caller))

        access = await self._access.get_effective(note_id, caller_id)
        if access is None:
            raise ResourceNotFoundException("note", note_id)
        owner_id = access.note.owner_id
        owner = await self._account_repo.get_by_id(owner_id)

        collaborators: list[Collaborator] = []
        for row in await self._permission_repo.list_by_note(note_id):
            if row.account_id == owner_id:
                continue
            try:
                entry = await self._collaborator_entry(row)
            except Exception:
                logger.exception(
                    "Skipping collaborator %s on note %s", row.account_id, note_id
                )
                continue
            if entry is None:
                logger.warning(
                    "No account for collaborator %s on note %s", row.account_id, note_id
                )
                continue
            collaborators.append(entry)
        return CollaboratorListing(
            owner=self._owner_entry(owner_id, owner), collaborators=collaborators
        )

    @staticmethod
    def _owner_entry(owner_id: str, owner: AccountResult | None) -> Collaborator:
        if owner is None:
            return Collaborator(
                account_id=owner_id,
                email="",
                display_name=UNKNOWN_OWNER_NAME,
                avatar_ref=None,
                level=AccessLevel.ADMIN,
                is_owner=True,
            )
        return Collaborator(
            account_id=owner.id,
            email=owner.email,
            display_name=owner.display_name,
            avatar_ref=owner.avatar_ref,
            level=AccessLevel.ADMIN,
            is_pending=owner.is_pending,
            is_owner=True,
        )

    async def _collaborator_entry(self, row: PermissionResult) -> Collaborator | None:
        account = await self._account_repo.get_by_id(row.account_id)
        if account is None:
            return None
        return Collaborator(
            account_id=account.id,
            email=account.email,
            display_name=account.display_name,
            avatar_ref=account.avatar_ref,
            level=row.level,
            is_pending=account.is_pending,
        )
