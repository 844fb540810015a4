"""Version history: append-only snapshots written after each note update."""

from __future__ import annotations

import logging

from app.application.dtos.version import VersionResult, VersionView
from app.application.interfaces.repositories import (
    IAccountRepository,
    IVersionRepository,
)
from app.application.services.access_service import NoteAccessResolver
from app.domain.enums import AccessLevel
from app.domain.exceptions import ResourceNotFoundException
from app.shared.utils.datetime import epoch_millis

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR = "Unknown"


class VersionService:
    """Appends and lists note versions.

    Numbering is max(existing) + 1. Concurrent appends may race; when the
    counter cannot be computed or written, the current epoch milliseconds
    are used instead so a content update never fails on history.
    """

    def __init__(
        self,
        version_repo: IVersionRepository,
        account_repo: IAccountRepository,
        access: NoteAccessResolver,
    ) -> None:
        self._version_repo = version_repo
        self._account_repo = account_repo
        self._access = access

    async def append(
        self, note_id: str, author_id: str, title: str, body: str
    ) -> VersionResult | None:
        """Record a version; returns None only if the fallback write also failed."""
        try:
            next_number = await self._version_repo.max_version_number(note_id) + 1
            return await self._version_repo.add(note_id, author_id, title, body, next_number)
        except Exception:
            logger.exception(
                "Sequential version numbering failed for note %s; using timestamp", note_id
            )
        try:
            return await self._version_repo.add(
                note_id, author_id, title, body, epoch_millis()
            )
        except Exception:
            logger.exception("Version write failed for note %s; history entry skipped", note_id)
            return None

    async def list(self, note_id: str, account_id: str) -> list[VersionView]:
        """Return versions newest first with author names (read access required)."""
        await self._access.require(note_id, account_id, AccessLevel.READ, "read")
        versions = await self._version_repo.list_for_note(note_id)
        versions.sort(key=lambda v: v.version_number, reverse=True)
        names: dict[str, str] = {}
        views: list[VersionView] = []
        for version in versions:
            if version.created_by not in names:
                names[version.created_by] = await self._author_name(version.created_by)
            views.append(VersionView(version=version, author_name=names[version.created_by]))
        return views

    async def get_by_number(
        self, note_id: str, account_id: str, version_number: int
    ) -> VersionView:
        """Return one version by exact number (read access required)."""
        await self._access.require(note_id, account_id, AccessLevel.READ, "read")
        version = await self._version_repo.get_by_number(note_id, version_number)
        if version is None:
            raise ResourceNotFoundException("version", f"{note_id}#{version_number}")
        return VersionView(version=version, author_name=await self._author_name(version.created_by))

    async def _author_name(self, account_id: str) -> str:
        account = await self._account_repo.get_by_id(account_id)
        return account.display_name if account else UNKNOWN_AUTHOR
