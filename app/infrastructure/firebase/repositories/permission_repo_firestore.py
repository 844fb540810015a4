"""Firestore-backed permission repository (implements IPermissionRepository)."""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.permission import PermissionResult
from app.domain.enums import AccessLevel
from app.infrastructure.firebase._rest_client import FirestoreRESTClient, stream_all
from app.infrastructure.firebase.collections import (
    COLLECTION_NOTE_PERMISSIONS,
    permission_doc_id,
)
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class FirestorePermissionRepository:
    """Permission rows keyed by "{note_id}_{account_id}".

    The deterministic document id gives at most one row per pair; upsert
    and migrate rely on it.
    """

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_NOTE_PERMISSIONS)

    def _to_result(self, doc_id: str, data: dict) -> PermissionResult:
        return PermissionResult(
            id=doc_id,
            note_id=data.get("note_id", ""),
            account_id=data.get("account_id", ""),
            level=AccessLevel.parse(data.get("level")) or AccessLevel.READ,
            granted_by=data.get("granted_by", ""),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            migrated_from=data.get("migrated_from"),
        )

    async def get(self, note_id: str, account_id: str) -> PermissionResult | None:
        """Return the row for the pair, or None."""
        doc = await self._coll.document(permission_doc_id(note_id, account_id)).get()
        if not doc:
            return None
        return self._to_result(doc.id, doc.to_dict())

    async def upsert(
        self,
        note_id: str,
        account_id: str,
        level: AccessLevel,
        granted_by: str,
    ) -> PermissionResult:
        """Create the row, or change only level and updated_at when it exists."""
        doc_id = permission_doc_id(note_id, account_id)
        ref = self._coll.document(doc_id)
        now = utc_now()
        existing = await ref.get()
        if existing is not None:
            await ref.update({"level": level.value, "updated_at": now})
            data = {**existing.to_dict(), "level": level.value, "updated_at": now}
            return self._to_result(doc_id, data)
        data = {
            "note_id": note_id,
            "account_id": account_id,
            "level": level.value,
            "granted_by": granted_by,
            "created_at": now,
            "updated_at": now,
        }
        await ref.set(data)
        return self._to_result(doc_id, data)

    async def delete(self, note_id: str, account_id: str) -> None:
        """Delete the row. Idempotent."""
        await self._coll.document(permission_doc_id(note_id, account_id)).delete()

    async def list_by_note(self, note_id: str) -> list[PermissionResult]:
        """Return all rows for a note."""
        q = self._coll.where("note_id", "==", note_id).order_by("__name__")
        return [self._to_result(s.id, s.to_dict()) async for s in stream_all(q)]

    async def list_by_account(self, account_id: str) -> list[PermissionResult]:
        """Return all rows granting the account access."""
        q = self._coll.where("account_id", "==", account_id).order_by("__name__")
        return [self._to_result(s.id, s.to_dict()) async for s in stream_all(q)]

    async def migrate(
        self, note_id: str, from_account_id: str, to_account_id: str
    ) -> PermissionResult | None:
        """Move a row from one account to another in a single atomic batch.

        The new row keeps level, granted_by and created_at, and records the
        source id in migrated_from. Returns None when the source row is absent.
        """
        source = await self.get(note_id, from_account_id)
        if source is None:
            return None
        now = utc_now()
        target_id = permission_doc_id(note_id, to_account_id)
        data = {
            "note_id": note_id,
            "account_id": to_account_id,
            "level": source.level.value,
            "granted_by": source.granted_by,
            "created_at": source.created_at or now,
            "updated_at": now,
            "migrated_from": from_account_id,
        }
        await self._client.batch_write([
            {"path": f"{COLLECTION_NOTE_PERMISSIONS}/{target_id}", "data": data},
            {"path": f"{COLLECTION_NOTE_PERMISSIONS}/{source.id}", "delete": True},
        ])
        logger.info(
            "Migrated %s access on note %s from %s to %s",
            source.level.value,
            note_id,
            from_account_id,
            to_account_id,
        )
        return self._to_result(target_id, data)

    async def delete_writes_for_note(self, note_id: str) -> list[dict[str, Any]]:
        """Return batch delete writes for every row of the note."""
        rows = await self.list_by_note(note_id)
        return [
            {"path": f"{COLLECTION_NOTE_PERMISSIONS}/{row.id}", "delete": True}
            for row in rows
        ]
