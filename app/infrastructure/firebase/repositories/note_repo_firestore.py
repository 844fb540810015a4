"""Firestore-backed note repository (implements INoteRepository)."""

from __future__ import annotations

from typing import Any

from app.application.dtos.note import DEFAULT_TITLE, NoteCreate, NoteResult
from app.domain.exceptions import ValidationException
from app.infrastructure.firebase._rest_client import (
    MAX_BATCH_WRITES,
    FirestoreRESTClient,
    stream_all,
)
from app.infrastructure.firebase.collections import COLLECTION_NOTES
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid


class FirestoreNoteRepository:
    """Note repository using Firestore."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_NOTES)

    def _to_result(self, doc_id: str, data: dict) -> NoteResult:
        return NoteResult(
            id=doc_id,
            title=data.get("title") or DEFAULT_TITLE,
            body=data.get("body") or "",
            owner_id=data.get("owner_id", ""),
            archived=data.get("archived", False),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    async def create(self, owner_id: str, data: NoteCreate) -> NoteResult:
        """Persist a new note with a generated id."""
        now = utc_now()
        note_id = generate_cuid()
        record = {
            "title": data.title or DEFAULT_TITLE,
            "body": data.body or "",
            "owner_id": owner_id,
            "archived": False,
            "created_at": now,
            "updated_at": now,
        }
        await self._coll.document(note_id).set(record)
        return self._to_result(note_id, record)

    async def get_by_id(self, note_id: str) -> NoteResult | None:
        """Return note by ID (archived notes included)."""
        if not note_id:
            return None
        doc = await self._coll.document(note_id).get()
        if not doc:
            return None
        return self._to_result(doc.id, doc.to_dict())

    async def update_fields(self, note_id: str, fields: dict[str, Any]) -> None:
        """Write the given fields and refresh updated_at."""
        await self._coll.document(note_id).update({**fields, "updated_at": utc_now()})

    async def list_owned(self, owner_id: str) -> list[NoteResult]:
        """Return non-archived notes owned by the account."""
        q = (
            self._coll.where("owner_id", "==", owner_id)
            .where("archived", "==", False)
            .order_by("__name__")
        )
        return [self._to_result(s.id, s.to_dict()) async for s in stream_all(q)]

    async def list_by_ids(self, note_ids: list[str]) -> list[NoteResult]:
        """Return non-archived notes among the ids (caller bounds the id count)."""
        if not note_ids:
            return []
        q = (
            self._coll.where("__name__", "in", [self._coll.document(i).path for i in note_ids])
            .where("archived", "==", False)
            .limit(len(note_ids))
        )
        return [self._to_result(s.id, s.to_dict()) async for s in q.stream()]

    async def hard_delete(self, note_id: str, extra_writes: list[dict[str, Any]]) -> None:
        """Delete the note together with extra_writes in one atomic batch.

        Raises:
            ValidationException: The batch would exceed the commit write limit.
        """
        writes = [*extra_writes, {"path": f"{COLLECTION_NOTES}/{note_id}", "delete": True}]
        if len(writes) > MAX_BATCH_WRITES:
            raise ValidationException(
                f"Note {note_id} has too many collaborators to delete in one step; "
                f"revoke access until at most {MAX_BATCH_WRITES - 1} remain"
            )
        await self._client.batch_write(writes)
