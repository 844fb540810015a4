"""Firestore-backed version repository (implements IVersionRepository)."""

from __future__ import annotations

from app.application.dtos.version import VersionResult
from app.infrastructure.firebase._rest_client import FirestoreRESTClient, stream_all
from app.infrastructure.firebase.collections import COLLECTION_NOTE_VERSIONS
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid


class FirestoreVersionRepository:
    """Append-only note versions. Versions are never updated or deleted here."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_NOTE_VERSIONS)

    def _to_result(self, doc_id: str, data: dict) -> VersionResult:
        return VersionResult(
            id=doc_id,
            note_id=data.get("note_id", ""),
            title=data.get("title", ""),
            body=data.get("body", ""),
            version_number=int(data.get("version_number", 0)),
            created_by=data.get("created_by", ""),
            created_at=data.get("created_at"),
        )

    async def list_for_note(self, note_id: str) -> list[VersionResult]:
        """Return every version of the note, highest number first.

        Needs the composite index (note_id ASC, version_number DESC).
        """
        q = self._coll.where("note_id", "==", note_id).order_by(
            "version_number", "DESCENDING"
        )
        return [self._to_result(s.id, s.to_dict()) async for s in stream_all(q)]

    async def max_version_number(self, note_id: str) -> int:
        """Return the highest version number of the note, 0 when it has none."""
        q = (
            self._coll.where("note_id", "==", note_id)
            .order_by("version_number", "DESCENDING")
            .limit(1)
        )
        async for snapshot in q.stream():
            return int(snapshot.to_dict().get("version_number", 0))
        return 0

    async def add(
        self,
        note_id: str,
        author_id: str,
        title: str,
        body: str,
        version_number: int,
    ) -> VersionResult:
        """Persist one version snapshot."""
        version_id = generate_cuid()
        record = {
            "note_id": note_id,
            "title": title,
            "body": body,
            "version_number": version_number,
            "created_by": author_id,
            "created_at": utc_now(),
        }
        await self._coll.document(version_id).set(record)
        return self._to_result(version_id, record)

    async def get_by_number(
        self, note_id: str, version_number: int
    ) -> VersionResult | None:
        """Return the version with that exact number."""
        q = (
            self._coll.where("note_id", "==", note_id)
            .where("version_number", "==", version_number)
            .limit(1)
        )
        async for snapshot in q.stream():
            return self._to_result(snapshot.id, snapshot.to_dict())
        return None
