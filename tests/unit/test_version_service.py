"""VersionService numbering, fallback and listing."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.note import NoteCreate, NotePatch
from app.application.dtos.version import VersionResult
from app.application.services.version_service import VersionService
from app.domain.enums import AccessLevel
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.firebase.collections import COLLECTION_NOTE_VERSIONS


def _version(number: int, created_by: str = "alice") -> VersionResult:
    return VersionResult(
        id=f"v{number}",
        note_id="n1",
        title="T",
        body="B",
        version_number=number,
        created_by=created_by,
        created_at=datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def version_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.add.side_effect = lambda note_id, author_id, title, body, number: _version(number, author_id)
    return repo


async def test_append_uses_max_plus_one(version_repo) -> None:
    version_repo.max_version_number.return_value = 7
    service = VersionService(version_repo, AsyncMock(), AsyncMock())

    result = await service.append("n1", "bob", "T", "B")

    assert result.version_number == 8
    version_repo.add.assert_awaited_once_with("n1", "bob", "T", "B", 8)


async def test_append_falls_back_to_epoch_millis(version_repo) -> None:
    version_repo.max_version_number.side_effect = RuntimeError("query failed")
    service = VersionService(version_repo, AsyncMock(), AsyncMock())

    result = await service.append("n1", "bob", "T", "B")

    assert result is not None
    assert result.version_number > 1_600_000_000_000


async def test_append_returns_none_when_every_write_fails() -> None:
    repo = AsyncMock()
    repo.max_version_number.return_value = 0
    repo.add.side_effect = RuntimeError("write failed")
    service = VersionService(repo, AsyncMock(), AsyncMock())

    assert await service.append("n1", "bob", "T", "B") is None
    assert repo.add.await_count == 2


async def test_update_succeeds_when_history_write_fails(services, fake_store, people) -> None:
    note = await services.documents.create("alice", NoteCreate(title="T"))
    fake_store.fail["set:note_versions"] = RuntimeError("versions down")

    updated = await services.documents.update(note.id, "alice", NotePatch(body="kept"))

    assert updated.body == "kept"


async def test_list_is_newest_first_with_author_names(services, repos, people) -> None:
    note = await services.documents.create("alice", NoteCreate())
    await repos.permissions.upsert(note.id, "bob", AccessLevel.WRITE, "alice")
    await services.documents.update(note.id, "alice", NotePatch(body="1"))
    await services.documents.update(note.id, "bob", NotePatch(body="2"))
    await repos.versions.add(note.id, "ghost", "T", "3", 3)

    views = await services.versions.list(note.id, "bob")

    assert [v.version.version_number for v in views] == [3, 2, 1]
    assert [v.author_name for v in views] == ["Unknown", "Bob", "Alice"]


async def test_list_requires_access(services, people) -> None:
    note = await services.documents.create("alice", NoteCreate())
    with pytest.raises(ResourceNotFoundException):
        await services.versions.list(note.id, "carol")


async def test_get_by_number(services, people) -> None:
    note = await services.documents.create("alice", NoteCreate())
    await services.documents.update(note.id, "alice", NotePatch(title="First"))

    view = await services.versions.get_by_number(note.id, "alice", 1)
    assert view.version.title == "First"
    assert view.author_name == "Alice"

    with pytest.raises(ResourceNotFoundException) as exc_info:
        await services.versions.get_by_number(note.id, "alice", 2)
    assert exc_info.value.details["resource_type"] == "version"


def _seed_versions(fake_store, note_id: str, count: int) -> None:
    for number in range(1, count + 1):
        fake_store.seed(
            COLLECTION_NOTE_VERSIONS,
            f"v{number:05d}",
            {
                "note_id": note_id,
                "title": "T",
                "body": str(number),
                "version_number": number,
                "created_by": "alice",
            },
        )


async def test_append_after_long_history_keeps_numbers_unique(services, fake_store, people) -> None:
    note = await services.documents.create("alice", NoteCreate(title="T"))
    _seed_versions(fake_store, note.id, 1001)

    await services.documents.update(note.id, "alice", NotePatch(body="x"))

    numbers = [
        v["version_number"]
        for v in fake_store.docs(COLLECTION_NOTE_VERSIONS).values()
        if v["note_id"] == note.id
    ]
    assert len(numbers) == len(set(numbers)) == 1002
    assert max(numbers) == 1002


async def test_list_returns_full_history_newest_first(services, fake_store, people) -> None:
    note = await services.documents.create("alice", NoteCreate())
    _seed_versions(fake_store, note.id, 1201)

    views = await services.versions.list(note.id, "alice")

    assert len(views) == 1201
    assert views[0].version.version_number == 1201
    assert views[-1].version.version_number == 1
