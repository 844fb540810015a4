"""SharingService: share by email, pending recipients, revoke and collaborators."""

from unittest.mock import AsyncMock

import pytest

from app.application.dtos.account import AccountCreate
from app.application.dtos.note import NoteCreate
from app.application.services.sharing_service import SharingService
from app.domain.enums import AccessLevel
from app.domain.exceptions import (
    AuthorizationException,
    InvalidEmailException,
    OwnerProtectedException,
    ResourceNotFoundException,
    SelfShareException,
    ValidationException,
)
from app.infrastructure.firebase.collections import COLLECTION_ACCOUNTS


@pytest.fixture
async def note(services, people):
    return await services.documents.create("alice", NoteCreate(title="Plans"))


async def test_share_with_registered_account(services, repos, notifier, note) -> None:
    result = await services.sharing.share(note.id, "alice", "BOB@example.com", "write")

    assert result.recipient.id == "bob"
    assert result.recipient.is_pending is False
    assert result.level is AccessLevel.WRITE
    assert (await repos.permissions.get(note.id, "bob")).granted_by == "alice"
    assert notifier.shares == [{
        "recipient_email": "bob@example.com",
        "sender_name": "Alice",
        "note_title": "Plans",
        "note_id": note.id,
        "level": AccessLevel.WRITE,
    }]


async def test_share_with_unknown_email_creates_placeholder(services, fake_store, note) -> None:
    first = await services.sharing.share(note.id, "alice", "New.Person@Example.com", "read")
    second = await services.sharing.share(note.id, "alice", "new.person@example.com", "admin")

    assert first.recipient.id == "pending_new.person_example_com"
    assert first.recipient.is_pending is True
    assert first.recipient.email == "new.person@example.com"
    assert first.recipient.display_name == "new.person"
    assert second.recipient.id == first.recipient.id
    placeholder = fake_store.docs(COLLECTION_ACCOUNTS)[first.recipient.id]
    assert placeholder["is_pending"] is True


async def test_reshare_updates_level(services, repos, note) -> None:
    await services.sharing.share(note.id, "alice", "bob@example.com", "read")
    await services.sharing.share(note.id, "alice", "bob@example.com", "admin")
    rows = await repos.permissions.list_by_note(note.id)
    assert [(r.account_id, r.level) for r in rows] == [("bob", AccessLevel.ADMIN)]


@pytest.mark.parametrize(("email", "level"), [("", "read"), ("   ", "read"), ("bob@example.com", "owner")])
async def test_share_validates_input(services, note, email, level) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await services.sharing.share(note.id, "alice", email, level)
    assert exc_info.value.error_code == "VALIDATION_ERROR"


async def test_share_malformed_email(services, note) -> None:
    with pytest.raises(InvalidEmailException):
        await services.sharing.share(note.id, "alice", "not-an-email", "read")


async def test_share_with_self(services, note) -> None:
    with pytest.raises(SelfShareException):
        await services.sharing.share(note.id, "alice", "alice@example.com", "read")


async def test_admin_collaborator_cannot_share_with_owner(services, note) -> None:
    await services.sharing.share(note.id, "alice", "bob@example.com", "admin")
    with pytest.raises(OwnerProtectedException):
        await services.sharing.share(note.id, "bob", "alice@example.com", "read")


async def test_share_requires_admin(services, note) -> None:
    await services.sharing.share(note.id, "alice", "bob@example.com", "write")
    with pytest.raises(AuthorizationException):
        await services.sharing.share(note.id, "bob", "carol@example.com", "read")
    with pytest.raises(ResourceNotFoundException):
        await services.sharing.share(note.id, "carol", "bob@example.com", "read")


async def test_admin_collaborator_can_share(services, repos, note) -> None:
    await services.sharing.share(note.id, "alice", "bob@example.com", "admin")
    await services.sharing.share(note.id, "bob", "carol@example.com", "read")
    assert (await repos.permissions.get(note.id, "carol")).granted_by == "bob"


async def test_share_survives_notifier_failure(repos, services, note) -> None:
    broken = AsyncMock()
    broken.notify_share.side_effect = RuntimeError("smtp down")
    sharing = SharingService(repos.accounts, repos.permissions, services.access, services.pending, broken)

    result = await sharing.share(note.id, "alice", "bob@example.com", "read")

    assert result.recipient.id == "bob"
    broken.notify_share.assert_awaited_once()


async def test_revoke(services, repos, note) -> None:
    await services.sharing.share(note.id, "alice", "bob@example.com", "read")
    await services.sharing.revoke(note.id, "alice", "bob")
    assert await repos.permissions.get(note.id, "bob") is None
    with pytest.raises(ResourceNotFoundException):
        await services.documents.get(note.id, "bob")


async def test_revoke_owner_is_protected(services, note) -> None:
    await services.sharing.share(note.id, "alice", "bob@example.com", "admin")
    with pytest.raises(OwnerProtectedException):
        await services.sharing.revoke(note.id, "bob", "alice")
    with pytest.raises(OwnerProtectedException):
        await services.sharing.revoke(note.id, "alice", "alice")


async def test_revoke_requires_admin(services, note) -> None:
    await services.sharing.share(note.id, "alice", "bob@example.com", "write")
    await services.sharing.share(note.id, "alice", "carol@example.com", "read")
    with pytest.raises(AuthorizationException):
        await services.sharing.revoke(note.id, "bob", "carol")


async def test_list_collaborators(services, note) -> None:
    await services.sharing.share(note.id, "alice", "bob@example.com", "write")
    await services.sharing.share(note.id, "alice", "dave@localhost", "read")

    listing = await services.sharing.list_collaborators(note.id, "bob")

    assert listing.owner.account_id == "alice"
    assert listing.owner.is_owner is True
    assert listing.owner.level is AccessLevel.ADMIN
    by_id = {c.account_id: c for c in listing.collaborators}
    assert by_id["bob"].level is AccessLevel.WRITE
    assert by_id["pending_dave_localhost"].is_pending is True
    assert by_id["pending_dave_localhost"].email == "dave@localhost"


async def test_list_collaborators_unknown_owner(services, repos, people) -> None:
    note = await services.documents.create("ghost", NoteCreate())
    listing = await services.sharing.list_collaborators(note.id, "ghost")
    assert listing.owner.display_name == "Unknown User"
    assert listing.collaborators == []


async def test_list_collaborators_skips_unresolvable_rows(services, repos, note) -> None:
    await repos.permissions.upsert(note.id, "vanished", AccessLevel.READ, "alice")
    await services.sharing.share(note.id, "alice", "bob@example.com", "read")
    listing = await services.sharing.list_collaborators(note.id, "alice")
    assert [c.account_id for c in listing.collaborators] == ["bob"]


async def test_list_collaborators_for_new_note(services, people) -> None:
    listing = await services.sharing.list_collaborators("new", "bob")
    assert listing.owner.account_id == "bob"
    assert listing.collaborators == []


async def test_list_collaborators_without_access(services, note) -> None:
    with pytest.raises(ResourceNotFoundException):
        await services.sharing.list_collaborators(note.id, "carol")


async def test_resolve_pending_shares(services, repos, note) -> None:
    await services.sharing.share(note.id, "alice", "erin@example.com", "write")
    await repos.accounts.create(AccountCreate(id="erin", email="erin@example.com"))
    assert await services.sharing.resolve_pending_shares(note.id, "erin") is AccessLevel.WRITE
    assert await services.sharing.resolve_pending_shares(note.id, "erin") is None
