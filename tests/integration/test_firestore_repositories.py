"""Firestore repositories against the in-memory Firestore fake."""

import pytest

from app.application.dtos.account import AccountCreate, AccountProfilePatch
from app.application.dtos.note import DEFAULT_TITLE, NoteCreate
from app.domain.enums import AccessLevel
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.firebase._rest_client import DocumentMissingError
from app.infrastructure.firebase.collections import (
    COLLECTION_ACCOUNTS,
    COLLECTION_NOTE_PERMISSIONS,
    COLLECTION_NOTES,
    permission_doc_id,
)

# ---- Accounts ----


async def test_account_create_stores_normalized_fields(repos, fake_store) -> None:
    account = await repos.accounts.create(AccountCreate(id="bob", email="Bob@Example.com"))
    assert account.display_name == "Bob"
    stored = fake_store.docs(COLLECTION_ACCOUNTS)["bob"]
    assert stored["email"] == "Bob@Example.com"
    assert stored["email_normalized"] == "bob@example.com"
    assert stored["display_name_lower"] == "bob"
    assert stored["is_pending"] is False


async def test_account_create_existing_id_refreshes_profile(repos, fake_store) -> None:
    first = await repos.accounts.create(
        AccountCreate(id="bob", email="bob@example.com", display_name="Bob")
    )
    again = await repos.accounts.create(
        AccountCreate(id="bob", email="other@example.com", display_name="Robert")
    )
    assert again.display_name == "Robert"
    assert again.email == "bob@example.com"
    assert again.created_at == first.created_at


@pytest.mark.parametrize(("account_id", "email"), [("", "a@b.com"), ("  ", "a@b.com"), ("a", "")])
async def test_account_create_rejects_blank_id_or_email(repos, account_id, email) -> None:
    with pytest.raises(ValidationException):
        await repos.accounts.create(AccountCreate(id=account_id, email=email))


async def test_real_account_replaces_persisted_placeholder(repos, fake_store) -> None:
    await repos.accounts.create(
        AccountCreate(id="pending_bob_example_com", email="bob@example.com", is_pending=True)
    )
    await repos.accounts.create(AccountCreate(id="bob", email="Bob@example.com"))
    docs = fake_store.docs(COLLECTION_ACCOUNTS)
    assert "pending_bob_example_com" not in docs
    assert "bob" in docs
    assert len(fake_store.batches[-1]) == 2


async def test_get_by_id_synthesizes_unpersisted_placeholder(repos) -> None:
    account = await repos.accounts.get_by_id("pending_dave_localhost")
    assert account is not None
    assert account.email == "dave@localhost"
    assert account.display_name == "dave"
    assert account.is_pending is True
    assert await repos.accounts.get_persisted("pending_dave_localhost") is None


async def test_get_by_id_unknown_returns_none(repos) -> None:
    assert await repos.accounts.get_by_id("nobody") is None
    assert await repos.accounts.get_by_id("") is None


async def test_get_by_email_is_case_insensitive(repos) -> None:
    await repos.accounts.create(AccountCreate(id="bob", email="bob@example.com"))
    found = await repos.accounts.get_by_email("  BOB@Example.COM")
    assert found is not None and found.id == "bob"


async def test_get_by_email_scans_records_without_normalized_field(repos, fake_store) -> None:
    fake_store.seed(COLLECTION_ACCOUNTS, "eve", {"email": "Eve@Example.com", "display_name": "Eve"})
    found = await repos.accounts.get_by_email("eve@example.com")
    assert found is not None and found.id == "eve"


async def test_search_matches_name_or_email_prefix_and_excludes_caller(repos) -> None:
    await repos.accounts.create(AccountCreate(id="alice", email="alice@example.com", display_name="Alice"))
    await repos.accounts.create(AccountCreate(id="alicia", email="al@example.com", display_name="Alicia"))
    await repos.accounts.create(AccountCreate(id="zed", email="alison@example.com", display_name="Zed"))
    await repos.accounts.create(AccountCreate(id="bob", email="bob@example.com", display_name="Bob"))

    results = await repos.accounts.search("ali", exclude_id="alice", limit=10)

    assert sorted(a.id for a in results) == ["alicia", "zed"]


async def test_search_respects_limit(repos) -> None:
    for i in range(5):
        await repos.accounts.create(AccountCreate(id=f"u{i}", email=f"sam{i}@example.com", display_name=f"Sam {i}"))
    assert len(await repos.accounts.search("sam", exclude_id=None, limit=3)) == 3


async def test_update_profile(repos) -> None:
    await repos.accounts.create(AccountCreate(id="bob", email="bob@example.com"))
    updated = await repos.accounts.update_profile(
        "bob", AccountProfilePatch(display_name="Bobby", avatar_ref="https://img/b.png")
    )
    assert updated.display_name == "Bobby"
    assert updated.avatar_ref == "https://img/b.png"


async def test_update_profile_unknown_account(repos) -> None:
    with pytest.raises(ResourceNotFoundException):
        await repos.accounts.update_profile("ghost", AccountProfilePatch(display_name="G"))


# ---- Permissions ----


async def test_permission_upsert_then_update_changes_level_only(repos) -> None:
    created = await repos.permissions.upsert("n1", "bob", AccessLevel.READ, "alice")
    updated = await repos.permissions.upsert("n1", "bob", AccessLevel.ADMIN, "carol")
    assert created.id == updated.id == "n1_bob"
    assert updated.level is AccessLevel.ADMIN
    assert updated.granted_by == "alice"
    assert updated.created_at == created.created_at
    stored = await repos.permissions.get("n1", "bob")
    assert stored.level is AccessLevel.ADMIN


async def test_permission_delete_is_idempotent(repos) -> None:
    await repos.permissions.upsert("n1", "bob", AccessLevel.READ, "alice")
    await repos.permissions.delete("n1", "bob")
    await repos.permissions.delete("n1", "bob")
    assert await repos.permissions.get("n1", "bob") is None


async def test_permission_lists_by_note_and_account(repos) -> None:
    await repos.permissions.upsert("n1", "bob", AccessLevel.READ, "alice")
    await repos.permissions.upsert("n1", "carol", AccessLevel.WRITE, "alice")
    await repos.permissions.upsert("n2", "bob", AccessLevel.ADMIN, "alice")
    assert sorted(p.account_id for p in await repos.permissions.list_by_note("n1")) == ["bob", "carol"]
    assert sorted(p.note_id for p in await repos.permissions.list_by_account("bob")) == ["n1", "n2"]


async def test_permission_migrate_moves_row_atomically(repos, fake_store) -> None:
    original = await repos.permissions.upsert("n1", "pending_bob_x_com", AccessLevel.WRITE, "alice")
    moved = await repos.permissions.migrate("n1", "pending_bob_x_com", "bob")
    assert moved is not None
    assert moved.id == "n1_bob"
    assert moved.level is AccessLevel.WRITE
    assert moved.granted_by == "alice"
    assert moved.created_at == original.created_at
    assert moved.migrated_from == "pending_bob_x_com"
    assert await repos.permissions.get("n1", "pending_bob_x_com") is None
    assert len(fake_store.batches) == 1


async def test_permission_migrate_without_source_returns_none(repos) -> None:
    assert await repos.permissions.migrate("n1", "pending_bob_x_com", "bob") is None


async def test_permission_delete_writes_for_note(repos) -> None:
    await repos.permissions.upsert("n1", "bob", AccessLevel.READ, "alice")
    await repos.permissions.upsert("n2", "bob", AccessLevel.READ, "alice")
    writes = await repos.permissions.delete_writes_for_note("n1")
    assert writes == [{"path": f"{COLLECTION_NOTE_PERMISSIONS}/n1_bob", "delete": True}]


# ---- Notes ----


async def test_note_create_defaults(repos) -> None:
    note = await repos.notes.create("alice", NoteCreate())
    assert note.title == DEFAULT_TITLE
    assert note.body == ""
    assert note.archived is False
    assert (await repos.notes.get_by_id(note.id)).owner_id == "alice"


async def test_note_update_fields_missing_note(repos) -> None:
    with pytest.raises(DocumentMissingError):
        await repos.notes.update_fields("missing", {"title": "x"})


async def test_note_list_owned_excludes_archived(repos) -> None:
    kept = await repos.notes.create("alice", NoteCreate(title="Kept"))
    gone = await repos.notes.create("alice", NoteCreate(title="Gone"))
    await repos.notes.create("bob", NoteCreate(title="Other"))
    await repos.notes.update_fields(gone.id, {"archived": True})
    assert [n.id for n in await repos.notes.list_owned("alice")] == [kept.id]


async def test_note_list_by_ids_filters_by_document_name(repos) -> None:
    a = await repos.notes.create("alice", NoteCreate(title="A"))
    b = await repos.notes.create("alice", NoteCreate(title="B"))
    c = await repos.notes.create("alice", NoteCreate(title="C"))
    await repos.notes.update_fields(b.id, {"archived": True})
    found = await repos.notes.list_by_ids([a.id, b.id])
    assert [n.id for n in found] == [a.id]
    assert c.id not in {n.id for n in found}
    assert await repos.notes.list_by_ids([]) == []


async def test_note_hard_delete_commits_extra_writes(repos, fake_store) -> None:
    note = await repos.notes.create("alice", NoteCreate())
    await repos.permissions.upsert(note.id, "bob", AccessLevel.READ, "alice")
    writes = await repos.permissions.delete_writes_for_note(note.id)
    await repos.notes.hard_delete(note.id, writes)
    assert note.id not in fake_store.docs(COLLECTION_NOTES)
    assert await repos.permissions.list_by_note(note.id) == []
    assert len(fake_store.batches[-1]) == 2


# ---- Versions ----


async def test_versions_add_list_and_get_by_number(repos) -> None:
    await repos.versions.add("n1", "alice", "T1", "B1", 1)
    await repos.versions.add("n1", "bob", "T2", "B2", 2)
    await repos.versions.add("n2", "alice", "X", "Y", 1)
    assert sorted(v.version_number for v in await repos.versions.list_for_note("n1")) == [1, 2]
    second = await repos.versions.get_by_number("n1", 2)
    assert second.title == "T2" and second.created_by == "bob"
    assert await repos.versions.get_by_number("n1", 3) is None


# ---- Paged listings ----


async def test_listings_return_more_than_one_page(repos, fake_store) -> None:
    for i in range(1001):
        note_id = f"n{i:04d}"
        fake_store.seed(COLLECTION_NOTES, note_id, {"owner_id": "alice", "archived": False})
        fake_store.seed(
            COLLECTION_NOTE_PERMISSIONS,
            permission_doc_id(note_id, "bob"),
            {"note_id": note_id, "account_id": "bob", "level": "read", "granted_by": "alice"},
        )
        fake_store.seed(
            COLLECTION_NOTE_PERMISSIONS,
            permission_doc_id("big", f"u{i:04d}"),
            {"note_id": "big", "account_id": f"u{i:04d}", "level": "write", "granted_by": "alice"},
        )

    owned = await repos.notes.list_owned("alice")
    shared = await repos.permissions.list_by_account("bob")
    rows = await repos.permissions.list_by_note("big")

    assert len({n.id for n in owned}) == 1001
    assert len({r.id for r in shared}) == 1001
    assert len({r.account_id for r in rows}) == 1001
