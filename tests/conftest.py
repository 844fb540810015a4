"""Pytest configuration and fixtures for collabnotes.

HTTP tests run app.main:app over ASGI with the Firestore client and the
credential verifier swapped for in-memory fakes (tests/fakes.py) through
app.dependency_overrides. No network or Firebase project is needed.
"""

import os
from types import SimpleNamespace

os.environ.setdefault("FIREBASE_PROJECT_ID", "test-project")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.api.v1.dependencies import (  # noqa: E402
    get_credential_verifier,
    get_firestore,
    get_notifier,
)
from app.application.dtos.account import AccountCreate  # noqa: E402
from app.application.services.access_service import (  # noqa: E402
    NoteAccessResolver,
    PendingShareResolver,
)
from app.application.services.account_service import AccountService  # noqa: E402
from app.application.services.document_service import DocumentService  # noqa: E402
from app.application.services.sharing_service import SharingService  # noqa: E402
from app.application.services.version_service import VersionService  # noqa: E402
from app.core.limiter import limiter  # noqa: E402
from app.infrastructure.firebase.repositories import (  # noqa: E402
    FirestoreAccountRepository,
    FirestoreNoteRepository,
    FirestorePermissionRepository,
    FirestoreVersionRepository,
)
from app.main import app  # noqa: E402
from tests.fakes import FakeFirestoreClient, FakeVerifier, RecordingNotifier  # noqa: E402


@pytest.fixture
def fake_store() -> FakeFirestoreClient:
    """Empty in-memory Firestore."""
    return FakeFirestoreClient()


@pytest.fixture
def verifier() -> FakeVerifier:
    """Token verifier preloaded with alice, bob and carol."""
    v = FakeVerifier()
    v.add("alice-token", "alice", "alice@example.com", name="Alice")
    v.add("bob-token", "bob", "bob@example.com", name="Bob")
    v.add("carol-token", "carol", "Carol@Example.com", name="Carol")
    return v


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    """Rate limit counters are process-wide; start every test from zero."""
    limiter.reset()
    yield


@pytest.fixture
def override_dependencies(fake_store, verifier, notifier):
    """Point the app at the fakes for the duration of a test."""
    app.dependency_overrides[get_firestore] = lambda: fake_store
    app.dependency_overrides[get_credential_verifier] = lambda: verifier
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(override_dependencies) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def repos(fake_store):
    """Real Firestore repositories over the in-memory store."""
    return SimpleNamespace(
        accounts=FirestoreAccountRepository(fake_store),
        permissions=FirestorePermissionRepository(fake_store),
        notes=FirestoreNoteRepository(fake_store),
        versions=FirestoreVersionRepository(fake_store),
    )


@pytest.fixture
def services(repos, notifier):
    """Application services wired like app.api.v1.dependencies, over the fakes."""
    pending = PendingShareResolver(repos.accounts, repos.permissions)
    access = NoteAccessResolver(repos.notes, repos.permissions, pending)
    versions = VersionService(repos.versions, repos.accounts, access)

    return SimpleNamespace(
        pending=pending,
        access=access,
        versions=versions,
        documents=DocumentService(
            repos.notes, repos.permissions, repos.accounts, access, versions
        ),
        sharing=SharingService(repos.accounts, repos.permissions, access, pending, notifier),
        accounts=AccountService(repos.accounts, notifier),
    )


@pytest.fixture
async def people(repos) -> None:
    """alice, bob and carol registered as real accounts."""
    for account_id, name in (("alice", "Alice"), ("bob", "Bob"), ("carol", "Carol")):
        await repos.accounts.create(
            AccountCreate(id=account_id, email=f"{account_id}@example.com", display_name=name)
        )
