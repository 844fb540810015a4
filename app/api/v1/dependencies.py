"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the Firestore client, repositories,
application services and the authenticated account. Services are built
from infrastructure implementations here; routes depend only on these
dependencies, not on infra directly. Tests swap the Firestore client and
the credential verifier through app.dependency_overrides.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.dtos.account import VerifiedIdentity
from app.application.interfaces.services import ICredentialVerifier, INotifier
from app.application.services.access_service import (
    NoteAccessResolver,
    PendingShareResolver,
)
from app.application.services.account_service import AccountService
from app.application.services.document_service import DocumentService
from app.application.services.sharing_service import SharingService
from app.application.services.version_service import VersionService
from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException, StoreNotConfiguredException
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.client import get_firestore_client
from app.infrastructure.firebase.repositories import (
    FirestoreAccountRepository,
    FirestoreNoteRepository,
    FirestorePermissionRepository,
    FirestoreVersionRepository,
)
from app.infrastructure.security.firebase_verifier import FirebaseCredentialVerifier
from app.infrastructure.services.notification_service import LogOnlyNotifier
from app.shared.context import set_current_account

http_bearer = HTTPBearer(auto_error=False)


def get_firestore() -> FirestoreRESTClient:
    """Return Firestore client or raise StoreNotConfiguredException (503)."""
    client = get_firestore_client()
    if client is None:
        raise StoreNotConfiguredException()
    return client


FirestoreDep = Annotated[FirestoreRESTClient, Depends(get_firestore)]


# ---- Repositories ----


def get_account_repo(client: FirestoreDep) -> FirestoreAccountRepository:
    return FirestoreAccountRepository(client)


def get_permission_repo(client: FirestoreDep) -> FirestorePermissionRepository:
    return FirestorePermissionRepository(client)


def get_note_repo(client: FirestoreDep) -> FirestoreNoteRepository:
    return FirestoreNoteRepository(client)


def get_version_repo(client: FirestoreDep) -> FirestoreVersionRepository:
    return FirestoreVersionRepository(client)


# ---- External collaborators ----


@lru_cache
def get_credential_verifier() -> ICredentialVerifier:
    """Firebase ID token verifier for the configured project (one per process)."""
    return FirebaseCredentialVerifier(get_settings().firebase_project_id)


def get_notifier() -> INotifier:
    """Log-only notifier; links point at settings.frontend_url."""
    settings = get_settings()
    return LogOnlyNotifier(frontend_url=settings.frontend_url, app_name=settings.app_name)


# ---- Services ----


def get_pending_resolver(
    account_repo: Annotated[FirestoreAccountRepository, Depends(get_account_repo)],
    permission_repo: Annotated[FirestorePermissionRepository, Depends(get_permission_repo)],
) -> PendingShareResolver:
    return PendingShareResolver(account_repo, permission_repo)


def get_access_resolver(
    note_repo: Annotated[FirestoreNoteRepository, Depends(get_note_repo)],
    permission_repo: Annotated[FirestorePermissionRepository, Depends(get_permission_repo)],
    pending: Annotated[PendingShareResolver, Depends(get_pending_resolver)],
) -> NoteAccessResolver:
    return NoteAccessResolver(note_repo, permission_repo, pending)


def get_version_service(
    version_repo: Annotated[FirestoreVersionRepository, Depends(get_version_repo)],
    account_repo: Annotated[FirestoreAccountRepository, Depends(get_account_repo)],
    access: Annotated[NoteAccessResolver, Depends(get_access_resolver)],
) -> VersionService:
    return VersionService(version_repo, account_repo, access)


def get_document_service(
    note_repo: Annotated[FirestoreNoteRepository, Depends(get_note_repo)],
    permission_repo: Annotated[FirestorePermissionRepository, Depends(get_permission_repo)],
    account_repo: Annotated[FirestoreAccountRepository, Depends(get_account_repo)],
    access: Annotated[NoteAccessResolver, Depends(get_access_resolver)],
    versions: Annotated[VersionService, Depends(get_version_service)],
) -> DocumentService:
    return DocumentService(
        note_repo,
        permission_repo,
        account_repo,
        access,
        versions,
        shared_chunk_size=get_settings().shared_notes_chunk_size,
    )


def get_sharing_service(
    account_repo: Annotated[FirestoreAccountRepository, Depends(get_account_repo)],
    permission_repo: Annotated[FirestorePermissionRepository, Depends(get_permission_repo)],
    access: Annotated[NoteAccessResolver, Depends(get_access_resolver)],
    pending: Annotated[PendingShareResolver, Depends(get_pending_resolver)],
    notifier: Annotated[INotifier, Depends(get_notifier)],
) -> SharingService:
    return SharingService(account_repo, permission_repo, access, pending, notifier)


def get_account_service(
    account_repo: Annotated[FirestoreAccountRepository, Depends(get_account_repo)],
    notifier: Annotated[INotifier, Depends(get_notifier)],
) -> AccountService:
    settings = get_settings()
    return AccountService(
        account_repo,
        notifier,
        search_min_length=settings.search_min_query_length,
        search_max_limit=settings.search_max_limit,
    )


# ---- Authentication ----


async def get_verified_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(http_bearer)],
    verifier: Annotated[ICredentialVerifier, Depends(get_credential_verifier)],
) -> VerifiedIdentity:
    """Verify the bearer token; raise 401 if missing or invalid."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Not authenticated")
    return await verifier.verify(credentials.credentials)


async def get_current_account_id(
    identity: Annotated[VerifiedIdentity, Depends(get_verified_identity)],
    account_service: Annotated[AccountService, Depends(get_account_service)],
) -> str:
    """Return the caller's account id, creating the account on first request."""
    await account_service.ensure_provisioned(identity)
    set_current_account(identity.subject_id)
    return identity.subject_id


CurrentAccountId = Annotated[str, Depends(get_current_account_id)]
