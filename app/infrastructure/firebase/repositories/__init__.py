"""Firestore-backed repository implementations."""

from app.infrastructure.firebase.repositories.account_repo_firestore import (
    FirestoreAccountRepository,
)
from app.infrastructure.firebase.repositories.note_repo_firestore import (
    FirestoreNoteRepository,
)
from app.infrastructure.firebase.repositories.permission_repo_firestore import (
    FirestorePermissionRepository,
)
from app.infrastructure.firebase.repositories.version_repo_firestore import (
    FirestoreVersionRepository,
)

__all__ = [
    "FirestoreAccountRepository",
    "FirestoreNoteRepository",
    "FirestorePermissionRepository",
    "FirestoreVersionRepository",
]
