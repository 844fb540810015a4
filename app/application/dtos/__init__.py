"""Application DTOs (no store dependency)."""

from app.application.dtos.account import (
    AccountCreate,
    AccountProfilePatch,
    AccountResult,
    VerifiedIdentity,
)
from app.application.dtos.note import (
    DEFAULT_TITLE,
    NEW_NOTE_ID,
    UNSET,
    NoteAccess,
    NoteCreate,
    NoteListing,
    NotePatch,
    NoteResult,
    SharedNote,
)
from app.application.dtos.permission import PermissionResult
from app.application.dtos.sharing import Collaborator, CollaboratorListing, ShareResult
from app.application.dtos.version import VersionResult, VersionView

__all__ = [
    "AccountCreate",
    "AccountProfilePatch",
    "AccountResult",
    "Collaborator",
    "CollaboratorListing",
    "DEFAULT_TITLE",
    "NEW_NOTE_ID",
    "NoteAccess",
    "NoteCreate",
    "NoteListing",
    "NotePatch",
    "NoteResult",
    "PermissionResult",
    "ShareResult",
    "SharedNote",
    "UNSET",
    "VerifiedIdentity",
    "VersionResult",
    "VersionView",
]
