"""Application services (use cases over repository ports)."""

from app.application.services.access_service import (
    NoteAccessResolver,
    PendingShareResolver,
)
from app.application.services.account_service import AccountService
from app.application.services.document_service import DocumentService
from app.application.services.sharing_service import SharingService
from app.application.services.version_service import VersionService

__all__ = [
    "AccountService",
    "DocumentService",
    "NoteAccessResolver",
    "PendingShareResolver",
    "SharingService",
    "VersionService",
]
