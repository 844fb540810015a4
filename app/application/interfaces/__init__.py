"""Application ports (Protocols) implemented by infrastructure."""

from app.application.interfaces.repositories import (
    IAccountRepository,
    INoteRepository,
    IPermissionRepository,
    IVersionRepository,
)
from app.application.interfaces.services import ICredentialVerifier, INotifier

__all__ = [
    "IAccountRepository",
    "ICredentialVerifier",
    "INoteRepository",
    "INotifier",
    "IPermissionRepository",
    "IVersionRepository",
]
