"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import AccessLevel
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    InvalidEmailException,
    NotesException,
    OwnerProtectedException,
    ResourceNotFoundException,
    SelfShareException,
    StoreNotConfiguredException,
    ValidationException,
)

__all__ = [
    # Enums
    "AccessLevel",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "InvalidEmailException",
    "NotesException",
    "OwnerProtectedException",
    "ResourceNotFoundException",
    "SelfShareException",
    "StoreNotConfiguredException",
    "ValidationException",
]
