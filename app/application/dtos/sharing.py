"""DTOs for sharing and collaborator listings."""

from __future__ import annotations

from dataclasses import dataclass, field

from app.application.dtos.account import AccountResult
from app.domain.enums import AccessLevel


@dataclass(frozen=True)
class ShareResult:
    """Outcome of a share: the recipient (possibly a placeholder) and granted level."""

    note_id: str
    recipient: AccountResult
    level: AccessLevel


@dataclass(frozen=True)
class Collaborator:
    """Display identity of someone with access to a note."""

    account_id: str
    email: str
    display_name: str
    avatar_ref: str | None
    level: AccessLevel
    is_pending: bool = False
    is_owner: bool = False


@dataclass(frozen=True)
class CollaboratorListing:
    """Owner plus every other account holding a permission row on the note."""

    owner: Collaborator
    collaborators: list[Collaborator] = field(default_factory=list)
