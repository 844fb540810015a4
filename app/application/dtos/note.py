"""DTOs for note (document) use cases."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from app.domain.enums import AccessLevel

DEFAULT_TITLE = "Untitled Note"
NEW_NOTE_ID = "new"


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset.UNSET


@dataclass(frozen=True)
class NoteResult:
    """Note read-model."""

    id: str
    title: str
    body: str
    owner_id: str
    archived: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class NoteCreate:
    """Input for creating a note. Empty or missing title becomes DEFAULT_TITLE."""

    title: str | None = None
    body: str | None = None


@dataclass(frozen=True)
class NotePatch:
    """Partial note update with three states per field.

    UNSET leaves the field unchanged, None clears it (title back to
    DEFAULT_TITLE, body to ""), any other value replaces it.
    """

    title: str | None | _Unset = UNSET
    body: str | None | _Unset = UNSET

    @classmethod
    def from_fields(cls, fields: dict[str, Any]) -> "NotePatch":
        """Build a patch from only the keys the client actually sent."""
        return cls(
            title=fields.get("title", UNSET),
            body=fields.get("body", UNSET),
        )

    def is_empty(self) -> bool:
        return self.title is UNSET and self.body is UNSET


@dataclass(frozen=True)
class NoteAccess:
    """A note together with the caller's effective access level."""

    note: NoteResult
    level: AccessLevel


@dataclass(frozen=True)
class SharedNote:
    """A note shared with the caller, with their level and the owner's name."""

    note: NoteResult
    level: AccessLevel
    owner_name: str


@dataclass(frozen=True)
class NoteListing:
    """Result of listing an account's notes."""

    owned: list[NoteResult] = field(default_factory=list)
    shared: list[SharedNote] = field(default_factory=list)
