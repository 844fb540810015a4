"""DTOs for note version history."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class VersionResult:
    """Immutable snapshot of a note's title and body after an update."""

    id: str
    note_id: str
    title: str
    body: str
    version_number: int
    created_by: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class VersionView:
    """Version enriched with the author's display name for history listings."""

    version: VersionResult
    author_name: str
