"""Pydantic request/response schemas for the API."""

from app.schemas.account import (
    AccountResponse,
    AccountSearchItem,
    ProfileUpdateRequest,
    PublicProfileResponse,
    RegisterRequest,
    SharedNotesCountResponse,
    VerifyTokenResponse,
)
from app.schemas.health import HealthResponse, ReadinessResponse
from app.schemas.note import (
    CollaboratorListResponse,
    CollaboratorResponse,
    MessageResponse,
    NoteCreateRequest,
    NoteDetailResponse,
    NoteListResponse,
    NoteResponse,
    NoteUpdateRequest,
    ShareRequest,
    ShareResponse,
    SharedNoteResponse,
    VersionResponse,
)
from app.schemas.websocket import RelayInbound, RelayOutbound

__all__ = [
    "AccountResponse",
    "AccountSearchItem",
    "CollaboratorListResponse",
    "CollaboratorResponse",
    "HealthResponse",
    "MessageResponse",
    "NoteCreateRequest",
    "NoteDetailResponse",
    "NoteListResponse",
    "NoteResponse",
    "NoteUpdateRequest",
    "ProfileUpdateRequest",
    "PublicProfileResponse",
    "ReadinessResponse",
    "RegisterRequest",
    "RelayInbound",
    "RelayOutbound",
    "ShareRequest",
    "ShareResponse",
    "SharedNoteResponse",
    "SharedNotesCountResponse",
    "VerifyTokenResponse",
    "VersionResponse",
]
