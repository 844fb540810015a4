"""Note, sharing and version API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import AccessLevel


class NoteCreateRequest(BaseModel):
    """Request body for POST /notes."""

    title: str | None = Field(default=None, max_length=500)
    body: str | None = None


class NoteUpdateRequest(BaseModel):
    """Request body for PUT /notes/{id}.

    Only fields present in the JSON change; an explicit null clears the
    field (title back to the default, body to empty).
    """

    title: str | None = Field(default=None, max_length=500)
    body: str | None = None


class NoteResponse(BaseModel):
    """Note fields."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    body: str
    owner_id: str
    archived: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CollaboratorResponse(BaseModel):
    """Someone with access to a note."""

    model_config = ConfigDict(from_attributes=True)

    account_id: str
    email: str
    display_name: str
    avatar_ref: str | None = None
    level: AccessLevel
    is_pending: bool = False
    is_owner: bool = False


class CollaboratorListResponse(BaseModel):
    """Owner plus collaborators of a note."""

    owner: CollaboratorResponse
    collaborators: list[CollaboratorResponse] = Field(default_factory=list)


class NoteDetailResponse(NoteResponse):
    """Note with the caller's level, owner and collaborators (GET /notes/{id})."""

    level: AccessLevel
    owner: CollaboratorResponse
    collaborators: list[CollaboratorResponse] = Field(default_factory=list)


class SharedNoteResponse(NoteResponse):
    """Note shared with the caller."""

    level: AccessLevel
    owner_name: str


class NoteListResponse(BaseModel):
    """Response for GET /notes."""

    owned: list[NoteResponse] = Field(default_factory=list)
    shared: list[SharedNoteResponse] = Field(default_factory=list)


class ShareRequest(BaseModel):
    """Request body for POST /notes/{id}/share.

    Checked by the sharing service so bad input maps to VALIDATION_ERROR.
    """

    email: str = Field(..., max_length=320)
    level: str


class ShareResponse(BaseModel):
    """Recipient of a share; is_pending means they still need to register."""

    note_id: str
    level: AccessLevel
    recipient_id: str
    recipient_email: str
    recipient_name: str
    is_pending: bool


class MessageResponse(BaseModel):
    """Simple acknowledgement."""

    message: str


class VersionResponse(BaseModel):
    """One version of a note."""

    id: str
    note_id: str
    title: str
    body: str
    version_number: int
    created_by: str
    author_name: str
    created_at: datetime | None = None
