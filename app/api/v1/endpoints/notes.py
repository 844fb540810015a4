"""Notes API: CRUD, sharing, collaborators and version history.

Routes are thin: access rules live in DocumentService, SharingService and
VersionService. A note the caller cannot see answers 404, never 403.
"""

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    CurrentAccountId,
    get_document_service,
    get_sharing_service,
    get_version_service,
)
from app.application.dtos.note import NEW_NOTE_ID, NoteCreate, NotePatch, NoteResult
from app.application.dtos.sharing import CollaboratorListing
from app.application.dtos.version import VersionView
from app.application.services.document_service import DocumentService
from app.application.services.sharing_service import SharingService
from app.application.services.version_service import VersionService
from app.core.limiter import limit_share, limit_writes
from app.domain.exceptions import ValidationException
from app.schemas.note import (
    CollaboratorListResponse,
    CollaboratorResponse,
    MessageResponse,
    NoteCreateRequest,
    NoteDetailResponse,
    NoteListResponse,
    NoteResponse,
    NoteUpdateRequest,
    SharedNoteResponse,
    ShareRequest,
    ShareResponse,
    VersionResponse,
)

router = APIRouter()


def _note_response(note: NoteResult) -> NoteResponse:
    return NoteResponse.model_validate(note)


def _collaborators_response(listing: CollaboratorListing) -> CollaboratorListResponse:
    return CollaboratorListResponse(
        owner=CollaboratorResponse.model_validate(listing.owner),
        collaborators=[CollaboratorResponse.model_validate(c) for c in listing.collaborators],
    )


def _version_response(view: VersionView) -> VersionResponse:
    v = view.version
    return VersionResponse(
        id=v.id,
        note_id=v.note_id,
        title=v.title,
        body=v.body,
        version_number=v.version_number,
        created_by=v.created_by,
        author_name=view.author_name,
        created_at=v.created_at,
    )


@router.get("", response_model=NoteListResponse)
async def list_notes(
    account_id: CurrentAccountId,
    documents: DocumentService = Depends(get_document_service),
):
    """List the caller's own notes and notes shared with them (archived excluded)."""
    listing = await documents.list_for_account(account_id)
    return NoteListResponse(
        owned=[_note_response(n) for n in listing.owned],
        shared=[
            SharedNoteResponse(
                **_note_response(s.note).model_dump(),
                level=s.level,
                owner_name=s.owner_name,
            )
            for s in listing.shared
        ],
    )


@router.post("", response_model=NoteResponse, status_code=201)
@limit_writes
async def create_note(
    request: Request,
    body: NoteCreateRequest,
    account_id: CurrentAccountId,
    documents: DocumentService = Depends(get_document_service),
):
    """Create a note owned by the caller."""
    note = await documents.create(account_id, NoteCreate(title=body.title, body=body.body))
    return _note_response(note)


@router.get("/{note_id}", response_model=NoteDetailResponse)
async def get_note(
    note_id: str,
    account_id: CurrentAccountId,
    documents: DocumentService = Depends(get_document_service),
    sharing: SharingService = Depends(get_sharing_service),
):
    """Return the note with the caller's level, its owner and collaborators."""
    access = await documents.get(note_id, account_id)
    listing = await sharing.list_collaborators(note_id, account_id)
    collaborators = _collaborators_response(listing)
    return NoteDetailResponse(
        **_note_response(access.note).model_dump(),
        level=access.level,
        owner=collaborators.owner,
        collaborators=collaborators.collaborators,
    )


@router.put("/{note_id}", response_model=NoteResponse)
@limit_writes
async def update_note(
    request: Request,
    note_id: str,
    body: NoteUpdateRequest,
    account_id: CurrentAccountId,
    documents: DocumentService = Depends(get_document_service),
):
    """Partially update a note (write access). Only fields present in the body change.

    The id "new" creates a note from the body instead.
    """
    patch = NotePatch.from_fields(body.model_dump(include=body.model_fields_set))
    if patch.is_empty() and note_id != NEW_NOTE_ID:
        raise ValidationException("No update data provided")
    return _note_response(await documents.update(note_id, account_id, patch))


@router.delete("/{note_id}", response_model=MessageResponse)
@limit_writes
async def archive_note(
    request: Request,
    note_id: str,
    account_id: CurrentAccountId,
    documents: DocumentService = Depends(get_document_service),
):
    """Archive a note (owner only). Archived notes disappear from listings."""
    await documents.archive(note_id, account_id)
    return MessageResponse(message="Note archived")


@router.delete("/{note_id}/permanent", response_model=MessageResponse)
@limit_writes
async def delete_note(
    request: Request,
    note_id: str,
    account_id: CurrentAccountId,
    documents: DocumentService = Depends(get_document_service),
):
    """Delete a note and all its permissions (owner only)."""
    await documents.hard_delete(note_id, account_id)
    return MessageResponse(message="Note deleted")


@router.post("/{note_id}/share", response_model=ShareResponse)
@limit_share
async def share_note(
    request: Request,
    note_id: str,
    body: ShareRequest,
    account_id: CurrentAccountId,
    sharing: SharingService = Depends(get_sharing_service),
):
    """Grant access by email (admin level). Unknown emails get a pending share."""
    result = await sharing.share(note_id, account_id, body.email, body.level)
    return ShareResponse(
        note_id=result.note_id,
        level=result.level,
        recipient_id=result.recipient.id,
        recipient_email=result.recipient.email,
        recipient_name=result.recipient.display_name,
        is_pending=result.recipient.is_pending,
    )


@router.delete("/{note_id}/share/{target_account_id}", response_model=MessageResponse)
@limit_share
async def revoke_share(
    request: Request,
    note_id: str,
    target_account_id: str,
    account_id: CurrentAccountId,
    sharing: SharingService = Depends(get_sharing_service),
):
    """Remove an account's access (admin level; the owner cannot be removed)."""
    await sharing.revoke(note_id, account_id, target_account_id)
    return MessageResponse(message="Access revoked")


@router.get("/{note_id}/collaborators", response_model=CollaboratorListResponse)
async def list_collaborators(
    note_id: str,
    account_id: CurrentAccountId,
    sharing: SharingService = Depends(get_sharing_service),
):
    """Return the owner and every collaborator of the note (any access level)."""
    return _collaborators_response(await sharing.list_collaborators(note_id, account_id))


@router.get("/{note_id}/versions", response_model=list[VersionResponse])
async def list_versions(
    note_id: str,
    account_id: CurrentAccountId,
    versions: VersionService = Depends(get_version_service),
):
    """Return the note's versions, newest first."""
    return [_version_response(v) for v in await versions.list(note_id, account_id)]


@router.get("/{note_id}/versions/{version_number}", response_model=VersionResponse)
async def get_version(
    note_id: str,
    version_number: int,
    account_id: CurrentAccountId,
    versions: VersionService = Depends(get_version_service),
):
    """Return one version by number."""
    return _version_response(await versions.get_by_number(note_id, account_id, version_number))
