"""Users API: account search, public profiles and shared-note counts."""

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    CurrentAccountId,
    get_account_service,
    get_document_service,
)
from app.application.services.account_service import AccountService
from app.application.services.document_service import DocumentService
from app.core.config import get_settings
from app.core.limiter import limit_search
from app.domain.exceptions import AuthorizationException
from app.schemas.account import (
    AccountSearchItem,
    PublicProfileResponse,
    SharedNotesCountResponse,
)

router = APIRouter()


@router.get("", response_model=list[AccountSearchItem])
@limit_search
async def search_users(
    request: Request,
    account_id: CurrentAccountId,
    query: str = Query(..., description="Prefix of a display name or email"),
    limit: int | None = Query(None, ge=1),
    account_service: AccountService = Depends(get_account_service),
):
    """Prefix search over display names and emails, excluding the caller."""
    if limit is None:
        limit = get_settings().search_default_limit
    accounts = await account_service.search(query, account_id, limit)
    return [AccountSearchItem.model_validate(a) for a in accounts]


@router.get("/{user_id}", response_model=PublicProfileResponse)
async def get_user(
    user_id: str,
    account_id: CurrentAccountId,
    account_service: AccountService = Depends(get_account_service),
):
    """Return the public profile of any account, including pending ones."""
    return PublicProfileResponse.model_validate(
        await account_service.get_public_profile(user_id)
    )


@router.get("/{user_id}/shared-notes-count", response_model=SharedNotesCountResponse)
async def shared_notes_count(
    user_id: str,
    account_id: CurrentAccountId,
    documents: DocumentService = Depends(get_document_service),
):
    """Return how many notes are shared with the caller (own id only)."""
    if user_id != account_id:
        raise AuthorizationException(resource="account", action="read shared notes count")
    return SharedNotesCountResponse(count=await documents.count_shared_with(user_id))
