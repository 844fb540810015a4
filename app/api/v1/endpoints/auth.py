"""Auth API: registration, own profile and token verification.

Identity comes from the Firebase ID token in the Authorization header; the
account id is the token subject. Uses only injected dependencies.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials

from app.api.v1.dependencies import (
    CurrentAccountId,
    http_bearer,
    get_account_service,
    get_credential_verifier,
    get_verified_identity,
)
from app.application.dtos.account import AccountProfilePatch, VerifiedIdentity
from app.application.interfaces.services import ICredentialVerifier
from app.application.services.account_service import AccountService
from app.core.limiter import limit_writes
from app.domain.exceptions import AuthenticationException
from app.schemas.account import (
    AccountResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    VerifyTokenResponse,
)

router = APIRouter()


@router.post("/register", response_model=AccountResponse, status_code=201)
@limit_writes
async def register(
    request: Request,
    body: RegisterRequest,
    identity: Annotated[VerifiedIdentity, Depends(get_verified_identity)],
    account_service: AccountService = Depends(get_account_service),
):
    """Create the caller's account (or refresh name/avatar if it exists)."""
    account = await account_service.register(
        identity, display_name=body.display_name, avatar_ref=body.avatar_ref
    )
    return AccountResponse.model_validate(account)


@router.get("/profile", response_model=AccountResponse)
async def get_profile(
    account_id: CurrentAccountId,
    account_service: AccountService = Depends(get_account_service),
):
    """Return the caller's account."""
    return AccountResponse.model_validate(await account_service.get_profile(account_id))


@router.put("/profile", response_model=AccountResponse)
@limit_writes
async def update_profile(
    request: Request,
    body: ProfileUpdateRequest,
    account_id: CurrentAccountId,
    account_service: AccountService = Depends(get_account_service),
):
    """Update display name and/or avatar of the caller."""
    account = await account_service.update_profile(
        account_id,
        AccountProfilePatch(display_name=body.display_name, avatar_ref=body.avatar_ref),
    )
    return AccountResponse.model_validate(account)


@router.get("/verify-token", response_model=VerifyTokenResponse)
async def verify_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(http_bearer)],
    verifier: Annotated[ICredentialVerifier, Depends(get_credential_verifier)],
):
    """Report whether the bearer token is valid. Always 200."""
    if credentials is None or not credentials.credentials:
        return VerifyTokenResponse(valid=False, error="No token provided")
    try:
        await verifier.verify(credentials.credentials)
    except AuthenticationException as e:
        return VerifyTokenResponse(valid=False, error=e.message)
    return VerifyTokenResponse(valid=True)
