"""Account and auth API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Request body for POST /auth/register (identity comes from the bearer token)."""

    display_name: str | None = Field(default=None, max_length=200)
    avatar_ref: str | None = Field(default=None, max_length=2048)


class ProfileUpdateRequest(BaseModel):
    """Request body for PUT /auth/profile (partial)."""

    display_name: str | None = Field(default=None, min_length=1, max_length=200)
    avatar_ref: str | None = Field(default=None, max_length=2048)


class AccountResponse(BaseModel):
    """Full account (returned to the account itself)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    display_name: str
    avatar_ref: str | None = None
    is_pending: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PublicProfileResponse(BaseModel):
    """Public fields of any account."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    display_name: str
    avatar_ref: str | None = None
    is_pending: bool = False


class AccountSearchItem(BaseModel):
    """Search hit (email shown so the caller can pick a share recipient)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    display_name: str
    avatar_ref: str | None = None
    is_pending: bool = False


class VerifyTokenResponse(BaseModel):
    """Response for GET /auth/verify-token (always 200)."""

    valid: bool
    error: str | None = None


class SharedNotesCountResponse(BaseModel):
    """Response for GET /users/{id}/shared-notes-count."""

    count: int
