"""Account use cases: registration, auto-provisioning, profile and search."""

from __future__ import annotations

import logging

from app.application.dtos.account import (
    AccountCreate,
    AccountProfilePatch,
    AccountResult,
    VerifiedIdentity,
)
from app.application.interfaces.repositories import IAccountRepository
from app.application.interfaces.services import INotifier
from app.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)


class AccountService:
    """Account lifecycle around a verified identity."""

    def __init__(
        self,
        account_repo: IAccountRepository,
        notifier: INotifier | None = None,
        search_min_length: int = 3,
        search_max_limit: int = 50,
    ) -> None:
        self._account_repo = account_repo
        self._notifier = notifier
        self._search_min_length = search_min_length
        self._search_max_limit = search_max_limit

    async def register(
        self,
        identity: VerifiedIdentity,
        display_name: str | None = None,
        avatar_ref: str | None = None,
    ) -> AccountResult:
        """Create the caller's account, or refresh it when it already exists.

        The welcome notification goes out only on first creation and never
        fails the registration.
        """
        existed = await self._account_repo.get_persisted(identity.subject_id) is not None
        account = await self._account_repo.create(
            AccountCreate(
                id=identity.subject_id,
                email=identity.email,
                display_name=display_name or identity.name,
                avatar_ref=avatar_ref or identity.picture,
            )
        )
        if not existed:
            logger.info("Registered account %s", account.id)
            await self._welcome(account)
        return account

    async def ensure_provisioned(self, identity: VerifiedIdentity) -> None:
        """Create the account on first authenticated request.

        Failures are logged and swallowed: authentication already succeeded
        and must not be blocked by provisioning.
        """
        try:
            if await self._account_repo.get_persisted(identity.subject_id) is not None:
                return
            account = await self._account_repo.create(
                AccountCreate(
                    id=identity.subject_id,
                    email=identity.email,
                    display_name=identity.name,
                    avatar_ref=identity.picture,
                )
            )
            logger.info("Auto-provisioned account %s", account.id)
            await self._welcome(account)
        except Exception:
            logger.exception("Auto-provisioning failed for %s", identity.subject_id)

    async def _welcome(self, account: AccountResult) -> None:
        if self._notifier is None:
            return
        try:
            await self._notifier.notify_welcome(account.email, account.display_name)
        except Exception:
            logger.exception("Welcome notification to %s failed", account.email)

    async def get_profile(self, account_id: str) -> AccountResult:
        """Return the caller's account."""
        account = await self._account_repo.get_by_id(account_id)
        if account is None:
            raise ResourceNotFoundException("account", account_id)
        return account

    async def update_profile(
        self, account_id: str, patch: AccountProfilePatch
    ) -> AccountResult:
        """Update display name and/or avatar."""
        if patch.display_name is None and patch.avatar_ref is None:
            raise ValidationException("At least one of display_name or avatar_ref is required")
        if patch.display_name is not None and not patch.display_name.strip():
            raise ValidationException("Display name must not be blank", field="display_name")
        return await self._account_repo.update_profile(account_id, patch)

    async def get_public_profile(self, account_id: str) -> AccountResult:
        """Return any account (including placeholders) by id."""
        account = await self._account_repo.get_by_id(account_id)
        if account is None:
            raise ResourceNotFoundException("account", account_id)
        return account

    async def search(self, query: str, caller_id: str, limit: int) -> list[AccountResult]:
        """Prefix search excluding the caller.

        Raises:
            ValidationException: Query shorter than the minimum length.
        """
        needle = (query or "").strip()
        if len(needle) < self._search_min_length:
            raise ValidationException(
                f"Search query must be at least {self._search_min_length} characters long",
                field="query",
            )
        limit = max(1, min(limit, self._search_max_limit))
        return await self._account_repo.search(needle, caller_id, limit)
