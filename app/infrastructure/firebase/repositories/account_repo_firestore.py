"""Firestore-backed account repository (implements IAccountRepository)."""

from __future__ import annotations

import logging

from app.application.dtos.account import (
    AccountCreate,
    AccountProfilePatch,
    AccountResult,
)
from app.application.services.identity_resolver import (
    derive_placeholder_id,
    is_placeholder_id,
    normalize_email,
    reconstruct_email,
)
from app.domain.exceptions import (
    InvalidEmailException,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.collections import COLLECTION_ACCOUNTS
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

# Highest BMP private-use code point: upper bound of a string prefix range.
_PREFIX_END = "\uf8ff"


def _default_display_name(email: str) -> str:
    return email.split("@")[0]


class FirestoreAccountRepository:
    """Account repository using Firestore.

    Placeholder accounts created by sharing are stored like real ones with
    is_pending=True. Lookups by a placeholder-shaped id with no record
    return a transient placeholder built from the id.
    """

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_ACCOUNTS)

    def _to_result(self, doc_id: str, data: dict) -> AccountResult:
        email = data.get("email", "")
        return AccountResult(
            id=doc_id,
            email=email,
            display_name=data.get("display_name") or _default_display_name(email),
            avatar_ref=data.get("avatar_ref"),
            is_pending=data.get("is_pending", False),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    async def create(self, data: AccountCreate) -> AccountResult:
        """Create the account, or refresh display name/avatar if the id exists.

        Creating a real account deletes the persisted placeholder for the
        same email in the same batch, so stored emails stay unique.
        Permission rows stay on the placeholder id until migrated.
        """
        if not data.id or not data.id.strip():
            raise ValidationException("Account id must not be empty", field="id")
        if not data.email or not data.email.strip():
            raise ValidationException("Account email must not be empty", field="email")

        now = utc_now()
        display_name = data.display_name or _default_display_name(data.email)
        ref = self._coll.document(data.id)
        existing = await ref.get()
        if existing is not None:
            await ref.update({
                "display_name": display_name,
                "display_name_lower": display_name.lower(),
                "avatar_ref": data.avatar_ref,
                "updated_at": now,
            })
            logger.debug("Account %s already exists; profile refreshed", data.id)
            refreshed = await ref.get()
            return self._to_result(data.id, refreshed.to_dict() if refreshed else existing.to_dict())

        record = {
            "email": data.email,
            "email_normalized": normalize_email(data.email),
            "display_name": display_name,
            "display_name_lower": display_name.lower(),
            "avatar_ref": data.avatar_ref,
            "is_pending": data.is_pending,
            "created_at": now,
            "updated_at": now,
        }
        writes = [{"path": f"{COLLECTION_ACCOUNTS}/{data.id}", "data": record}]
        placeholder_id = self._placeholder_for(data)
        if placeholder_id is not None:
            placeholder = await self._coll.document(placeholder_id).get()
            if placeholder is not None:
                writes.append({"path": f"{COLLECTION_ACCOUNTS}/{placeholder_id}", "delete": True})
                logger.info(
                    "Account %s replaces placeholder %s", data.id, placeholder_id
                )
        await self._client.batch_write(writes)
        return self._to_result(data.id, record)

    @staticmethod
    def _placeholder_for(data: AccountCreate) -> str | None:
        if data.is_pending or is_placeholder_id(data.id):
            return None
        try:
            return derive_placeholder_id(data.email)
        except InvalidEmailException:
            return None

    async def get_persisted(self, account_id: str) -> AccountResult | None:
        """Return the stored account only (no placeholder synthesis)."""
        if not account_id or not account_id.strip():
            return None
        doc = await self._coll.document(account_id).get()
        if not doc:
            return None
        return self._to_result(doc.id, doc.to_dict())

    async def get_by_id(self, account_id: str) -> AccountResult | None:
        """Return account by ID; synthesize a placeholder for unregistered pending ids."""
        found = await self.get_persisted(account_id)
        if found is not None:
            return found
        email = reconstruct_email(account_id) if account_id else None
        if email is None:
            return None
        return AccountResult(
            id=account_id,
            email=email,
            display_name=_default_display_name(email),
            avatar_ref=None,
            is_pending=True,
            created_at=utc_now(),
        )

    async def get_by_email(self, email: str) -> AccountResult | None:
        """Return account by email, case-insensitively.

        Tries the indexed normalized field first, then scans every account
        to catch records written with a different casing.
        """
        normalized = normalize_email(email)
        if not normalized:
            return None
        q = self._coll.where("email_normalized", "==", normalized).limit(1)
        async for snapshot in q.stream():
            return self._to_result(snapshot.id, snapshot.to_dict())
        async for snapshot in self._coll.stream():
            data = snapshot.to_dict()
            if (data.get("email") or "").strip().lower() == normalized:
                return self._to_result(snapshot.id, data)
        return None

    async def search(
        self, query: str, exclude_id: str | None, limit: int
    ) -> list[AccountResult]:
        """Case-insensitive prefix search over display name or email."""
        needle = (query or "").strip().lower()
        if not needle or limit <= 0:
            return []
        results: list[AccountResult] = []
        seen: set[str] = set()
        for field in ("display_name_lower", "email_normalized"):
            q = (
                self._coll.where(field, ">=", needle)
                .where(field, "<=", needle + _PREFIX_END)
                .limit(limit)
            )
            async for snapshot in q.stream():
                if snapshot.id == exclude_id or snapshot.id in seen:
                    continue
                seen.add(snapshot.id)
                results.append(self._to_result(snapshot.id, snapshot.to_dict()))
        return results[:limit]

    async def update_profile(
        self, account_id: str, patch: AccountProfilePatch
    ) -> AccountResult:
        """Apply a partial profile update."""
        current = await self.get_persisted(account_id)
        if current is None:
            raise ResourceNotFoundException("account", account_id)
        updates: dict = {"updated_at": utc_now()}
        if patch.display_name is not None:
            updates["display_name"] = patch.display_name
            updates["display_name_lower"] = patch.display_name.lower()
        if patch.avatar_ref is not None:
            updates["avatar_ref"] = patch.avatar_ref
        ref = self._coll.document(account_id)
        await ref.update(updates)
        doc = await ref.get()
        if doc is None:
            raise ResourceNotFoundException("account", account_id)
        return self._to_result(doc.id, doc.to_dict())
