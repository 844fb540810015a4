"""Firebase ID token verification (implements ICredentialVerifier).

Uses google-auth: the token signature is checked against Google's public
certificates and the audience must equal FIREBASE_PROJECT_ID. Verification
is blocking (certificate fetch), so it runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from google.auth import exceptions as google_auth_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from app.application.dtos.account import VerifiedIdentity
from app.domain.exceptions import AuthenticationException

logger = logging.getLogger(__name__)


def _verify_sync(token: str, project_id: str, request: google_requests.Request) -> dict[str, Any]:
    return id_token.verify_firebase_token(token, request, audience=project_id)


class FirebaseCredentialVerifier:
    """Verifies Firebase ID tokens for one project."""

    def __init__(self, project_id: str, request: google_requests.Request | None = None) -> None:
        self._project_id = project_id
        # Request caches the certificate fetch session across verifications.
        self._request = request or google_requests.Request()

    async def verify(self, token: str) -> VerifiedIdentity:
        """Return the identity in the token.

        Raises:
            AuthenticationException: Token missing, malformed, expired,
                for another project, or without an email claim.
        """
        if not token or not token.strip():
            raise AuthenticationException("Missing credential")
        try:
            claims = await asyncio.to_thread(
                _verify_sync, token.strip(), self._project_id, self._request
            )
        except (ValueError, google_auth_exceptions.GoogleAuthError) as e:
            logger.info("ID token rejected: %s", e)
            raise AuthenticationException("Invalid credential") from e
        if not claims:
            raise AuthenticationException("Invalid credential")
        subject_id = claims.get("user_id") or claims.get("sub")
        email = claims.get("email")
        if not subject_id or not email:
            raise AuthenticationException("Credential has no subject or email")
        return VerifiedIdentity(
            subject_id=subject_id,
            email=email,
            email_verified=bool(claims.get("email_verified", False)),
            name=claims.get("name"),
            picture=claims.get("picture"),
        )
