"""Service interfaces (ports) for the application layer.

Protocols define contracts for external collaborators (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.account import VerifiedIdentity
    from app.domain.enums import AccessLevel


# Credential verifier interface
class ICredentialVerifier(Protocol):
    """Protocol for turning a bearer credential into a verified identity."""

    async def verify(self, token: str) -> VerifiedIdentity:
        """Return the identity; raise AuthenticationException when invalid."""


# Notification interface
class INotifier(Protocol):
    """Protocol for outbound notifications (share and welcome emails)."""

    async def notify_share(
        self,
        recipient_email: str,
        sender_name: str,
        note_title: str,
        note_id: str,
        level: AccessLevel,
    ) -> None:
        """Tell the recipient a note was shared with them."""

    async def notify_welcome(self, email: str, display_name: str) -> None:
        """Send the welcome message after registration."""
