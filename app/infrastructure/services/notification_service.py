"""Share and welcome notifications: log-only sender (implements INotifier)."""

from __future__ import annotations

import logging

from app.domain.enums import AccessLevel
from app.infrastructure.services.notification_templates import (
    LEVEL_VERBS,
    SHARE_TEMPLATE,
    WELCOME_TEMPLATE,
    NotificationTemplateRenderer,
)
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class LogOnlyNotifier:
    """INotifier implementation that logs instead of sending email.

    Use when no mail backend is configured. Production can swap in an SMTP
    or queue-based implementation behind the same two methods.
    """

    def __init__(
        self,
        frontend_url: str,
        app_name: str,
        renderer: NotificationTemplateRenderer | None = None,
    ) -> None:
        self._frontend_url = frontend_url.rstrip("/")
        self._app_name = app_name
        self._renderer = renderer or NotificationTemplateRenderer()

    def note_url(self, note_id: str) -> str:
        return f"{self._frontend_url}/notes/{note_id}"

    async def notify_share(
        self,
        recipient_email: str,
        sender_name: str,
        note_title: str,
        note_id: str,
        level: AccessLevel,
    ) -> None:
        """Log the share notification; no actual email sent."""
        subject, body = self._renderer.render(
            SHARE_TEMPLATE,
            sender_name=sender_name,
            note_title=note_title,
            level=level.value,
            verb=LEVEL_VERBS.get(level.value, "access"),
            note_url=self.note_url(note_id),
        )
        self._send(recipient_email, subject, body)

    async def notify_welcome(self, email: str, display_name: str) -> None:
        """Log the welcome notification; no actual email sent."""
        subject, body = self._renderer.render(
            WELCOME_TEMPLATE,
            display_name=display_name,
            app_name=self._app_name,
            app_url=self._frontend_url,
        )
        self._send(email, subject, body)

    def _send(self, to_email: str, subject: str, body: str) -> None:
        logger.info("Notify: would send to %s (subject=%r)", to_email, subject[:80])
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Notify body at %s (first 500 chars): %s", utc_now().isoformat(), body[:500])
