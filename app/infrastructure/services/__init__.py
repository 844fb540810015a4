"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.notification_service import LogOnlyNotifier
from app.infrastructure.services.notification_templates import (
    NotificationTemplateRenderer,
)

__all__ = [
    "LogOnlyNotifier",
    "NotificationTemplateRenderer",
]
