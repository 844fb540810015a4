"""Notification email templates: template key -> subject/body (Jinja)."""

from __future__ import annotations

from typing import Any

from jinja2 import Environment, StrictUndefined, Template

SHARE_TEMPLATE = "note_shared"
WELCOME_TEMPLATE = "welcome"

# Verb shown for each access level in share emails.
LEVEL_VERBS: dict[str, str] = {"read": "view", "write": "edit", "admin": "manage"}

_DEFAULT_TEMPLATES: dict[str, tuple[str, str]] = {
    SHARE_TEMPLATE: (
        "{{ sender_name }} shared a note with you",
        "{{ sender_name }} has shared \"{{ note_title }}\" with you and given you "
        "{{ level }} access to {{ verb }} it.\n\n"
        "Open the note: {{ note_url }}\n"
        "{% if level == 'admin' %}\nYou can also share the note and manage collaborators.\n{% endif %}",
    ),
    WELCOME_TEMPLATE: (
        "Welcome to {{ app_name }}!",
        "Hi {{ display_name }},\n\n"
        "Welcome to {{ app_name }}. Create notes, share them with granular "
        "permissions and browse their version history.\n\n"
        "Get started: {{ app_url }}\n",
    ),
}


class NotificationTemplateRenderer:
    """Renders subject and body for a notification template key."""

    def __init__(
        self,
        templates: dict[str, tuple[str, str]] | None = None,
    ) -> None:
        """Initialize with optional template dict; falls back to _DEFAULT_TEMPLATES."""
        self._templates = templates or _DEFAULT_TEMPLATES
        self._env = Environment(autoescape=False, undefined=StrictUndefined)
        self._compiled: dict[str, tuple[Template, Template]] = {}
        for key, (sub_str, body_str) in self._templates.items():
            self._compiled[key] = (
                self._env.from_string(sub_str),
                self._env.from_string(body_str),
            )

    def render(self, template_key: str, **context: Any) -> tuple[str, str]:
        """Render subject and body for the template key. Raises KeyError if key unknown."""
        if template_key not in self._compiled:
            raise KeyError(f"Unknown notification template: {template_key}")
        subject_tpl, body_tpl = self._compiled[template_key]
        return subject_tpl.render(**context), body_tpl.render(**context)
