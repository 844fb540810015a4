"""Placeholder identities for recipients who have not registered yet.

A note shared with an unknown email is granted to a deterministic
placeholder id derived from that email, e.g. ``bob@x.com`` ->
``pending_bob_x_com``. When the recipient later signs in, their grants are
moved from the placeholder id to their real account id.

The reverse mapping is lossy: only the text after the last underscore is
treated as the domain, so ``pending_bob_x_com`` reads back as ``bob_x@com``.
Callers must not rely on reconstruct_email for anything but display.
"""

from __future__ import annotations

from app.domain.exceptions import InvalidEmailException

PLACEHOLDER_PREFIX = "pending_"


def normalize_email(email: str) -> str:
    """Lowercase and trim an email for comparison and id derivation."""
    return (email or "").strip().lower()


def derive_placeholder_id(email: str) -> str:
    """Return the placeholder account id for an email.

    Raises:
        InvalidEmailException: Email does not have exactly one '@' with a
            non-empty local part and domain.
    """
    normalized = normalize_email(email)
    parts = normalized.split("@")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise InvalidEmailException(email)
    local, domain = parts
    return f"{PLACEHOLDER_PREFIX}{local}_{domain.replace('.', '_')}"


def is_placeholder_id(account_id: str | None) -> bool:
    """Return True if the id has the placeholder shape."""
    return bool(account_id) and account_id.startswith(PLACEHOLDER_PREFIX)


def reconstruct_email(placeholder_id: str) -> str | None:
    """Best-effort inverse of derive_placeholder_id (see module docstring).

    Returns None when the id is not a placeholder or has no usable
    local-part/domain split.
    """
    if not is_placeholder_id(placeholder_id):
        return None
    rest = placeholder_id[len(PLACEHOLDER_PREFIX):]
    idx = rest.rfind("_")
    if idx <= 0:
        return None
    local, domain = rest[:idx], rest[idx + 1:]
    if not domain:
        return None
    return f"{local}@{domain.replace('_', '.')}"
