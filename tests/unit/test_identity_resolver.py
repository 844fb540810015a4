"""Placeholder id derivation and the lossy reverse mapping."""

import pytest

from app.application.services.identity_resolver import (
    derive_placeholder_id,
    is_placeholder_id,
    normalize_email,
    reconstruct_email,
)
from app.domain.exceptions import InvalidEmailException


def test_normalize_email_trims_and_lowercases() -> None:
    assert normalize_email("  Bob@X.COM ") == "bob@x.com"


def test_derive_placeholder_id_replaces_dots_in_domain() -> None:
    assert derive_placeholder_id("bob@x.com") == "pending_bob_x_com"


def test_derive_placeholder_id_is_case_insensitive() -> None:
    """Differently cased emails map to the same placeholder."""
    assert derive_placeholder_id("Bob@X.com") == derive_placeholder_id("bob@x.COM")


def test_derive_placeholder_id_keeps_dots_in_local_part() -> None:
    assert derive_placeholder_id("first.last@mail.example.org") == (
        "pending_first.last_mail_example_org"
    )


@pytest.mark.parametrize("email", ["", "bob", "@x.com", "bob@", "a@b@c.com"])
def test_derive_placeholder_id_rejects_malformed_email(email: str) -> None:
    with pytest.raises(InvalidEmailException) as exc_info:
        derive_placeholder_id(email)
    assert exc_info.value.error_code == "INVALID_EMAIL"


def test_is_placeholder_id() -> None:
    assert is_placeholder_id("pending_bob_x_com") is True
    assert is_placeholder_id("uid-123") is False
    assert is_placeholder_id("") is False
    assert is_placeholder_id(None) is False


def test_reconstruct_email_single_label_domain() -> None:
    assert reconstruct_email("pending_bob_localhost") == "bob@localhost"


def test_reconstruct_email_is_lossy_for_dotted_domains() -> None:
    """Only the text after the last underscore is taken as the domain."""
    assert reconstruct_email("pending_bob_x_com") == "bob_x@com"


@pytest.mark.parametrize(
    "account_id",
    ["uid-123", "pending_", "pending_nounderscore", "pending__com", "pending_bob_"],
)
def test_reconstruct_email_returns_none_without_usable_split(account_id: str) -> None:
    assert reconstruct_email(account_id) is None
