"""AccessLevel ordering and parsing."""

import pytest

from app.domain.enums import AccessLevel


def test_values_in_rank_order() -> None:
    assert AccessLevel.values() == ["read", "write", "admin"]


@pytest.mark.parametrize(
    ("level", "required", "expected"),
    [
        (AccessLevel.ADMIN, AccessLevel.READ, True),
        (AccessLevel.ADMIN, AccessLevel.ADMIN, True),
        (AccessLevel.WRITE, AccessLevel.READ, True),
        (AccessLevel.WRITE, AccessLevel.ADMIN, False),
        (AccessLevel.READ, AccessLevel.WRITE, False),
    ],
)
def test_allows(level: AccessLevel, required: AccessLevel, expected: bool) -> None:
    assert level.allows(required) is expected


def test_parse_accepts_values_and_members() -> None:
    assert AccessLevel.parse("write") is AccessLevel.WRITE
    assert AccessLevel.parse(AccessLevel.ADMIN) is AccessLevel.ADMIN


@pytest.mark.parametrize("value", [None, "", "owner", "ADMIN"])
def test_parse_unknown_returns_none(value) -> None:
    assert AccessLevel.parse(value) is None


def test_access_level_is_str() -> None:
    """Stored and serialized as its plain value."""
    assert AccessLevel.READ == "read"
