"""Domain enumerations for the notes application.

Enums represent fixed sets of domain values (e.g. access levels).
"""

from enum import Enum


class AccessLevel(str, Enum):
    """Per-note access level, ordered read < write < admin.

    Owners always resolve to ADMIN; other accounts get the level stored on
    their permission row.
    """

    READ = "read"
    WRITE = "write"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        """Position in the read < write < admin ordering."""
        return _RANK[self]

    def allows(self, required: "AccessLevel") -> bool:
        """Return True when this level grants at least `required`."""
        return self.rank >= required.rank

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid level values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [level.value for level in cls]

    @classmethod
    def parse(cls, value: "str | AccessLevel | None") -> "AccessLevel | None":
        """Return the level for a stored or submitted value, None when unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


_RANK = {AccessLevel.READ: 1, AccessLevel.WRITE: 2, AccessLevel.ADMIN: 3}
