"""Domain exceptions for the notes application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class NotesException(Exception):
    """Base exception for all notes application errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body: error code, message and details."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(NotesException):
    """Raised when input validation fails (e.g. blank id, unknown access level)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidEmailException(ValidationException):
    """Raised when an email cannot be turned into a placeholder identity."""

    def __init__(self, email: str) -> None:
        super().__init__(f"Invalid email address: {email!r}", field="email")
        self.error_code = "INVALID_EMAIL"


class AuthenticationException(NotesException):
    """Raised when the bearer credential is missing, expired or invalid."""

    def __init__(self, message: str = "Authentication failed") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(NotesException):
    """Raised when the account lacks the access level required for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'note').
            action: Optional action that was attempted (e.g. 'update', 'share').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class SelfShareException(AuthorizationException):
    """Raised when a caller tries to share a note with themselves."""

    def __init__(self, note_id: str) -> None:
        super().__init__(message="Cannot share a note with yourself")
        self.error_code = "SELF_SHARE"
        self.details = {"note_id": note_id}


class OwnerProtectedException(AuthorizationException):
    """Raised when a share or revoke targets the note owner's implicit access."""

    def __init__(self, note_id: str, message: str = "Cannot change the owner's access") -> None:
        super().__init__(message=message)
        self.error_code = "OWNER_PROTECTED"
        self.details = {"note_id": note_id}


class ResourceNotFoundException(NotesException):
    """Raised when a requested resource is not found (or is not visible to the caller)."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'note', 'account', 'version').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class StoreNotConfiguredException(NotesException):
    """Raised when an operation needs Firestore but no client was initialized."""

    def __init__(self) -> None:
        super().__init__(
            message="Firestore is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
