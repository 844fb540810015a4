"""Security: bearer credential verification."""

from app.infrastructure.security.firebase_verifier import FirebaseCredentialVerifier

__all__ = ["FirebaseCredentialVerifier"]
