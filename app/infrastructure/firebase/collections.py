"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when you first write a document. Use these constants so collection names
stay consistent and act as the single source of truth for the "schema".

Example:
    from app.infrastructure.firebase.client import get_firestore_client
    from app.infrastructure.firebase.collections import COLLECTION_NOTES

    db = get_firestore_client()
    if db:
        snapshot = await db.collection(COLLECTION_NOTES).document(note_id).get()
"""

COLLECTION_ACCOUNTS = "accounts"
COLLECTION_NOTES = "notes"
# Document id is "{note_id}_{account_id}" so each pair has at most one row.
COLLECTION_NOTE_PERMISSIONS = "note_permissions"
COLLECTION_NOTE_VERSIONS = "note_versions"


def permission_doc_id(note_id: str, account_id: str) -> str:
    """Return the deterministic permission document id for a (note, account) pair."""
    return f"{note_id}_{account_id}"
