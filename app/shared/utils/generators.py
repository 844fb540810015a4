"""Document id generation for notes, versions and auto-id Firestore writes."""

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new CUID2 string, safe to use as a Firestore document id."""
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(f"cuid generator returned {type(result).__name__}")
    return result
