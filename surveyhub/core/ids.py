import uuid


def new_id() -> str:
    """Return a globally unique, opaque document id."""
    return uuid.uuid4().hex
