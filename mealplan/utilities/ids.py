from uuid import uuid4


def generate_id() -> str:
    """Return a new opaque unique id."""
    return str(uuid4())
