from uuid import uuid4


def new_id():
    """Opaque 32-char identifier for customers and transactions."""
    return uuid4().hex
