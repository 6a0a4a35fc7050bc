class InvalidInputError(Exception):
    """Raise to map to HTTP 400 (missing or out-of-range request field)."""


class InvalidStateError(Exception):
    """Raise to map to HTTP 400 (operation incompatible with the lock state)."""
