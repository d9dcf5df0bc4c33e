"""Entry source errors."""


class SourceError(Exception):
    """Raised when an entry source cannot be opened or read."""
