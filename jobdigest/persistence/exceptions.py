"""Persistence layer exceptions.

All file-store exceptions inherit from PersistenceError so callers can catch
them with a single except clause.
"""


class PersistenceError(Exception):
    """Base exception for all persistence layer errors."""

    pass


class StoreWriteError(PersistenceError):
    """Raised when a JSON document cannot be written.

    Examples:
    - Data directory cannot be created
    - File permissions incorrect
    - Value not serializable to JSON
    """

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path
