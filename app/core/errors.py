class ContactServiceError(Exception):
    """Base class for errors raised below the HTTP layer."""


class StorageError(ContactServiceError):
    """The record store could not complete a read or write."""


class NotFound(ContactServiceError):
    pass


class InvalidToken(ContactServiceError):
    """Bearer token failed signature, expiry or claim checks."""


class ExternalSideEffectError(ContactServiceError):
    """The spreadsheet append failed. Logged, never returned to callers."""
