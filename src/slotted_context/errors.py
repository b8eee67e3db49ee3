"""Exception hierarchy for the context store.

Every failure the store reports to its consumers derives from
``ContextStoreError`` so callers can catch the whole family at once. The store
guarantees its in-memory snapshot is unchanged whenever one of these is raised,
so retrying the failed call is always safe.
"""

from typing import Optional


class ContextStoreError(Exception):
    """Base class for all context store failures."""


class FormatError(ContextStoreError):
    """A stored or imported snapshot could not be parsed into a context document."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.details = details


class StorageError(ContextStoreError):
    """The persistence backend was unreachable or rejected a read or write."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class NoDocumentError(ContextStoreError):
    """An operation needed a current document but onboarding has not produced one."""


class StoreDisposedError(ContextStoreError):
    """The store was used after ``dispose()``."""
