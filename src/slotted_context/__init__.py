"""
Slotted Context - the shared company context store behind the Slotted marketing app.
"""

from .errors import ContextStoreError, FormatError, NoDocumentError, StorageError, StoreDisposedError
from .models.context_document import ContextDocument
from .store.context_store import ContextStore
from .store.notification_bus import NotificationBus, Subscription

__version__ = "0.1.0"

__all__ = [
    "ContextStore", "ContextDocument", "NotificationBus", "Subscription",
    "ContextStoreError", "FormatError", "NoDocumentError", "StorageError", "StoreDisposedError",
]

