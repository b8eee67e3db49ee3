"""
The context store: sole owner of the current context document.

This module provides the ContextStore class which keeps the authoritative
in-memory snapshot of the context document, persists it through a
``StorageBackend`` and notifies subscribers after every successful change.
Onboarding steps, dashboards and AI collaborators share one store instance,
constructed explicitly and passed to them, instead of coordinating with each
other.

Every failing operation leaves the snapshot exactly as it was and notifies
nobody, so callers can simply retry.
"""

import asyncio
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from ..errors import FormatError, NoDocumentError, StoreDisposedError
from ..models.context_document import SCHEMA_VERSION, ContextDocument, Metadata, utcnow
from ..models.resources import ContextResource
from ..storage.base import StorageBackend
from ..utils.logging import get_logger
from .notification_bus import NotificationBus, Subscriber, Subscription
from .prompt_projection import render_prompt_context
from .resources import build_resources
from .serialization import dump_snapshot, parse_snapshot

logger = get_logger(__name__)

DEFAULT_STORAGE_KEY = "slotted_context"


class ContextStore:
    """
    Owner of the context document, its persistence and its change notifications.

    Attributes:
        storage (StorageBackend): Persistence backend holding the snapshot
        key (str): Storage key the snapshot is kept under
        bus (NotificationBus): Subscribers informed after each change

    Example:
        ```python
        async with ContextStore(FileStorage("./.slotted/storage.json")) as store:
            handle = store.subscribe(lambda doc: print(doc.metadata.updated_at))

            if store.get_current() is None:
                document = store.create_initial_document({"company": {"name": "Acme"}})
                await store.save(document)

            print(store.get_prompt_context())
            store.unsubscribe(handle)
        ```
    """

    def __init__(self, storage: StorageBackend, key: str = DEFAULT_STORAGE_KEY, bus: Optional[NotificationBus] = None):
        self.storage = storage
        self.key = key
        self.bus = bus or NotificationBus()
        self._current: Optional[ContextDocument] = None
        self._write_lock = asyncio.Lock()
        self._disposed = False

    # Lifecycle

    async def init(self) -> Optional[ContextDocument]:
        """Load the persisted document, if any. Load failures propagate to the caller."""
        self._ensure_open()
        logger.info("Initializing context store", extra={"backend": self.storage.name, "key": self.key})
        return await self.load()

    async def dispose(self) -> None:
        """Drop all subscribers and the in-memory snapshot, then close the backend."""
        if self._disposed:
            return
        self._disposed = True
        self.bus.clear()
        self._current = None
        await self.storage.close()
        logger.info("Context store disposed", extra={"backend": self.storage.name, "key": self.key})

    async def __aenter__(self) -> "ContextStore":
        try:
            await self.init()
        except Exception:
            await self.dispose()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.dispose()

    def _ensure_open(self) -> None:
        if self._disposed:
            raise StoreDisposedError("Context store has been disposed")

    # Reads

    def get_current(self) -> Optional[ContextDocument]:
        """
        Return the latest snapshot without any I/O.

        The returned document is shared with every other consumer. It is frozen;
        never mutate its lists in place. Build a new document and ``save`` it.
        """
        return self._current

    def has_document(self) -> bool:
        return self._current is not None

    async def load(self) -> Optional[ContextDocument]:
        """
        Read the persisted snapshot and make it current.

        Returns:
            Optional[ContextDocument]: The loaded document, or None when nothing
            is stored (the current snapshot is then left untouched)

        Raises:
            FormatError: If the stored snapshot is corrupt
            StorageError: If the backend cannot be read
        """
        self._ensure_open()
        raw = await self.storage.get(self.key)
        if raw is None:
            logger.info("No stored context found", extra={"key": self.key})
            return None

        try:
            document = parse_snapshot(raw)
        except FormatError as e:
            logger.error(
                "Failed to load context",
                extra={"key": self.key, "error_message": str(e), "details": e.details}
            )
            raise

        self._current = document
        logger.info("Context loaded", extra={"key": self.key, "company": document.company.name})
        self.bus.publish(document)
        return document

    # Writes

    async def save(self, document: ContextDocument) -> ContextDocument:
        """
        Replace the whole document, persist it and notify subscribers.

        ``metadata.updated_at`` is stamped with the save time, never earlier than
        the previous save. ``metadata.created_at`` keeps the value of the current
        document once one exists.

        Saves replace rather than merge: read ``get_current()`` immediately
        before building the next document, or a concurrent save from another
        consumer is silently discarded (last writer wins).

        Args:
            document (ContextDocument): The complete next document

        Returns:
            ContextDocument: The document as stored, with stamped metadata

        Raises:
            FormatError: If the document fails schema validation; nothing changes
            StorageError: If the backend rejects the write; nothing changes
        """
        return await self._commit(document, keep_created_at=True)

    async def import_snapshot(self, raw: str) -> ContextDocument:
        """
        Replace the current document with a serialized snapshot.

        The snapshot is validated completely before anything is written, then
        saved like any other document, created_at included.

        Raises:
            FormatError: If ``raw`` is not a valid snapshot; nothing changes
            StorageError: If the backend rejects the write; nothing changes
        """
        self._ensure_open()
        try:
            document = parse_snapshot(raw)
        except FormatError as e:
            logger.warning("Rejected context import", extra={"error_message": str(e)})
            raise
        stored = await self._commit(document, keep_created_at=False)
        logger.info("Context imported", extra={"key": self.key, "company": stored.company.name})
        return stored

    async def clear(self) -> None:
        """Remove the persisted snapshot and forget the current document."""
        self._ensure_open()
        async with self._write_lock:
            await self.storage.clear(self.key)
            self._current = None
        logger.info("Context cleared", extra={"key": self.key})

    async def _commit(self, document: ContextDocument, keep_created_at: bool) -> ContextDocument:
        self._ensure_open()
        if not isinstance(document, ContextDocument):
            raise TypeError(f"Expected a ContextDocument, got {type(document).__name__}")

        async with self._write_lock:
            previous = self._current
            now = utcnow()
            created_at = document.metadata.created_at
            if previous is not None:
                if keep_created_at:
                    created_at = previous.metadata.created_at
                now = max(now, previous.metadata.updated_at)

            metadata = document.metadata.model_copy(
                update={"created_at": created_at, "updated_at": now, "mcp_compatible": True}
            )
            stamped = self._validate(document.model_copy(update={"metadata": metadata}, deep=True))

            await self.storage.set(self.key, dump_snapshot(stamped))
            self._current = stamped

        logger.info(
            "Context saved",
            extra={"key": self.key, "company": stamped.company.name, "updated_at": now.isoformat()}
        )
        self.bus.publish(stamped)
        return stamped

    def _validate(self, document: ContextDocument) -> ContextDocument:
        # model_copy(update=...) skips validation; what is written must load back
        try:
            return ContextDocument.model_validate(document.model_dump(by_alias=True, warnings=False))
        except ValidationError as e:
            logger.warning(
                "Rejected invalid context document",
                extra={"key": self.key, "errors": e.error_count()}
            )
            raise FormatError(
                f"Document does not match the document schema ({e.error_count()} errors)",
                details=str(e)
            ) from e

    # Construction

    def create_initial_document(self, partial: Optional[Union[Mapping[str, Any], ContextDocument]] = None) -> ContextDocument:
        """
        Build a new document from onboarding data merged over the defaults.

        Sections and fields missing from ``partial`` take their documented
        defaults (brand colors, weekly cadence, 2000/280/500 length
        preferences). Metadata is always freshly stamped. Keys may use either
        snake_case attribute names or camelCase snapshot names.

        This is pure: nothing is saved and nobody is notified.

        Raises:
            FormatError: If ``partial`` contains invalid values
        """
        if isinstance(partial, ContextDocument):
            partial = partial.model_dump(by_alias=True, exclude_unset=True)
        data = {k: v for k, v in dict(partial or {}).items() if k != "metadata"}

        now = utcnow()
        data["metadata"] = Metadata(
            version=SCHEMA_VERSION, created_at=now, updated_at=now, mcp_compatible=True
        )
        try:
            return ContextDocument.model_validate(data)
        except ValidationError as e:
            raise FormatError(
                f"Onboarding data does not match the document schema ({e.error_count()} errors)",
                details=str(e)
            ) from e

    # Serialization and projections

    def export_snapshot(self) -> str:
        """
        Serialize the current document as canonical JSON.

        Raises:
            NoDocumentError: If no document has been loaded or saved
            StoreDisposedError: If the store has been disposed
        """
        self._ensure_open()
        if self._current is None:
            raise NoDocumentError("No context available to export")
        return dump_snapshot(self._current)

    def get_prompt_context(self) -> str:
        """Render the current document as plain text for AI prompts."""
        return render_prompt_context(self._current)

    def get_resources(self) -> List[ContextResource]:
        """Return URI-addressed views of the current document's sections."""
        return build_resources(self._current)

    # Notifications

    def subscribe(self, callback: Subscriber) -> Subscription:
        """Register ``callback`` for every future change. See ``NotificationBus.subscribe``."""
        self._ensure_open()
        return self.bus.subscribe(callback)

    def unsubscribe(self, handle: Subscription) -> None:
        self.bus.unsubscribe(handle)
