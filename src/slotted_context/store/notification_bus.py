"""Ordered, fault-isolated fan-out of document changes to subscribers."""

from typing import Callable, List, Optional

from ..models.context_document import ContextDocument
from ..utils.logging import get_logger

logger = get_logger(__name__)

Subscriber = Callable[[ContextDocument], None]


class Subscription:
    """Handle returned by ``NotificationBus.subscribe``.

    Handles compare by identity, so subscribing the same callback twice yields
    two independent subscriptions.
    """

    def __init__(self, bus: "NotificationBus", callback: Subscriber):
        self._bus = bus
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        """Stop receiving notifications. Safe to call more than once."""
        self._bus.unsubscribe(self)

    def __call__(self) -> None:
        self.cancel()

    def __repr__(self) -> str:
        name = getattr(self.callback, "__qualname__", repr(self.callback))
        return f"<Subscription {name} active={self.active}>"


class NotificationBus:
    """
    Delivers the current context document to every subscriber on each change.

    Subscribers are called synchronously in registration order. Each call runs
    in its own failure boundary: an exception raised by one subscriber is
    logged and the remaining subscribers still receive the document.

    Example:
        ```python
        bus = NotificationBus()
        handle = bus.subscribe(lambda doc: print(doc.company.name))
        bus.publish(document)
        bus.unsubscribe(handle)
        ```
    """

    def __init__(self):
        self._subscriptions: List[Subscription] = []

    def subscribe(self, callback: Subscriber) -> Subscription:
        """
        Register a callback for future changes.

        The callback is not invoked with the current document; consumers read
        ``ContextStore.get_current()`` themselves when they start.

        Args:
            callback: Called with the new document after every change

        Returns:
            Subscription: Handle to pass to ``unsubscribe``
        """
        if not callable(callback):
            raise TypeError("Subscriber callback must be callable")
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        logger.debug(
            "Subscriber registered",
            extra={"subscription": repr(subscription), "subscribers": len(self._subscriptions)}
        )
        return subscription

    def unsubscribe(self, handle: Optional[Subscription]) -> None:
        """Remove a subscription. Unknown or already removed handles are ignored."""
        if handle is None or not handle.active:
            return
        handle.active = False
        self._subscriptions = [s for s in self._subscriptions if s is not handle]
        logger.debug(
            "Subscriber removed",
            extra={"subscription": repr(handle), "subscribers": len(self._subscriptions)}
        )

    def publish(self, document: ContextDocument) -> int:
        """
        Deliver ``document`` to all active subscribers.

        Returns:
            int: Number of subscribers whose callback completed without raising
        """
        delivered = 0
        # Subscribers may subscribe or unsubscribe during delivery
        for subscription in list(self._subscriptions):
            if not subscription.active:
                continue
            try:
                subscription.callback(document)
                delivered += 1
            except Exception as e:
                logger.error(
                    "Context subscriber failed",
                    extra={
                        "subscription": repr(subscription),
                        "error_type": type(e).__name__,
                        "error_message": str(e)
                    },
                    exc_info=True
                )
        return delivered

    def clear(self) -> None:
        """Drop every subscription."""
        for subscription in self._subscriptions:
            subscription.active = False
        self._subscriptions = []

    def __len__(self) -> int:
        return len(self._subscriptions)
