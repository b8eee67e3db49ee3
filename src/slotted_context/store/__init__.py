"""Context store, notification bus and document projections."""

from .context_store import DEFAULT_STORAGE_KEY, ContextStore
from .notification_bus import NotificationBus, Subscription
from .prompt_projection import NO_CONTEXT_PLACEHOLDER, render_prompt_context
from .resources import build_resources
from .serialization import dump_snapshot, parse_snapshot

__all__ = [
    "ContextStore", "DEFAULT_STORAGE_KEY",
    "NotificationBus", "Subscription",
    "render_prompt_context", "NO_CONTEXT_PLACEHOLDER",
    "build_resources", "dump_snapshot", "parse_snapshot",
]
