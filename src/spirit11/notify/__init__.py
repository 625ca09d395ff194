"""Best-effort push of team updates to connected clients."""

from .registry import Notifier, Subscription, UpdateRegistry, format_event

__all__ = ["Notifier", "Subscription", "UpdateRegistry", "format_event"]
