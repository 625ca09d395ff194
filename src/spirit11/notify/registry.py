"""Client registry for server-sent team updates.

The registry is created per application and handed to the ledger, so the
ledger can be exercised with any object that has ``notify_user``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Mapping, Protocol
from uuid import uuid4


logger = logging.getLogger(__name__)

CONNECTED_EVENT = "event: connected\ndata: Connected to server\n\n"


class Notifier(Protocol):
    def notify_user(self, user_id: str, event_type: str, payload: Mapping[str, Any]) -> None: ...


def format_event(event_type: str, payload: Mapping[str, Any]) -> str:
    return f"data: {json.dumps({'type': event_type, 'data': dict(payload)})}\n\n"


@dataclass
class Subscription:
    user_id: str
    loop: asyncio.AbstractEventLoop
    queue: asyncio.Queue = field(default_factory=lambda: asyncio.Queue(maxsize=100))
    client_id: str = field(default_factory=lambda: uuid4().hex)


class UpdateRegistry:
    """Tracks live subscriptions and fans messages out to them."""

    def __init__(self, *, max_queue: int = 100):
        self._max_queue = max_queue
        self._lock = threading.Lock()
        self._clients: dict[str, Subscription] = {}

    def register(self, user_id: str) -> Subscription:
        """Open a subscription bound to the running event loop."""

        loop = asyncio.get_running_loop()
        subscription = Subscription(
            user_id=user_id,
            loop=loop,
            queue=asyncio.Queue(maxsize=self._max_queue),
        )
        with self._lock:
            self._clients[subscription.client_id] = subscription
        logger.info("Client %s subscribed for user %s", subscription.client_id, user_id)
        return subscription

    def unregister(self, client_id: str) -> None:
        with self._lock:
            removed = self._clients.pop(client_id, None)
        if removed is not None:
            logger.info("Client %s unsubscribed", client_id)

    def subscriber_count(self, user_id: str | None = None) -> int:
        with self._lock:
            if user_id is None:
                return len(self._clients)
            return sum(1 for sub in self._clients.values() if sub.user_id == user_id)

    def publish(self, user_id: str, event_type: str, payload: Mapping[str, Any]) -> int:
        """Queue an event for every subscription of ``user_id``.

        Returns the number of subscriptions the event was handed to.
        """

        with self._lock:
            targets = [sub for sub in self._clients.values() if sub.user_id == user_id]
        return self._dispatch(targets, format_event(event_type, payload))

    def broadcast(self, event_type: str, payload: Mapping[str, Any]) -> int:
        with self._lock:
            targets = list(self._clients.values())
        return self._dispatch(targets, format_event(event_type, payload))

    # Ledger-facing name.
    def notify_user(self, user_id: str, event_type: str, payload: Mapping[str, Any]) -> None:
        self.publish(user_id, event_type, payload)

    async def stream(self, subscription: Subscription) -> AsyncIterator[str]:
        try:
            yield CONNECTED_EVENT
            while True:
                message = await subscription.queue.get()
                yield message
        finally:
            self.unregister(subscription.client_id)

    def _dispatch(self, targets: list[Subscription], message: str) -> int:
        delivered = 0
        for sub in targets:
            try:
                sub.loop.call_soon_threadsafe(self._deliver, sub, message)
            except RuntimeError:
                # Loop already closed; the client is gone.
                self.unregister(sub.client_id)
                continue
            delivered += 1
        return delivered

    @staticmethod
    def _deliver(subscription: Subscription, message: str) -> None:
        try:
            subscription.queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning("Dropping update for slow client %s", subscription.client_id)
