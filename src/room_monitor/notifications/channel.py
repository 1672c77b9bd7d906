from __future__ import annotations

import threading
from collections import defaultdict
from typing import Any, Callable

from ..common.logging import get_logger

logger = get_logger(__name__)

Handler = Callable[[str, dict], Any]


class NotificationChannel:
    """In-process publish/subscribe channel used by the service layer.

    Engine components never publish; orchestrators do after a write or a
    reconciliation run. A failing subscriber is logged and does not stop the
    delivery to the others.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def subscribe(self, topic: str, handler: Handler) -> Callable[[], None]:
        """Register ``handler``; returns a callable that unsubscribes it."""
        with self._lock:
            self._handlers[topic].append(handler)

        def unsubscribe() -> None:
            with self._lock:
                if handler in self._handlers[topic]:
                    self._handlers[topic].remove(handler)

        return unsubscribe

    def publish(self, topic: str, payload: dict | None = None) -> int:
        """Deliver to every subscriber of ``topic``; returns how many succeeded."""
        with self._lock:
            handlers = list(self._handlers.get(topic, ()))

        delivered = 0
        for handler in handlers:
            try:
                handler(topic, dict(payload or {}))
                delivered += 1
            except Exception:
                logger.exception("notification_handler_failed", topic=topic)
        return delivered
