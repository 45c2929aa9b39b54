"""In-process notification broadcaster.

Scanner errors and cleanup summaries are pushed to whoever subscribed
(the CLI logs them, a web layer could forward them to clients). Delivery is
fire-and-forget: a failing handler is logged and never reaches the scan.
"""

from __future__ import annotations

import threading
import uuid
from typing import Callable, List, Optional

from pydantic import BaseModel, Field

from .logging_config import get_logger

logger = get_logger(__name__)

NotificationHandler = Callable[["Notification"], None]


class Notification(BaseModel):
    key: str = Field(default_factory=lambda: uuid.uuid4().hex)
    type: str = "message"
    header: str
    content: str
    negative: bool = False
    positive: bool = False
    timeout: Optional[int] = None  # milliseconds before the client dismisses it


class Notifier:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handlers: List[NotificationHandler] = []

    def subscribe(self, handler: NotificationHandler) -> Callable[[], None]:
        """Register handler; returns a function that unsubscribes it."""
        with self._lock:
            self._handlers.append(handler)

        def unsubscribe() -> None:
            with self._lock:
                if handler in self._handlers:
                    self._handlers.remove(handler)

        return unsubscribe

    def broadcast(self, notification: Notification) -> None:
        with self._lock:
            handlers = list(self._handlers)

        for handler in handlers:
            try:
                handler(notification)
            except Exception as exc:
                logger.error(f"Notification handler failed for '{notification.header}': {exc}")

    def scanner_error(self, message: str) -> None:
        """Log an error and broadcast it as a negative "Scanner error" message."""
        logger.error(message)
        self.broadcast(Notification(header="Scanner error", content=message, negative=True))
