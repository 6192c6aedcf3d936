"""Notification channel between the form flow and the presentation layer.

The channel provides:
- Typed success/error notifications (the "toast" the operator sees)
- Handler registration with kind filtering
- Error isolation (handler failures don't break other handlers)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    """Notification kinds understood by the presentation layer."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A message for the operator."""

    kind: NotificationKind
    text: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def title(self) -> str:
        return "Success" if self.kind == NotificationKind.SUCCESS else "Error"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "title": self.title,
            "text": self.text,
            "created_at": self.created_at.isoformat(),
        }


NotificationHandler = Callable[[Notification], None]


@dataclass
class _Registration:
    handler: NotificationHandler
    kinds: set[NotificationKind] | None  # None = all kinds


class NotificationChannel:
    """Publishes notifications to registered handlers.

    Usage:
        channel = NotificationChannel()
        channel.subscribe(show_toast)
        channel.subscribe(page_oncall, kinds=[NotificationKind.ERROR])

        channel.error("network down")
    """

    def __init__(self) -> None:
        self._handlers: list[_Registration] = []

    def subscribe(
        self,
        handler: NotificationHandler,
        kinds: list[NotificationKind] | None = None,
    ) -> None:
        """Register a handler, optionally for specific kinds only."""
        self._handlers.append(
            _Registration(handler=handler, kinds=set(kinds) if kinds else None)
        )

    def unsubscribe(self, handler: NotificationHandler) -> None:
        """Unregister a handler."""
        self._handlers = [reg for reg in self._handlers if reg.handler is not handler]

    def publish(self, notification: Notification) -> list[Exception]:
        """Deliver a notification to every matching handler.

        Returns list of any exceptions raised by handlers.
        """
        errors: list[Exception] = []
        for reg in self._handlers:
            if reg.kinds and notification.kind not in reg.kinds:
                continue
            try:
                reg.handler(notification)
            except Exception as e:
                logger.exception(
                    "Notification handler %s failed for %s notification",
                    reg.handler,
                    notification.kind.value,
                )
                errors.append(e)
        return errors

    def success(self, text: str) -> Notification:
        notification = Notification(kind=NotificationKind.SUCCESS, text=text)
        self.publish(notification)
        return notification

    def error(self, text: str) -> Notification:
        notification = Notification(kind=NotificationKind.ERROR, text=text)
        self.publish(notification)
        return notification


class NotificationCollector:
    """Handler that buffers notifications until the presentation layer reads them."""

    def __init__(self) -> None:
        self._pending: list[Notification] = []

    def __call__(self, notification: Notification) -> None:
        self._pending.append(notification)

    @property
    def pending(self) -> list[Notification]:
        return list(self._pending)

    def drain(self) -> list[Notification]:
        """Return and clear buffered notifications."""
        drained, self._pending = self._pending, []
        return drained
