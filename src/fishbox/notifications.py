"""Best-effort user notifications.

Delivery is up to the ``Notifier`` (browser push, desktop toast, log line).
Dispatch never raises: a failing notifier is logged and ignored so the
operation that triggered it is unaffected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_ICON = "/icon-192x192.png"


@dataclass(frozen=True)
class Notification:
    """Title/body/icon triple handed to a notifier."""

    title: str
    body: str
    tag: str | None = None
    icon: str = DEFAULT_ICON


class Notifier(Protocol):
    def send(self, notification: Notification) -> None: ...


class LoggingNotifier:
    """Writes notifications to the log. Default when nothing else is wired."""

    def send(self, notification: Notification) -> None:
        logger.info(
            "notification [%s] %s: %s", notification.tag, notification.title, notification.body
        )


class NotificationService:
    """Builds FishBox notifications and dispatches them if the user opted in."""

    def __init__(self, notifier: Notifier | None = None, *, enabled: bool = True) -> None:
        self.notifier: Notifier = notifier or LoggingNotifier()
        self.enabled = enabled

    def dispatch(self, notification: Notification) -> bool:
        """Send a notification. Returns True if the notifier accepted it."""
        if not self.enabled:
            return False
        try:
            self.notifier.send(notification)
        except Exception:
            logger.warning("Notification dispatch failed: %s", notification.title, exc_info=True)
            return False
        return True

    def notify_new_comment(self, user_name: str, species: str) -> bool:
        return self.dispatch(
            Notification(
                title="💬 Neuer Kommentar",
                body=f"{user_name} hat deinen {species}-Fang kommentiert",
                tag="comment",
            )
        )

    def notify_new_like(self, user_name: str, species: str) -> bool:
        return self.dispatch(
            Notification(
                title="❤️ Neuer Like",
                body=f"{user_name} gefällt dein {species}-Fang",
                tag="like",
            )
        )

    def notify_friend_request(self, user_name: str) -> bool:
        return self.dispatch(
            Notification(
                title="👥 Neue Freundschaftsanfrage",
                body=f"{user_name} möchte mit dir befreundet sein",
                tag="friend_request",
            )
        )

    def notify_friend_accepted(self, user_name: str) -> bool:
        return self.dispatch(
            Notification(
                title="✅ Freundschaftsanfrage angenommen",
                body=f"{user_name} hat deine Freundschaftsanfrage angenommen",
                tag="friend_accepted",
            )
        )

    def notify_catch_published(self, species: str, length: int) -> bool:
        return self.dispatch(
            Notification(
                title="🌍 Fang veröffentlicht",
                body=f"Dein {species} ({length} cm) ist jetzt öffentlich",
                tag="catch_published",
            )
        )
