"""Recording stub for NotificationPort."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SentNotification:
    """A notification captured by the stub."""

    user_id: str
    subject: str
    body: str


class NotificationStub:
    """In-memory stub implementation of NotificationPort.

    Attributes:
        sent: Every notification delivered, in order.
        fail_delivery: When True, notify_user() raises instead.
    """

    def __init__(self) -> None:
        self.sent: list[SentNotification] = []
        self.fail_delivery = False

    async def notify_user(self, user_id: str, subject: str, body: str) -> None:
        if self.fail_delivery:
            raise ConnectionError(f"simulated delivery failure to {user_id}")
        self.sent.append(SentNotification(user_id=user_id, subject=subject, body=body))

    def sent_to(self, user_id: str) -> list[SentNotification]:
        """Return notifications delivered to one user."""
        return [n for n in self.sent if n.user_id == user_id]
