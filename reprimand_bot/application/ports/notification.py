"""Notification port for direct messages to users."""

from __future__ import annotations

from typing import Protocol


class NotificationPort(Protocol):
    """Protocol for announcing workflow outcomes to a user.

    Delivery is best-effort. Callers log failures and never roll back
    the decision that triggered the notification.
    """

    async def notify_user(self, user_id: str, subject: str, body: str) -> None:
        """Send a direct notification.

        Args:
            user_id: Recipient.
            subject: Short headline.
            body: Message body.
        """
        ...
