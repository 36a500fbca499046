"""In-memory stubs of the application ports for development and testing.

These stubs are NOT suitable for production use.
"""

from reprimand_bot.infrastructure.stubs.authorization_stub import AuthorizationStub
from reprimand_bot.infrastructure.stubs.counter_store_stub import CounterStoreStub
from reprimand_bot.infrastructure.stubs.notification_stub import (
    NotificationStub,
    SentNotification,
)
from reprimand_bot.infrastructure.stubs.presentation_stub import PresentationStub

__all__: list[str] = [
    "AuthorizationStub",
    "CounterStoreStub",
    "NotificationStub",
    "PresentationStub",
    "SentNotification",
]
