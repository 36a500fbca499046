"""Ports (interfaces) consumed by the application layer."""

from reprimand_bot.application.ports.authorization import AuthorizationPort
from reprimand_bot.application.ports.counter_store import CounterStoreProtocol
from reprimand_bot.application.ports.notification import NotificationPort
from reprimand_bot.application.ports.presentation import PresentationPort
from reprimand_bot.application.ports.record_registry import RecordRegistryProtocol
from reprimand_bot.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "AuthorizationPort",
    "CounterStoreProtocol",
    "NotificationPort",
    "PresentationPort",
    "RecordRegistryProtocol",
    "TimeAuthorityProtocol",
]
