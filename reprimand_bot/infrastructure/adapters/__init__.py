"""Production adapters for the application ports."""

from reprimand_bot.infrastructure.adapters.console import (
    ConsoleNotifier,
    ConsolePresentation,
)
from reprimand_bot.infrastructure.adapters.persistence import (
    InMemoryRecordRegistry,
    JsonFileCounterStore,
)
from reprimand_bot.infrastructure.adapters.static_authorization import (
    StaticModeratorAuthorization,
)
from reprimand_bot.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)

__all__: list[str] = [
    "ConsoleNotifier",
    "ConsolePresentation",
    "InMemoryRecordRegistry",
    "JsonFileCounterStore",
    "StaticModeratorAuthorization",
    "SystemTimeAuthority",
]
