"""Persistence adapters for counters and workflow records."""

from reprimand_bot.infrastructure.adapters.persistence.in_memory_record_registry import (
    InMemoryRecordRegistry,
)
from reprimand_bot.infrastructure.adapters.persistence.json_counter_store import (
    JsonFileCounterStore,
)

__all__: list[str] = ["InMemoryRecordRegistry", "JsonFileCounterStore"]
