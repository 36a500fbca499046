"""In-memory stub for CounterStoreProtocol.

Keeps counters in a dict and can be told to fail its durable write, so
tests can exercise the log-and-continue persistence policy.
"""

from __future__ import annotations

from reprimand_bot.domain.errors import CounterOutOfRangeError, PersistenceError
from reprimand_bot.domain.models.escalation import (
    MAX_ESCALATION_LEVEL,
    MIN_ESCALATION_LEVEL,
    is_valid_level,
)


class CounterStoreStub:
    """In-memory stub implementation of CounterStoreProtocol.

    Attributes:
        writes: Every (user_id, value) pair passed to set(), in order.
        fail_writes: When True, set() updates memory then raises
            PersistenceError.
    """

    def __init__(self, initial: dict[str, int] | None = None) -> None:
        """Initialize the stub, optionally pre-seeded."""
        self._counts: dict[str, int] = dict(initial or {})
        self.writes: list[tuple[str, int]] = []
        self.fail_writes = False

    async def get(self, user_id: str) -> int:
        return self._counts.get(user_id, MIN_ESCALATION_LEVEL)

    async def set(self, user_id: str, value: int) -> None:
        if not is_valid_level(value):
            raise CounterOutOfRangeError(
                user_id=user_id,
                value=value,
                minimum=MIN_ESCALATION_LEVEL,
                maximum=MAX_ESCALATION_LEVEL,
            )
        self._counts[user_id] = value
        self.writes.append((user_id, value))
        if self.fail_writes:
            raise PersistenceError("<memory>", "simulated write failure")

    async def snapshot(self) -> dict[str, int]:
        return dict(self._counts)
