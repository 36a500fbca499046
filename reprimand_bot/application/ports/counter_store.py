"""Escalation counter store port.

This module defines the contract for the persistent map from user id to
escalation level.

Rules:
- Unseen users read as level 0
- Writes outside [0, 3] are refused
- Every write is persisted before returning; when the durable write
  fails the in-memory value is still updated and PersistenceError is
  raised so the caller can log it
"""

from __future__ import annotations

from typing import Protocol


class CounterStoreProtocol(Protocol):
    """Protocol for escalation counter storage.

    Implementations may use a flat JSON file, a key-value store or plain
    memory. The store owns the counter map exclusively.
    """

    async def get(self, user_id: str) -> int:
        """Return the user's escalation level.

        Args:
            user_id: The user to look up.

        Returns:
            The stored level, or 0 if the user has never been seen.
        """
        ...

    async def set(self, user_id: str, value: int) -> None:
        """Store the user's escalation level.

        Args:
            user_id: The user to update.
            value: New level in [0, 3].

        Raises:
            CounterOutOfRangeError: If value is outside [0, 3].
            PersistenceError: If the durable write failed. The in-memory
                value has been updated regardless.
        """
        ...

    async def snapshot(self) -> dict[str, int]:
        """Return a copy of every stored level keyed by user id."""
        ...
