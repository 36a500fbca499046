"""Persistence errors for the escalation counter store."""

from __future__ import annotations

from pathlib import Path

from reprimand_bot.domain.exceptions import ReprimandBotError


class PersistenceError(ReprimandBotError):
    """Raised when a durable write of the counter map fails.

    The in-memory value has already been updated when this is raised;
    callers log it and carry on with the in-memory state.

    Attributes:
        path: The backing file that could not be written.
    """

    def __init__(self, path: Path | str, cause: str) -> None:
        """Initialize persistence error.

        Args:
            path: The backing file path.
            cause: Description of the underlying failure.
        """
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Failed to persist escalation counters to {path}: {cause}")
