"""Flat JSON file implementation of CounterStoreProtocol.

The backing file is a single JSON object mapping user id strings to
integer levels, e.g. ``{"1234": 2, "5678": 0}``. It is rewritten whole
on every mutation so it stays human-inspectable.

Loading rules:
- Missing file: empty map
- Blank file: empty map
- Unreadable or malformed JSON: logged, empty map
- Entries that are not integers in [0, 3]: logged and dropped

Write failures update the in-memory map first, then raise
PersistenceError. Nothing is retried; the next successful write flushes
the whole map again.
"""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path

from structlog import get_logger

from reprimand_bot.domain.errors import CounterOutOfRangeError, PersistenceError
from reprimand_bot.domain.models.escalation import (
    MAX_ESCALATION_LEVEL,
    MIN_ESCALATION_LEVEL,
    is_valid_level,
)

logger = get_logger(__name__)


class JsonFileCounterStore:
    """Escalation counters persisted to a flat JSON file.

    Attributes:
        path: Location of the backing file.
    """

    def __init__(self, path: Path | str) -> None:
        """Initialize the store and load any existing counters.

        Args:
            path: Location of the backing JSON file. It need not exist.
        """
        self.path = Path(path)
        self._counts: dict[str, int] = self._load()
        self._write_lock = asyncio.Lock()

    def _load(self) -> dict[str, int]:
        if not self.path.exists():
            logger.info("counter_file_absent", path=str(self.path))
            return {}

        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("counter_file_unreadable", path=str(self.path), error=str(e))
            return {}

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("counter_file_malformed", path=str(self.path), error=str(e))
            return {}

        if not isinstance(data, dict):
            logger.error(
                "counter_file_malformed",
                path=str(self.path),
                error="top-level value is not an object",
            )
            return {}

        counts: dict[str, int] = {}
        for user_id, value in data.items():
            if is_valid_level(value):
                counts[str(user_id)] = value
            else:
                logger.warning(
                    "counter_entry_dropped",
                    path=str(self.path),
                    user_id=user_id,
                    value=value,
                )
        logger.info("counter_file_loaded", path=str(self.path), users=len(counts))
        return counts

    def _flush(self) -> None:
        # Write beside the target then swap, so readers never see half a file
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        payload = json.dumps(self._counts, indent=2, sort_keys=True)
        tmp_path.write_text(payload, encoding="utf-8")
        os.replace(tmp_path, self.path)

    async def get(self, user_id: str) -> int:
        """Return the user's level, 0 if unseen."""
        return self._counts.get(user_id, MIN_ESCALATION_LEVEL)

    async def set(self, user_id: str, value: int) -> None:
        """Store a level and rewrite the backing file.

        Args:
            user_id: The user to update.
            value: New level in [0, 3].

        Raises:
            CounterOutOfRangeError: If value is outside [0, 3].
            PersistenceError: If the file could not be written. The
                in-memory value is updated regardless.
        """
        if not is_valid_level(value):
            raise CounterOutOfRangeError(
                user_id=user_id,
                value=value,
                minimum=MIN_ESCALATION_LEVEL,
                maximum=MAX_ESCALATION_LEVEL,
            )

        async with self._write_lock:
            self._counts[user_id] = value
            try:
                self._flush()
            except OSError as e:
                raise PersistenceError(self.path, str(e)) from e

        logger.debug("counter_persisted", user_id=user_id, value=value)

    async def snapshot(self) -> dict[str, int]:
        """Return a copy of all stored levels."""
        return dict(self._counts)
