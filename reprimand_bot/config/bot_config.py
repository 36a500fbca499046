"""Reprimand bot configuration.

Configuration is read from environment variables (optionally seeded from
a ``.env`` file by the entry point) with defaults suitable for local use.

Environment Variables:
- REPRIMAND_COUNTS_FILE: Path of the escalation counter JSON file
  (default: reprimand_counts.json)
- MODERATOR_USER_IDS: Comma-separated user ids allowed to approve and
  reject records (default: empty)
- ENVIRONMENT: 'production' for JSON logs, 'development' for console
  logs (default: development)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_COUNTS_FILE = "reprimand_counts.json"
VALID_ENVIRONMENTS: frozenset[str] = frozenset({"production", "development"})


def _get_str_env(key: str, default: str) -> str:
    """Get string environment variable, falling back on unset or blank."""
    value = os.environ.get(key)
    if value is None or not value.strip():
        return default
    return value.strip()


def _get_list_env(key: str) -> tuple[str, ...]:
    """Get a comma-separated environment variable as a tuple of items."""
    value = os.environ.get(key, "")
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class BotConfig:
    """Runtime configuration for the reprimand bot.

    Attributes:
        counts_file: Location of the escalation counter file.
        moderator_ids: User ids holding the moderator role.
        environment: Logging mode, 'production' or 'development'.
    """

    counts_file: Path = field(default_factory=lambda: Path(DEFAULT_COUNTS_FILE))
    moderator_ids: tuple[str, ...] = ()
    environment: str = "development"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.environment not in VALID_ENVIRONMENTS:
            raise ValueError(
                f"environment must be one of {sorted(VALID_ENVIRONMENTS)}, "
                f"got {self.environment!r}"
            )
        if self.counts_file.suffix != ".json":
            raise ValueError(f"counts_file must be a .json file, got {self.counts_file}")
        for moderator_id in self.moderator_ids:
            if not moderator_id.isdigit():
                raise ValueError(f"moderator id must be numeric, got {moderator_id!r}")

    @classmethod
    def from_environment(cls) -> BotConfig:
        """Create config from environment variables with defaults.

        Returns:
            BotConfig with values from environment or defaults.

        Raises:
            ValueError: If a value fails validation.
        """
        return cls(
            counts_file=Path(_get_str_env("REPRIMAND_COUNTS_FILE", DEFAULT_COUNTS_FILE)),
            moderator_ids=_get_list_env("MODERATOR_USER_IDS"),
            environment=_get_str_env("ENVIRONMENT", "development").lower(),
        )
