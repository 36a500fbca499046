"""Authorization adapter backed by a fixed set of moderator ids.

The chat platform would normally answer this from the caller's roles;
a configured allow-list is enough for the console driver and for
deployments that keep moderators in configuration.
"""

from __future__ import annotations

from collections.abc import Iterable

from structlog import get_logger

logger = get_logger(__name__)


class StaticModeratorAuthorization:
    """Grants moderator rights to a configured set of user ids."""

    def __init__(self, moderator_ids: Iterable[str]) -> None:
        """Initialize with the moderator allow-list.

        Args:
            moderator_ids: User ids holding the moderator role.
        """
        self._moderator_ids = frozenset(moderator_ids)
        if not self._moderator_ids:
            logger.warning("no_moderators_configured")

    async def is_authorized_moderator(self, caller_id: str) -> bool:
        """Return True if the caller is on the allow-list."""
        return caller_id in self._moderator_ids
