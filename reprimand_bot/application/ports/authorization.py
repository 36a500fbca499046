"""Authorization port for moderator-only actions."""

from __future__ import annotations

from typing import Protocol


class AuthorizationPort(Protocol):
    """Protocol deciding whether a caller may approve or reject records."""

    async def is_authorized_moderator(self, caller_id: str) -> bool:
        """Return True if the caller holds the moderator role."""
        ...
