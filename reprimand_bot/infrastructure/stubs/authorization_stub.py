"""Stub for AuthorizationPort with a mutable moderator set."""

from __future__ import annotations


class AuthorizationStub:
    """In-memory stub implementation of AuthorizationPort."""

    def __init__(self, moderator_ids: set[str] | None = None) -> None:
        self.moderator_ids: set[str] = set(moderator_ids or ())

    async def is_authorized_moderator(self, caller_id: str) -> bool:
        return caller_id in self.moderator_ids
