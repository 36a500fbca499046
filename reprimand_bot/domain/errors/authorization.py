"""Authorization errors for moderator-only actions."""

from __future__ import annotations

from reprimand_bot.domain.exceptions import ReprimandBotError


class UnauthorizedModeratorError(ReprimandBotError):
    """Raised when a non-moderator attempts to approve or reject a record."""

    def __init__(self, caller_id: str, action_id: str) -> None:
        """Initialize unauthorized moderator error.

        Args:
            caller_id: The user who attempted the action.
            action_id: The action they attempted.
        """
        self.caller_id = caller_id
        self.action_id = action_id
        super().__init__("You don't have permission.")
