"""Validation errors for workflow input.

Raised when a command carries input that can never be accepted: a
missing rejection reason, an empty required form field, a malformed
user identifier or an escalation level outside its bounds.
"""

from __future__ import annotations

from reprimand_bot.domain.exceptions import ReprimandBotError


class ValidationError(ReprimandBotError):
    """Raised when command input fails validation.

    Attributes:
        field: Name of the offending field, when known.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize validation error.

        Args:
            message: Human-readable description of the problem.
            field: Name of the offending field (optional).
        """
        self.field = field
        super().__init__(message)


class MissingRejectionReasonError(ValidationError):
    """Raised when a rejection is attempted without a reason."""

    def __init__(self, handle: str) -> None:
        """Initialize missing rejection reason error.

        Args:
            handle: Handle of the record being rejected.
        """
        self.handle = handle
        super().__init__(
            f"A rejection reason is required to reject record {handle}",
            field="reason",
        )


class MalformedUserIdError(ValidationError):
    """Raised when a user identifier is not a numeric id or mention."""

    def __init__(self, raw_value: str) -> None:
        """Initialize malformed user id error.

        Args:
            raw_value: The value that failed to parse.
        """
        self.raw_value = raw_value
        super().__init__(
            f"Malformed user identifier: {raw_value!r}",
            field="user_id",
        )


class CounterOutOfRangeError(ValidationError):
    """Raised when an escalation level falls outside its bounds."""

    def __init__(self, user_id: str, value: int, minimum: int, maximum: int) -> None:
        """Initialize counter out of range error.

        Args:
            user_id: The user whose counter was being written.
            value: The rejected value.
            minimum: Lowest permitted level.
            maximum: Highest permitted level.
        """
        self.user_id = user_id
        self.value = value
        super().__init__(
            f"Escalation level {value} for user {user_id} is outside "
            f"[{minimum}, {maximum}]",
            field="value",
        )


class UnknownActionError(ValidationError):
    """Raised when the dispatcher receives an action it does not route."""

    def __init__(self, action_id: str) -> None:
        """Initialize unknown action error.

        Args:
            action_id: The unrecognised inbound action identifier.
        """
        self.action_id = action_id
        super().__init__(f"Unknown action: {action_id!r}", field="action_id")
