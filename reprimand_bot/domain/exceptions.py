"""Base exception classes for the Reprimand Bot domain layer."""


class ReprimandBotError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class so the
    platform adapter can catch a single type when rendering feedback.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
