"""Domain errors for Reprimand Bot.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from ReprimandBotError.
"""

from reprimand_bot.domain.errors.authorization import UnauthorizedModeratorError
from reprimand_bot.domain.errors.persistence import PersistenceError
from reprimand_bot.domain.errors.validation import (
    CounterOutOfRangeError,
    MalformedUserIdError,
    MissingRejectionReasonError,
    UnknownActionError,
    ValidationError,
)
from reprimand_bot.domain.errors.workflow import InvalidStateError, NotFoundError
from reprimand_bot.domain.exceptions import ReprimandBotError

__all__: list[str] = [
    "CounterOutOfRangeError",
    "InvalidStateError",
    "MalformedUserIdError",
    "MissingRejectionReasonError",
    "NotFoundError",
    "PersistenceError",
    "ReprimandBotError",
    "UnauthorizedModeratorError",
    "UnknownActionError",
    "ValidationError",
]
