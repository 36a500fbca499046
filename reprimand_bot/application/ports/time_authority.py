"""Time Authority Protocol - interface for consistent timestamp provisioning.

All services that need timestamps inject a TimeAuthorityProtocol
implementation instead of calling datetime.now() directly, so tests can
freeze and advance time.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    For production:
        Use SystemTimeAuthority from reprimand_bot.infrastructure.adapters

    For testing:
        Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return current time with timezone awareness (UTC recommended)."""
        ...

    @abstractmethod
    def utcnow(self) -> datetime:
        """Return current UTC time as a timezone-aware datetime."""
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return monotonic clock value for measuring elapsed time.

        Note:
            Only differences between values are meaningful.
        """
        ...
