"""Wall-clock implementation of TimeAuthorityProtocol."""

from __future__ import annotations

import time
from datetime import datetime, timezone

from reprimand_bot.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Time authority backed by the system clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def utcnow(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()
