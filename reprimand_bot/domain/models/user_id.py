"""Chat-platform user identifier parsing.

User ids are decimal snowflake strings. Forms submitted by moderators
may contain either the raw id or a mention such as ``<@123>`` or
``<@!123>``; both normalize to the bare digit string.
"""

from __future__ import annotations

import re

from reprimand_bot.domain.errors.validation import MalformedUserIdError

_USER_ID_PATTERN = re.compile(r"^(?:<@!?(\d+)>|(\d+))$")


def normalize_user_id(raw: str) -> str:
    """Normalize a raw id or mention to the bare numeric id.

    Args:
        raw: The submitted value.

    Returns:
        The user id as a string of digits.

    Raises:
        MalformedUserIdError: If the value is neither an id nor a mention.
    """
    if not isinstance(raw, str):
        raise MalformedUserIdError(repr(raw))
    match = _USER_ID_PATTERN.match(raw.strip())
    if match is None:
        raise MalformedUserIdError(raw)
    return match.group(1) or match.group(2)
