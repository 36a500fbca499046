"""Escalation counter arithmetic.

A member's escalation level is an integer in [0, 3]. Three rules mutate
it, one per workflow:

- Approved reprimand: one level up, clamped at the maximum
- Approved remediation: reset to zero
- Approved appeal: one level down, clamped at zero
"""

from __future__ import annotations

MIN_ESCALATION_LEVEL: int = 0
MAX_ESCALATION_LEVEL: int = 3


def is_valid_level(level: int) -> bool:
    """Check whether a value is a legal escalation level."""
    return (
        isinstance(level, int)
        and not isinstance(level, bool)
        and MIN_ESCALATION_LEVEL <= level <= MAX_ESCALATION_LEVEL
    )


def escalate(level: int) -> int:
    """Return the level after an approved reprimand."""
    return min(level + 1, MAX_ESCALATION_LEVEL)


def de_escalate(level: int) -> int:
    """Return the level after an approved appeal."""
    return max(level - 1, MIN_ESCALATION_LEVEL)


def reset(level: int) -> int:
    """Return the level after an approved remediation, whatever the prior level."""
    return MIN_ESCALATION_LEVEL


def is_at_maximum(level: int) -> bool:
    """Check whether a level leaves no room for remediation."""
    return level >= MAX_ESCALATION_LEVEL
