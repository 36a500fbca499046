"""
Reprimand Bot - Moderation workflow core

Issues reprimands against chat members, tracks a bounded escalation
counter per member, and routes remediation and appeal requests through
a human moderator approval pipeline.

Workflows:
- Reprimand: filed by a moderator, approved or rejected by another
- Remediation: filed by a reprimanded member to reset their counter
- Appeal: filed by a member to contest a reprimand
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
