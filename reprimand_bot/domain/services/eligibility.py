"""Eligibility rules for starting a workflow.

Pure predicates over registry contents. The application layer fetches
the relevant records and grants and asks these functions for a verdict.

Rules:
- Reprimand: always permitted; concurrent pending reprimands against the
  same subject are allowed and each escalates independently.
- Remediation: permitted only while the user holds a remediation grant.
  A user may also have at most one pending remediation at a time.
- Appeal: permitted only if the user has no tracked appeal at all,
  whatever its status. Decided appeals are never purged, so this is a
  permanent lockout after the first appeal.
"""

from __future__ import annotations

from collections.abc import Iterable

from reprimand_bot.domain.models.records import (
    AppealRecord,
    RemediationGrant,
    RemediationRecord,
)
from reprimand_bot.domain.models.workflow import RecordStatus


def can_start_reprimand(subject_id: str) -> bool:
    """Any subject may receive a new reprimand at any time."""
    return True


def can_start_remediation(user_id: str, grants: Iterable[RemediationGrant]) -> bool:
    """Check whether the user holds at least one remediation grant.

    Args:
        user_id: The user asking to remediate.
        grants: All tracked remediation grants.

    Returns:
        True if a grant exists for the user.
    """
    return any(grant.user_id == user_id for grant in grants)


def has_pending_remediation(
    user_id: str, remediations: Iterable[RemediationRecord]
) -> bool:
    """Check whether the user already has a remediation awaiting decision."""
    return any(
        record.submitter_id == user_id and record.status is RecordStatus.PENDING
        for record in remediations
    )


def can_start_appeal(user_id: str, appeals: Iterable[AppealRecord]) -> bool:
    """Check whether the user has never filed a tracked appeal.

    Args:
        user_id: The user asking to appeal.
        appeals: All tracked appeal records, of every status.

    Returns:
        True if no appeal record belongs to the user.
    """
    return not any(record.submitter_id == user_id for record in appeals)
