"""Workflow types and the record lifecycle state machine.

Every workflow record moves through the same lifecycle:

    PENDING -> APPROVED   (terminal)
    PENDING -> REJECTED   (terminal)

No transition leaves a terminal state. The matrix below is the single
definition of which transitions are legal; the registry consults it on
every decision.
"""

from __future__ import annotations

from enum import Enum


class WorkflowType(Enum):
    """The three fixed workflow types tracked by the bot.

    Types:
        REPRIMAND: Disciplinary citation filed against a subject user.
        REMEDIATION: Corrective submission that resets the counter.
        APPEAL: Submission contesting a reprimand.
    """

    REPRIMAND = "reprimand"
    REMEDIATION = "remediation"
    APPEAL = "appeal"


class RecordStatus(Enum):
    """Lifecycle status of a workflow record.

    States:
        PENDING: Awaiting a moderator decision.
        APPROVED: Approved by a moderator (terminal).
        REJECTED: Rejected by a moderator with a reason (terminal).
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    def is_terminal(self) -> bool:
        """Check if no further transitions are permitted from this status."""
        return self in TERMINAL_STATUSES

    def valid_transitions(self) -> frozenset[RecordStatus]:
        """Get the statuses reachable from this status.

        Returns:
            Frozenset of target statuses. Empty for terminal statuses.
        """
        return STATUS_TRANSITION_MATRIX.get(self, frozenset())


class DecisionOutcome(Enum):
    """Decision a moderator can make on a pending record."""

    APPROVE = "approve"
    REJECT = "reject"

    @property
    def target_status(self) -> RecordStatus:
        """The record status this outcome transitions to."""
        if self is DecisionOutcome.APPROVE:
            return RecordStatus.APPROVED
        return RecordStatus.REJECTED


TERMINAL_STATUSES: frozenset[RecordStatus] = frozenset(
    {
        RecordStatus.APPROVED,
        RecordStatus.REJECTED,
    }
)

STATUS_TRANSITION_MATRIX: dict[RecordStatus, frozenset[RecordStatus]] = {
    RecordStatus.PENDING: frozenset(
        {
            RecordStatus.APPROVED,
            RecordStatus.REJECTED,
        }
    ),
    # Terminal statuses have no valid transitions
    RecordStatus.APPROVED: frozenset(),
    RecordStatus.REJECTED: frozenset(),
}
