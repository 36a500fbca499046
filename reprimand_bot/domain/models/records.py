"""Workflow record value objects.

Records are frozen dataclasses. A record is created PENDING, receives
its handle once published, and is decided exactly once. Deciding a
record produces a new instance through ``with_decision``; the original
instance is never mutated.

Records:
- ReprimandRecord: citation against a subject user
- RemediationRecord: corrective proof filed by a reprimanded user
- AppealRecord: contest of a reprimand filed by a user
- RemediationGrant: eligibility token created on reprimand approval
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import ClassVar

from reprimand_bot.domain.errors.validation import ValidationError
from reprimand_bot.domain.errors.workflow import InvalidStateError
from reprimand_bot.domain.models.escalation import is_valid_level
from reprimand_bot.domain.models.workflow import (
    DecisionOutcome,
    RecordStatus,
    WorkflowType,
)

EVIDENCE_NOT_PROVIDED: str = "N/A"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def _require_text(value: str, field_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} must not be empty", field=field_name)


@dataclass(frozen=True, eq=True)
class Decision:
    """A moderator's decision on a record.

    Attributes:
        outcome: APPROVE or REJECT.
        decided_by: User id of the deciding moderator.
        decided_at: When the decision was recorded (UTC).
        rejection_reason: Reason given for a rejection, None for approvals.
    """

    outcome: DecisionOutcome
    decided_by: str
    decided_at: datetime
    rejection_reason: str | None = None

    def __post_init__(self) -> None:
        """Validate that rejections carry a reason."""
        if self.outcome is DecisionOutcome.REJECT:
            if self.rejection_reason is None or not self.rejection_reason.strip():
                raise ValidationError(
                    "A rejection requires a non-empty reason", field="reason"
                )


class _DecidableRecord:
    """Lifecycle helpers shared by the three record types."""

    WORKFLOW_TYPE: ClassVar[WorkflowType]

    handle: str | None
    status: RecordStatus
    decision: Decision | None

    @property
    def owner_id(self) -> str:
        """The user the record concerns (subject or submitter)."""
        raise NotImplementedError

    @property
    def is_pending(self) -> bool:
        return self.status is RecordStatus.PENDING

    def with_handle(self, handle: str):
        """Create a copy carrying its published handle."""
        return replace(self, handle=handle)

    def with_decision(self, decision: Decision):
        """Create a decided copy of this record.

        Args:
            decision: The moderator decision to apply.

        Returns:
            New record with status and decision set.

        Raises:
            InvalidStateError: If the record is already terminal.
        """
        new_status = decision.outcome.target_status
        if new_status not in self.status.valid_transitions():
            raise InvalidStateError(
                workflow_type=self.WORKFLOW_TYPE,
                handle=self.handle,
                current_status=self.status,
            )
        return replace(self, status=new_status, decision=decision)


@dataclass(frozen=True, eq=True)
class ReprimandRecord(_DecidableRecord):
    """A disciplinary citation against a subject user.

    ``escalation_level_at_issue`` is the subject's level after the
    tentative increment, computed when the reprimand was filed. It is
    shown to moderators; the counter itself only moves on approval.

    Attributes:
        subject_id: The user being reprimanded.
        issuer_id: The user who filed the reprimand.
        charter_article: Charter article that was breached.
        remediation_method: How the subject can remediate.
        escalation_level_at_issue: Display level, capped at the maximum.
        evidence: Supporting evidence, "N/A" when omitted.
        handle: Opaque handle, None until published.
        status: Lifecycle status.
        decision: Moderator decision once terminal.
        created_at: Filing timestamp (UTC).
    """

    WORKFLOW_TYPE: ClassVar[WorkflowType] = WorkflowType.REPRIMAND

    subject_id: str
    issuer_id: str
    charter_article: str
    remediation_method: str
    escalation_level_at_issue: int
    evidence: str = field(default=EVIDENCE_NOT_PROVIDED)
    handle: str | None = field(default=None)
    status: RecordStatus = field(default=RecordStatus.PENDING)
    decision: Decision | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate reprimand fields."""
        _require_text(self.charter_article, "charter_article")
        _require_text(self.remediation_method, "remediation_method")
        _require_text(self.evidence, "evidence")
        if not is_valid_level(self.escalation_level_at_issue):
            raise ValidationError(
                f"escalation_level_at_issue out of range: "
                f"{self.escalation_level_at_issue}",
                field="escalation_level_at_issue",
            )

    @property
    def owner_id(self) -> str:
        return self.subject_id


@dataclass(frozen=True, eq=True)
class RemediationRecord(_DecidableRecord):
    """Corrective proof filed by a reprimanded user.

    ``reprimand_reference`` is free text (usually a link) and is not
    checked against tracked reprimands.
    """

    WORKFLOW_TYPE: ClassVar[WorkflowType] = WorkflowType.REMEDIATION

    submitter_id: str
    reprimand_reference: str
    proof: str
    handle: str | None = field(default=None)
    status: RecordStatus = field(default=RecordStatus.PENDING)
    decision: Decision | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate remediation fields."""
        _require_text(self.reprimand_reference, "reprimand_reference")
        _require_text(self.proof, "proof")

    @property
    def owner_id(self) -> str:
        return self.submitter_id


@dataclass(frozen=True, eq=True)
class AppealRecord(_DecidableRecord):
    """A user's appeal against a reprimand."""

    WORKFLOW_TYPE: ClassVar[WorkflowType] = WorkflowType.APPEAL

    submitter_id: str
    reprimand_reference: str
    reason: str
    proof: str
    handle: str | None = field(default=None)
    status: RecordStatus = field(default=RecordStatus.PENDING)
    decision: Decision | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate appeal fields."""
        _require_text(self.reprimand_reference, "reprimand_reference")
        _require_text(self.reason, "reason")
        _require_text(self.proof, "proof")

    @property
    def owner_id(self) -> str:
        return self.submitter_id


WorkflowRecord = ReprimandRecord | RemediationRecord | AppealRecord

RECORD_CLASSES: dict[WorkflowType, type] = {
    WorkflowType.REPRIMAND: ReprimandRecord,
    WorkflowType.REMEDIATION: RemediationRecord,
    WorkflowType.APPEAL: AppealRecord,
}


@dataclass(frozen=True, eq=True)
class RemediationGrant:
    """Permission for a user to file remediation forms.

    Created when a reprimand is approved and the subject's level stays
    below the maximum. Keyed by the handle of the published approval
    notice. Grants are never removed, so one grant permits any number of
    remediation submissions over time.

    Attributes:
        notice_handle: Handle of the published approval notice.
        user_id: The reprimanded user the grant belongs to.
        reprimand_handle: Handle of the approved reprimand record.
        created_at: When the grant was created (UTC).
    """

    notice_handle: str
    user_id: str
    reprimand_handle: str
    created_at: datetime = field(default_factory=_utc_now)


@dataclass(frozen=True, eq=True)
class Refused:
    """Result returned when an eligibility gate turns a submission away.

    Refusals are ordinary control flow, not errors: the submission is
    dropped, nothing is published, and the caller receives no feedback.

    Attributes:
        workflow_type: The workflow the user tried to start.
        user_id: The user who was turned away.
        reason: Short machine-readable explanation.
    """

    workflow_type: WorkflowType
    user_id: str
    reason: str
