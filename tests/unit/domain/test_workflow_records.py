"""Unit tests for workflow record value objects and the status machine.

Tests cover:
- Status transition matrix (PENDING -> APPROVED/REJECTED only)
- Decision validation (rejections need a reason)
- Record field validation
- with_handle / with_decision immutability
- Terminal records cannot be decided again
"""

from datetime import datetime, timezone

import pytest

from reprimand_bot.domain.errors import InvalidStateError, ValidationError
from reprimand_bot.domain.models.records import (
    EVIDENCE_NOT_PROVIDED,
    AppealRecord,
    Decision,
    Refused,
    RemediationRecord,
    ReprimandRecord,
)
from reprimand_bot.domain.models.workflow import (
    STATUS_TRANSITION_MATRIX,
    DecisionOutcome,
    RecordStatus,
    WorkflowType,
)

DECIDED_AT = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def _reprimand(**overrides) -> ReprimandRecord:
    fields = {
        "subject_id": "200",
        "issuer_id": "100",
        "charter_article": "Article 4",
        "remediation_method": "Apologise in #general",
        "escalation_level_at_issue": 1,
    }
    fields.update(overrides)
    return ReprimandRecord(**fields)


def _approval() -> Decision:
    return Decision(outcome=DecisionOutcome.APPROVE, decided_by="900", decided_at=DECIDED_AT)


def _rejection(reason: str = "Insufficient proof") -> Decision:
    return Decision(
        outcome=DecisionOutcome.REJECT,
        decided_by="900",
        decided_at=DECIDED_AT,
        rejection_reason=reason,
    )


class TestRecordStatus:
    """Tests for the status transition matrix."""

    def test_pending_can_reach_both_terminal_statuses(self) -> None:
        assert RecordStatus.PENDING.valid_transitions() == frozenset(
            {RecordStatus.APPROVED, RecordStatus.REJECTED}
        )

    @pytest.mark.parametrize("status", [RecordStatus.APPROVED, RecordStatus.REJECTED])
    def test_terminal_statuses_have_no_transitions(self, status: RecordStatus) -> None:
        assert status.is_terminal()
        assert status.valid_transitions() == frozenset()

    def test_pending_is_not_terminal(self) -> None:
        assert not RecordStatus.PENDING.is_terminal()

    def test_matrix_covers_every_status(self) -> None:
        assert set(STATUS_TRANSITION_MATRIX) == set(RecordStatus)

    def test_outcome_target_status(self) -> None:
        assert DecisionOutcome.APPROVE.target_status is RecordStatus.APPROVED
        assert DecisionOutcome.REJECT.target_status is RecordStatus.REJECTED

    def test_workflow_type_values(self) -> None:
        """Values are used in action identifiers and log events."""
        assert [t.value for t in WorkflowType] == ["reprimand", "remediation", "appeal"]


class TestDecision:
    """Tests for Decision validation."""

    def test_approval_needs_no_reason(self) -> None:
        decision = _approval()
        assert decision.rejection_reason is None

    @pytest.mark.parametrize("reason", [None, "", "   "])
    def test_rejection_without_reason_raises(self, reason: str | None) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Decision(
                outcome=DecisionOutcome.REJECT,
                decided_by="900",
                decided_at=DECIDED_AT,
                rejection_reason=reason,
            )
        assert exc_info.value.field == "reason"


class TestReprimandRecord:
    """Tests for ReprimandRecord."""

    def test_defaults(self) -> None:
        record = _reprimand()
        assert record.status is RecordStatus.PENDING
        assert record.handle is None
        assert record.decision is None
        assert record.evidence == EVIDENCE_NOT_PROVIDED
        assert record.is_pending

    def test_owner_is_subject(self) -> None:
        assert _reprimand().owner_id == "200"

    def test_workflow_type(self) -> None:
        assert ReprimandRecord.WORKFLOW_TYPE is WorkflowType.REPRIMAND

    @pytest.mark.parametrize("field_name", ["charter_article", "remediation_method", "evidence"])
    def test_empty_text_field_raises(self, field_name: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _reprimand(**{field_name: "  "})
        assert exc_info.value.field == field_name

    @pytest.mark.parametrize("level", [-1, 4])
    def test_display_level_out_of_range_raises(self, level: int) -> None:
        with pytest.raises(ValidationError):
            _reprimand(escalation_level_at_issue=level)

    def test_with_handle_returns_copy(self) -> None:
        record = _reprimand()
        published = record.with_handle("1001")
        assert published.handle == "1001"
        assert record.handle is None

    def test_with_decision_approves(self) -> None:
        record = _reprimand().with_handle("1001")
        decided = record.with_decision(_approval())
        assert decided.status is RecordStatus.APPROVED
        assert decided.decision.decided_by == "900"
        assert record.status is RecordStatus.PENDING

    def test_with_decision_rejects_with_reason(self) -> None:
        decided = _reprimand().with_handle("1001").with_decision(_rejection("Wrong article"))
        assert decided.status is RecordStatus.REJECTED
        assert decided.decision.rejection_reason == "Wrong article"

    @pytest.mark.parametrize("first", [_approval, _rejection])
    @pytest.mark.parametrize("second", [_approval, _rejection])
    def test_terminal_record_cannot_be_decided_again(self, first, second) -> None:
        decided = _reprimand().with_handle("1001").with_decision(first())
        with pytest.raises(InvalidStateError) as exc_info:
            decided.with_decision(second())
        assert exc_info.value.handle == "1001"
        assert exc_info.value.current_status is decided.status

    def test_records_are_frozen(self) -> None:
        record = _reprimand()
        with pytest.raises(AttributeError):
            record.status = RecordStatus.APPROVED  # type: ignore[misc]


class TestSubmissionRecords:
    """Tests for RemediationRecord and AppealRecord."""

    def test_remediation_owner_is_submitter(self) -> None:
        record = RemediationRecord(
            submitter_id="200", reprimand_reference="#1001", proof="Apologised"
        )
        assert record.owner_id == "200"
        assert record.WORKFLOW_TYPE is WorkflowType.REMEDIATION

    def test_remediation_requires_proof(self) -> None:
        with pytest.raises(ValidationError):
            RemediationRecord(submitter_id="200", reprimand_reference="#1001", proof="")

    def test_appeal_owner_is_submitter(self) -> None:
        record = AppealRecord(
            submitter_id="200",
            reprimand_reference="#1001",
            reason="I was not there",
            proof="Screenshot",
        )
        assert record.owner_id == "200"
        assert record.WORKFLOW_TYPE is WorkflowType.APPEAL

    @pytest.mark.parametrize("field_name", ["reprimand_reference", "reason", "proof"])
    def test_appeal_requires_text_fields(self, field_name: str) -> None:
        fields = {
            "submitter_id": "200",
            "reprimand_reference": "#1001",
            "reason": "I was not there",
            "proof": "Screenshot",
        }
        fields[field_name] = ""
        with pytest.raises(ValidationError):
            AppealRecord(**fields)


class TestRefused:
    """Refused is a plain value, not an exception."""

    def test_refused_is_not_an_exception(self) -> None:
        refused = Refused(WorkflowType.APPEAL, "200", "appeal_already_filed")
        assert not isinstance(refused, Exception)
        assert refused.reason == "appeal_already_filed"
