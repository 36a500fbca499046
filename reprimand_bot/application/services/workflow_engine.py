"""Workflow engine for reprimands, remediations and appeals.

The engine is the single logical actor that moves workflow records
through PENDING -> APPROVED / REJECTED and applies the escalation
counter rule attached to each workflow type.

Counter rules (on approval only):
- Reprimand: level + 1, clamped at 3. Below 3 a remediation grant is
  created, keyed by the published approval notice.
- Remediation: level reset to 0.
- Appeal: level - 1, clamped at 0.

Developer Golden Rules:
1. COMMIT FIRST - the transition and counter write happen under the
   command lock; presentation and notification run afterwards
2. BEST EFFORT SIDE EFFECTS - failed posts, edits, DMs and counter
   flushes are logged and never roll back a transition
3. REFUSE QUIETLY - ineligible submissions return Refused, not errors
4. FAIL LOUD ON INPUT - validation, lookup and state errors propagate
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING

from structlog import get_logger

from reprimand_bot.application.services.eligibility_gate import EligibilityGate
from reprimand_bot.domain.errors import (
    InvalidStateError,
    MissingRejectionReasonError,
    PersistenceError,
)
from reprimand_bot.domain.models import escalation
from reprimand_bot.domain.models.records import (
    EVIDENCE_NOT_PROVIDED,
    AppealRecord,
    Refused,
    RemediationGrant,
    RemediationRecord,
    ReprimandRecord,
    WorkflowRecord,
)
from reprimand_bot.domain.models.user_id import normalize_user_id
from reprimand_bot.domain.models.workflow import DecisionOutcome, WorkflowType

if TYPE_CHECKING:
    from reprimand_bot.application.ports.counter_store import CounterStoreProtocol
    from reprimand_bot.application.ports.notification import NotificationPort
    from reprimand_bot.application.ports.presentation import PresentationPort
    from reprimand_bot.application.ports.record_registry import (
        RecordRegistryProtocol,
    )
    from reprimand_bot.application.ports.time_authority import (
        TimeAuthorityProtocol,
    )

logger = get_logger(__name__)

# Level transformation applied to the record owner on approval
COUNTER_RULES: dict[WorkflowType, Callable[[int], int]] = {
    WorkflowType.REPRIMAND: escalation.escalate,
    WorkflowType.REMEDIATION: escalation.reset,
    WorkflowType.APPEAL: escalation.de_escalate,
}

# Direct-message subjects; reprimand decisions do not notify anyone
NOTIFICATION_SUBJECTS: dict[tuple[WorkflowType, DecisionOutcome], str] = {
    (WorkflowType.REMEDIATION, DecisionOutcome.APPROVE): (
        "Your Remediation form was approved"
    ),
    (WorkflowType.REMEDIATION, DecisionOutcome.REJECT): (
        "Your Remediation form was rejected"
    ),
    (WorkflowType.APPEAL, DecisionOutcome.APPROVE): "Your Reprimand appeal was approved",
    (WorkflowType.APPEAL, DecisionOutcome.REJECT): "Your Reprimand appeal was rejected",
}

_FORM_LABELS: dict[WorkflowType, str] = {
    WorkflowType.REMEDIATION: "Remediation form",
    WorkflowType.APPEAL: "Appeal form",
}


def _clean_evidence(evidence: str | None) -> str:
    if evidence is None or not evidence.strip():
        return EVIDENCE_NOT_PROVIDED
    return evidence.strip()


class WorkflowEngine:
    """State machine driving the three moderation workflows.

    Example:
        >>> engine = WorkflowEngine(
        ...     counter_store=counter_store,
        ...     registry=registry,
        ...     presentation=presentation,
        ...     notifier=notifier,
        ...     time_authority=time_authority,
        ... )
        >>> record = await engine.issue_reprimand(
        ...     subject_id="1234",
        ...     issuer_id="5678",
        ...     charter_article="Article 3",
        ...     remediation_method="Apologise in #general",
        ... )
        >>> await engine.decide_reprimand(record.handle, DecisionOutcome.APPROVE, "9999")
    """

    def __init__(
        self,
        counter_store: CounterStoreProtocol,
        registry: RecordRegistryProtocol,
        presentation: PresentationPort,
        notifier: NotificationPort,
        time_authority: TimeAuthorityProtocol,
        eligibility_gate: EligibilityGate | None = None,
    ) -> None:
        """Initialize the workflow engine.

        Args:
            counter_store: Persistent escalation counters.
            registry: Workflow record and grant registry.
            presentation: Sink for publishing and re-rendering records.
            notifier: Sink for direct user notifications.
            time_authority: Source of creation and decision timestamps.
            eligibility_gate: Optional gate; built from the registry if
                not provided.
        """
        self._counter_store = counter_store
        self._registry = registry
        self._presentation = presentation
        self._notifier = notifier
        self._time = time_authority
        self._gate = eligibility_gate or EligibilityGate(registry)
        # One command at a time mutates registry and counters
        self._command_lock = asyncio.Lock()

    @property
    def registry(self) -> RecordRegistryProtocol:
        """The registry holding records and grants."""
        return self._registry

    @property
    def eligibility(self) -> EligibilityGate:
        """The gate used to admit remediation and appeal submissions."""
        return self._gate

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    async def get_counter(self, user_id: str) -> int:
        """Return a user's current escalation level."""
        return await self._counter_store.get(normalize_user_id(user_id))

    async def get_record(self, workflow_type: WorkflowType, handle: str) -> WorkflowRecord:
        """Return a tracked record.

        Raises:
            NotFoundError: If the handle is unknown.
        """
        return await self._registry.get(workflow_type, handle)

    # ------------------------------------------------------------------
    # Reprimands
    # ------------------------------------------------------------------

    async def issue_reprimand(
        self,
        subject_id: str,
        issuer_id: str,
        charter_article: str,
        remediation_method: str,
        evidence: str | None = None,
    ) -> ReprimandRecord:
        """File a new pending reprimand.

        The displayed level is the subject's level after a tentative
        increment. The counter itself is not touched until approval.

        Args:
            subject_id: User id or mention of the subject.
            issuer_id: User id of the filing moderator.
            charter_article: Charter article breached.
            remediation_method: How the subject can remediate.
            evidence: Optional evidence; "N/A" when omitted.

        Returns:
            The published pending record.

        Raises:
            ValidationError: If an id is malformed or a field is empty.
        """
        subject = normalize_user_id(subject_id)
        issuer = normalize_user_id(issuer_id)

        async with self._command_lock:
            prior_level = await self._counter_store.get(subject)
            record = ReprimandRecord(
                subject_id=subject,
                issuer_id=issuer,
                charter_article=charter_article.strip(),
                remediation_method=remediation_method.strip(),
                escalation_level_at_issue=escalation.escalate(prior_level),
                evidence=_clean_evidence(evidence),
                created_at=self._time.now(),
            )
            published = await self._publish(WorkflowType.REPRIMAND, record)

        logger.info(
            "reprimand_issued",
            handle=published.handle,
            subject_id=subject,
            issuer_id=issuer,
            display_level=published.escalation_level_at_issue,
        )
        return published

    async def decide_reprimand(
        self,
        handle: str,
        outcome: DecisionOutcome,
        decider_id: str,
        reason: str | None = None,
    ) -> ReprimandRecord:
        """Approve or reject a pending reprimand.

        On approval the subject's level goes up by one (max 3) and the
        approval is announced. If the subject is still below 3 once the
        announcement is out, a remediation grant keyed by it is created.

        Raises:
            NotFoundError: If the handle is unknown.
            InvalidStateError: If the reprimand was already decided.
            MissingRejectionReasonError: If rejecting without a reason.
        """
        decided, _ = await self._decide(
            WorkflowType.REPRIMAND, handle, outcome, decider_id, reason
        )

        if outcome is DecisionOutcome.APPROVE:
            notice_handle = await self._announce(decided)
            await self._grant_remediation(decided, notice_handle or handle)
        return decided

    async def _grant_remediation(self, reprimand: ReprimandRecord, notice_handle: str) -> None:
        """Create a remediation grant unless the subject is at the maximum.

        The level is read again under the command lock, since other
        approvals may have run while the announcement was being posted.
        """
        subject = reprimand.subject_id
        async with self._command_lock:
            level = await self._counter_store.get(subject)
            if escalation.is_at_maximum(level):
                logger.info(
                    "remediation_grant_withheld",
                    user_id=subject,
                    reprimand_handle=reprimand.handle,
                    level=level,
                )
                return
            grant = RemediationGrant(
                notice_handle=notice_handle,
                user_id=subject,
                reprimand_handle=reprimand.handle,
                created_at=self._time.now(),
            )
            await self._registry.add_grant(grant)

        logger.info(
            "remediation_grant_created",
            user_id=subject,
            notice_handle=grant.notice_handle,
        )

    # ------------------------------------------------------------------
    # Remediations
    # ------------------------------------------------------------------

    async def submit_remediation(
        self,
        user_id: str,
        reprimand_reference: str,
        proof: str,
    ) -> RemediationRecord | Refused:
        """File a remediation form.

        Users without a remediation grant, or with a remediation still
        awaiting decision, are turned away with Refused.

        Raises:
            ValidationError: If the id is malformed or a field is empty.
        """
        submitter = normalize_user_id(user_id)

        async with self._command_lock:
            if not await self._gate.can_start_remediation(submitter):
                return self._refuse(WorkflowType.REMEDIATION, submitter, "no_remediation_grant")
            if await self._gate.has_pending_remediation(submitter):
                return self._refuse(WorkflowType.REMEDIATION, submitter, "remediation_pending")

            record = RemediationRecord(
                submitter_id=submitter,
                reprimand_reference=reprimand_reference.strip(),
                proof=proof.strip(),
                created_at=self._time.now(),
            )
            published = await self._publish(WorkflowType.REMEDIATION, record)

        logger.info("remediation_submitted", handle=published.handle, user_id=submitter)
        return published

    async def decide_remediation(
        self,
        handle: str,
        outcome: DecisionOutcome,
        decider_id: str,
        reason: str | None = None,
    ) -> RemediationRecord:
        """Approve or reject a pending remediation.

        Approval resets the submitter's level to 0. The submitter is
        notified of either outcome.
        """
        decided, _ = await self._decide(
            WorkflowType.REMEDIATION, handle, outcome, decider_id, reason
        )
        await self._notify_decision(WorkflowType.REMEDIATION, decided)
        return decided

    # ------------------------------------------------------------------
    # Appeals
    # ------------------------------------------------------------------

    async def submit_appeal(
        self,
        user_id: str,
        reprimand_reference: str,
        reason: str,
        proof: str,
    ) -> AppealRecord | Refused:
        """File an appeal.

        Users with any tracked appeal, whatever its status, are turned
        away with Refused.

        Raises:
            ValidationError: If the id is malformed or a field is empty.
        """
        submitter = normalize_user_id(user_id)

        async with self._command_lock:
            if not await self._gate.can_start_appeal(submitter):
                return self._refuse(WorkflowType.APPEAL, submitter, "appeal_already_filed")

            record = AppealRecord(
                submitter_id=submitter,
                reprimand_reference=reprimand_reference.strip(),
                reason=reason.strip(),
                proof=proof.strip(),
                created_at=self._time.now(),
            )
            published = await self._publish(WorkflowType.APPEAL, record)

        logger.info("appeal_submitted", handle=published.handle, user_id=submitter)
        return published

    async def decide_appeal(
        self,
        handle: str,
        outcome: DecisionOutcome,
        decider_id: str,
        reason: str | None = None,
    ) -> AppealRecord:
        """Approve or reject a pending appeal.

        Approval lowers the submitter's level by one (min 0). The
        submitter is notified of either outcome.
        """
        decided, _ = await self._decide(
            WorkflowType.APPEAL, handle, outcome, decider_id, reason
        )
        await self._notify_decision(WorkflowType.APPEAL, decided)
        return decided

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _refuse(self, workflow_type: WorkflowType, user_id: str, reason: str) -> Refused:
        logger.info(
            "submission_refused",
            workflow_type=workflow_type.value,
            user_id=user_id,
            reason=reason,
        )
        return Refused(workflow_type=workflow_type, user_id=user_id, reason=reason)

    async def _publish(self, workflow_type: WorkflowType, record):
        """Post the record and track it under the returned handle.

        If posting fails the registry generates a handle so the record
        is still tracked and can be decided.
        """
        external_handle: str | None = None
        try:
            external_handle = await self._presentation.publish_record(workflow_type, record)
        except Exception as e:
            logger.warning(
                "record_publish_failed",
                workflow_type=workflow_type.value,
                owner_id=record.owner_id,
                error=str(e),
            )
        handle = await self._registry.publish(workflow_type, record, handle=external_handle)
        return await self._registry.get(workflow_type, handle)

    async def _decide(
        self,
        workflow_type: WorkflowType,
        handle: str,
        outcome: DecisionOutcome,
        decider_id: str,
        reason: str | None,
    ) -> tuple[WorkflowRecord, int | None]:
        """Transition a record and apply the counter rule on approval.

        Returns:
            The decided record and the owner's new level (None on reject).
        """
        decider = normalize_user_id(decider_id)
        log = logger.bind(
            workflow_type=workflow_type.value,
            handle=handle,
            decider_id=decider,
            outcome=outcome.value,
        )

        new_level: int | None = None
        async with self._command_lock:
            # Unknown handle, then terminal record, then missing reason
            current = await self._registry.get(workflow_type, handle)
            if not current.is_pending:
                raise InvalidStateError(workflow_type, handle, current.status)
            if outcome is DecisionOutcome.REJECT and (reason is None or not reason.strip()):
                log.info("rejection_without_reason")
                raise MissingRejectionReasonError(handle)

            decided = await self._registry.transition(
                workflow_type,
                handle,
                outcome,
                decided_by=decider,
                decided_at=self._time.now(),
                reason=reason,
            )

            if outcome is DecisionOutcome.APPROVE:
                owner = decided.owner_id
                prior_level = await self._counter_store.get(owner)
                new_level = COUNTER_RULES[workflow_type](prior_level)
                await self._write_counter(owner, new_level)
                log = log.bind(owner_id=owner, prior_level=prior_level, new_level=new_level)

        log.info(f"{workflow_type.value}_{decided.status.value}")
        await self._refresh_display(workflow_type, decided)
        return decided, new_level

    async def _write_counter(self, user_id: str, value: int) -> None:
        try:
            await self._counter_store.set(user_id, value)
        except PersistenceError as e:
            # In-memory value is already updated and stays authoritative
            logger.error(
                "counter_persist_failed",
                user_id=user_id,
                value=value,
                path=e.path,
                error=e.cause,
            )

    async def _refresh_display(self, workflow_type: WorkflowType, record: WorkflowRecord) -> None:
        try:
            await self._presentation.update_record_display(workflow_type, record.handle, record)
        except Exception as e:
            logger.warning(
                "record_display_update_failed",
                workflow_type=workflow_type.value,
                handle=record.handle,
                error=str(e),
            )

    async def _announce(self, record: ReprimandRecord) -> str | None:
        try:
            return await self._presentation.publish_announcement(record)
        except Exception as e:
            logger.warning(
                "reprimand_announcement_failed",
                handle=record.handle,
                subject_id=record.subject_id,
                error=str(e),
            )
            return None

    async def _notify_decision(self, workflow_type: WorkflowType, record: WorkflowRecord) -> None:
        decision = record.decision
        subject = NOTIFICATION_SUBJECTS[(workflow_type, decision.outcome)]
        reference = f"{_FORM_LABELS[workflow_type]}: {record.handle}"
        if decision.outcome is DecisionOutcome.REJECT:
            body = f"Reason: {decision.rejection_reason}\n{reference}"
        else:
            body = reference

        try:
            await self._notifier.notify_user(record.owner_id, subject, body)
        except Exception as e:
            logger.warning(
                "decision_notification_failed",
                workflow_type=workflow_type.value,
                handle=record.handle,
                user_id=record.owner_id,
                error=str(e),
            )
