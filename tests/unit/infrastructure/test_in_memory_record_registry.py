"""Unit tests for InMemoryRecordRegistry.

Tests cover:
- publish() with supplied and generated handles
- publish() guards (type mismatch, duplicate handle, non-pending record)
- get() of unknown handles
- transition() atomicity and terminal-state enforcement
- find_by_user() and list_records() ordering and filtering
- Remediation grants
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from reprimand_bot.domain.errors import InvalidStateError, NotFoundError
from reprimand_bot.domain.models.records import (
    AppealRecord,
    RemediationGrant,
    RemediationRecord,
    ReprimandRecord,
)
from reprimand_bot.domain.models.workflow import (
    DecisionOutcome,
    RecordStatus,
    WorkflowType,
)
from reprimand_bot.infrastructure.adapters.persistence import InMemoryRecordRegistry

DECIDED_AT = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def _reprimand(subject_id: str = "200") -> ReprimandRecord:
    return ReprimandRecord(
        subject_id=subject_id,
        issuer_id="100",
        charter_article="Article 4",
        remediation_method="Apologise",
        escalation_level_at_issue=1,
    )


def _remediation(user_id: str = "200") -> RemediationRecord:
    return RemediationRecord(submitter_id=user_id, reprimand_reference="#1", proof="Done")


class TestPublish:
    """Tests for publish()."""

    @pytest.mark.asyncio
    async def test_publish_with_supplied_handle(self, registry: InMemoryRecordRegistry) -> None:
        handle = await registry.publish(WorkflowType.REPRIMAND, _reprimand(), handle="1001")

        assert handle == "1001"
        stored = await registry.get(WorkflowType.REPRIMAND, "1001")
        assert stored.handle == "1001"
        assert stored.status is RecordStatus.PENDING

    @pytest.mark.asyncio
    async def test_publish_generates_handle(self, registry: InMemoryRecordRegistry) -> None:
        first = await registry.publish(WorkflowType.REPRIMAND, _reprimand())
        second = await registry.publish(WorkflowType.REPRIMAND, _reprimand())

        assert first and second
        assert first != second

    @pytest.mark.asyncio
    async def test_duplicate_handle_rejected(self, registry: InMemoryRecordRegistry) -> None:
        await registry.publish(WorkflowType.REPRIMAND, _reprimand(), handle="1001")
        with pytest.raises(ValueError):
            await registry.publish(WorkflowType.REPRIMAND, _reprimand(), handle="1001")

    @pytest.mark.asyncio
    async def test_same_handle_allowed_across_workflow_types(
        self, registry: InMemoryRecordRegistry
    ) -> None:
        """Each workflow type has its own handle space."""
        await registry.publish(WorkflowType.REPRIMAND, _reprimand(), handle="1001")
        await registry.publish(WorkflowType.REMEDIATION, _remediation(), handle="1001")

        assert (await registry.get(WorkflowType.REMEDIATION, "1001")).WORKFLOW_TYPE is (
            WorkflowType.REMEDIATION
        )

    @pytest.mark.asyncio
    async def test_type_mismatch_rejected(self, registry: InMemoryRecordRegistry) -> None:
        with pytest.raises(ValueError):
            await registry.publish(WorkflowType.APPEAL, _reprimand())

    @pytest.mark.asyncio
    async def test_decided_record_cannot_be_published(
        self, registry: InMemoryRecordRegistry
    ) -> None:
        handle = await registry.publish(WorkflowType.REPRIMAND, _reprimand())
        decided = await registry.transition(
            WorkflowType.REPRIMAND, handle, DecisionOutcome.APPROVE, "900", DECIDED_AT
        )
        with pytest.raises(ValueError):
            await registry.publish(WorkflowType.REPRIMAND, decided, handle="other")


class TestGet:
    @pytest.mark.asyncio
    async def test_unknown_handle_raises(self, registry: InMemoryRecordRegistry) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await registry.get(WorkflowType.APPEAL, "nope")
        assert exc_info.value.workflow_type is WorkflowType.APPEAL
        assert exc_info.value.handle == "nope"


class TestTransition:
    """Tests for transition()."""

    @pytest.mark.asyncio
    async def test_approve_sets_status_and_decision(
        self, registry: InMemoryRecordRegistry
    ) -> None:
        handle = await registry.publish(WorkflowType.REPRIMAND, _reprimand())

        decided = await registry.transition(
            WorkflowType.REPRIMAND, handle, DecisionOutcome.APPROVE, "900", DECIDED_AT
        )

        assert decided.status is RecordStatus.APPROVED
        assert decided.decision.decided_by == "900"
        assert decided.decision.decided_at == DECIDED_AT
        assert decided.decision.rejection_reason is None
        assert await registry.get(WorkflowType.REPRIMAND, handle) == decided

    @pytest.mark.asyncio
    async def test_approve_ignores_reason(self, registry: InMemoryRecordRegistry) -> None:
        handle = await registry.publish(WorkflowType.REPRIMAND, _reprimand())
        decided = await registry.transition(
            WorkflowType.REPRIMAND,
            handle,
            DecisionOutcome.APPROVE,
            "900",
            DECIDED_AT,
            reason="stray text",
        )
        assert decided.decision.rejection_reason is None

    @pytest.mark.asyncio
    async def test_reject_stores_reason(self, registry: InMemoryRecordRegistry) -> None:
        handle = await registry.publish(WorkflowType.REMEDIATION, _remediation())
        decided = await registry.transition(
            WorkflowType.REMEDIATION,
            handle,
            DecisionOutcome.REJECT,
            "900",
            DECIDED_AT,
            reason="  Not enough proof ",
        )
        assert decided.status is RecordStatus.REJECTED
        assert decided.decision.rejection_reason == "Not enough proof"

    @pytest.mark.asyncio
    async def test_second_transition_raises(self, registry: InMemoryRecordRegistry) -> None:
        handle = await registry.publish(WorkflowType.REPRIMAND, _reprimand())
        await registry.transition(
            WorkflowType.REPRIMAND, handle, DecisionOutcome.APPROVE, "900", DECIDED_AT
        )

        with pytest.raises(InvalidStateError):
            await registry.transition(
                WorkflowType.REPRIMAND,
                handle,
                DecisionOutcome.REJECT,
                "901",
                DECIDED_AT,
                reason="late",
            )

        stored = await registry.get(WorkflowType.REPRIMAND, handle)
        assert stored.status is RecordStatus.APPROVED
        assert stored.decision.decided_by == "900"

    @pytest.mark.asyncio
    async def test_unknown_handle_raises_not_found(
        self, registry: InMemoryRecordRegistry
    ) -> None:
        with pytest.raises(NotFoundError):
            await registry.transition(
                WorkflowType.REPRIMAND, "ghost", DecisionOutcome.APPROVE, "900", DECIDED_AT
            )

    @pytest.mark.asyncio
    async def test_concurrent_transitions_only_one_wins(
        self, registry: InMemoryRecordRegistry
    ) -> None:
        handle = await registry.publish(WorkflowType.REPRIMAND, _reprimand())

        results = await asyncio.gather(
            registry.transition(
                WorkflowType.REPRIMAND, handle, DecisionOutcome.APPROVE, "900", DECIDED_AT
            ),
            registry.transition(
                WorkflowType.REPRIMAND,
                handle,
                DecisionOutcome.REJECT,
                "901",
                DECIDED_AT,
                reason="No",
            ),
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, InvalidStateError)]
        assert len(errors) == 1


class TestQueries:
    """Tests for find_by_user() and list_records()."""

    @pytest.mark.asyncio
    async def test_find_by_user_filters_owner(self, registry: InMemoryRecordRegistry) -> None:
        mine = await registry.publish(WorkflowType.REPRIMAND, _reprimand("200"))
        await registry.publish(WorkflowType.REPRIMAND, _reprimand("201"))

        assert await registry.find_by_user(WorkflowType.REPRIMAND, "200") == [mine]

    @pytest.mark.asyncio
    async def test_find_by_user_filters_status(self, registry: InMemoryRecordRegistry) -> None:
        decided = await registry.publish(WorkflowType.REMEDIATION, _remediation())
        await registry.transition(
            WorkflowType.REMEDIATION, decided, DecisionOutcome.APPROVE, "900", DECIDED_AT
        )
        pending = await registry.publish(WorkflowType.REMEDIATION, _remediation())

        found = await registry.find_by_user(
            WorkflowType.REMEDIATION, "200", statuses={RecordStatus.PENDING}
        )
        assert found == [pending]
        assert await registry.find_by_user(WorkflowType.REMEDIATION, "200") == [
            decided,
            pending,
        ]

    @pytest.mark.asyncio
    async def test_list_records_in_publication_order(
        self, registry: InMemoryRecordRegistry
    ) -> None:
        for handle in ("3", "1", "2"):
            await registry.publish(
                WorkflowType.APPEAL,
                AppealRecord(
                    submitter_id=f"20{handle}",
                    reprimand_reference="#1",
                    reason="Unfair",
                    proof="Log",
                ),
                handle=handle,
            )

        records = await registry.list_records(WorkflowType.APPEAL)
        assert [r.handle for r in records] == ["3", "1", "2"]
        assert await registry.list_records(WorkflowType.REPRIMAND) == []


class TestGrants:
    @pytest.mark.asyncio
    async def test_grants_keyed_by_notice_handle(self, registry: InMemoryRecordRegistry) -> None:
        grant = RemediationGrant(notice_handle="5000", user_id="200", reprimand_handle="1001")
        await registry.add_grant(grant)
        await registry.add_grant(grant)

        assert await registry.list_grants() == [grant]
