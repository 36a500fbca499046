"""In-memory implementation of RecordRegistryProtocol.

Records only live for the lifetime of the process; a restart forgets
every pending record and grant while the escalation counters survive in
their own store.

Three independent maps (reprimand, remediation, appeal) are kept,
plus the grant map keyed by approval notice handle. Dicts preserve
insertion order, so scans return records in publication order.
"""

from __future__ import annotations

import asyncio
from collections.abc import Collection
from datetime import datetime
from uuid import uuid4

from structlog import get_logger

from reprimand_bot.domain.errors import NotFoundError
from reprimand_bot.domain.models.records import (
    RECORD_CLASSES,
    Decision,
    RemediationGrant,
    WorkflowRecord,
)
from reprimand_bot.domain.models.workflow import (
    DecisionOutcome,
    RecordStatus,
    WorkflowType,
)

logger = get_logger(__name__)


class InMemoryRecordRegistry:
    """Handle -> record maps per workflow type, plus remediation grants.

    Attributes:
        _records: Per-type dictionaries mapping handle to record.
        _grants: Dictionary mapping notice handle to grant.
    """

    def __init__(self) -> None:
        """Initialize empty maps."""
        self._records: dict[WorkflowType, dict[str, WorkflowRecord]] = {
            workflow_type: {} for workflow_type in WorkflowType
        }
        self._grants: dict[str, RemediationGrant] = {}
        # Guards the read-check-write in transition()
        self._transition_lock = asyncio.Lock()

    async def publish(
        self,
        workflow_type: WorkflowType,
        record: WorkflowRecord,
        handle: str | None = None,
    ) -> str:
        """Track a new pending record and return its handle.

        Raises:
            ValueError: If the handle is taken, the record type does not
                match, or the record is not PENDING.
        """
        if not isinstance(record, RECORD_CLASSES[workflow_type]):
            raise ValueError(
                f"{type(record).__name__} cannot be tracked as {workflow_type.value}"
            )
        if record.status is not RecordStatus.PENDING:
            raise ValueError(f"Only pending records can be published, got {record.status.value}")

        records = self._records[workflow_type]
        effective_handle = handle if handle is not None else uuid4().hex
        if effective_handle in records:
            raise ValueError(f"Handle already in use: {effective_handle}")

        records[effective_handle] = record.with_handle(effective_handle)
        logger.debug(
            "record_published",
            workflow_type=workflow_type.value,
            handle=effective_handle,
            owner_id=record.owner_id,
        )
        return effective_handle

    async def get(self, workflow_type: WorkflowType, handle: str) -> WorkflowRecord:
        """Retrieve a record by handle.

        Raises:
            NotFoundError: If no record is tracked under the handle.
        """
        record = self._records[workflow_type].get(handle)
        if record is None:
            raise NotFoundError(workflow_type, handle)
        return record

    async def transition(
        self,
        workflow_type: WorkflowType,
        handle: str,
        outcome: DecisionOutcome,
        decided_by: str,
        decided_at: datetime,
        reason: str | None = None,
    ) -> WorkflowRecord:
        """Atomically decide a pending record.

        Status and decision are replaced together in a single assignment.

        Raises:
            NotFoundError: If the handle is unknown.
            InvalidStateError: If the record is already terminal.
            ValidationError: If a rejection carries no reason.
        """
        async with self._transition_lock:
            record = await self.get(workflow_type, handle)
            rejection_reason = None
            if outcome is DecisionOutcome.REJECT:
                rejection_reason = (reason or "").strip()
            decision = Decision(
                outcome=outcome,
                decided_by=decided_by,
                decided_at=decided_at,
                rejection_reason=rejection_reason,
            )
            updated = record.with_decision(decision)
            self._records[workflow_type][handle] = updated
            return updated

    async def find_by_user(
        self,
        workflow_type: WorkflowType,
        user_id: str,
        statuses: Collection[RecordStatus] | None = None,
    ) -> list[str]:
        """Return handles of a user's records, optionally filtered by status."""
        return [
            handle
            for handle, record in self._records[workflow_type].items()
            if record.owner_id == user_id
            and (statuses is None or record.status in statuses)
        ]

    async def list_records(self, workflow_type: WorkflowType) -> list[WorkflowRecord]:
        """Return every record of a workflow type in publication order."""
        return list(self._records[workflow_type].values())

    async def add_grant(self, grant: RemediationGrant) -> None:
        """Track a remediation grant keyed by its notice handle."""
        self._grants[grant.notice_handle] = grant
        logger.debug(
            "remediation_grant_added",
            notice_handle=grant.notice_handle,
            user_id=grant.user_id,
        )

    async def list_grants(self) -> list[RemediationGrant]:
        """Return every tracked remediation grant."""
        return list(self._grants.values())
