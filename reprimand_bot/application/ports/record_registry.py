"""Workflow record registry port.

This module defines the contract for tracking workflow records and
remediation grants in memory.

Developer Golden Rules:
1. SINGLE MUTATION POINT - status only changes through transition()
2. TERMINAL IS FINAL - transition() refuses anything not PENDING
3. FAIL LOUD - unknown handles raise NotFoundError
4. NEVER DELETE - decided records stay tracked
"""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from typing import Protocol

from reprimand_bot.domain.models.records import RemediationGrant, WorkflowRecord
from reprimand_bot.domain.models.workflow import (
    DecisionOutcome,
    RecordStatus,
    WorkflowType,
)


class RecordRegistryProtocol(Protocol):
    """Protocol for the per-workflow handle -> record maps plus grants.

    Methods:
        publish: Track a new pending record under a handle
        get: Retrieve a record by handle
        transition: Decide a pending record (the only status mutation)
        find_by_user: Handles of a user's records, optionally by status
        list_records: All records of one workflow type
        add_grant: Track a remediation grant
        list_grants: All tracked remediation grants
    """

    async def publish(
        self,
        workflow_type: WorkflowType,
        record: WorkflowRecord,
        handle: str | None = None,
    ) -> str:
        """Track a new pending record.

        Args:
            workflow_type: Registry to store the record in.
            record: The record to track. Must be PENDING.
            handle: Handle to store it under. A fresh handle is generated
                when None.

        Returns:
            The handle the record is tracked under.

        Raises:
            ValueError: If the handle is already in use, the record type
                does not match workflow_type, or the record is not PENDING.
        """
        ...

    async def get(self, workflow_type: WorkflowType, handle: str) -> WorkflowRecord:
        """Retrieve a record by handle.

        Raises:
            NotFoundError: If no record is tracked under the handle.
        """
        ...

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

        Args:
            workflow_type: Registry holding the record.
            handle: Handle of the record.
            outcome: APPROVE or REJECT.
            decided_by: The deciding moderator.
            decided_at: Decision timestamp.
            reason: Rejection reason (required for REJECT).

        Returns:
            The updated record.

        Raises:
            NotFoundError: If the handle is unknown.
            InvalidStateError: If the record is already terminal.
            ValidationError: If a rejection carries no reason.
        """
        ...

    async def find_by_user(
        self,
        workflow_type: WorkflowType,
        user_id: str,
        statuses: Collection[RecordStatus] | None = None,
    ) -> list[str]:
        """Return handles of records owned by a user.

        Args:
            workflow_type: Registry to scan.
            user_id: Subject (reprimands) or submitter (others).
            statuses: Restrict to these statuses. All statuses when None.

        Returns:
            Handles in publication order.
        """
        ...

    async def list_records(self, workflow_type: WorkflowType) -> list[WorkflowRecord]:
        """Return every record of a workflow type in publication order."""
        ...

    async def add_grant(self, grant: RemediationGrant) -> None:
        """Track a remediation grant keyed by its notice handle."""
        ...

    async def list_grants(self) -> list[RemediationGrant]:
        """Return every tracked remediation grant."""
        ...
