"""Eligibility gate service.

Reads the registry and applies the pure eligibility rules from
``reprimand_bot.domain.services.eligibility``. The gate never mutates
anything; it only answers whether a user may start a workflow.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from reprimand_bot.domain.services import eligibility
from reprimand_bot.domain.models.workflow import RecordStatus, WorkflowType

if TYPE_CHECKING:
    from reprimand_bot.application.ports.record_registry import (
        RecordRegistryProtocol,
    )
    from reprimand_bot.domain.models.records import WorkflowRecord


class EligibilityGate:
    """Decides whether a user may open a new reprimand, remediation or appeal.

    Example:
        >>> gate = EligibilityGate(registry)
        >>> if await gate.can_start_remediation(user_id):
        ...     show_remediation_form()
    """

    def __init__(self, registry: RecordRegistryProtocol) -> None:
        """Initialize the gate.

        Args:
            registry: Registry holding records and grants.
        """
        self._registry = registry

    async def can_start_reprimand(self, subject_id: str) -> bool:
        """Reprimands are never gated."""
        return eligibility.can_start_reprimand(subject_id)

    async def can_start_remediation(self, user_id: str) -> bool:
        """Return True if the user holds a remediation grant."""
        grants = await self._registry.list_grants()
        return eligibility.can_start_remediation(user_id, grants)

    async def has_pending_remediation(self, user_id: str) -> bool:
        """Return True if the user has a remediation awaiting decision."""
        records = await self._records_of(
            WorkflowType.REMEDIATION, user_id, {RecordStatus.PENDING}
        )
        return eligibility.has_pending_remediation(user_id, records)

    async def can_start_appeal(self, user_id: str) -> bool:
        """Return True if the user has no tracked appeal of any status."""
        records = await self._records_of(WorkflowType.APPEAL, user_id)
        return eligibility.can_start_appeal(user_id, records)

    async def _records_of(
        self,
        workflow_type: WorkflowType,
        user_id: str,
        statuses: set[RecordStatus] | None = None,
    ) -> list[WorkflowRecord]:
        handles = await self._registry.find_by_user(workflow_type, user_id, statuses)
        return [await self._registry.get(workflow_type, handle) for handle in handles]
