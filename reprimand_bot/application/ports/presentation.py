"""Presentation port for publishing workflow records.

The platform adapter renders records as rich messages in the relevant
channel and returns the message id as the record's handle. Rendering
details (colours, fields, buttons) belong entirely to the adapter.
"""

from __future__ import annotations

from typing import Protocol

from reprimand_bot.domain.models.records import ReprimandRecord, WorkflowRecord
from reprimand_bot.domain.models.workflow import WorkflowType


class PresentationPort(Protocol):
    """Protocol for rendering, posting and editing workflow records."""

    async def publish_record(
        self, workflow_type: WorkflowType, record: WorkflowRecord
    ) -> str:
        """Post a new pending record for moderators to decide.

        Returns:
            External handle of the posted record (e.g. message id).
        """
        ...

    async def update_record_display(
        self,
        workflow_type: WorkflowType,
        handle: str,
        record: WorkflowRecord,
    ) -> None:
        """Re-render a published record after its status changed."""
        ...

    async def publish_announcement(self, record: ReprimandRecord) -> str:
        """Announce an approved reprimand in the announcement channel.

        Returns:
            Handle of the published notice. Remediation grants are keyed
            by this handle.
        """
        ...
