"""Workflow record errors.

These errors cover lookups of unknown handles and transitions attempted
on records that have already been decided. Both are surfaced to the
platform adapter so the moderator receives feedback.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from reprimand_bot.domain.exceptions import ReprimandBotError

if TYPE_CHECKING:
    from reprimand_bot.domain.models.workflow import RecordStatus, WorkflowType


class NotFoundError(ReprimandBotError):
    """Raised when no record is tracked under the given handle.

    Attributes:
        workflow_type: Registry that was searched.
        handle: The handle that was not found.
    """

    def __init__(self, workflow_type: WorkflowType, handle: str) -> None:
        """Initialize not found error.

        Args:
            workflow_type: The workflow registry that was searched.
            handle: The unknown handle.
        """
        self.workflow_type = workflow_type
        self.handle = handle
        super().__init__(f"No {workflow_type.value} record tracked for handle {handle}")


class InvalidStateError(ReprimandBotError):
    """Raised when a transition is attempted on a non-pending record.

    Once a record is approved or rejected it is terminal; its status and
    decision can never change again.

    Attributes:
        workflow_type: Type of the record.
        handle: Handle of the record.
        current_status: The status the record is already in.
    """

    def __init__(
        self,
        workflow_type: WorkflowType,
        handle: str | None,
        current_status: RecordStatus,
    ) -> None:
        """Initialize invalid state error.

        Args:
            workflow_type: Type of the record.
            handle: Handle of the record (None if never published).
            current_status: The record's current status.
        """
        self.workflow_type = workflow_type
        self.handle = handle
        self.current_status = current_status
        super().__init__(
            f"{workflow_type.value} record {handle} is already "
            f"{current_status.value}; terminal records cannot be decided again"
        )
