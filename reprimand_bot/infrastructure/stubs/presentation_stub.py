"""Recording stub for PresentationPort.

Hands out sequential message-style handles and records every call so
tests can assert on what would have been posted or edited.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count

from reprimand_bot.domain.models.records import ReprimandRecord, WorkflowRecord
from reprimand_bot.domain.models.workflow import WorkflowType


@dataclass
class PresentationStub:
    """In-memory stub implementation of PresentationPort.

    Attributes:
        published: (workflow_type, handle, record) for each publish_record().
        updates: (workflow_type, handle, record) for each display update.
        announcements: (notice_handle, record) for each announcement.
        fail_publish: Raise from publish_record() when True.
        fail_updates: Raise from update_record_display() when True.
        fail_announcements: Raise from publish_announcement() when True.
    """

    published: list[tuple[WorkflowType, str, WorkflowRecord]] = field(
        default_factory=list
    )
    updates: list[tuple[WorkflowType, str, WorkflowRecord]] = field(
        default_factory=list
    )
    announcements: list[tuple[str, ReprimandRecord]] = field(default_factory=list)
    fail_publish: bool = False
    fail_updates: bool = False
    fail_announcements: bool = False
    _ids: count = field(default_factory=lambda: count(1000))

    def _next_handle(self) -> str:
        return str(next(self._ids))

    async def publish_record(
        self, workflow_type: WorkflowType, record: WorkflowRecord
    ) -> str:
        if self.fail_publish:
            raise ConnectionError("simulated publish failure")
        handle = self._next_handle()
        self.published.append((workflow_type, handle, record))
        return handle

    async def update_record_display(
        self,
        workflow_type: WorkflowType,
        handle: str,
        record: WorkflowRecord,
    ) -> None:
        if self.fail_updates:
            raise ConnectionError("simulated edit failure")
        self.updates.append((workflow_type, handle, record))

    async def publish_announcement(self, record: ReprimandRecord) -> str:
        if self.fail_announcements:
            raise ConnectionError("simulated announcement failure")
        handle = self._next_handle()
        self.announcements.append((handle, record))
        return handle
