"""Console adapters for running the workflow without a chat platform.

Records, announcements and direct messages are written as single text
lines to a stream (stdout by default). Handles are sequential integers
rendered as strings, mimicking platform message ids.
"""

from __future__ import annotations

import sys
from itertools import count
from typing import TextIO

from reprimand_bot.domain.models.records import ReprimandRecord, WorkflowRecord
from reprimand_bot.domain.models.workflow import WorkflowType


class ConsolePresentation:
    """PresentationPort writing records to a text stream."""

    def __init__(self, stream: TextIO | None = None, first_handle: int = 1) -> None:
        self._stream = stream or sys.stdout
        self._ids = count(first_handle)

    def _write(self, line: str) -> None:
        print(line, file=self._stream, flush=True)

    async def publish_record(
        self, workflow_type: WorkflowType, record: WorkflowRecord
    ) -> str:
        handle = str(next(self._ids))
        self._write(
            f"[{workflow_type.value} #{handle}] pending approval "
            f"(owner {record.owner_id})"
        )
        return handle

    async def update_record_display(
        self,
        workflow_type: WorkflowType,
        handle: str,
        record: WorkflowRecord,
    ) -> None:
        decision = record.decision
        line = f"[{workflow_type.value} #{handle}] {record.status.value}"
        if decision is not None:
            line += f" by {decision.decided_by}"
            if decision.rejection_reason:
                line += f": {decision.rejection_reason}"
        self._write(line)

    async def publish_announcement(self, record: ReprimandRecord) -> str:
        handle = str(next(self._ids))
        self._write(
            f"[announcement #{handle}] reprimand for {record.subject_id} approved "
            f"({record.charter_article})"
        )
        return handle


class ConsoleNotifier:
    """NotificationPort writing direct messages to a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout

    async def notify_user(self, user_id: str, subject: str, body: str) -> None:
        flat_body = body.replace("\n", " | ")
        print(f"[dm -> {user_id}] {subject}: {flat_body}", file=self._stream, flush=True)
