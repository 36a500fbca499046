"""
Pytest configuration and shared fixtures for Reprimand Bot tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Port collaborators come from reprimand_bot.infrastructure.stubs
- Timestamps come from FakeTimeAuthority, never the wall clock
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from reprimand_bot.application.services.command_dispatcher import CommandDispatcher
from reprimand_bot.application.services.workflow_engine import WorkflowEngine
from reprimand_bot.infrastructure.adapters.persistence import InMemoryRecordRegistry
from reprimand_bot.infrastructure.stubs import (
    AuthorizationStub,
    CounterStoreStub,
    NotificationStub,
    PresentationStub,
)
from tests.helpers import FakeTimeAuthority

MODERATOR_ID = "900"
SUBJECT_ID = "200"
ISSUER_ID = "100"


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Clock frozen at 2026-01-15T10:00:00Z."""
    return FakeTimeAuthority(frozen_at=datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def counter_store() -> CounterStoreStub:
    """Create an empty counter store stub."""
    return CounterStoreStub()


@pytest.fixture
def registry() -> InMemoryRecordRegistry:
    """Create an empty record registry."""
    return InMemoryRecordRegistry()


@pytest.fixture
def presentation() -> PresentationStub:
    """Create a recording presentation stub."""
    return PresentationStub()


@pytest.fixture
def notifier() -> NotificationStub:
    """Create a recording notification stub."""
    return NotificationStub()


@pytest.fixture
def authorization() -> AuthorizationStub:
    """Authorization stub recognising a single moderator."""
    return AuthorizationStub({MODERATOR_ID})


@pytest.fixture
def engine(
    counter_store: CounterStoreStub,
    registry: InMemoryRecordRegistry,
    presentation: PresentationStub,
    notifier: NotificationStub,
    fake_time_authority: FakeTimeAuthority,
) -> WorkflowEngine:
    """Create a workflow engine wired to stubs."""
    return WorkflowEngine(
        counter_store=counter_store,
        registry=registry,
        presentation=presentation,
        notifier=notifier,
        time_authority=fake_time_authority,
    )


@pytest.fixture
def dispatcher(engine: WorkflowEngine, authorization: AuthorizationStub) -> CommandDispatcher:
    """Create a command dispatcher around the stubbed engine."""
    return CommandDispatcher(engine=engine, authorization=authorization)
