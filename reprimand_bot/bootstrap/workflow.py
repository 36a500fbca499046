"""Bootstrap wiring for the workflow engine and command dispatcher.

The platform adapter supplies the presentation and notification sinks;
everything else is assembled from configuration.
"""

from __future__ import annotations

from structlog import get_logger

from reprimand_bot.application.ports.authorization import AuthorizationPort
from reprimand_bot.application.ports.counter_store import CounterStoreProtocol
from reprimand_bot.application.ports.notification import NotificationPort
from reprimand_bot.application.ports.presentation import PresentationPort
from reprimand_bot.application.ports.record_registry import RecordRegistryProtocol
from reprimand_bot.application.ports.time_authority import TimeAuthorityProtocol
from reprimand_bot.application.services.command_dispatcher import CommandDispatcher
from reprimand_bot.application.services.workflow_engine import WorkflowEngine
from reprimand_bot.config.bot_config import BotConfig
from reprimand_bot.infrastructure.adapters import (
    InMemoryRecordRegistry,
    JsonFileCounterStore,
    StaticModeratorAuthorization,
    SystemTimeAuthority,
)

logger = get_logger()


def build_workflow_engine(
    config: BotConfig,
    presentation: PresentationPort,
    notifier: NotificationPort,
    *,
    counter_store: CounterStoreProtocol | None = None,
    registry: RecordRegistryProtocol | None = None,
    time_authority: TimeAuthorityProtocol | None = None,
) -> WorkflowEngine:
    """Assemble a WorkflowEngine.

    Args:
        config: Bot configuration.
        presentation: Platform sink for records.
        notifier: Platform sink for direct messages.
        counter_store: Override for the JSON file counter store.
        registry: Override for the in-memory record registry.
        time_authority: Override for the system clock.

    Returns:
        A ready WorkflowEngine.
    """
    if counter_store is None:
        counter_store = JsonFileCounterStore(config.counts_file)
        logger.info("counter_store_initialized", path=str(config.counts_file))

    return WorkflowEngine(
        counter_store=counter_store,
        registry=registry or InMemoryRecordRegistry(),
        presentation=presentation,
        notifier=notifier,
        time_authority=time_authority or SystemTimeAuthority(),
    )


def build_command_dispatcher(
    config: BotConfig,
    presentation: PresentationPort,
    notifier: NotificationPort,
    *,
    authorization: AuthorizationPort | None = None,
    engine: WorkflowEngine | None = None,
) -> CommandDispatcher:
    """Assemble a CommandDispatcher around a (new) WorkflowEngine.

    Moderator rights come from ``config.moderator_ids`` unless an
    authorization port is supplied.
    """
    if engine is None:
        engine = build_workflow_engine(config, presentation, notifier)
    if authorization is None:
        authorization = StaticModeratorAuthorization(config.moderator_ids)
    return CommandDispatcher(engine=engine, authorization=authorization)
