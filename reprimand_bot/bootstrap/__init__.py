"""Bootstrap wiring for Reprimand Bot."""

from reprimand_bot.bootstrap.logging import configure_structlog
from reprimand_bot.bootstrap.workflow import (
    build_command_dispatcher,
    build_workflow_engine,
)

__all__ = [
    "build_command_dispatcher",
    "build_workflow_engine",
    "configure_structlog",
]
