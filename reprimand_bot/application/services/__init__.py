"""Application services for Reprimand Bot."""

from reprimand_bot.application.services.command_dispatcher import (
    CommandDispatcher,
    DispatchResult,
    InboundAction,
    OpenForm,
)
from reprimand_bot.application.services.eligibility_gate import EligibilityGate
from reprimand_bot.application.services.workflow_engine import WorkflowEngine

__all__: list[str] = [
    "CommandDispatcher",
    "DispatchResult",
    "EligibilityGate",
    "InboundAction",
    "OpenForm",
    "WorkflowEngine",
]
