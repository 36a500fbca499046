"""Domain models for Reprimand Bot."""

from reprimand_bot.domain.models.escalation import (
    MAX_ESCALATION_LEVEL,
    MIN_ESCALATION_LEVEL,
)
from reprimand_bot.domain.models.records import (
    EVIDENCE_NOT_PROVIDED,
    AppealRecord,
    Decision,
    Refused,
    RemediationGrant,
    RemediationRecord,
    ReprimandRecord,
    WorkflowRecord,
)
from reprimand_bot.domain.models.workflow import (
    DecisionOutcome,
    RecordStatus,
    WorkflowType,
)

__all__: list[str] = [
    "AppealRecord",
    "Decision",
    "DecisionOutcome",
    "EVIDENCE_NOT_PROVIDED",
    "MAX_ESCALATION_LEVEL",
    "MIN_ESCALATION_LEVEL",
    "RecordStatus",
    "Refused",
    "RemediationGrant",
    "RemediationRecord",
    "ReprimandRecord",
    "WorkflowRecord",
    "WorkflowType",
]
