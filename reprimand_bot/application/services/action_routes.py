"""Routing tables for inbound platform actions.

The platform adapter translates every button click and form submission
into an action identifier. These tables map each identifier to the
engine operation it triggers, and describe the forms the adapter must
render. Both tables are pure data; the dispatcher holds no per-action
control flow.

Action identifiers for reject forms carry the record handle after a
colon, e.g. ``reject_appeal_modal:1234567890``.
"""

from __future__ import annotations

from dataclasses import dataclass

from reprimand_bot.domain.models.workflow import DecisionOutcome, WorkflowType

HANDLE_SEPARATOR = ":"


@dataclass(frozen=True)
class FormField:
    """A single input of a platform form.

    Attributes:
        field_id: Key under which the adapter returns the value.
        label: Label shown to the user.
        required: Whether the adapter must insist on a value.
        multiline: Paragraph input rather than a single line.
    """

    field_id: str
    label: str
    required: bool = True
    multiline: bool = False


@dataclass(frozen=True)
class FormSpec:
    """A form the adapter renders when an entry action is clicked."""

    form_id: str
    title: str
    fields: tuple[FormField, ...]


@dataclass(frozen=True)
class Route:
    """Where an inbound action leads.

    Attributes:
        operation: Name of the dispatcher handler to run.
        workflow_type: Workflow the action belongs to.
        outcome: Decision outcome for approve/reject actions.
        form_id: Form to open, for open_form routes.
        moderator_only: Whether the caller must be a moderator.
        needs_handle: Whether the action targets a published record.
        gate: Workflow whose start eligibility the caller must pass.
    """

    operation: str
    workflow_type: WorkflowType
    outcome: DecisionOutcome | None = None
    form_id: str | None = None
    moderator_only: bool = False
    needs_handle: bool = False
    gate: WorkflowType | None = None


REJECTION_REASON_FIELD = "rejection_reason"

FORMS: dict[str, FormSpec] = {
    "reprimand_modal": FormSpec(
        form_id="reprimand_modal",
        title="New Reprimand",
        fields=(
            FormField("issue_to", "Issue to (User ID)"),
            FormField("charter_article", "Charter article", multiline=True),
            FormField("remediation", "Remediation method", multiline=True),
            FormField("proof", "Proof (evidence)", required=False, multiline=True),
        ),
    ),
    "remediation_modal": FormSpec(
        form_id="remediation_modal",
        title="Submit Remediation",
        fields=(
            FormField("reprimand_link", "Link to Reprimand"),
            FormField("remediation_proof", "Remediation proof", multiline=True),
        ),
    ),
    "appeal_modal": FormSpec(
        form_id="appeal_modal",
        title="Submit Reprimand Appeal",
        fields=(
            FormField("appeal_link", "Link to Reprimand"),
            FormField("appeal_reason", "Reason for appeal", multiline=True),
            FormField("appeal_proof", "Proof", multiline=True),
        ),
    ),
}

# Rejection forms share one layout; their ids are bound to a handle
for _workflow_type in WorkflowType:
    _form_id = f"reject_{_workflow_type.value}_modal"
    FORMS[_form_id] = FormSpec(
        form_id=_form_id,
        title="Rejection reason",
        fields=(FormField(REJECTION_REASON_FIELD, "Reason for rejection", multiline=True),),
    )

ACTION_ROUTES: dict[str, Route] = {
    # Entry buttons
    "issue_reprimand": Route(
        "open_form",
        WorkflowType.REPRIMAND,
        form_id="reprimand_modal",
        gate=WorkflowType.REPRIMAND,
    ),
    "remediate": Route(
        "open_form",
        WorkflowType.REMEDIATION,
        form_id="remediation_modal",
        gate=WorkflowType.REMEDIATION,
    ),
    "appeal": Route(
        "open_form",
        WorkflowType.APPEAL,
        form_id="appeal_modal",
        gate=WorkflowType.APPEAL,
    ),
    # Submissions
    "reprimand_modal": Route("issue_reprimand", WorkflowType.REPRIMAND),
    "remediation_modal": Route("submit_remediation", WorkflowType.REMEDIATION),
    "appeal_modal": Route("submit_appeal", WorkflowType.APPEAL),
}

for _workflow_type in WorkflowType:
    _name = _workflow_type.value
    ACTION_ROUTES[f"approve_{_name}"] = Route(
        "decide",
        _workflow_type,
        outcome=DecisionOutcome.APPROVE,
        moderator_only=True,
        needs_handle=True,
    )
    ACTION_ROUTES[f"reject_{_name}"] = Route(
        "open_form",
        _workflow_type,
        form_id=f"reject_{_name}_modal",
        moderator_only=True,
        needs_handle=True,
    )
    ACTION_ROUTES[f"reject_{_name}_modal"] = Route(
        "decide",
        _workflow_type,
        outcome=DecisionOutcome.REJECT,
        moderator_only=True,
        needs_handle=True,
    )


def split_action_id(action_id: str) -> tuple[str, str | None]:
    """Split ``name:handle`` into its parts.

    Returns:
        The route name and the embedded handle (None when absent).
    """
    name, separator, handle = action_id.partition(HANDLE_SEPARATOR)
    return name, (handle or None) if separator else None
