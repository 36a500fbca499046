"""Command dispatcher translating platform actions into engine commands.

The platform adapter calls ``dispatch`` once per user action with the
action identifier, the caller, the record the action was attached to
and any submitted form fields. Routing is looked up in
``ACTION_ROUTES``; the dispatcher validates the caller and the fields
and runs exactly one engine operation.

Results:
- OpenForm: the adapter should render the given form
- A workflow record: the submission or decision succeeded
- Refused: an eligibility gate turned the user away; show nothing
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from reprimand_bot.application.services.action_routes import (
    ACTION_ROUTES,
    FORMS,
    HANDLE_SEPARATOR,
    REJECTION_REASON_FIELD,
    FormSpec,
    Route,
    split_action_id,
)
from reprimand_bot.domain.errors import (
    UnauthorizedModeratorError,
    UnknownActionError,
    ValidationError,
)
from reprimand_bot.domain.models.records import Refused, WorkflowRecord
from reprimand_bot.domain.models.user_id import normalize_user_id
from reprimand_bot.domain.models.workflow import DecisionOutcome, WorkflowType
from reprimand_bot.infrastructure.observability import (
    generate_correlation_id,
    get_logger_for_service,
    set_correlation_id,
)

if TYPE_CHECKING:
    from reprimand_bot.application.ports.authorization import AuthorizationPort
    from reprimand_bot.application.services.workflow_engine import WorkflowEngine


@dataclass(frozen=True)
class InboundAction:
    """One user interaction delivered by the platform adapter.

    Attributes:
        action_id: Button or form identifier, optionally ``name:handle``.
        caller_id: The user who clicked or submitted.
        target_handle: Handle of the record the button was attached to.
        fields: Submitted form values keyed by field id.
    """

    action_id: str
    caller_id: str
    target_handle: str | None = None
    fields: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class OpenForm:
    """Instruction to render a form.

    ``form_id`` is the identifier the adapter must use for the submitted
    form; for rejection forms it embeds the target handle.
    """

    form_id: str
    spec: FormSpec


DispatchResult = Union[OpenForm, WorkflowRecord, Refused]


class CommandDispatcher:
    """Maps inbound action identifiers onto WorkflowEngine operations."""

    def __init__(
        self,
        engine: WorkflowEngine,
        authorization: AuthorizationPort,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            engine: The workflow engine commands are sent to.
            authorization: Decides who may approve and reject records.
        """
        self._engine = engine
        self._authorization = authorization
        self._log = get_logger_for_service("CommandDispatcher", component="adapter")
        self._handlers = {
            "open_form": self._open_form,
            "issue_reprimand": self._issue_reprimand,
            "submit_remediation": self._submit_remediation,
            "submit_appeal": self._submit_appeal,
            "decide": self._decide,
        }

    @property
    def engine(self) -> WorkflowEngine:
        """The engine commands are routed to."""
        return self._engine

    async def dispatch(self, action: InboundAction) -> DispatchResult:
        """Route one inbound action to the engine.

        Args:
            action: The action delivered by the platform adapter.

        Returns:
            OpenForm, the affected record, or Refused.

        Raises:
            UnknownActionError: If the action identifier is not routed.
            UnauthorizedModeratorError: If a non-moderator tries to decide.
            ValidationError: If the caller id, handle or a required field
                is missing or malformed.
            NotFoundError: If the target record is unknown.
            InvalidStateError: If the target record is already decided.
        """
        set_correlation_id(generate_correlation_id())
        name, embedded_handle = split_action_id(action.action_id)
        route = ACTION_ROUTES.get(name)
        if route is None:
            raise UnknownActionError(action.action_id)

        caller = normalize_user_id(action.caller_id)
        log = self._log.bind(action_id=name, caller_id=caller)

        if route.moderator_only and not await self._authorization.is_authorized_moderator(caller):
            log.warning("unauthorized_moderator_action")
            raise UnauthorizedModeratorError(caller, name)

        handle = embedded_handle or action.target_handle
        if route.needs_handle and not handle:
            raise ValidationError(f"Action {name} requires a target record", field="handle")

        log.debug("action_dispatched", operation=route.operation, handle=handle)
        return await self._handlers[route.operation](route, caller, handle, action.fields)

    async def _open_form(
        self,
        route: Route,
        caller: str,
        handle: str | None,
        fields: Mapping[str, str],
    ) -> OpenForm | Refused:
        if route.gate is not None:
            gate = self._engine.eligibility
            can_start = {
                WorkflowType.REPRIMAND: gate.can_start_reprimand,
                WorkflowType.REMEDIATION: gate.can_start_remediation,
                WorkflowType.APPEAL: gate.can_start_appeal,
            }[route.gate]
            if not await can_start(caller):
                self._log.info(
                    "form_refused", workflow_type=route.gate.value, caller_id=caller
                )
                return Refused(route.gate, caller, "not_eligible")

        spec = FORMS[route.form_id]
        form_id = spec.form_id if handle is None else f"{spec.form_id}{HANDLE_SEPARATOR}{handle}"
        return OpenForm(form_id=form_id, spec=spec)

    async def _issue_reprimand(
        self,
        route: Route,
        caller: str,
        handle: str | None,
        fields: Mapping[str, str],
    ) -> WorkflowRecord:
        return await self._engine.issue_reprimand(
            subject_id=_required(fields, "issue_to"),
            issuer_id=caller,
            charter_article=_required(fields, "charter_article"),
            remediation_method=_required(fields, "remediation"),
            evidence=fields.get("proof"),
        )

    async def _submit_remediation(
        self,
        route: Route,
        caller: str,
        handle: str | None,
        fields: Mapping[str, str],
    ) -> WorkflowRecord | Refused:
        return await self._engine.submit_remediation(
            user_id=caller,
            reprimand_reference=_required(fields, "reprimand_link"),
            proof=_required(fields, "remediation_proof"),
        )

    async def _submit_appeal(
        self,
        route: Route,
        caller: str,
        handle: str | None,
        fields: Mapping[str, str],
    ) -> WorkflowRecord | Refused:
        return await self._engine.submit_appeal(
            user_id=caller,
            reprimand_reference=_required(fields, "appeal_link"),
            reason=_required(fields, "appeal_reason"),
            proof=_required(fields, "appeal_proof"),
        )

    async def _decide(
        self,
        route: Route,
        caller: str,
        handle: str | None,
        fields: Mapping[str, str],
    ) -> WorkflowRecord:
        reason = None
        if route.outcome is DecisionOutcome.REJECT:
            reason = fields.get(REJECTION_REASON_FIELD)

        decide = {
            WorkflowType.REPRIMAND: self._engine.decide_reprimand,
            WorkflowType.REMEDIATION: self._engine.decide_remediation,
            WorkflowType.APPEAL: self._engine.decide_appeal,
        }[route.workflow_type]
        return await decide(handle, route.outcome, caller, reason)


def _required(fields: Mapping[str, str], field_id: str) -> str:
    value = fields.get(field_id)
    if value is None or not value.strip():
        raise ValidationError(f"{field_id} is required", field=field_id)
    return value
