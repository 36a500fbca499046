#!/usr/bin/env python3
"""Drive the reprimand workflow from a terminal.

Each input line is one platform action performed by one user:

    <caller_id> <action_id> [field=value ...]

Quote values containing spaces. Records are posted, edited and
announced as text lines; direct messages are printed the same way.

Examples:
    100 reprimand_modal issue_to=<@200> charter_article="Art. 4" remediation="Apologise"
    300 approve_reprimand handle=1
    200 remediate
    200 remediation_modal reprimand_link=#2 remediation_proof="Apologised in #general"
    300 reject_remediation_modal:4 rejection_reason="Not enough proof"

Read-only commands:
    counter <user_id>         show a user's escalation level
    records <workflow_type>   list tracked records (reprimand/remediation/appeal)

Usage:
    python scripts/run_console.py
    python scripts/run_console.py --moderators 300,301 --counts-file /tmp/counts.json
"""

from __future__ import annotations

import argparse
import asyncio
import shlex
import sys
from dataclasses import replace
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from structlog import get_logger

from reprimand_bot.application.services.command_dispatcher import (
    CommandDispatcher,
    InboundAction,
    OpenForm,
)
from reprimand_bot.bootstrap import (
    build_command_dispatcher,
    build_workflow_engine,
    configure_structlog,
)
from reprimand_bot.config import BotConfig
from reprimand_bot.domain.exceptions import ReprimandBotError
from reprimand_bot.domain.models import MAX_ESCALATION_LEVEL
from reprimand_bot.domain.models.records import Refused
from reprimand_bot.domain.models.workflow import WorkflowType
from reprimand_bot.infrastructure.adapters import ConsoleNotifier, ConsolePresentation

logger = get_logger()

HANDLE_FIELD = "handle"


def parse_action_line(line: str) -> InboundAction:
    """Parse ``<caller_id> <action_id> [field=value ...]``.

    A ``handle=`` field becomes the action's target handle rather than a
    form field.

    Raises:
        ValueError: If the line has fewer than two tokens or a field
            token has no ``=``.
    """
    tokens = shlex.split(line)
    if len(tokens) < 2:
        raise ValueError("expected: <caller_id> <action_id> [field=value ...]")

    caller_id, action_id, *field_tokens = tokens
    fields: dict[str, str] = {}
    for token in field_tokens:
        key, separator, value = token.partition("=")
        if not separator or not key:
            raise ValueError(f"field must look like key=value, got {token!r}")
        fields[key] = value

    target_handle = fields.pop(HANDLE_FIELD, None)
    return InboundAction(
        action_id=action_id,
        caller_id=caller_id,
        target_handle=target_handle,
        fields=fields,
    )


def describe_result(result: object) -> str:
    """Render a dispatch result as one line of console output."""
    if isinstance(result, Refused):
        return f"(refused: {result.reason})"
    if isinstance(result, OpenForm):
        labels = ", ".join(
            f"{f.field_id}{'' if f.required else '?'}" for f in result.spec.fields
        )
        return f"form {result.form_id} '{result.spec.title}': {labels}"
    return f"{result.WORKFLOW_TYPE.value} #{result.handle} is {result.status.value}"


async def run_line(dispatcher: CommandDispatcher, line: str) -> str:
    """Execute one console line and return the text to print."""
    tokens = shlex.split(line)
    if tokens and tokens[0] == "counter" and len(tokens) == 2:
        level = await dispatcher.engine.get_counter(tokens[1])
        return f"{tokens[1]}: {level}/{MAX_ESCALATION_LEVEL}"
    if tokens and tokens[0] == "records" and len(tokens) == 2:
        workflow_type = WorkflowType(tokens[1])
        records = await dispatcher.engine.registry.list_records(workflow_type)
        return "\n".join(
            f"#{r.handle} {r.owner_id} {r.status.value}" for r in records
        ) or "(none)"

    action = parse_action_line(line)
    result = await dispatcher.dispatch(action)
    return describe_result(result)


async def repl(dispatcher: CommandDispatcher) -> None:
    """Read actions from stdin until EOF."""
    for raw_line in sys.stdin:
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            print(await run_line(dispatcher, line), flush=True)
        except (ReprimandBotError, ValueError) as e:
            print(f"error: {e}", flush=True)


def main() -> None:
    """Parse arguments, wire the bot and start the console loop."""
    from dotenv import load_dotenv

    load_dotenv()

    parser = argparse.ArgumentParser(description="Run the reprimand workflow on a console")
    parser.add_argument("--counts-file", type=Path, help="Escalation counter JSON file")
    parser.add_argument("--moderators", help="Comma-separated moderator user ids")
    args = parser.parse_args()

    config = BotConfig.from_environment()
    if args.counts_file is not None:
        config = replace(config, counts_file=args.counts_file)
    if args.moderators:
        config = replace(
            config,
            moderator_ids=tuple(m.strip() for m in args.moderators.split(",") if m.strip()),
        )

    configure_structlog(config.environment)
    presentation = ConsolePresentation()
    notifier = ConsoleNotifier()
    engine = build_workflow_engine(config, presentation, notifier)
    dispatcher = build_command_dispatcher(config, presentation, notifier, engine=engine)

    logger.info(
        "console_started",
        counts_file=str(config.counts_file),
        moderators=len(config.moderator_ids),
    )
    asyncio.run(repl(dispatcher))


if __name__ == "__main__":
    main()
