"""Tests for the console driver (line parsing and dispatch)."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from scripts.run_console import describe_result, parse_action_line, run_line

from reprimand_bot.application.services.command_dispatcher import CommandDispatcher
from reprimand_bot.bootstrap import build_command_dispatcher
from reprimand_bot.config import BotConfig
from reprimand_bot.domain.errors import UnauthorizedModeratorError
from reprimand_bot.domain.models.records import Refused
from reprimand_bot.domain.models.workflow import WorkflowType
from reprimand_bot.infrastructure.adapters import ConsoleNotifier, ConsolePresentation


class TestParseActionLine:
    """Test console line parsing."""

    def test_parses_caller_action_and_fields(self) -> None:
        action = parse_action_line(
            '100 reprimand_modal issue_to=<@200> charter_article="Art. 4" remediation=Apologise'
        )
        assert action.caller_id == "100"
        assert action.action_id == "reprimand_modal"
        assert action.fields == {
            "issue_to": "<@200>",
            "charter_article": "Art. 4",
            "remediation": "Apologise",
        }
        assert action.target_handle is None

    def test_handle_field_becomes_target_handle(self) -> None:
        action = parse_action_line("900 approve_reprimand handle=1")
        assert action.target_handle == "1"
        assert action.fields == {}

    def test_requires_caller_and_action(self) -> None:
        with pytest.raises(ValueError):
            parse_action_line("900")

    def test_rejects_bare_tokens(self) -> None:
        with pytest.raises(ValueError, match="key=value"):
            parse_action_line("900 approve_reprimand 1")


class TestDescribeResult:
    def test_refused(self) -> None:
        refused = Refused(WorkflowType.APPEAL, "200", "appeal_already_filed")
        assert describe_result(refused) == "(refused: appeal_already_filed)"


class TestRunLine:
    """End-to-end console lines against real adapters."""

    @pytest.fixture
    def output(self) -> io.StringIO:
        """Stream shared by the console adapters."""
        return io.StringIO()

    @pytest.fixture
    def console_dispatcher(self, tmp_path: Path, output: io.StringIO) -> CommandDispatcher:
        """Dispatcher wired like the console entry point."""
        config = BotConfig(counts_file=tmp_path / "counts.json", moderator_ids=("900",))
        return build_command_dispatcher(
            config, ConsolePresentation(stream=output), ConsoleNotifier(stream=output)
        )

    @pytest.mark.asyncio
    async def test_reprimand_round(
        self, console_dispatcher: CommandDispatcher, output: io.StringIO, tmp_path: Path
    ) -> None:
        issued = await run_line(
            console_dispatcher,
            '100 reprimand_modal issue_to=200 charter_article="Art. 4" remediation=Apologise',
        )
        assert issued == "reprimand #1 is pending"

        approved = await run_line(console_dispatcher, "900 approve_reprimand handle=1")
        assert approved == "reprimand #1 is approved"

        assert await run_line(console_dispatcher, "counter 200") == "200: 1/3"
        assert await run_line(console_dispatcher, "records reprimand") == "#1 200 approved"
        assert (tmp_path / "counts.json").exists()
        assert "[announcement #2]" in output.getvalue()

    @pytest.mark.asyncio
    async def test_form_and_refusal_lines(self, console_dispatcher: CommandDispatcher) -> None:
        assert (await run_line(console_dispatcher, "200 remediate")) == "(refused: not_eligible)"
        form = await run_line(console_dispatcher, "100 issue_reprimand")
        assert form.startswith("form reprimand_modal 'New Reprimand':")
        assert form.endswith("proof?")

    @pytest.mark.asyncio
    async def test_empty_record_list(self, console_dispatcher: CommandDispatcher) -> None:
        assert await run_line(console_dispatcher, "records appeal") == "(none)"

    @pytest.mark.asyncio
    async def test_errors_propagate(self, console_dispatcher: CommandDispatcher) -> None:
        with pytest.raises(UnauthorizedModeratorError):
            await run_line(console_dispatcher, "200 approve_reprimand handle=1")
