"""Tests for AccountCleaner orchestration."""

from __future__ import annotations

from unittest.mock import MagicMock

from cfnctl.models.deletion_record import SweepReport
from cfnctl.models.stack import StackDeletionStatus, StackRef
from cfnctl.models.teardown_run import RunStatus
from cfnctl.teardown.cleaner import AccountCleaner
from cfnctl.teardown.identity import CallerIdentity
from tests.fixtures.aws import client_error, console_output, make_console, make_prompter, paginated_client

IDENTITY = CallerIdentity(
    account_id="123456789012",
    arn="arn:aws:iam::123456789012:user/alice",
    caller="alice",
    region="us-east-1",
)


def cfn_client(names: list[str], exports: list[dict], imports: list[dict]) -> MagicMock:
    client = paginated_client(
        list_stacks=[{"StackSummaries": [{"StackName": name} for name in names]}],
        list_exports=[{"Exports": exports}],
        list_imports=imports,
    )
    client.describe_stacks.side_effect = lambda StackName: {
        "Stacks": [{"StackName": StackName, "StackId": f"id-{StackName}", "EnableTerminationProtection": False}]
    }
    return client


class TestDeleteStacks:
    """Test suite for the stack phase."""

    def test_deletes_importer_before_exporter(self) -> None:
        client = cfn_client(
            names=["A", "B", "C"],
            exports=[{"ExportingStackId": "id-A", "Name": "X"}],
            imports=[{"Imports": ["B"]}],
        )
        prompter = make_prompter(confirms=True, answer="1 2 3")
        console = make_console()

        results = AccountCleaner(client, prompter, console).delete_stacks()

        deleted = [c.kwargs["StackName"] for c in client.delete_stack.call_args_list]
        assert sorted(deleted) == ["id-A", "id-B", "id-C"]
        assert deleted.index("id-B") < deleted.index("id-A")
        assert all(r.status == StackDeletionStatus.DELETED for r in results)
        assert "Deletion order (importers → exporters):" in console_output(console)

    def test_no_active_stacks(self) -> None:
        client = cfn_client(names=[], exports=[], imports=[])
        prompter = make_prompter()
        console = make_console()

        assert AccountCleaner(client, prompter, console).delete_stacks() == []
        prompter.ask.assert_not_called()
        assert "No active stacks found." in console_output(console)

    def test_listing_failure_skips_stack_phase(self) -> None:
        client = paginated_client(list_stacks=client_error("AccessDenied"))
        prompter = make_prompter()

        assert AccountCleaner(client, prompter, make_console()).delete_stacks() == []
        prompter.ask.assert_not_called()

    def test_skipped_selection(self) -> None:
        client = cfn_client(names=["A"], exports=[], imports=[])

        assert AccountCleaner(client, make_prompter(answer=""), make_console()).delete_stacks() == []
        client.delete_stack.assert_not_called()

    def test_unresolvable_selection(self) -> None:
        client = cfn_client(names=["A"], exports=[], imports=[])
        client.describe_stacks.side_effect = client_error("ValidationError")
        console = make_console()

        results = AccountCleaner(client, make_prompter(confirms=True, answer="1"), console).delete_stacks()

        assert results == []
        assert "No resolvable stacks remain" in console_output(console)

    def test_cycle_warns_and_still_deletes_everything(self) -> None:
        client = cfn_client(
            names=["A", "B"],
            exports=[{"ExportingStackId": "id-A", "Name": "X"}, {"ExportingStackId": "id-B", "Name": "Y"}],
            imports=[],
        )
        client.get_paginator("list_imports").paginate.side_effect = lambda ExportName: [
            {"Imports": ["B" if ExportName == "X" else "A"]}
        ]
        console = make_console()

        results = AccountCleaner(client, make_prompter(confirms=True, answer="1 2"), console).delete_stacks()

        assert len(results) == 2
        assert "Circular export/import dependency detected" in console_output(console)


class TestRun:
    """Test suite for full runs."""

    def test_sweep_runs_even_without_stacks(self) -> None:
        client = cfn_client(names=[], exports=[], imports=[])
        category = MagicMock()
        category.discover.return_value = []
        category.label = "widgets"

        run = AccountCleaner(client, make_prompter(), make_console()).run(IDENTITY, [category], aws_profile="dev")

        category.discover.assert_called_once()
        assert run.status == RunStatus.COMPLETED
        assert run.account_id == "123456789012"
        assert run.aws_profile == "dev"
        assert run.run_id.startswith("run_")
        assert run.completed_at is not None
        assert isinstance(run.sweep, SweepReport)

    def test_failed_stack_marks_run_partial(self) -> None:
        client = cfn_client(names=["A"], exports=[], imports=[])
        client.delete_stack.side_effect = client_error("AccessDenied")

        run = AccountCleaner(client, make_prompter(confirms=True, answer="1"), make_console()).run(IDENTITY, [])

        assert run.stack_results[0].stack == StackRef("A", "id-A")
        assert run.status == RunStatus.PARTIAL
