"""CloudFormation stack deletion.

Deletes stacks one at a time in dependency order, handling termination
protection and waiting for each deletion to finish. A failing stack is reported
and the batch moves on.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError, WaiterError
from rich.console import Console

from cfnctl.models.stack import StackDeletionResult, StackDeletionStatus, StackRef
from cfnctl.teardown.safety import ProtectionGuard, ProtectionOutcome

logger = logging.getLogger(__name__)

SEPARATOR = "━" * 60


class StackDeleter:
    """Stack deletion orchestrator.

    Attributes:
        cfn_client: CloudFormation client
        guard: Protection guard asking before termination protection is cleared
        console: Rich console for operator output
    """

    def __init__(self, cfn_client: Any, guard: ProtectionGuard, console: Optional[Console] = None) -> None:
        self.cfn_client = cfn_client
        self.guard = guard
        self.console = console or Console()

    def delete_all(self, order: list[StackRef]) -> list[StackDeletionResult]:
        """Delete stacks in the given order.

        Args:
            order: Stacks in deletion order

        Returns:
            One result per stack
        """
        self.console.print("⏳ Initiating deletions in the computed order...")
        return [self.delete(stack) for stack in order]

    def delete(self, stack: StackRef) -> StackDeletionResult:
        """Delete one stack and wait for the outcome.

        Args:
            stack: Stack to delete

        Returns:
            StackDeletionResult in a terminal state
        """
        result = StackDeletionResult(stack=stack)
        self.console.print()
        self.console.print(SEPARATOR)
        self.console.print(f"🛡️ Checking termination protection for: {stack.name} ...")

        outcome, reason = self.guard.ensure_unprotected(
            label=stack.name,
            protection="Termination protection",
            is_protected=self._termination_protection(stack),
            clear=lambda: self.cfn_client.update_termination_protection(
                StackName=stack.stack_id, EnableTerminationProtection=False
            ),
        )
        if not outcome.may_delete:
            if outcome == ProtectionOutcome.KEPT:
                result.status = StackDeletionStatus.SKIPPED
            else:
                result.status = StackDeletionStatus.FAILED
            result.reason = reason
            return result

        self.console.print(f"🗑️ Initiating deletion of stack: {stack.name} ...")
        try:
            self.cfn_client.delete_stack(StackName=stack.stack_id)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Delete call failed for {stack.name}: {e}")
            self.console.print(f"❌ Delete call failed for {stack.name}.", style="red")
            result.status = StackDeletionStatus.FAILED
            result.reason = str(e)
            return result

        result.status = StackDeletionStatus.DELETE_REQUESTED
        self.console.print(f"⏳ Waiting for {stack.name} to be deleted...")
        try:
            self.cfn_client.get_waiter("stack_delete_complete").wait(StackName=stack.stack_id)
        except (WaiterError, ClientError, BotoCoreError) as e:
            logger.debug(f"Waiter failed for {stack.name}: {e}")
            status, failure_reason = self._failure_details(stack)
            self.console.print(
                f"❌ Deletion did not complete for {stack.name}. Status: {status}", style="red", markup=False
            )
            if failure_reason:
                self.console.print(f"   Reason: {failure_reason}", markup=False)
            result.status = StackDeletionStatus.FAILED
            result.stack_status = status
            result.reason = failure_reason
            return result

        self.console.print(f"✅ Stack {stack.name} deleted.", style="green")
        result.status = StackDeletionStatus.DELETED
        result.stack_status = "DELETE_COMPLETE"
        return result

    def _termination_protection(self, stack: StackRef) -> bool:
        """Read the termination protection flag, treating errors as unprotected."""
        try:
            response = self.cfn_client.describe_stacks(StackName=stack.stack_id)
            return bool(response["Stacks"][0].get("EnableTerminationProtection", False))
        except (ClientError, BotoCoreError, IndexError, KeyError) as e:
            logger.debug(f"Could not read termination protection for {stack.name}: {e}")
            return False

    def _failure_details(self, stack: StackRef) -> tuple[str, Optional[str]]:
        """Return the current stack status and the latest DELETE_FAILED reason."""
        try:
            response = self.cfn_client.describe_stacks(StackName=stack.stack_id)
            status = response["Stacks"][0].get("StackStatus", "unknown")
        except (ClientError, BotoCoreError, IndexError, KeyError):
            status = "unknown"

        reason = None
        try:
            paginator = self.cfn_client.get_paginator("describe_stack_events")
            # Events are returned newest first
            for page in paginator.paginate(StackName=stack.stack_id):
                failed = [e for e in page.get("StackEvents", []) if e.get("ResourceStatus") == "DELETE_FAILED"]
                if failed:
                    reason = failed[0].get("ResourceStatusReason")
                    break
        except (ClientError, BotoCoreError) as e:
            logger.debug(f"Could not read stack events for {stack.name}: {e}")

        return status, reason
