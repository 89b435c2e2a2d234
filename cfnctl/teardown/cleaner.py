"""Account cleaner for teardown runs.

Main orchestrator: stack selection, dependency-ordered stack deletion and the
unconditional orphaned resource sweep.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Optional

from rich.console import Console

from cfnctl.models.stack import StackDeletionResult, StackRef
from cfnctl.models.teardown_run import TeardownRun
from cfnctl.stacks.deleter import StackDeleter
from cfnctl.stacks.dependency import DependencyResolver
from cfnctl.stacks.inventory import StackInventory
from cfnctl.sweep.base import SweepCategory
from cfnctl.sweep.sweeper import ResourceSweeper
from cfnctl.teardown.identity import CallerIdentity
from cfnctl.teardown.prompts import Prompter
from cfnctl.teardown.safety import ProtectionGuard

logger = logging.getLogger(__name__)


class AccountCleaner:
    """Account cleaner orchestrator.

    Deletes operator-selected stacks in dependency order, then sweeps every
    resource category. Stack deletion is best effort; the sweep always runs.

    Attributes:
        cfn_client: CloudFormation client
        prompter: Operator prompts
        console: Rich console for operator output
    """

    def __init__(self, cfn_client: Any, prompter: Prompter, console: Optional[Console] = None) -> None:
        self.cfn_client = cfn_client
        self.prompter = prompter
        self.console = console or Console()

    def run(
        self,
        identity: CallerIdentity,
        categories: list[SweepCategory],
        aws_profile: Optional[str] = None,
    ) -> TeardownRun:
        """Execute a teardown run for a confirmed identity.

        Args:
            identity: Identity the operator confirmed
            categories: Sweep categories in sweep order
            aws_profile: AWS profile name (recorded only)

        Returns:
            Finished TeardownRun
        """
        run = TeardownRun(
            run_id=f"run_{uuid.uuid4()}",
            account_id=identity.account_id,
            region=identity.region,
            caller_arn=identity.arn,
            started_at=datetime.utcnow(),
            aws_profile=aws_profile,
        )

        run.stack_results = self.delete_stacks()
        run.sweep = ResourceSweeper(self.prompter, self.console).sweep(categories)
        run.complete()

        logger.info(
            f"Teardown {run.run_id} {run.status.value}: {len(run.stack_results)} stack(s) processed, "
            f"{run.sweep.succeeded_count} resource(s) removed, {run.sweep.failed_count} failed"
        )
        return run

    def delete_stacks(self) -> list[StackDeletionResult]:
        """Select, order and delete stacks.

        Returns:
            One result per stack that reached the deleter (empty if none were chosen)
        """
        inventory = StackInventory(self.cfn_client, self.prompter, self.console)

        self.console.print("🕵️ Scanning for active CloudFormation stacks...")
        stack_names = inventory.list_active_stacks()
        if not stack_names:
            self.console.print("🎉 No active stacks found.")
            self.console.print("➡️  Proceeding directly to orphaned resource sweep...")
            return []

        selected = inventory.select(stack_names)
        if not selected:
            return []

        stacks = inventory.resolve(selected)
        if not stacks:
            self.console.print("❌ No resolvable stacks remain. Skipping stack deletion.", style="red")
            return []

        order = self.plan_deletion(stacks)
        deleter = StackDeleter(self.cfn_client, ProtectionGuard(self.prompter, self.console), self.console)
        return deleter.delete_all(order)

    def plan_deletion(self, stacks: list[StackRef]) -> list[StackRef]:
        """Compute and display the deletion order for resolved stacks."""
        resolver = DependencyResolver(self.console)
        resolver.build_from_exports(self.cfn_client, stacks)

        if resolver.has_cycle():
            self.console.print(
                "⚠️ Circular export/import dependency detected; some deletions may fail.", style="yellow"
            )

        order = resolver.compute_deletion_order(stacks)
        tier_of = {stack: tier for tier, members in resolver.get_deletion_tiers(stacks).items() for stack in members}

        self.console.print("🗺️ Deletion order (importers → exporters):")
        for stack in order:
            self.console.print(f"   💥 {stack.name} (tier {tier_of[stack]})", markup=False)

        return order
