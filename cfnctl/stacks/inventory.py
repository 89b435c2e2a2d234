"""Stack inventory and interactive selection."""

from __future__ import annotations

import logging
from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError
from rich.console import Console

from cfnctl.models.stack import StackRef
from cfnctl.teardown.prompts import Prompter

logger = logging.getLogger(__name__)

# Terminal "healthy" states eligible for deletion
ACTIVE_STACK_STATUSES = ["CREATE_COMPLETE", "UPDATE_COMPLETE", "UPDATE_ROLLBACK_COMPLETE"]


def parse_selection(raw: str, options: list[str]) -> tuple[list[str], list[str]]:
    """Parse a space-separated list of 1-based menu indices.

    Args:
        raw: Operator input (e.g., "1 3 4")
        options: Menu entries in display order

    Returns:
        Tuple of (selected, invalid)
            selected: Chosen entries in input order, duplicates removed
            invalid: Tokens that were not a valid index
    """
    selected: list[str] = []
    invalid: list[str] = []

    for token in raw.split():
        if token.isdigit() and 1 <= int(token) <= len(options):
            choice = options[int(token) - 1]
            if choice not in selected:
                selected.append(choice)
        else:
            invalid.append(token)

    return selected, invalid


class StackInventory:
    """Enumerate, select and resolve stacks eligible for deletion."""

    def __init__(self, cfn_client: Any, prompter: Prompter, console: Optional[Console] = None) -> None:
        self.cfn_client = cfn_client
        self.prompter = prompter
        self.console = console or Console()

    def list_active_stacks(self) -> list[str]:
        """List names of stacks in a completed state.

        Returns:
            Stack names, empty if the listing call fails
        """
        names: list[str] = []
        try:
            paginator = self.cfn_client.get_paginator("list_stacks")
            for page in paginator.paginate(StackStatusFilter=ACTIVE_STACK_STATUSES):
                names.extend(summary["StackName"] for summary in page.get("StackSummaries", []))
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Failed to list stacks: {e}")
            self.console.print("❌ Failed to list stacks. Check your permissions.", style="red")
            return []

        return names

    def select(self, stack_names: list[str]) -> list[str]:
        """Let the operator pick stacks from a numbered menu.

        Requires a final confirmation naming every selected stack.

        Args:
            stack_names: Candidate stacks

        Returns:
            Confirmed stack names (empty when skipped or declined)
        """
        self.console.print("🧨 Here are your active stacks:")
        for index, name in enumerate(stack_names, start=1):
            self.console.print(f" [{index}] 💣 {name}", markup=False)
        self.console.print()

        raw = self.prompter.ask(
            "🔢 Enter the numbers of the stacks you want to delete (e.g., 1 3 4), "
            "or press Enter to skip stack deletion"
        )
        selected, invalid = parse_selection(raw, stack_names)
        for token in invalid:
            self.console.print(f"⚠️ Invalid selection: '{token}'. Skipping.", style="yellow", markup=False)

        if not selected:
            return []

        self.console.print("⚠️ You selected the following stacks for deletion:")
        for name in selected:
            self.console.print(f"   💥 {name}")
        self.console.print()

        if not self.prompter.confirm("🚨 Final confirmation: delete these stacks?"):
            self.console.print("🙅 Operation cancelled. Skipping stack deletion.")
            return []

        return selected

    def resolve(self, stack_names: list[str]) -> list[StackRef]:
        """Resolve stack names to stable stack ids.

        Stacks whose id cannot be resolved are dropped with a warning.

        Args:
            stack_names: Confirmed stack names

        Returns:
            Resolved stack references in input order
        """
        self.console.print("🧭 Resolving StackIds for selected stacks...")
        stacks: list[StackRef] = []

        for name in stack_names:
            try:
                response = self.cfn_client.describe_stacks(StackName=name)
                stack_id = response["Stacks"][0].get("StackId")
            except (ClientError, BotoCoreError, IndexError, KeyError) as e:
                logger.debug(f"describe_stacks failed for {name}: {e}")
                stack_id = None

            if not stack_id:
                self.console.print(f"❌ Could not resolve StackId for {name}. Skipping.", style="red")
                continue

            stacks.append(StackRef(name=name, stack_id=stack_id))

        return stacks
