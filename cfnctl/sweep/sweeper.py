"""Orphaned resource sweep.

Runs every category through the same discover, display, confirm and delete
sequence. Discovery failures count as "nothing found"; deletion failures are
recorded per item. Nothing here aborts the sweep.
"""

from __future__ import annotations

import logging
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError
from rich.console import Console

from cfnctl.models.deletion_record import CategoryResult, ItemStatus, SweepReport
from cfnctl.sweep.base import SweepCategory
from cfnctl.teardown.prompts import Prompter

logger = logging.getLogger(__name__)


class ResourceSweeper:
    """Sweep orchestrator.

    Attributes:
        prompter: Operator prompts (one confirmation per category)
        console: Rich console for operator output
    """

    def __init__(self, prompter: Prompter, console: Optional[Console] = None) -> None:
        self.prompter = prompter
        self.console = console or Console()

    def sweep(self, categories: list[SweepCategory]) -> SweepReport:
        """Sweep every category in order.

        Args:
            categories: Categories to sweep

        Returns:
            SweepReport with one result per category
        """
        self.console.print()
        self.console.print("🧹 Starting orphaned resource sweep (these often incur charges).", style="bold")

        report = SweepReport()
        for category in categories:
            report.categories.append(self.sweep_category(category))

        self.console.print()
        self.console.print(
            "🎯 Sweep complete. Re-run until it finds nothing. "
            "Keep an eye on Cost Explorer for the next day to confirm charges drop."
        )
        return report

    def sweep_category(self, category: SweepCategory) -> CategoryResult:
        """Discover, confirm and delete one category.

        Args:
            category: Category to sweep

        Returns:
            CategoryResult (no records if nothing was found or the operator declined)
        """
        result = CategoryResult(category=category.name)

        try:
            items = category.discover()
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Failed to list {category.label}, treating as none found: {e}")
            items = []

        result.discovered = items
        if not items:
            self.console.print(f"✅ No {category.label}.", style="green")
            return result

        self.console.print(f"{category.emoji} {category.label[0].upper()}{category.label[1:]} found: {len(items)}")
        for item in items:
            self.console.print(f"   - {item}", markup=False)

        if not self.prompter.confirm(f"   ➤ {category.confirm_message}"):
            self.console.print(f"   ⏭️ Leaving {category.label} in place.")
            return result

        result.confirmed = True
        result.records = category.delete_items(items)

        succeeded = result.count(ItemStatus.SUCCEEDED)
        failed = result.count(ItemStatus.FAILED)
        skipped = result.count(ItemStatus.SKIPPED)
        style = "yellow" if failed else "green"
        self.console.print(f"   {succeeded} done, {failed} failed, {skipped} skipped.", style=style)
        if category.notice and succeeded:
            self.console.print(f"   ℹ️ {category.notice}", markup=False)

        return result
