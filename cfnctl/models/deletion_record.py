"""Sweep deletion records.

Discovered resources and the outcome of each deletion attempt within a category.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class ItemStatus(Enum):
    """Individual resource deletion status."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class SweepItem:
    """A discovered resource.

    Attributes:
        identifier: Resource identifier (ID, name or ARN) passed to the delete call
        kind: Sub-kind for categories covering several resource kinds (optional)
    """

    identifier: str
    kind: Optional[str] = None

    def __str__(self) -> str:
        if self.kind:
            return f"{self.kind}:{self.identifier}"
        return self.identifier


@dataclass
class DeletionRecord:
    """Outcome of one delete/release/schedule attempt.

    Validation rules:
        - status=succeeded: no error_code or skip_reason
        - status=failed: requires error_code
        - status=skipped: requires skip_reason

    Attributes:
        category: Category the item belongs to
        item: Resource the attempt targeted
        status: Attempt outcome
        timestamp: When the attempt finished
        error_code: AWS error code if failed (optional)
        error_message: Human-readable error if failed (optional)
        skip_reason: Why the item was left in place (optional)
    """

    category: str
    item: SweepItem
    status: ItemStatus
    timestamp: datetime = field(default_factory=datetime.utcnow)
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    skip_reason: Optional[str] = None

    def validate(self) -> bool:
        """Validate record invariants.

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if self.status == ItemStatus.FAILED:
            if not self.error_code:
                raise ValueError("Failed status requires error_code")
        elif self.status == ItemStatus.SKIPPED:
            if not self.skip_reason:
                raise ValueError("Skipped status requires skip_reason")
        elif self.status == ItemStatus.SUCCEEDED:
            if self.error_code or self.skip_reason:
                raise ValueError("Succeeded status cannot have error or skip reason")

        return True


@dataclass
class CategoryResult:
    """Result of sweeping one resource category.

    Attributes:
        category: Category name
        discovered: Items found during discovery
        confirmed: Whether the operator accepted deletion (False when nothing was found)
        records: One record per attempted item
    """

    category: str
    discovered: list[SweepItem] = field(default_factory=list)
    confirmed: bool = False
    records: list[DeletionRecord] = field(default_factory=list)

    def count(self, status: ItemStatus) -> int:
        return sum(1 for record in self.records if record.status == status)


@dataclass
class SweepReport:
    """Results of one sweep pass across all categories."""

    categories: list[CategoryResult] = field(default_factory=list)

    @property
    def records(self) -> list[DeletionRecord]:
        return [record for result in self.categories for record in result.records]

    @property
    def failed_count(self) -> int:
        return sum(result.count(ItemStatus.FAILED) for result in self.categories)

    @property
    def succeeded_count(self) -> int:
        return sum(result.count(ItemStatus.SUCCEEDED) for result in self.categories)

    @property
    def skipped_count(self) -> int:
        return sum(result.count(ItemStatus.SKIPPED) for result in self.categories)
