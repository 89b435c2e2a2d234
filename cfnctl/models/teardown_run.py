"""Teardown run model.

Represents one invocation of the teardown command: identity, stack deletion
results and the orphaned resource sweep.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from cfnctl.models.deletion_record import SweepReport
from cfnctl.models.stack import StackDeletionResult, StackDeletionStatus


class RunStatus(Enum):
    """Teardown run status."""

    EXECUTING = "executing"
    COMPLETED = "completed"
    PARTIAL = "partial"


@dataclass
class TeardownRun:
    """Teardown run entity.

    State transitions:
        executing → completed (nothing failed)
        executing → partial (at least one stack or resource failed)

    Attributes:
        run_id: Unique identifier for the run
        account_id: AWS account ID the run targeted
        region: AWS region the run targeted
        caller_arn: Principal that confirmed the run
        started_at: When the run started (UTC)
        aws_profile: AWS profile used for credentials (optional)
        status: Current status
        stack_results: One result per stack in deletion order
        sweep: Orphaned resource sweep report
        completed_at: When the run finished (optional)
    """

    run_id: str
    account_id: str
    region: str
    caller_arn: str
    started_at: datetime
    aws_profile: Optional[str] = None
    status: RunStatus = RunStatus.EXECUTING
    stack_results: list[StackDeletionResult] = field(default_factory=list)
    sweep: SweepReport = field(default_factory=SweepReport)
    completed_at: Optional[datetime] = None

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    @property
    def failed_stack_count(self) -> int:
        return sum(1 for result in self.stack_results if result.status == StackDeletionStatus.FAILED)

    def complete(self, completed_at: Optional[datetime] = None) -> None:
        """Mark the run finished and derive its final status."""
        self.completed_at = completed_at or datetime.utcnow()
        if self.failed_stack_count or self.sweep.failed_count:
            self.status = RunStatus.PARTIAL
        else:
            self.status = RunStatus.COMPLETED
