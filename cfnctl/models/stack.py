"""Stack models.

Stack references, export/import edges and per-stack deletion outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class StackRef:
    """A CloudFormation stack selected for deletion.

    The name is what the operator sees; the stack id is immutable and is used for
    dependency tracking and waiting, since a name can be reused by a later stack.

    Attributes:
        name: Stack name (unique within account and region)
        stack_id: Stack ARN
    """

    name: str
    stack_id: str


@dataclass(frozen=True)
class ExportEdge:
    """A named value published by a stack."""

    exporting_stack_id: str
    export_name: str


@dataclass(frozen=True)
class ImportEdge:
    """A stack consuming a named export."""

    export_name: str
    importing_stack_id: str


class StackDeletionStatus(Enum):
    """Per-stack deletion state.

    State transitions:
        pending → skipped (protection kept)
        pending → delete_requested → deleted
        pending → delete_requested → failed (wait failed or timed out)
        pending → failed (protection could not be cleared, delete call rejected)
    """

    PENDING = "pending"
    SKIPPED = "skipped"
    DELETE_REQUESTED = "delete_requested"
    DELETED = "deleted"
    FAILED = "failed"


@dataclass
class StackDeletionResult:
    """Outcome of deleting one stack.

    Attributes:
        stack: Stack the result belongs to
        status: Final deletion state
        stack_status: Last observed CloudFormation status (on failure)
        reason: Failure or skip reason (optional)
    """

    stack: StackRef
    status: StackDeletionStatus = StackDeletionStatus.PENDING
    stack_status: Optional[str] = None
    reason: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (StackDeletionStatus.SKIPPED, StackDeletionStatus.DELETED, StackDeletionStatus.FAILED)
