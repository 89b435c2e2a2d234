"""Protection flag overrides.

Stacks with termination protection and database instances with deletion
protection are never deleted unless the operator explicitly agrees to clear the
flag first.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from botocore.exceptions import BotoCoreError, ClientError
from rich.console import Console

from cfnctl.teardown.prompts import Prompter

logger = logging.getLogger(__name__)


class ProtectionOutcome(Enum):
    """Result of a protection check."""

    UNPROTECTED = "unprotected"
    CLEARED = "cleared"
    KEPT = "kept"
    CLEAR_FAILED = "clear_failed"

    @property
    def may_delete(self) -> bool:
        return self in (ProtectionOutcome.UNPROTECTED, ProtectionOutcome.CLEARED)


class ProtectionGuard:
    """Ask before clearing a resource's protection flag.

    Attributes:
        prompter: Operator prompts
        console: Rich console for operator output
    """

    def __init__(self, prompter: Prompter, console: Optional[Console] = None) -> None:
        self.prompter = prompter
        self.console = console or Console()

    def ensure_unprotected(
        self,
        label: str,
        protection: str,
        is_protected: bool,
        clear: Callable[[], object],
    ) -> tuple[ProtectionOutcome, Optional[str]]:
        """Make sure a resource may be deleted.

        Args:
            label: Resource label shown to the operator
            protection: Name of the protection flag (e.g., "Termination protection")
            is_protected: Current flag value
            clear: Callable that clears the flag

        Returns:
            Tuple of (outcome, reason)
                outcome: ProtectionOutcome; deletion may proceed if outcome.may_delete
                reason: Why deletion must not proceed, None otherwise
        """
        if not is_protected:
            return ProtectionOutcome.UNPROTECTED, None

        if not self.prompter.confirm(f"⚠️  {protection} is ON for {label}. Disable and proceed?"):
            self.console.print(f"⏭️ Skipping {label} due to {protection.lower()}.")
            return ProtectionOutcome.KEPT, f"{protection} kept by operator"

        try:
            clear()
        except (ClientError, BotoCoreError) as e:
            message = f"Failed to disable {protection.lower()} on {label}: {e}"
            logger.error(message)
            self.console.print(f"❌ {message}. Skipping.", style="red", markup=False)
            return ProtectionOutcome.CLEAR_FAILED, message

        self.console.print(f"🛡️ {protection} disabled for {label}.")
        return ProtectionOutcome.CLEARED, None
