"""Caller identity confirmation.

The single gate preventing destruction of the wrong account: nothing mutating
happens until the operator confirms the account, principal and region.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import boto3
from rich.console import Console

from cfnctl.aws.client import resolve_region
from cfnctl.aws.credentials import validate_credentials
from cfnctl.teardown.prompts import Prompter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallerIdentity:
    """Resolved caller identity and effective region."""

    account_id: str
    arn: str
    caller: str
    region: str


class IdentityGuard:
    """Resolve and confirm the active AWS identity."""

    def __init__(self, session: boto3.Session, prompter: Prompter, console: Optional[Console] = None) -> None:
        self.session = session
        self.prompter = prompter
        self.console = console or Console()

    def resolve(self) -> CallerIdentity:
        """Resolve the caller identity.

        Raises:
            CredentialValidationError: If credentials are missing or invalid
        """
        identity = validate_credentials(self.session)
        return CallerIdentity(
            account_id=identity["account_id"],
            arn=identity["arn"],
            caller=identity["caller"],
            region=resolve_region(self.session),
        )

    def confirm(self, identity: CallerIdentity) -> bool:
        """Show the identity and ask the operator to confirm it.

        Returns:
            True only on an explicit affirmative answer
        """
        self.console.print("🚨 You are logged in as:", style="bold")
        self.console.print(f"👤 User:       {identity.caller}")
        self.console.print(f"🔗 ARN:        {identity.arn}")
        self.console.print(f"🏢 Account ID: {identity.account_id}")
        self.console.print(f"🌍 Region:     {identity.region}")
        self.console.print()

        confirmed = self.prompter.confirm("❓ Is this the right account to wreak havoc on?")
        logger.info(f"Account {identity.account_id} confirmation: {'accepted' if confirmed else 'declined'}")
        return confirmed
