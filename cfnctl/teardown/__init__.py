"""Account teardown module.

Interactive deletion of CloudFormation stacks followed by an unconditional sweep
for orphaned billable resources.

Classes:
    AccountCleaner: Main orchestrator for a teardown run
    IdentityGuard: Caller identity confirmation
    ProtectionGuard: Deletion/termination protection override prompts
    Prompter: Operator prompts
    AuditStorage: YAML run record storage
"""

from __future__ import annotations

__all__ = [
    "AccountCleaner",
    "IdentityGuard",
    "ProtectionGuard",
    "Prompter",
    "AuditStorage",
]
