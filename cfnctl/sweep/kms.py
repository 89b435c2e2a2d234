"""KMS customer-managed key sweep category."""

from __future__ import annotations

from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from cfnctl.models.deletion_record import SweepItem
from cfnctl.sweep.base import ListedCategory, ResourceKind

# Shortest waiting period KMS accepts
PENDING_WINDOW_DAYS = 7


class KMSKeyCategory(ListedCategory):
    """Customer-managed KMS keys, disabled and scheduled for deletion.

    AWS-managed keys are never targeted. Scheduling is reversible until the
    pending window elapses.
    """

    emoji = "🔑"
    KINDS = {
        None: ResourceKind(
            list_method="list_keys",
            result_key="Keys",
            id_key="KeyId",
            delete_method="schedule_key_deletion",
            id_param="KeyId",
        )
    }

    @property
    def name(self) -> str:
        return "kms-keys"

    @property
    def label(self) -> str:
        return "customer-managed KMS keys"

    @property
    def service_name(self) -> str:
        return "kms"

    @property
    def confirm_message(self) -> str:
        return (
            f"SCHEDULE {PENDING_WINDOW_DAYS}-day deletion for ALL these KMS keys? "
            "(keys are disabled first)"
        )

    @property
    def notice(self) -> str:
        return (
            f"Scheduled key deletions only take effect after {PENDING_WINDOW_DAYS} days; "
            "until then they can be cancelled with `aws kms cancel-key-deletion --key-id <id>`."
        )

    def discover(self) -> list[SweepItem]:
        client = self._create_client()
        keys = []
        for item in super().discover():
            try:
                metadata = client.describe_key(KeyId=item.identifier)["KeyMetadata"]
            except (ClientError, BotoCoreError) as e:
                self.logger.debug(f"Could not describe key {item.identifier}: {e}")
                continue
            if metadata.get("KeyManager") == "CUSTOMER" and metadata.get("KeyState") != "PendingDeletion":
                keys.append(item)
        return keys

    def delete_item(self, item: SweepItem) -> Optional[str]:
        client = self._create_client()
        try:
            client.disable_key(KeyId=item.identifier)
        except (ClientError, BotoCoreError) as e:
            self.logger.debug(f"Could not disable key {item.identifier}: {e}")

        response = client.schedule_key_deletion(KeyId=item.identifier, PendingWindowInDays=PENDING_WINDOW_DAYS)
        deletion_date = response.get("DeletionDate")
        when = deletion_date.strftime("%Y-%m-%d") if deletion_date else f"in {PENDING_WINDOW_DAYS} days"
        self.console.print(f"   🔑 {item.identifier} scheduled for deletion ({when})", markup=False)
        return None
