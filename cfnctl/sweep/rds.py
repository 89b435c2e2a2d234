"""RDS sweep categories: DB instances and manual snapshots."""

from __future__ import annotations

from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError, WaiterError

from cfnctl.models.deletion_record import SweepItem
from cfnctl.sweep.base import ItemDeletionError, ListedCategory, ResourceKind
from cfnctl.teardown.safety import ProtectionGuard, ProtectionOutcome


class RDSInstanceCategory(ListedCategory):
    """RDS DB instances, deleted without a final snapshot.

    Instances with deletion protection are only deleted after the operator agrees
    to clear the flag. Each deletion is waited on before moving to the next one.
    """

    emoji = "🗄️"
    KINDS = {
        None: ResourceKind(
            list_method="describe_db_instances",
            result_key="DBInstances",
            id_key="DBInstanceIdentifier",
            delete_method="delete_db_instance",
            id_param="DBInstanceIdentifier",
            include=lambda instance: instance.get("DBInstanceStatus") != "deleting",
        )
    }

    @property
    def name(self) -> str:
        return "rds-instances"

    @property
    def label(self) -> str:
        return "RDS instances"

    @property
    def service_name(self) -> str:
        return "rds"

    @property
    def confirm_message(self) -> str:
        return "DELETE ALL RDS instances (skip final snapshot)?"

    def delete_item(self, item: SweepItem) -> Optional[str]:
        client = self._create_client()
        instance_id = item.identifier

        guard = ProtectionGuard(self.prompter, self.console)
        outcome, reason = guard.ensure_unprotected(
            label=instance_id,
            protection="Deletion protection",
            is_protected=self._deletion_protection(instance_id),
            clear=lambda: client.modify_db_instance(
                DBInstanceIdentifier=instance_id, DeletionProtection=False, ApplyImmediately=True
            ),
        )
        if outcome == ProtectionOutcome.KEPT:
            return reason
        if outcome == ProtectionOutcome.CLEAR_FAILED:
            raise ItemDeletionError("ProtectionNotCleared", reason or "Deletion protection could not be disabled")

        client.delete_db_instance(
            DBInstanceIdentifier=instance_id,
            SkipFinalSnapshot=True,
            DeleteAutomatedBackups=True,
        )

        self.console.print(f"      ⏳ Waiting for {instance_id} to be deleted...")
        try:
            client.get_waiter("db_instance_deleted").wait(DBInstanceIdentifier=instance_id)
        except (WaiterError, ClientError, BotoCoreError) as e:
            # Deletion was accepted; the instance may still be going away
            self.logger.warning(f"Waiter failed for {instance_id}: {e}")
            self.console.print(f"      ⚠️ Waiter failed for {instance_id}", style="yellow")

        return None

    def _deletion_protection(self, instance_id: str) -> bool:
        try:
            response = self._create_client().describe_db_instances(DBInstanceIdentifier=instance_id)
            return bool(response["DBInstances"][0].get("DeletionProtection", False))
        except (ClientError, BotoCoreError, IndexError, KeyError) as e:
            self.logger.debug(f"Could not read deletion protection for {instance_id}: {e}")
            return False


class RDSSnapshotCategory(ListedCategory):
    """Manual RDS snapshots; they survive instance deletion and remain billable."""

    emoji = "📸"
    KINDS = {
        None: ResourceKind(
            list_method="describe_db_snapshots",
            result_key="DBSnapshots",
            id_key="DBSnapshotIdentifier",
            delete_method="delete_db_snapshot",
            id_param="DBSnapshotIdentifier",
            list_kwargs={"SnapshotType": "manual"},
        )
    }

    @property
    def name(self) -> str:
        return "rds-snapshots"

    @property
    def label(self) -> str:
        return "manual RDS snapshots"

    @property
    def service_name(self) -> str:
        return "rds"
