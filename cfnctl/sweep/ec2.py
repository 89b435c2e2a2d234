"""EC2 sweep categories: instances, NAT gateways, Elastic IPs, volumes, VPC endpoints."""

from __future__ import annotations

from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from cfnctl.models.deletion_record import DeletionRecord, ItemStatus, SweepItem
from cfnctl.sweep.base import ListedCategory, ResourceKind

LIVE_INSTANCE_STATES = ["pending", "running", "stopping", "stopped"]
GONE_STATES = ("deleted", "deleting")


class EC2InstanceCategory(ListedCategory):
    """EC2 instances (on-demand charges), terminated in a single batch call."""

    emoji = "🖥️"
    KINDS = {
        None: ResourceKind(
            list_method="describe_instances",
            result_key="Reservations",
            id_key=None,
            delete_method="terminate_instances",
            id_param="InstanceIds",
            list_kwargs={"Filters": [{"Name": "instance-state-name", "Values": LIVE_INSTANCE_STATES}]},
        )
    }

    @property
    def name(self) -> str:
        return "ec2-instances"

    @property
    def label(self) -> str:
        return "EC2 instances"

    @property
    def service_name(self) -> str:
        return "ec2"

    @property
    def confirm_message(self) -> str:
        return "Terminate ALL of these EC2 instances?"

    def discover(self) -> list[SweepItem]:
        client = self._create_client()
        items = []
        for reservation in self._list_entries(client, self.KINDS[None]):
            for instance in reservation.get("Instances", []):
                items.append(SweepItem(identifier=instance["InstanceId"]))
        return items

    def delete_item(self, item: SweepItem) -> Optional[str]:
        self._create_client().terminate_instances(InstanceIds=[item.identifier])
        return None

    def delete_items(self, items: list[SweepItem]) -> list[DeletionRecord]:
        client = self._create_client()
        try:
            client.terminate_instances(InstanceIds=[item.identifier for item in items])
        except (ClientError, BotoCoreError) as e:
            self.console.print("⚠️ Terminate call failed.", style="yellow")
            return [self._failed(item, e) for item in items]

        return [DeletionRecord(category=self.name, item=item, status=ItemStatus.SUCCEEDED) for item in items]


class NatGatewayCategory(ListedCategory):
    """NAT gateways (hourly and data processing charges)."""

    emoji = "🚪"
    KINDS = {
        None: ResourceKind(
            list_method="describe_nat_gateways",
            result_key="NatGateways",
            id_key="NatGatewayId",
            delete_method="delete_nat_gateway",
            id_param="NatGatewayId",
            include=lambda gateway: gateway.get("State") not in GONE_STATES,
        )
    }

    @property
    def name(self) -> str:
        return "nat-gateways"

    @property
    def label(self) -> str:
        return "NAT gateways"

    @property
    def service_name(self) -> str:
        return "ec2"


class ElasticIpCategory(ListedCategory):
    """Elastic IPs (charged when unattached)."""

    emoji = "📡"
    KINDS = {
        None: ResourceKind(
            list_method="describe_addresses",
            result_key="Addresses",
            id_key="AllocationId",
            delete_method="release_address",
            id_param="AllocationId",
            paginated=False,
            include=lambda address: "AllocationId" in address,
        )
    }

    @property
    def name(self) -> str:
        return "elastic-ips"

    @property
    def label(self) -> str:
        return "Elastic IPs"

    @property
    def service_name(self) -> str:
        return "ec2"

    @property
    def confirm_message(self) -> str:
        return "Release ALL Elastic IPs?"


class EBSVolumeCategory(ListedCategory):
    """Unattached EBS volumes."""

    emoji = "💽"
    KINDS = {
        None: ResourceKind(
            list_method="describe_volumes",
            result_key="Volumes",
            id_key="VolumeId",
            delete_method="delete_volume",
            id_param="VolumeId",
            list_kwargs={"Filters": [{"Name": "status", "Values": ["available"]}]},
        )
    }

    @property
    def name(self) -> str:
        return "ebs-volumes"

    @property
    def label(self) -> str:
        return "unattached EBS volumes"

    @property
    def service_name(self) -> str:
        return "ec2"


class VPCEndpointCategory(ListedCategory):
    """VPC endpoints (EC2-Other charges), deleted in a single batch call."""

    emoji = "🧩"
    KINDS = {
        None: ResourceKind(
            list_method="describe_vpc_endpoints",
            result_key="VpcEndpoints",
            id_key="VpcEndpointId",
            delete_method="delete_vpc_endpoints",
            id_param="VpcEndpointIds",
            include=lambda endpoint: endpoint.get("State", "").lower() not in GONE_STATES,
        )
    }

    @property
    def name(self) -> str:
        return "vpc-endpoints"

    @property
    def label(self) -> str:
        return "VPC endpoints"

    @property
    def service_name(self) -> str:
        return "ec2"

    def delete_item(self, item: SweepItem) -> Optional[str]:
        self._create_client().delete_vpc_endpoints(VpcEndpointIds=[item.identifier])
        return None

    def delete_items(self, items: list[SweepItem]) -> list[DeletionRecord]:
        client = self._create_client()
        try:
            response = client.delete_vpc_endpoints(VpcEndpointIds=[item.identifier for item in items])
        except (ClientError, BotoCoreError) as e:
            self.console.print("⚠️ Could not delete some endpoints.", style="yellow")
            return [self._failed(item, e) for item in items]

        unsuccessful = {entry.get("ResourceId"): entry.get("Error", {}) for entry in response.get("Unsuccessful", [])}
        records = []
        for item in items:
            if item.identifier in unsuccessful:
                error = unsuccessful[item.identifier]
                code = error.get("Code", "Unknown")
                message = error.get("Message", "")
                self.console.print(f"   ⚠️ Could not delete {item}: {code} - {message}", style="yellow", markup=False)
                records.append(
                    DeletionRecord(
                        category=self.name,
                        item=item,
                        status=ItemStatus.FAILED,
                        error_code=code,
                        error_message=message,
                    )
                )
            else:
                records.append(DeletionRecord(category=self.name, item=item, status=ItemStatus.SUCCEEDED))
        return records
