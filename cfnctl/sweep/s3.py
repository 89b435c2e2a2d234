"""S3 bucket sweep category."""

from __future__ import annotations

from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError

from cfnctl.models.deletion_record import SweepItem
from cfnctl.sweep.base import ListedCategory, ResourceKind


def bucket_region(location_constraint: Optional[str]) -> str:
    """Map a GetBucketLocation constraint to a region name."""
    if not location_constraint:
        return "us-east-1"
    if location_constraint == "EU":
        return "eu-west-1"
    return location_constraint


class S3BucketCategory(ListedCategory):
    """S3 buckets, emptied and deleted.

    A bucket is first force-removed (all current objects, then the bucket). If
    that fails, typically because versioning left object versions or delete
    markers behind, every version and delete marker is removed individually and
    the bucket is deleted again.
    """

    emoji = "🪣"
    KINDS = {
        None: ResourceKind(
            list_method="list_buckets",
            result_key="Buckets",
            id_key="Name",
            delete_method="delete_bucket",
            id_param="Bucket",
            paginated=False,
        )
    }

    @property
    def name(self) -> str:
        return "s3-buckets"

    @property
    def label(self) -> str:
        return "S3 buckets"

    @property
    def service_name(self) -> str:
        return "s3"

    @property
    def confirm_message(self) -> str:
        return "EMPTY & DELETE ALL S3 buckets? (dangerous)"

    def delete_item(self, item: SweepItem) -> Optional[str]:
        bucket = item.identifier
        client = self._bucket_client(bucket)
        self.console.print(f"   • {bucket}", markup=False)

        try:
            self._force_remove(client, bucket)
        except ClientError as e:
            self.logger.debug(f"Force remove failed for {bucket}: {e}")
            self.console.print(f"     Falling back to explicit versioned delete for {bucket}")
            self._delete_versions(client, bucket)
            client.delete_bucket(Bucket=bucket)

        return None

    def _bucket_client(self, bucket: str) -> Any:
        try:
            response = self._create_client().get_bucket_location(Bucket=bucket)
            region = bucket_region(response.get("LocationConstraint"))
        except (ClientError, BotoCoreError) as e:
            self.logger.debug(f"Could not read location of {bucket}, using {self.region}: {e}")
            region = self.region
        return self._create_client(region=region)

    def _force_remove(self, client: Any, bucket: str) -> None:
        # list pages hold at most 1000 keys, the delete_objects limit
        paginator = client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket):
            keys = [{"Key": obj["Key"]} for obj in page.get("Contents", [])]
            if keys:
                client.delete_objects(Bucket=bucket, Delete={"Objects": keys, "Quiet": True})
        client.delete_bucket(Bucket=bucket)

    def _delete_versions(self, client: Any, bucket: str) -> None:
        paginator = client.get_paginator("list_object_versions")
        try:
            for page in paginator.paginate(Bucket=bucket):
                for entry in page.get("Versions", []) + page.get("DeleteMarkers", []):
                    try:
                        client.delete_object(Bucket=bucket, Key=entry["Key"], VersionId=entry["VersionId"])
                    except ClientError as e:
                        self.logger.debug(f"Could not delete {entry['Key']}@{entry['VersionId']} in {bucket}: {e}")
        except ClientError as e:
            self.logger.warning(f"Could not list object versions in {bucket}: {e}")
