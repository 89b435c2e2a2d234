"""Tests for the KMS key sweep."""

from __future__ import annotations

from datetime import datetime
from unittest.mock import MagicMock

from botocore.exceptions import EndpointConnectionError

from cfnctl.models.deletion_record import ItemStatus, SweepItem
from cfnctl.sweep.kms import PENDING_WINDOW_DAYS, KMSKeyCategory
from tests.fixtures.aws import client_error, console_output, make_console, make_prompter, paginated_client

KEYS = {
    "customer": {"KeyManager": "CUSTOMER", "KeyState": "Enabled"},
    "aws": {"KeyManager": "AWS", "KeyState": "Enabled"},
    "pending": {"KeyManager": "CUSTOMER", "KeyState": "PendingDeletion"},
    "disabled": {"KeyManager": "CUSTOMER", "KeyState": "Disabled"},
}


def build(client: MagicMock) -> KMSKeyCategory:
    session = MagicMock()
    session.client.return_value = client
    return KMSKeyCategory(session, "us-east-1", make_prompter(), make_console())


class TestKMSKeyCategory:
    """Test suite for key scheduling."""

    def test_only_customer_keys_not_pending(self) -> None:
        client = paginated_client(list_keys=[{"Keys": [{"KeyId": key_id} for key_id in KEYS]}])

        def describe_key(KeyId: str) -> dict:
            return {"KeyMetadata": KEYS[KeyId]}

        client.describe_key.side_effect = describe_key

        assert build(client).discover() == [SweepItem("customer"), SweepItem("disabled")]

    def test_undescribable_key_is_skipped(self) -> None:
        client = paginated_client(list_keys=[{"Keys": [{"KeyId": "k1"}]}])
        client.describe_key.side_effect = client_error("AccessDeniedException")

        assert build(client).discover() == []

    def test_connection_error_on_one_key_keeps_the_rest(self) -> None:
        client = paginated_client(list_keys=[{"Keys": [{"KeyId": "k1"}, {"KeyId": "k2"}]}])
        client.describe_key.side_effect = [
            EndpointConnectionError(endpoint_url="https://kms.us-east-1.amazonaws.com"),
            {"KeyMetadata": KEYS["customer"]},
        ]

        assert build(client).discover() == [SweepItem("k2")]

    def test_disables_then_schedules(self) -> None:
        client = MagicMock()
        client.schedule_key_deletion.return_value = {"DeletionDate": datetime(2026, 1, 8)}
        category = build(client)

        records = category.delete_items([SweepItem("k1")])

        assert records[0].status == ItemStatus.SUCCEEDED
        client.disable_key.assert_called_once_with(KeyId="k1")
        client.schedule_key_deletion.assert_called_once_with(KeyId="k1", PendingWindowInDays=7)
        assert "2026-01-08" in console_output(category.console)

    def test_disable_failure_still_schedules(self) -> None:
        client = MagicMock()
        client.disable_key.side_effect = client_error("KMSInvalidStateException")
        client.schedule_key_deletion.return_value = {}
        category = build(client)

        records = category.delete_items([SweepItem("k1")])

        assert records[0].status == ItemStatus.SUCCEEDED
        client.schedule_key_deletion.assert_called_once()

    def test_schedule_failure_recorded(self) -> None:
        client = MagicMock()
        client.schedule_key_deletion.side_effect = client_error("KMSInvalidStateException", "pending")
        category = build(client)

        records = category.delete_items([SweepItem("k1")])

        assert records[0].status == ItemStatus.FAILED

    def test_notice_mentions_cancellation(self) -> None:
        category = build(MagicMock())

        assert PENDING_WINDOW_DAYS == 7
        assert "7 days" in category.notice
        assert "cancel-key-deletion" in category.notice
        assert "7-day" in category.confirm_message
