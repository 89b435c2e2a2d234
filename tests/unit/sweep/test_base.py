"""Tests for table-driven sweep categories."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from cfnctl.models.deletion_record import ItemStatus, SweepItem
from cfnctl.sweep.base import ItemDeletionError, error_details
from cfnctl.sweep.elbv2 import LoadBalancerCategory
from cfnctl.sweep.glue import GlueCategory
from cfnctl.sweep.location import LocationCategory
from cfnctl.sweep.sns import SNSTopicCategory
from tests.fixtures.aws import client_error, make_console, make_prompter, paginated_client


def make_session(client: MagicMock) -> MagicMock:
    session = MagicMock()
    session.client.return_value = client
    return session


def build(category_cls, client: MagicMock):
    return category_cls(make_session(client), "us-east-1", make_prompter(), make_console())


class TestErrorDetails:
    def test_client_error(self) -> None:
        assert error_details(client_error("InvalidState", "busy")) == ("InvalidState", "busy")

    def test_item_deletion_error(self) -> None:
        assert error_details(ItemDeletionError("ProtectionNotCleared", "nope")) == ("ProtectionNotCleared", "nope")

    def test_other_exception(self) -> None:
        assert error_details(RuntimeError("boom")) == ("RuntimeError", "boom")


class TestSingleKindCategories:
    """Test suite for one-kind categories."""

    def test_sns_discover_and_delete(self) -> None:
        arn = "arn:aws:sns:us-east-1:123456789012:alerts"
        client = paginated_client(list_topics=[{"Topics": [{"TopicArn": arn}]}])
        category = build(SNSTopicCategory, client)

        items = category.discover()
        records = category.delete_items(items)

        assert items == [SweepItem(identifier=arn)]
        client.delete_topic.assert_called_once_with(TopicArn=arn)
        assert records[0].status == ItemStatus.SUCCEEDED

    def test_load_balancer_delete(self) -> None:
        arn = "arn:aws:elasticloadbalancing:us-east-1:123456789012:loadbalancer/app/web/1"
        client = paginated_client(describe_load_balancers=[{"LoadBalancers": [{"LoadBalancerArn": arn}]}])
        category = build(LoadBalancerCategory, client)

        category.delete_items(category.discover())

        client.delete_load_balancer.assert_called_once_with(LoadBalancerArn=arn)
        category.session.client.assert_called_with("elbv2", region_name="us-east-1")

    def test_list_failure_propagates_to_sweeper(self) -> None:
        client = paginated_client(list_topics=client_error("AccessDenied"))
        category = build(SNSTopicCategory, client)

        with pytest.raises(ClientError):
            category.discover()

    def test_client_is_created_once(self) -> None:
        client = paginated_client(list_topics=[{"Topics": [{"TopicArn": "a"}, {"TopicArn": "b"}]}])
        category = build(SNSTopicCategory, client)

        category.delete_items(category.discover())

        category.session.client.assert_called_once_with("sns", region_name="us-east-1")


class TestMultiKindCategories:
    """Test suite for Glue and Location sweeps."""

    def test_glue_discovers_every_kind(self) -> None:
        client = paginated_client(
            get_jobs=[{"Jobs": [{"Name": "etl"}]}],
            get_crawlers=[{"Crawlers": [{"Name": "crawl"}]}],
            get_databases=[{"DatabaseList": [{"Name": "lake"}]}],
            get_connections=[{"ConnectionList": [{"Name": "jdbc"}]}],
        )
        category = build(GlueCategory, client)

        items = category.discover()

        assert [str(item) for item in items] == ["job:etl", "crawler:crawl", "database:lake", "connection:jdbc"]

    def test_glue_deletes_with_kind_specific_calls(self) -> None:
        client = MagicMock()
        category = build(GlueCategory, client)
        items = [
            SweepItem("etl", "job"),
            SweepItem("crawl", "crawler"),
            SweepItem("lake", "database"),
            SweepItem("jdbc", "connection"),
        ]

        records = category.delete_items(items)

        client.delete_job.assert_called_once_with(JobName="etl")
        client.delete_crawler.assert_called_once_with(Name="crawl")
        client.delete_database.assert_called_once_with(Name="lake")
        client.delete_connection.assert_called_once_with(ConnectionName="jdbc")
        assert all(r.status == ItemStatus.SUCCEEDED for r in records)

    def test_failing_kind_does_not_hide_others(self) -> None:
        client = paginated_client(
            list_maps=client_error("AccessDenied"),
            list_trackers=[{"Entries": [{"TrackerName": "fleet"}]}],
            list_geofence_collections=EndpointConnectionError(endpoint_url="https://geo.example"),
            list_place_indexes=[{"Entries": [{"IndexName": "places"}]}],
            list_route_calculators=[{"Entries": []}],
        )
        category = build(LocationCategory, client)

        items = category.discover()

        assert items == [SweepItem("fleet", "tracker"), SweepItem("places", "place-index")]

    def test_location_delete_failure_recorded(self) -> None:
        client = MagicMock()
        client.delete_tracker.side_effect = client_error("ResourceNotFoundException", "gone")
        category = build(LocationCategory, client)

        records = category.delete_items([SweepItem("fleet", "tracker"), SweepItem("atlas", "map")])

        assert [r.status for r in records] == [ItemStatus.FAILED, ItemStatus.SUCCEEDED]
        assert records[0].error_code == "ResourceNotFoundException"
        client.delete_map.assert_called_once_with(MapName="atlas")
