"""SNS topic sweep category."""

from __future__ import annotations

from cfnctl.sweep.base import ListedCategory, ResourceKind


class SNSTopicCategory(ListedCategory):
    """SNS topics; subscriptions are removed with their topic."""

    emoji = "🔔"
    KINDS = {
        None: ResourceKind(
            list_method="list_topics",
            result_key="Topics",
            id_key="TopicArn",
            delete_method="delete_topic",
            id_param="TopicArn",
        )
    }

    @property
    def name(self) -> str:
        return "sns-topics"

    @property
    def label(self) -> str:
        return "SNS topics"

    @property
    def service_name(self) -> str:
        return "sns"

    @property
    def confirm_message(self) -> str:
        return "Delete ALL SNS topics? (subscriptions go away too)"
