"""Glue sweep category: jobs, crawlers, databases and connections."""

from __future__ import annotations

from cfnctl.sweep.base import ListedCategory, ResourceKind


class GlueCategory(ListedCategory):
    """Glue Data Catalog resources, confirmed together."""

    emoji = "🧪"
    KINDS = {
        "job": ResourceKind(
            list_method="get_jobs",
            result_key="Jobs",
            id_key="Name",
            delete_method="delete_job",
            id_param="JobName",
        ),
        "crawler": ResourceKind(
            list_method="get_crawlers",
            result_key="Crawlers",
            id_key="Name",
            delete_method="delete_crawler",
            id_param="Name",
        ),
        "database": ResourceKind(
            list_method="get_databases",
            result_key="DatabaseList",
            id_key="Name",
            delete_method="delete_database",
            id_param="Name",
        ),
        "connection": ResourceKind(
            list_method="get_connections",
            result_key="ConnectionList",
            id_key="Name",
            delete_method="delete_connection",
            id_param="ConnectionName",
        ),
    }

    @property
    def name(self) -> str:
        return "glue"

    @property
    def label(self) -> str:
        return "Glue resources"

    @property
    def service_name(self) -> str:
        return "glue"

    @property
    def confirm_message(self) -> str:
        return "Delete ALL Glue jobs/crawlers/databases/connections?"
