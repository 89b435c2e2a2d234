"""Application and Network Load Balancer sweep category."""

from __future__ import annotations

from cfnctl.sweep.base import ListedCategory, ResourceKind


class LoadBalancerCategory(ListedCategory):
    """ALBs and NLBs (hourly charges)."""

    emoji = "⚖️"
    KINDS = {
        None: ResourceKind(
            list_method="describe_load_balancers",
            result_key="LoadBalancers",
            id_key="LoadBalancerArn",
            delete_method="delete_load_balancer",
            id_param="LoadBalancerArn",
        )
    }

    @property
    def name(self) -> str:
        return "load-balancers"

    @property
    def label(self) -> str:
        return "load balancers"

    @property
    def service_name(self) -> str:
        return "elbv2"
