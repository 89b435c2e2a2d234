"""Orphaned resource sweep categories."""

from __future__ import annotations

from typing import Optional

import boto3
from rich.console import Console

from cfnctl.sweep.base import SweepCategory
from cfnctl.sweep.ec2 import (
    EBSVolumeCategory,
    EC2InstanceCategory,
    ElasticIpCategory,
    NatGatewayCategory,
    VPCEndpointCategory,
)
from cfnctl.sweep.elbv2 import LoadBalancerCategory
from cfnctl.sweep.glue import GlueCategory
from cfnctl.sweep.kms import KMSKeyCategory
from cfnctl.sweep.location import LocationCategory
from cfnctl.sweep.rds import RDSInstanceCategory, RDSSnapshotCategory
from cfnctl.sweep.s3 import S3BucketCategory
from cfnctl.sweep.sns import SNSTopicCategory
from cfnctl.teardown.prompts import Prompter

__all__ = ["SweepCategory", "default_categories"]


def default_categories(
    session: boto3.Session,
    region: str,
    prompter: Prompter,
    console: Optional[Console] = None,
) -> list[SweepCategory]:
    """Build every sweep category in sweep order.

    Args:
        session: boto3 session
        region: Region to sweep
        prompter: Operator prompts
        console: Rich console (optional)

    Returns:
        Categories in the order they are swept
    """
    args = (session, region, prompter, console)
    return [
        EC2InstanceCategory(*args),
        NatGatewayCategory(*args),
        ElasticIpCategory(*args),
        EBSVolumeCategory(*args),
        LoadBalancerCategory(*args),
        VPCEndpointCategory(*args),
        RDSInstanceCategory(*args),
        RDSSnapshotCategory(*args),
        S3BucketCategory(*args),
        GlueCategory(*args),
        LocationCategory(*args),
        KMSKeyCategory(*args),
        SNSTopicCategory(*args),
    ]
