"""Boto3 session and client construction."""

from __future__ import annotations

from typing import Optional

import boto3

DEFAULT_REGION = "us-east-1"


def create_session(profile_name: Optional[str] = None, region_name: Optional[str] = None) -> boto3.Session:
    """Create a boto3 session.

    Args:
        profile_name: AWS profile name (optional, falls back to environment)
        region_name: AWS region (optional, falls back to shared config)

    Returns:
        Configured boto3 session
    """
    return boto3.Session(profile_name=profile_name, region_name=region_name)


def resolve_region(session: boto3.Session) -> str:
    """Return the session's effective region, defaulting to us-east-1."""
    return session.region_name or DEFAULT_REGION
