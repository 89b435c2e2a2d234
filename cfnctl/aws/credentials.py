"""Caller identity resolution."""

from __future__ import annotations

import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class CredentialValidationError(Exception):
    """Raised when the active credentials cannot be resolved to an identity."""


def validate_credentials(session: Optional[boto3.Session] = None) -> dict[str, str]:
    """Resolve the caller identity for a session.

    Args:
        session: boto3 session (default session if not provided)

    Returns:
        Dictionary with account_id, arn, user_id and caller (last ARN path segment)

    Raises:
        CredentialValidationError: If the identity cannot be retrieved
    """
    session = session or boto3.Session()
    try:
        sts = session.client("sts")
        identity = sts.get_caller_identity()
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        raise CredentialValidationError(f"Could not get AWS identity ({error_code})") from e
    except BotoCoreError as e:
        raise CredentialValidationError(f"Could not get AWS identity: {e}") from e

    arn = identity["Arn"]
    logger.debug(f"Resolved caller identity {arn}")
    return {
        "account_id": identity["Account"],
        "arn": arn,
        "user_id": identity.get("UserId", ""),
        "caller": arn.rsplit("/", 1)[-1],
    }
