"""Configuration loading for cfnctl.

Values are read from ~/.cfnctl/config.yaml when present, then overridden by
environment variables. CLI options override both.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".cfnctl" / "config.yaml"
DEFAULT_LOG_DIR = "./logs/delete-all-stacks"


@dataclass
class Config:
    """Runtime configuration.

    Attributes:
        aws_profile: AWS profile name (None uses the default credential chain)
        region: AWS region (None uses the shared config region)
        log_dir: Directory for teardown transcripts and run records
        log_level: Log level name
    """

    aws_profile: Optional[str] = None
    region: Optional[str] = None
    log_dir: str = DEFAULT_LOG_DIR
    log_level: str = "INFO"

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load configuration from file and environment.

        Args:
            path: Config file path (default: ~/.cfnctl/config.yaml)

        Returns:
            Config instance
        """
        config_path = path or DEFAULT_CONFIG_PATH
        values: dict = {}

        if config_path.exists():
            try:
                with open(config_path, "r") as f:
                    loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                logger.warning(f"Ignoring unreadable config {config_path}: {e}")
                loaded = {}
            if isinstance(loaded, dict):
                values.update({k: v for k, v in loaded.items() if k in cls.__dataclass_fields__})

        env_overrides = {
            "aws_profile": os.environ.get("AWS_PROFILE"),
            "region": os.environ.get("AWS_DEFAULT_REGION") or os.environ.get("AWS_REGION"),
            "log_dir": os.environ.get("CFNCTL_LOG_DIR"),
            "log_level": os.environ.get("CFNCTL_LOG_LEVEL"),
        }
        values.update({k: v for k, v in env_overrides.items() if v})

        return cls(**values)
