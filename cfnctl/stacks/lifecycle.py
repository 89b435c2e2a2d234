"""Stack create and update.

Thin wrappers around CreateStack/UpdateStack that read a template file and an
AWS CLI style parameters file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CAPABILITIES = ["CAPABILITY_NAMED_IAM"]


def load_parameters(path: Path) -> list[dict[str, Any]]:
    """Load a parameters file.

    The file uses the AWS CLI format:
        [{"ParameterKey": "EnvironmentName", "ParameterValue": "udagram"}]

    Args:
        path: Parameters file path

    Returns:
        Parameter list passed through to CloudFormation

    Raises:
        ValueError: If the file is not a JSON list
    """
    with open(path, "r") as f:
        parameters = json.load(f)

    if not isinstance(parameters, list):
        raise ValueError(f"{path} must contain a JSON list of parameters")

    return parameters


class StackLifecycle:
    """Create or update a stack from local files."""

    def __init__(self, cfn_client: Any) -> None:
        self.cfn_client = cfn_client

    def _read_inputs(self, template_path: Path, parameters_path: Path) -> tuple[str, list[dict[str, Any]]]:
        for path in (template_path, parameters_path):
            if not path.is_file():
                raise FileNotFoundError(f"{path} not found")

        return template_path.read_text(), load_parameters(parameters_path)

    def create(self, stack_name: str, template_path: Path, parameters_path: Path, wait: bool = False) -> str:
        """Create a stack.

        Args:
            stack_name: Stack name
            template_path: Template file
            parameters_path: Parameters file
            wait: Block until creation completes

        Returns:
            Stack id

        Raises:
            FileNotFoundError: If an input file is missing
            botocore.exceptions.ClientError: If CloudFormation rejects the request
        """
        template_body, parameters = self._read_inputs(template_path, parameters_path)
        response = self.cfn_client.create_stack(
            StackName=stack_name,
            TemplateBody=template_body,
            Parameters=parameters,
            Capabilities=CAPABILITIES,
        )
        stack_id = response["StackId"]
        logger.info(f"Create requested for {stack_name}: {stack_id}")

        if wait:
            self.cfn_client.get_waiter("stack_create_complete").wait(StackName=stack_id)

        return stack_id

    def update(self, stack_name: str, template_path: Path, parameters_path: Path, wait: bool = False) -> str:
        """Update a stack.

        Args:
            stack_name: Stack name
            template_path: Template file
            parameters_path: Parameters file
            wait: Block until the update completes

        Returns:
            Stack id

        Raises:
            FileNotFoundError: If an input file is missing
            botocore.exceptions.ClientError: If CloudFormation rejects the request
        """
        template_body, parameters = self._read_inputs(template_path, parameters_path)
        response = self.cfn_client.update_stack(
            StackName=stack_name,
            TemplateBody=template_body,
            Parameters=parameters,
            Capabilities=CAPABILITIES,
        )
        stack_id = response["StackId"]
        logger.info(f"Update requested for {stack_name}: {stack_id}")

        if wait:
            self.cfn_client.get_waiter("stack_update_complete").wait(StackName=stack_id)

        return stack_id
