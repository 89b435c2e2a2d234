"""Integration tests for the create and update CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from cfnctl.cli.config import Config
from cfnctl.cli.main import app
from tests.fixtures.aws import client_error


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def inputs(tmp_path: Path) -> tuple[Path, Path]:
    template = tmp_path / "udagram.yml"
    template.write_text("Resources: {}\n")
    parameters = tmp_path / "udagram-parameters.json"
    parameters.write_text(json.dumps([{"ParameterKey": "EnvironmentName", "ParameterValue": "udagram"}]))
    return template, parameters


@pytest.fixture
def cfn_client() -> MagicMock:
    client = MagicMock()
    client.create_stack.return_value = {"StackId": "id-udagram"}
    client.update_stack.return_value = {"StackId": "id-udagram"}
    return client


def invoke(runner: CliRunner, cfn_client: MagicMock, args: list[str]):
    session = MagicMock()
    session.client.return_value = cfn_client
    with patch("cfnctl.cli.main.create_session", return_value=session), patch(
        "cfnctl.cli.main.Config.load", return_value=Config()
    ):
        return runner.invoke(app, args)


class TestLifecycleCLI:
    """Integration tests for create/update commands."""

    def test_create(self, runner: CliRunner, cfn_client: MagicMock, inputs: tuple[Path, Path]) -> None:
        template, parameters = inputs

        result = invoke(
            runner, cfn_client, ["create", "udagram", "--template", str(template), "--parameters", str(parameters)]
        )

        assert result.exit_code == 0
        assert "Stack create requested" in result.stdout
        cfn_client.create_stack.assert_called_once()
        cfn_client.get_waiter.assert_not_called()

    def test_update_and_wait(self, runner: CliRunner, cfn_client: MagicMock, inputs: tuple[Path, Path]) -> None:
        template, parameters = inputs

        result = invoke(
            runner,
            cfn_client,
            ["update", "udagram", "-t", str(template), "--parameters", str(parameters), "--wait"],
        )

        assert result.exit_code == 0
        assert "Stack update complete" in result.stdout
        cfn_client.get_waiter.assert_called_once_with("stack_update_complete")

    def test_missing_template(self, runner: CliRunner, cfn_client: MagicMock, inputs: tuple[Path, Path]) -> None:
        _, parameters = inputs

        result = invoke(
            runner, cfn_client, ["create", "udagram", "-t", "does-not-exist.yml", "--parameters", str(parameters)]
        )

        assert result.exit_code == 1
        assert "not found" in result.stdout
        cfn_client.create_stack.assert_not_called()

    def test_rejected_request(self, runner: CliRunner, cfn_client: MagicMock, inputs: tuple[Path, Path]) -> None:
        template, parameters = inputs
        cfn_client.update_stack.side_effect = client_error("ValidationError", "No updates are to be performed.")

        result = invoke(runner, cfn_client, ["update", "udagram", "-t", str(template), "--parameters", str(parameters)])

        assert result.exit_code == 1
        assert "CloudFormation stack update failed." in result.stdout
