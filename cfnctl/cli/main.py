"""Main CLI entry point using Typer."""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from botocore.exceptions import BotoCoreError, ClientError
from rich.console import Console

from ..aws.client import create_session
from ..aws.credentials import CredentialValidationError
from ..utils.logging import setup_logging
from ..utils.transcript import Transcript
from .config import Config

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="cfnctl",
    help="cfnctl - CloudFormation stack lifecycle and account teardown CLI tool",
    add_completion=False,
)

# Create Rich console for output
console = Console()

# Global config
config: Optional[Config] = None


@app.callback()
def main(
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="AWS profile name"),
    region: Optional[str] = typer.Option(None, "--region", "-r", help="AWS region (default: from AWS config)"),
    log_dir: Optional[str] = typer.Option(
        None, "--log-dir", help="Directory for teardown transcripts (default: ./logs/delete-all-stacks)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress log output except errors"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """cfnctl - CloudFormation stack lifecycle and account teardown CLI tool."""
    global config

    # Load configuration
    config = Config.load()

    # Override with CLI options
    if profile:
        config.aws_profile = profile
    if region:
        config.region = region
    if log_dir:
        config.log_dir = log_dir

    # Setup logging
    log_level = "ERROR" if quiet else ("DEBUG" if verbose else config.log_level)
    setup_logging(level=log_level, verbose=verbose)

    # Disable colors if requested
    if no_color:
        console.no_color = True


@app.command()
def version():
    """Show version information."""
    import boto3

    from .. import __version__

    console.print(f"cfnctl version {__version__}")
    console.print(f"Python {sys.version.split()[0]}")
    console.print(f"boto3 {boto3.__version__}")


@app.command()
def teardown():
    """Interactively delete stacks, then sweep the account for orphaned billable resources.

    DESTROY WITH CARE. Every step asks for confirmation:
    - the AWS account, principal and region
    - which stacks to delete, and a final confirmation naming them
    - disabling termination/deletion protection, per resource
    - each resource category in the sweep (EC2, NAT, EIP, EBS, ELB, VPC endpoints,
      RDS, S3, Glue, Location, KMS, SNS)

    The sweep always runs, even when no stacks are deleted. Re-run until it finds nothing.
    All output is copied to a timestamped transcript in the log directory.
    """
    from ..sweep import default_categories
    from ..teardown.audit import AuditStorage
    from ..teardown.cleaner import AccountCleaner
    from ..teardown.identity import IdentityGuard
    from ..teardown.prompts import Prompter

    with Transcript(config.log_dir) as transcript:
        console.print(f"📜 Logging to {transcript.path}", markup=False)
        try:
            session = create_session(profile_name=config.aws_profile, region_name=config.region)
            prompter = Prompter()
            guard = IdentityGuard(session, prompter, console)

            console.print("🔒 Checking AWS identity...")
            try:
                identity = guard.resolve()
            except CredentialValidationError as e:
                console.print(f"❌ {e}. Are your credentials configured?", style="bold red", markup=False)
                raise typer.Exit(code=1)

            if not guard.confirm(identity):
                console.print("🛑 Good call. Destruction postponed.")
                raise typer.Exit(code=1)

            cfn_client = session.client("cloudformation", region_name=identity.region)
            categories = default_categories(session, identity.region, prompter, console)

            run = AccountCleaner(cfn_client, prompter, console).run(
                identity, categories, aws_profile=config.aws_profile
            )

            record_path = AuditStorage(config.log_dir).log_run(run)
            console.print(f"🧾 Run record: {record_path}", markup=False)
            if run.failed_stack_count or run.sweep.failed_count:
                console.print(
                    f"⚠️ {run.failed_stack_count} stack(s) and {run.sweep.failed_count} resource(s) failed. "
                    "Re-run to retry.",
                    style="yellow",
                )

        except typer.Exit:
            raise
        except typer.Abort:
            # EOF or Ctrl-C at a prompt
            console.print()
            console.print("🛑 Aborted. Re-run to continue where this left off.")
            raise typer.Exit(code=1)
        except Exception as e:
            console.print(f"✗ Error during teardown: {e}", style="bold red", markup=False)
            logger.exception("Error in teardown command")
            raise typer.Exit(code=2)


def _run_lifecycle(action: str, stack_name: str, template: Path, parameters: Path, wait: bool) -> None:
    from ..stacks.lifecycle import StackLifecycle

    try:
        session = create_session(profile_name=config.aws_profile, region_name=config.region)
        lifecycle = StackLifecycle(session.client("cloudformation"))
        operation = lifecycle.create if action == "create" else lifecycle.update
        stack_id = operation(stack_name, template, parameters, wait=wait)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"Error: {e}", style="bold red", markup=False)
        raise typer.Exit(code=1)
    except (ClientError, BotoCoreError) as e:
        console.print(
            f"Error: CloudFormation stack {'creation' if action == 'create' else 'update'} failed. "
            "Check stack events for details.",
            style="bold red",
        )
        logger.debug(f"{action} {stack_name} failed: {e}")
        raise typer.Exit(code=1)

    done = "complete" if wait else "requested"
    console.print(f"✓ Stack {action} {done}: [bold]{stack_name}[/bold]", style="green")
    console.print(f"  {stack_id}")


@app.command()
def create(
    stack_name: str = typer.Argument(..., help="Stack name (e.g., networkserver)"),
    template: Path = typer.Option(..., "--template", "-t", help="Template file (e.g., network.yml)"),
    parameters: Path = typer.Option(
        ..., "--parameters", help="Parameters file in AWS CLI JSON format (e.g., network-parameters.json)"
    ),
    wait: bool = typer.Option(False, "--wait", help="Wait until the stack is created"),
):
    """Create a stack from a template and a parameters file."""
    _run_lifecycle("create", stack_name, template, parameters, wait)


@app.command()
def update(
    stack_name: str = typer.Argument(..., help="Stack name (e.g., udagramserver)"),
    template: Path = typer.Option(..., "--template", "-t", help="Template file (e.g., udagram.yml)"),
    parameters: Path = typer.Option(
        ..., "--parameters", help="Parameters file in AWS CLI JSON format (e.g., udagram-parameters.json)"
    ),
    wait: bool = typer.Option(False, "--wait", help="Wait until the update completes"),
):
    """Update a stack from a template and a parameters file."""
    _run_lifecycle("update", stack_name, template, parameters, wait)


def cli_main():
    """Entry point for console script."""
    app()


if __name__ == "__main__":
    cli_main()
