"""cfnctl - CloudFormation stack lifecycle and account teardown CLI."""

__version__ = "0.1.0"
