"""Test helpers for mocked boto3 clients."""

from __future__ import annotations

from io import StringIO
from typing import Any, Union
from unittest.mock import MagicMock, Mock

from botocore.exceptions import ClientError
from rich.console import Console

from cfnctl.teardown.prompts import Prompter


def client_error(code: str, message: str = "error", operation: str = "Operation") -> ClientError:
    """Create a botocore ClientError with the given code."""
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


def paginated_client(**pages_by_operation: Union[list[dict[str, Any]], Exception]) -> MagicMock:
    """Create a client whose paginators return canned pages.

    Args:
        pages_by_operation: Paginator name -> list of pages, or an exception raised by paginate()

    Returns:
        MagicMock client
    """
    client = MagicMock()
    paginators: dict[str, MagicMock] = {}

    def get_paginator(name: str) -> MagicMock:
        if name not in paginators:
            paginator = MagicMock()
            pages = pages_by_operation.get(name, [])
            if isinstance(pages, Exception):
                paginator.paginate.side_effect = pages
            else:
                paginator.paginate.return_value = pages
            paginators[name] = paginator
        return paginators[name]

    client.get_paginator.side_effect = get_paginator
    return client


def make_console() -> Console:
    """Create a Rich console writing to a buffer."""
    return Console(file=StringIO(), width=200, color_system=None)


def console_output(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


def make_prompter(confirms: Union[bool, list[bool]] = False, answer: str = "") -> Mock:
    """Create a prompter with scripted answers.

    Args:
        confirms: Answer for every confirm() call, or a list consumed in order
        answer: Answer for ask()
    """
    prompter = Mock(spec=Prompter)
    if isinstance(confirms, list):
        prompter.confirm.side_effect = confirms
    else:
        prompter.confirm.return_value = confirms
    prompter.ask.return_value = answer
    return prompter
