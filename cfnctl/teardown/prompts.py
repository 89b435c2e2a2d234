"""Operator prompts."""

from __future__ import annotations

import typer


class Prompter:
    """Blocking yes/no and free-text prompts on the terminal.

    Every confirmation defaults to "no": an empty answer declines.
    """

    def confirm(self, message: str) -> bool:
        return typer.confirm(message, default=False)

    def ask(self, message: str) -> str:
        return typer.prompt(message, default="", show_default=False)
