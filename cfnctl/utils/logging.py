"""Logging configuration."""

from __future__ import annotations

import logging

from rich.logging import RichHandler


def setup_logging(level: str = "INFO", verbose: bool = False) -> None:
    """Configure root logging through Rich.

    The handler writes to the current stdout at emit time, so records are also
    captured by an active transcript.

    Args:
        level: Log level name
        verbose: Show timestamps, module paths and rich tracebacks
    """
    handler = RichHandler(show_time=verbose, show_path=verbose, markup=False, rich_tracebacks=verbose)
    logging.basicConfig(level=level.upper(), format="%(message)s", handlers=[handler], force=True)

    # botocore is chatty at DEBUG
    if not verbose:
        logging.getLogger("botocore").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)
