"""Tests for logging setup."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from cfnctl.utils.logging import setup_logging


class TestSetupLogging:
    def test_installs_rich_handler(self) -> None:
        setup_logging(level="warning")

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert any(isinstance(handler, RichHandler) for handler in root.handlers)

    def test_quiets_botocore_unless_verbose(self) -> None:
        setup_logging(level="DEBUG")
        assert logging.getLogger("botocore").level == logging.WARNING

        logging.getLogger("botocore").setLevel(logging.NOTSET)
        setup_logging(level="DEBUG", verbose=True)
        assert logging.getLogger("botocore").level == logging.NOTSET
