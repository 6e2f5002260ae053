"""Unit tests for logging setup."""

import logging

from pacup.utils.logging_config import setup_logging
from rich.logging import RichHandler


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_default_level(self) -> None:
        """Warnings and above are shown by default."""
        setup_logging()
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert any(isinstance(h, RichHandler) for h in root.handlers)

    def test_verbose(self) -> None:
        """--verbose enables debug output, including httpx."""
        setup_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.DEBUG

    def test_quiet(self) -> None:
        """--quiet only shows errors."""
        setup_logging(quiet=True)
        assert logging.getLogger().level == logging.ERROR
        assert logging.getLogger("httpx").level == logging.WARNING
