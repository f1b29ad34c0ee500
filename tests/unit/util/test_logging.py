"""Unit tests for logging setup."""

import io
import logging

import pytest

from skythread.config import Settings
from skythread.util.logging import log_level, setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    skythread_level = logging.getLogger("skythread").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("skythread").setLevel(skythread_level)


class TestLogLevel:
    """Tests for log_level."""

    @pytest.mark.parametrize(
        "environment,debug,expected",
        [
            ("development", False, logging.INFO),
            ("production", False, logging.INFO),
            ("test", False, logging.WARNING),
            ("production", True, logging.DEBUG),
        ],
    )
    def test_level_follows_environment(self, environment, debug, expected):
        assert log_level(Settings(environment=environment, debug=debug)) == expected


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_writes_to_given_stream(self, restore_logging):
        stream = io.StringIO()

        setup_logging(Settings(environment="development"), stream=stream)
        logging.getLogger("skythread.viewer").info("thread loaded")

        output = stream.getvalue()
        assert "skythread logging ready (environment=development, level=INFO" in output
        assert "INFO [skythread.viewer] thread loaded" in output

    def test_http_client_loggers_quieted(self, restore_logging):
        setup_logging(Settings(environment="development"), stream=io.StringIO())

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
