"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

import pytest

from src.markdown_export.engine import RuleEngine


@pytest.fixture
def engine() -> RuleEngine:
    """Rule engine with the standard rule set."""
    return RuleEngine()


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Undo the CLI's logging setup after each test.

    The CLI attaches handlers to the 'src' logger that write to the streams
    of the CliRunner invocation, which are closed once the test ends.
    """
    yield
    app_logger = logging.getLogger("src")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)
