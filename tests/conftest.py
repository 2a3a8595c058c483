import logging
import os
import tempfile

# Must be set before vocabdeck is imported: the package configures its root logger on import.
os.environ.setdefault("VOCABDECK_AUTH__JWT_SECRET", "test-secret-0123456789abcdef0123456789abcdef")
os.environ.setdefault("VOCABDECK_DIR_PATHS__LOGGER_DIR", tempfile.mkdtemp(prefix="vocabdeck-test-logs-"))

import pytest  # noqa: E402

from vocabdeck.core import CoreSettings, reset_settings  # noqa: E402

TEST_JWT_SECRET = os.environ["VOCABDECK_AUTH__JWT_SECRET"]


def by_slow_marker(item):
    # Check if test is marked as slow
    is_slow = 0 if item.get_closest_marker("slow") is None else 1

    # Check if test is integration test
    is_integration = 1 if "integration" in str(item.fspath) else 0

    # Return tuple for sorting: (is_integration, is_slow)
    # This will sort unit tests first, then slow unit tests,
    # then integration tests, then slow integration tests
    return (is_integration, is_slow)


def pytest_addoption(parser):
    parser.addoption("--slow-last", action="store_true", default=False)


def pytest_collection_modifyitems(items, config):
    if config.getoption("--slow-last"):
        items.sort(key=by_slow_marker)


@pytest.fixture(autouse=True)
def configure_logging_for_tests(caplog):
    """Configure logging to work properly with caplog fixture.

    This fixture ensures that all VocabDeck loggers propagate their messages to the root logger so that caplog can
    capture them properly.
    """
    caplog.set_level(logging.DEBUG)

    root_logger = logging.getLogger()
    original_level = root_logger.level
    root_logger.setLevel(logging.DEBUG)

    vocabdeck_logger = logging.getLogger("vocabdeck")
    original_propagate = vocabdeck_logger.propagate
    vocabdeck_logger.propagate = True

    yield

    root_logger.setLevel(original_level)
    vocabdeck_logger.propagate = original_propagate


@pytest.fixture(autouse=True)
def _reset_cached_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings(tmp_path) -> CoreSettings:
    """Settings rooted in a per-test temporary directory."""
    return CoreSettings(
        VOCABDECK_DIR_PATHS={
            "ROOT": str(tmp_path),
            "DATA_DIR": str(tmp_path / "store"),
            "LOGGER_DIR": str(tmp_path / "logs"),
        },
        VOCABDECK_AUTH={"JWT_SECRET": TEST_JWT_SECRET, "BCRYPT_ROUNDS": 10},
    )
