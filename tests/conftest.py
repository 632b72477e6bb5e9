"""Shared test fixtures."""

import pytest
from podlink.config import ClientConfig, Config, LoggingConfig, ServerConfig
from podlink.dispatch.navigation import LoggingNavigator


@pytest.fixture
def test_config() -> Config:
    """Create a configuration with defaults suitable for testing."""
    return Config(
        server=ServerConfig(),
        logging=LoggingConfig(),
        client=ClientConfig(timeout=1.0),
    )


@pytest.fixture
def navigator() -> LoggingNavigator:
    """Create a recording navigator."""
    return LoggingNavigator()
