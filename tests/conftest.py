"""
Shared fixtures for the URL Status Monitor tests.
"""

import sys

import pytest
from loguru import logger

from config.settings import get_settings
from monitoring.store import StatusStore
from tests.helpers import FakeProber, UpdateRecorder


@pytest.fixture(autouse=True)
def testing_environment(monkeypatch):
    """Keep tests off the log files and isolate the cached settings."""
    monkeypatch.setenv("ENVIRONMENT", "testing")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    # the CLI tests point loguru at streams that are closed afterwards
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")


@pytest.fixture
def store():
    return StatusStore()


@pytest.fixture
def recorder(store):
    rec = UpdateRecorder()
    store.subscribe(rec)
    return rec


@pytest.fixture
def fake_prober():
    return FakeProber()
