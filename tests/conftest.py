"""Shared test configuration and fixtures."""

import logging
import os
from datetime import datetime

import pytest

from calendarcursor.config.models import CalendarConfig
from calendarcursor.config.settings import ENV_PREFIX, reset_settings
from calendarcursor.state import DualCalendarState


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests independent of the developer's environment and config files."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)

    yield

    reset_settings()
    package_logger = logging.getLogger("calendarcursor")
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def june_date():
    """Saturday, June 15th 2024, mid-morning."""
    return datetime(2024, 6, 15, 10, 30)


@pytest.fixture
def config():
    return CalendarConfig()


@pytest.fixture
def dual_state(june_date):
    """State with a primary cursor in June and a secondary cursor in December 2024."""
    return DualCalendarState(june_date, datetime(2024, 12, 1, 9, 0))
