from __future__ import annotations

import pytest
import structlog

from rocrate_tables.core.config import get_settings


@pytest.fixture(autouse=True)
def _reset_logging_and_settings():
    yield
    structlog.reset_defaults()
    get_settings.cache_clear()
