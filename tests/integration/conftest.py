"""Pytest configuration for integration tests.

These tests call the real TheMealDB API, so they only run when
RUN_LIVE_TESTS=true is set in the environment or in .env.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


def pytest_configure(config):
    """Load .env from the project root before collection."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)


@pytest.fixture(scope="session", autouse=True)
def require_live_opt_in():
    """Skip the whole session unless live upstream calls are enabled."""
    if os.getenv("RUN_LIVE_TESTS", "false").lower() not in ("true", "1", "yes"):
        pytest.skip(
            "Integration tests skipped. Set RUN_LIVE_TESTS=true to run against TheMealDB.",
            allow_module_level=True,
        )
