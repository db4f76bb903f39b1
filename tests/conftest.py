"""Root pytest configuration.

Test Structure:
    tests/
    └── unit/
        ├── domain/            # Pure domain tests (no I/O)
        ├── application/       # Application services against mocked ports
        ├── infrastructure/    # Repository tests on in-memory SQLite
        └── config/            # Settings and logging setup

Environment Variables:
    RUN_SLOW=1           Run @pytest.mark.slow tests
    RUN_ALL_TESTS=1      Run all tests (overrides other settings)
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from recova_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run tests marked with @pytest.mark.slow",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "slow: Tests that take more than 1 second (auto-skipped)",
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip slow tests unless explicitly enabled."""
    run_all = os.environ.get("RUN_ALL_TESTS", "").lower() in ("1", "true", "yes")
    run_slow = config.getoption("--run-slow") or os.environ.get(
        "RUN_SLOW",
        "",
    ).lower() in ("1", "true", "yes")

    if run_all or run_slow:
        return

    skip_slow = pytest.mark.skip(
        reason="Slow test - run with --run-slow or RUN_SLOW=1",
    )
    for item in items:
        item_markers = {mark.name for mark in item.iter_markers()}
        if "slow" in item_markers:
            item.add_marker(skip_slow)


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Ensure no settings leak between test sessions."""
    clear_settings_cache()
    yield
    clear_settings_cache()
